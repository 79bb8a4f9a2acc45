"""Pitch booking lookups from the LCSD open-data feed.

The feed lists turf soccer pitch sessions with the number of free courts. It is
public and read-only; the app only filters and sorts it (see ``utils.filters``).
"""

import logging

import requests
import streamlit as st

from utils.config import BOOKING_API_URL, BOOKING_TIMEOUT_SECONDS

logger = logging.getLogger(__name__)


class BookingError(RuntimeError):
    """Raised when the booking feed cannot be fetched or parsed."""


def fetch_bookings(url=BOOKING_API_URL, timeout=BOOKING_TIMEOUT_SECONDS):
    """Download the pitch session list.

    Returns:
        list: Booking dictionaries with the feed's own keys
            (``District_Name_EN``, ``Venue_Name_EN``, ``Available_Date``, ...).

    Raises:
        BookingError: On network errors, non-2xx responses or a payload that
            is not a JSON list.
    """
    try:
        response = requests.get(url, headers={"Accept": "application/json"}, timeout=timeout)
    except requests.RequestException as e:
        raise BookingError(f"Failed to fetch data from external API: {e}") from e

    if not response.ok:
        raise BookingError(f"Failed to fetch data from external API: {response.reason}")

    try:
        data = response.json()
    except ValueError as e:
        raise BookingError("External API returned invalid JSON") from e

    if not isinstance(data, list):
        raise BookingError("External API returned an unexpected payload")
    return data


# Cached for 10 minutes; the feed is refreshed a few times per day upstream
# Failures raise and are therefore never cached
@st.cache_data(ttl=600, show_spinner=False)
def _cached_bookings():
    return fetch_bookings()


def load_bookings():
    """Return ``(bookings, error_message)`` for the booking page."""
    try:
        bookings = _cached_bookings()
    except BookingError as e:
        logger.error(f"Error fetching booking data: {e}")
        return [], "Failed to fetch data. Please try again later."
    logger.info(f"Loaded {len(bookings)} pitch sessions")
    return bookings, None
