"""Filtering and sorting utilities for players, availability, matches and bookings.

All functions work on in-memory lists of row dictionaries as returned by
``utils.db`` or ``utils.booking``. Nothing here talks to the database.

KEY CONCEPTS:
------------
- Search filters: case-insensitive substring matching
- Multiple filters: all filters must match (AND logic, not OR)
- "No selection" means "no filter": an empty search or ``None`` district keeps
  every row

EXAMPLE:
--------
```python
visible = filter_bookings(bookings, search="victoria", district="Wan Chai",
                          day=date(2025, 7, 20), available_only=True)
visible = sort_bookings(visible, "Available_Date", "asc")
```
"""

from datetime import date, timedelta

import streamlit as st

# =============================================================================
# PLAYERS
# =============================================================================

def filter_players(players, search):
    """Keep players whose name, username or position contains ``search``.

    Args:
        players (list): Profile dictionaries.
        search (str): Search text; empty keeps everyone.

    Returns:
        list: Matching profiles in their original order.
    """
    term = (search or "").strip().lower()
    if not term:
        return list(players)

    def matches(player):
        fields = (player.get('full_name'), player.get('username'), player.get('position'))
        return any(term in value.lower() for value in fields if value)

    return [p for p in players if matches(p)]

# =============================================================================
# AVAILABILITY
# =============================================================================

def _day_string(day):
    return day if isinstance(day, str) else day.isoformat()


def availability_for_date(rows, day):
    """Return all availability rows for a given date."""
    day_string = _day_string(day)
    return [row for row in rows if row.get('date') == day_string]


def availability_status(rows, day, player_id):
    """Return True/False for the player's availability on ``day``, None if unset."""
    for row in availability_for_date(rows, day):
        if row.get('player_id') == player_id:
            return row.get('is_available')
    return None


def upcoming_availability(rows, player_id, start=None, days=7):
    """Pair each of the next ``days`` dates with the player's row (or None).

    Returns:
        list: ``(date, row_or_None)`` tuples starting with ``start`` (today by default).
    """
    start = start or date.today()
    own_rows = {row.get('date'): row for row in rows if row.get('player_id') == player_id}
    result = []
    for offset in range(days):
        day = start + timedelta(days=offset)
        result.append((day, own_rows.get(day.isoformat())))
    return result

# =============================================================================
# MATCH PARTICIPATION
# =============================================================================

def participation_status(participants, player_id):
    """Return the player's RSVP status for a match, ``"pending"`` when absent."""
    for participant in participants or []:
        if participant.get('player_id') == player_id:
            return participant.get('status') or "pending"
    return "pending"


def participant_preview(participants, limit=3):
    """Return the first ``limit`` participants of any status and how many are left over."""
    participants = list(participants or [])
    shown = participants[:limit]
    return shown, len(participants) - len(shown)


def key_players(participants):
    return [p for p in participants or [] if p.get('is_key_player')]

# =============================================================================
# BOOKINGS
# =============================================================================
# PURPOSE: Filter/sort the LCSD pitch session feed

DEFAULT_BOOKING_SORT = {'key': 'Available_Date', 'direction': 'asc'}


def _localized(booking, field, language):
    suffix = "TC" if language == "zh" else "EN"
    return booking.get(f"{field}_{suffix}") or ""


def _available_courts(booking):
    try:
        return int(booking.get('Available_Courts') or 0)
    except (TypeError, ValueError):
        return 0


def get_districts(bookings, language="en"):
    """Return the unique district names in the chosen language, sorted.

    Chinese names sort by code point, which keeps the order stable across
    platforms but is not stroke or Jyutping order.
    """
    return sorted({_localized(b, 'District_Name', language) for b in bookings} - {""})


def filter_bookings(bookings, search="", district=None, day=None, available_only=False, language="en"):
    """Filter pitch sessions by venue text, district, date and free courts.

    Args:
        bookings (list): Rows of the open-data feed.
        search (str): Substring of the venue name (in ``language``).
        district (str, optional): District name; ``None`` or ``"all"`` keeps all.
        day (date, optional): Only sessions on this date.
        available_only (bool): Only sessions with at least one free court.
        language (str): ``"en"`` or ``"zh"``; picks the _EN or _TC columns.

    Returns:
        list: Matching rows.
    """
    term = (search or "").lower()
    day_string = day.strftime('%Y-%m-%d') if day else None

    result = []
    for booking in bookings:
        if term not in _localized(booking, 'Venue_Name', language).lower():
            continue
        if district and district != "all" and _localized(booking, 'District_Name', language) != district:
            continue
        if day_string and booking.get('Available_Date') != day_string:
            continue
        if available_only and _available_courts(booking) <= 0:
            continue
        result.append(booking)
    return result


def sort_bookings(bookings, key, direction="asc"):
    """Sort rows by a column; free courts compare as numbers, the rest as text."""
    if key == 'Available_Courts':
        sort_key = _available_courts
    else:
        sort_key = lambda b: str(b.get(key) or "")
    return sorted(bookings, key=sort_key, reverse=(direction == "desc"))


def next_sort_config(current, key):
    """Clicking the active ascending column flips it to descending, else ascending."""
    if current and current.get('key') == key and current.get('direction') == 'asc':
        return {'key': key, 'direction': 'desc'}
    return {'key': key, 'direction': 'asc'}

# =============================================================================
# FILTER SESSION STATE DEFAULTS
# =============================================================================
# PURPOSE: Single source of truth for filter-related session state keys

FILTER_SESSION_DEFAULTS = {
    'player_search': "",
    'booking_search': "",
    'booking_district': "all",
    'booking_date': None,
    'booking_available_only': False,
}


def get_filter_session_keys():
    """Return all filter-related session state keys (cleared on logout)."""
    return list(FILTER_SESSION_DEFAULTS.keys())


def initialize_filter_state():
    """Set filter defaults in session state without overwriting user choices."""
    for key, value in FILTER_SESSION_DEFAULTS.items():
        if key not in st.session_state:
            st.session_state[key] = value
