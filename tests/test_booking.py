"""Tests for the LCSD booking feed client. requests.get is always patched."""

from types import SimpleNamespace

import pytest
import requests

from utils import booking

SESSIONS = [{"Venue_Name_EN": "Victoria Park", "Available_Courts": "1"}]


def _response(payload=None, ok=True, reason="OK", bad_json=False):
    def json():
        if bad_json:
            raise ValueError("no json")
        return payload

    return SimpleNamespace(ok=ok, reason=reason, json=json)


@pytest.fixture
def calls(monkeypatch):
    recorded = []

    def install(response=None, error=None):
        def fake_get(url, headers=None, timeout=None):
            recorded.append({"url": url, "headers": headers, "timeout": timeout})
            if error:
                raise error
            return response

        monkeypatch.setattr(booking.requests, "get", fake_get)
        return recorded

    return install


class TestFetchBookings:
    def test_returns_list(self, calls):
        recorded = calls(_response(SESSIONS))
        assert booking.fetch_bookings() == SESSIONS
        assert recorded[0]["url"] == booking.BOOKING_API_URL
        assert recorded[0]["headers"] == {"Accept": "application/json"}

    def test_http_error(self, calls):
        calls(_response(ok=False, reason="Bad Gateway"))
        with pytest.raises(booking.BookingError, match="Bad Gateway"):
            booking.fetch_bookings()

    def test_network_error(self, calls):
        calls(error=requests.ConnectionError("refused"))
        with pytest.raises(booking.BookingError):
            booking.fetch_bookings()

    def test_invalid_json(self, calls):
        calls(_response(bad_json=True))
        with pytest.raises(booking.BookingError):
            booking.fetch_bookings()

    def test_unexpected_payload(self, calls):
        calls(_response({"items": []}))
        with pytest.raises(booking.BookingError):
            booking.fetch_bookings()


class TestLoadBookings:
    def test_success(self, calls):
        calls(_response(SESSIONS))
        assert booking.load_bookings() == (SESSIONS, None)

    def test_failure_returns_message(self, calls):
        calls(_response(ok=False, reason="Server Error"))
        bookings, error = booking.load_bookings()
        assert bookings == []
        assert error == "Failed to fetch data. Please try again later."

    def test_failure_is_not_cached(self, calls):
        calls(_response(ok=False, reason="Server Error"))
        booking.load_bookings()
        calls(_response(SESSIONS))
        assert booking.load_bookings() == (SESSIONS, None)
