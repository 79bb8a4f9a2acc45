"""Tests for the iCal export."""

from datetime import timedelta

from icalendar import Calendar

from utils.calendar_feed import build_matches_calendar


def _events(ical_bytes):
    return [c for c in Calendar.from_ical(ical_bytes).walk() if c.name == "VEVENT"]


def test_one_event_per_dated_match():
    matches = [
        {"id": "m1", "opponent_team": "Kowloon FC", "match_date": "2025-07-20T18:30:00+00:00",
         "location": "Victoria Park", "is_home_game": True, "status": "scheduled"},
        {"id": "m2", "opponent_team": "No Date FC", "match_date": None},
    ]
    events = _events(build_matches_calendar(matches))
    assert len(events) == 1

    event = events[0]
    assert str(event["summary"]) == "vs Kowloon FC"
    assert str(event["location"]) == "Victoria Park"
    assert str(event["uid"]) == "m1@football-team"
    assert str(event["status"]) == "CONFIRMED"
    assert event.decoded("dtend") - event.decoded("dtstart") == timedelta(hours=2)


def test_result_and_reminder():
    matches = [{"id": "m1", "opponent_team": "Tai Po", "match_date": "2025-07-20T18:30:00",
                "status": "completed", "final_score_home": 2, "final_score_away": 1,
                "video_link": "https://video.example/m1"}]
    event = _events(build_matches_calendar(matches))[0]
    assert "Final score: 2 - 1" in str(event["description"])
    assert "https://video.example/m1" in str(event["description"])

    alarms = [c for c in event.subcomponents if c.name == "VALARM"]
    assert len(alarms) == 1


def test_cancelled_match():
    matches = [{"id": "m1", "opponent_team": "Tai Po", "match_date": "2025-07-20T18:30:00Z",
                "status": "cancelled"}]
    assert str(_events(build_matches_calendar(matches))[0]["status"]) == "CANCELLED"


def test_empty_calendar_is_valid():
    calendar = Calendar.from_ical(build_matches_calendar([]))
    assert str(calendar["X-WR-CALNAME"]) == "Football Team Matches"
