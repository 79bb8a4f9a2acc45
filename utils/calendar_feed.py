"""
iCal export for team matches
Used by the matches page download button and the /calendar/matches.ics endpoint
"""
from datetime import datetime, timedelta, timezone
from typing import Dict, List

from icalendar import Alarm, Calendar, Event

from utils.formatting import parse_match_datetime

MATCH_DURATION = timedelta(hours=2)
REMINDER_BEFORE = timedelta(minutes=60)


def _new_calendar(calendar_name: str) -> Calendar:
    cal = Calendar()
    cal.add('version', '2.0')
    cal.add('prodid', '-//Football Team//EN')
    cal.add('calscale', 'GREGORIAN')
    cal.add('method', 'PUBLISH')
    cal.add('X-WR-CALNAME', calendar_name)
    cal.add('X-WR-CALDESC', 'Scheduled team matches')
    return cal


def _match_description(match: Dict) -> str:
    lines = ["Home game" if match.get('is_home_game') else "Away game"]
    if match.get('home_jersey_color') or match.get('away_jersey_color'):
        lines.append(
            f"Jerseys: {match.get('home_jersey_color') or '-'} / {match.get('away_jersey_color') or '-'}"
        )
    if match.get('final_score_home') is not None and match.get('final_score_away') is not None:
        lines.append(f"Final score: {match['final_score_home']} - {match['final_score_away']}")
    if match.get('video_link'):
        lines.append(f"Video: {match['video_link']}")
    return "\n".join(lines)


def build_matches_calendar(matches: List[Dict], calendar_name: str = "Football Team Matches") -> bytes:
    """
    Build an iCal document with one VEVENT per match

    Matches without a date are skipped. A naive match date is treated as UTC.

    Args:
        matches: Match rows from utils.db
        calendar_name: Shown by calendar clients as the feed name

    Returns:
        bytes: iCal content ready to serve as text/calendar
    """
    cal = _new_calendar(calendar_name)

    for match in matches:
        start_time = parse_match_datetime(match.get('match_date'))
        if start_time is None:
            continue
        if start_time.tzinfo is None:
            start_time = start_time.replace(tzinfo=timezone.utc)

        event = Event()
        event.add('uid', f"{match.get('id')}@football-team")
        event.add('dtstamp', datetime.now(timezone.utc))
        event.add('dtstart', start_time)
        event.add('dtend', start_time + MATCH_DURATION)
        event.add('summary', f"vs {match.get('opponent_team', 'TBD')}")
        if match.get('location'):
            event.add('location', match['location'])
        event.add('description', _match_description(match))
        event.add('status', 'CANCELLED' if match.get('status') == 'cancelled' else 'CONFIRMED')
        event.add('sequence', 0)

        alarm = Alarm()
        alarm.add('action', 'DISPLAY')
        alarm.add('trigger', -REMINDER_BEFORE)
        alarm.add('description', 'Match reminder')
        event.add_component(alarm)

        cal.add_component(event)

    return cal.to_ical()
