"""
================================================================================
DISPLAY AND FORMATTING UTILITIES
================================================================================

Purpose: Small helpers that turn database rows into display strings, badges
and table data, so pages render matches, players and availability the same
way everywhere.
================================================================================
"""

from datetime import datetime

import pandas as pd
import streamlit as st

STATUS_EMOJI = {
    'accepted': '🟢',
    'declined': '🔴',
    'pending': '⚪',
    'scheduled': '🔵',
    'completed': '🏁',
    'cancelled': '⛔',
}


def parse_match_datetime(datetime_string):
    """Parse an ISO datetime string from the database or a form.

    Handles the 'Z' suffix, which ``datetime.fromisoformat`` rejects on older
    Python versions.

    Args:
        datetime_string (str or datetime or None): Value to parse.

    Returns:
        datetime or None: Parsed value, None for empty input.

    Example:
        >>> parse_match_datetime("2025-07-20T18:30:00Z")
        datetime.datetime(2025, 7, 20, 18, 30, tzinfo=datetime.timezone.utc)
    """
    if not datetime_string:
        return None
    if isinstance(datetime_string, str):
        return datetime.fromisoformat(datetime_string.replace('Z', '+00:00'))
    return datetime_string


def format_match_datetime(datetime_string):
    """Format a match kick-off as ``20.07.2025 at 18:30``."""
    dt = parse_match_datetime(datetime_string)
    if dt is None:
        return "N/A"
    return f"{dt.strftime('%d.%m.%Y')} at {dt.strftime('%H:%M')}"


def format_short_datetime(datetime_string):
    """Return ``YYYY-MM-DD HH:MM`` from an ISO string without timezone conversion."""
    if not datetime_string:
        return ""
    return str(datetime_string).replace('T', ' ')[:16]


def format_jersey(jersey_number):
    return f"#{jersey_number}" if jersey_number is not None else "#N/A"


def initials(full_name):
    """Return up to two uppercase initials, ``"U"`` when the name is empty.

    Example:
        >>> initials("Chan Tai Man")
        'CT'
    """
    words = (full_name or "").split()[:2]
    return ''.join(word[0].upper() for word in words) or "U"


def status_badge(status, label=None):
    """Prefix a status label with its colour emoji, e.g. ``'🟢 Accepted'``."""
    status = status or 'pending'
    emoji = STATUS_EMOJI.get(status, '⚪')
    return f"{emoji} {label or status.capitalize()}"


def availability_badge(is_available, available_label="Available", unavailable_label="Unavailable",
                       not_set_label="Not Set"):
    if is_available is None:
        return f"⚪ {not_set_label}"
    return f"🟢 {available_label}" if is_available else f"🔴 {unavailable_label}"


def render_user_avatar(full_name, size='large'):
    """Render a player's initials as a heading (profiles carry no pictures)."""
    text = initials(full_name)
    if size == 'small':
        st.markdown(f"### {text}")
    else:
        st.markdown(f"# {text}")


def players_stats_frame(players, stats):
    """Build the roster table shown under the player cards.

    Args:
        players (list): Profile dictionaries.
        stats (dict): Player id -> stats dict from ``utils.db.get_player_stats``.

    Returns:
        pd.DataFrame: One row per player with stats columns; an unrated
            player shows ``None`` in the Rating column.
    """
    rows = []
    for player in players:
        player_stats = stats.get(player['id'], {})
        rating = player_stats.get('average_rating', 0)
        rows.append({
            'Player': player.get('full_name', ''),
            'Jersey': player.get('jersey_number'),
            'Position': player.get('position') or '',
            'Matches': player_stats.get('matches_played', 0),
            'Goals': player_stats.get('goals', 0),
            'Assists': player_stats.get('assists', 0),
            'Rating': rating if rating > 0 else None,
        })
    return pd.DataFrame(rows, columns=['Player', 'Jersey', 'Position', 'Matches', 'Goals', 'Assists', 'Rating'])
