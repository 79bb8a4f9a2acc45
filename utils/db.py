# Supabase data access layer for the team app
# This module centralizes all database access operations
# Architecture: Streamlit UI → utils.* service helpers → utils.db → Supabase REST API
# Other modules should not import Supabase directly, they should use functions from this module
#
# Every function takes the Supabase client explicitly. Each browser session owns
# its own client because the client carries the signed-in user's token, and
# row-level security decides which rows that token may read or write.
# Cached reads take the client as `_client` (not hashed) plus a `cache_token`
# ("<user id>:<session key>") so a bumped session key forces a refetch.

import logging
from collections import defaultdict
from datetime import datetime, timezone
from decimal import ROUND_HALF_UP, Decimal

import streamlit as st
from supabase import Client, ClientOptions, create_client

from utils.config import get_supabase_credentials

logger = logging.getLogger(__name__)

PROFILES = "profiles"
MATCHES = "matches"
PARTICIPANTS = "match_participants"
AVAILABILITY = "availability"
MATCH_EVENTS = "match_events"
PLAYER_RATINGS = "player_ratings"

PARTICIPATION_STATUSES = ("pending", "accepted", "declined")
EVENT_TYPES = ("training", "match")
MATCH_EVENT_TYPES = ("goal", "assist", "water_break", "halftime", "game_start", "game_end")
PLAYER_EVENT_TYPES = ("goal", "assist")
RATING_RANGE = (1, 10)
UPCOMING_MATCH_LIMIT = 5
PAGE_SIZE = 1000

# CONNECTION

# Create a Supabase client for one browser session
# Token auto-refresh runs on a background thread in the SDK; it is disabled here
# and the session is refreshed from the script thread on rerun instead (see utils.auth)
def create_supabase_client() -> Client:
    url, key = get_supabase_credentials()
    return create_client(url, key, options=ClientOptions(auto_refresh_token=False))

# INTERNAL HELPERS

def _now_iso():
    return datetime.now(timezone.utc).isoformat()

def _blank_to_none(value):
    # Form widgets hand back "" for untouched text inputs
    if isinstance(value, str):
        value = value.strip()
    return value if value not in ("", None) else None

def _first(result):
    if result.data:
        return result.data[0]
    return None

# Supabase returns at most PAGE_SIZE rows per request, so unbounded reads are
# fetched in pages with .range() until a short page comes back
# build_query returns a fresh, ordered builder for each page so pages do not overlap
def _fetch_all(build_query):
    rows = []
    offset = 0
    while True:
        page = build_query().range(offset, offset + PAGE_SIZE - 1).execute().data or []
        rows.extend(page)
        if len(page) < PAGE_SIZE:
            break
        offset += PAGE_SIZE
    return rows

# Show a user-facing error for a failed read and log it
# The error text is classified so configuration problems get a helpful hint
def show_db_error(context, error):
    error_message = str(error)
    logger.error(f"Error fetching {context}: {error_message}")

    has_url_error = "URL not provided" in error_message or "invalid url" in error_message.lower()
    has_key_error = "key not provided" in error_message.lower() or "api key" in error_message.lower()
    has_auth_error = "jwt" in error_message.lower() or "unauthorized" in error_message.lower()

    if has_url_error or has_key_error:
        st.error("⚠️ **Database Configuration Error**\n\nPlease check your Supabase credentials in the app secrets.")
    elif has_auth_error:
        st.error("⚠️ **Session Expired**\n\nPlease sign in again.")
    else:
        st.error(f"⚠️ **Failed to load {context}**\n\nError: {error_message[:200]}")

# PROFILES

# Fetch exactly one profile row by auth user id
# Returns None when the row does not exist (e.g. sign-up finished but the insert failed)
def get_profile(client, user_id):
    result = client.table(PROFILES).select("*").eq("id", user_id).limit(1).execute()
    return _first(result)

def insert_profile(client, user_id, email, username, full_name, jersey_number=None, position=None, phone=None):
    profile = {
        "id": user_id,
        "username": username,
        "email": email,
        "full_name": full_name,
        "jersey_number": jersey_number or None,
        "position": _blank_to_none(position),
        "phone": _blank_to_none(phone),
    }
    result = client.table(PROFILES).insert(profile).execute()
    return _first(result)

# Update the editable profile fields; email and username are read-only
def update_profile(client, user_id, full_name, jersey_number=None, position=None, phone=None):
    full_name = _blank_to_none(full_name)
    if not full_name:
        raise ValueError("Full name is required")

    jersey_number = _blank_to_none(jersey_number)
    if jersey_number is not None:
        jersey_number = int(jersey_number)

    update_data = {
        "full_name": full_name,
        "jersey_number": jersey_number,
        "position": _blank_to_none(position),
        "phone": _blank_to_none(phone),
        "updated_at": _now_iso(),
    }
    result = client.table(PROFILES).update(update_data).eq("id", user_id).execute()
    return _first(result)

# Team roster ordered by name
@st.cache_data(ttl=120, show_spinner=False)
def get_players(_client, cache_token):
    return _fetch_all(
        lambda: _client.table(PROFILES).select("*").order("full_name").order("id")
    )

# MATCHES

def list_matches(client, upcoming_only=False, limit=None):
    def build_query():
        query = client.table(MATCHES).select("*")
        if upcoming_only:
            return query.gte("match_date", _now_iso()).order("match_date").order("id")
        return query.order("match_date", desc=True).order("id")

    if limit:
        return build_query().limit(limit).execute().data or []
    return _fetch_all(build_query)

# Fetch participants of several matches, grouped by match id
# Every requested match id gets a key, even when nobody responded yet
def list_participants(client, match_ids):
    grouped = {match_id: [] for match_id in match_ids}
    if not match_ids:
        return grouped
    rows = _fetch_all(
        lambda: client.table(PARTICIPANTS).select(
            "*, profiles(full_name, jersey_number)"
        ).in_("match_id", list(match_ids)).order("id")
    )
    for participant in rows:
        grouped.setdefault(participant["match_id"], []).append(participant)
    return grouped

# All matches (newest first) together with their participants
@st.cache_data(ttl=60, show_spinner=False)
def get_matches(_client, cache_token):
    matches = list_matches(_client)
    participants = list_participants(_client, [m["id"] for m in matches])
    logger.info(f"Loaded {len(matches)} matches")
    return {"matches": matches, "participants": participants}

# Create a match and add its creator as an accepted participant
def create_match(client, match, created_by):
    for field in ("opponent_team", "match_date", "location"):
        if not _blank_to_none(match.get(field)):
            raise ValueError(f"{field} is required")

    match_data = {
        "opponent_team": match["opponent_team"].strip(),
        "match_date": match["match_date"],
        "location": match["location"].strip(),
        "home_jersey_color": _blank_to_none(match.get("home_jersey_color")),
        "away_jersey_color": _blank_to_none(match.get("away_jersey_color")),
        "is_home_game": bool(match.get("is_home_game", True)),
        "status": "scheduled",
        "created_by": created_by,
    }
    created = _first(client.table(MATCHES).insert(match_data).execute())
    if created is None:
        raise RuntimeError("Match was not created")

    if created_by:
        client.table(PARTICIPANTS).insert({
            "match_id": created["id"],
            "player_id": created_by,
            "status": "accepted",
        }).execute()
    return created

# Record a player's RSVP; one row per (match, player)
def respond_to_match(client, match_id, player_id, status):
    if status not in PARTICIPATION_STATUSES:
        raise ValueError(f"Unknown participation status: {status}")
    if not player_id:
        raise ValueError("A signed-in player is required")
    client.table(PARTICIPANTS).upsert(
        {"match_id": match_id, "player_id": player_id, "status": status},
        on_conflict="match_id,player_id",
    ).execute()

def set_key_player(client, match_id, player_id, is_key_player):
    client.table(PARTICIPANTS).update(
        {"is_key_player": bool(is_key_player)}
    ).eq("match_id", match_id).eq("player_id", player_id).execute()

# Mark a match as completed with its final score
def record_match_result(client, match_id, final_score_home, final_score_away, video_link=None):
    if final_score_home < 0 or final_score_away < 0:
        raise ValueError("Scores cannot be negative")
    update_data = {
        "status": "completed",
        "final_score_home": int(final_score_home),
        "final_score_away": int(final_score_away),
        "video_link": _blank_to_none(video_link),
        "updated_at": _now_iso(),
    }
    client.table(MATCHES).update(update_data).eq("id", match_id).execute()

def delete_match(client, match_id):
    client.table(MATCHES).delete().eq("id", match_id).execute()

# MATCH EVENTS

def add_match_event(client, match_id, event_type, event_time, player_id=None):
    if event_type not in MATCH_EVENT_TYPES:
        raise ValueError(f"Unknown match event: {event_type}")
    if event_type in PLAYER_EVENT_TYPES and not player_id:
        raise ValueError(f"A player is required for {event_type}")
    if event_time is None or int(event_time) < 0:
        raise ValueError("Event time must be a non-negative minute")

    event = {
        "match_id": match_id,
        "event_type": event_type,
        "event_time": int(event_time),
        "player_id": player_id,
    }
    return _first(client.table(MATCH_EVENTS).insert(event).execute())

@st.cache_data(ttl=60, show_spinner=False)
def get_match_events(_client, match_id, cache_token):
    return _fetch_all(
        lambda: _client.table(MATCH_EVENTS).select(
            "*, profiles(full_name, jersey_number)"
        ).eq("match_id", match_id).order("event_time").order("id")
    )

# RATINGS

# Submit or update a rating; one rating per (match, rated player, rater)
def submit_player_rating(client, match_id, rated_player_id, rater_id, rating, comments=""):
    low, high = RATING_RANGE
    if not isinstance(rating, int) or not low <= rating <= high:
        raise ValueError(f"Rating must be between {low} and {high}")
    if rated_player_id == rater_id:
        raise ValueError("Players cannot rate themselves")

    client.table(PLAYER_RATINGS).upsert(
        {
            "match_id": match_id,
            "rated_player_id": rated_player_id,
            "rater_id": rater_id,
            "rating": rating,
            "comments": _blank_to_none(comments),
        },
        on_conflict="match_id,rated_player_id,rater_id",
    ).execute()

# AVAILABILITY

# Availability of the whole team, oldest date first
@st.cache_data(ttl=60, show_spinner=False)
def get_availability(_client, cache_token):
    return _fetch_all(
        lambda: _client.table(AVAILABILITY).select("*, profiles(full_name)").order("date").order("id")
    )

# Set a player's availability for a date; one row per (player, date)
def upsert_availability(client, player_id, date, is_available, event_type="training", notes=None):
    if not player_id:
        raise ValueError("A signed-in player is required")
    if event_type not in EVENT_TYPES:
        raise ValueError(f"Unknown event type: {event_type}")
    if not date:
        raise ValueError("Date is required")

    row = {
        "player_id": player_id,
        "date": date if isinstance(date, str) else date.isoformat(),
        "is_available": bool(is_available),
        "event_type": event_type,
        "notes": _blank_to_none(notes),
    }
    client.table(AVAILABILITY).upsert(row, on_conflict="player_id,date").execute()

def delete_availability(client, availability_id):
    client.table(AVAILABILITY).delete().eq("id", availability_id).execute()

# DASHBOARD

# Stats cards and the next matches for the dashboard
@st.cache_data(ttl=60, show_spinner=False)
def get_dashboard_data(_client, profile_id, cache_token):
    upcoming = list_matches(_client, upcoming_only=True, limit=UPCOMING_MATCH_LIMIT)

    players = _client.table(PROFILES).select("id", count="exact").execute()
    played = _client.table(MATCHES).select("id", count="exact").eq("status", "completed").execute()
    pending = _client.table(PARTICIPANTS).select("id", count="exact").eq(
        "player_id", profile_id
    ).eq("status", "pending").execute()

    return {
        "upcoming_matches": upcoming,
        "stats": {
            "upcoming_matches": len(upcoming),
            "total_players": players.count or 0,
            "matches_played": played.count or 0,
            "pending_invitations": pending.count or 0,
        },
    }

# PLAYER STATISTICS

# Matches played, goals, assists and average rating for each player
# Aggregation happens in Python because the REST API has no GROUP BY
@st.cache_data(ttl=120, show_spinner=False)
def get_player_stats(_client, player_ids, cache_token):
    player_ids = list(player_ids)
    stats = {
        player_id: {"matches_played": 0, "goals": 0, "assists": 0, "average_rating": 0}
        for player_id in player_ids
    }
    if not player_ids:
        return stats

    participations = _fetch_all(
        lambda: _client.table(PARTICIPANTS).select("id, player_id").in_(
            "player_id", player_ids
        ).eq("status", "accepted").order("id")
    )
    for row in participations:
        stats[row["player_id"]]["matches_played"] += 1

    events = _fetch_all(
        lambda: _client.table(MATCH_EVENTS).select("id, player_id, event_type").in_(
            "player_id", player_ids
        ).in_("event_type", list(PLAYER_EVENT_TYPES)).order("id")
    )
    for row in events:
        key = "goals" if row["event_type"] == "goal" else "assists"
        stats[row["player_id"]][key] += 1

    ratings = _fetch_all(
        lambda: _client.table(PLAYER_RATINGS).select("id, rated_player_id, rating").in_(
            "rated_player_id", player_ids
        ).order("id")
    )
    collected = defaultdict(list)
    for row in ratings:
        collected[row["rated_player_id"]].append(row["rating"])
    for player_id, values in collected.items():
        stats[player_id]["average_rating"] = average_rating(values)

    return stats

# Mean rating to one decimal, halves rounded up (7.25 -> 7.3)
def average_rating(values):
    if not values:
        return 0
    mean = Decimal(sum(values)) / Decimal(len(values))
    return float(mean.quantize(Decimal("0.1"), rounding=ROUND_HALF_UP))
