"""pages.matches

Match list with RSVP, results, match events and player ratings.
New matches are created in a dialog; the creator joins as accepted.
"""

import logging
from datetime import datetime, time

import streamlit as st

from utils import db
from utils.auth import check_auth, get_auth_session
from utils.calendar_feed import build_matches_calendar
from utils.components import participant_name, render_match_summary
from utils.filters import participation_status
from utils.i18n import MATCH_EVENT_LABELS, t

logger = logging.getLogger(__name__)

check_auth()
auth = get_auth_session()
user_id = auth.user_id


def _save(write, message):
    """Run a database write; show validation and Supabase errors on the page."""
    try:
        write()
    except ValueError as e:
        st.error(f"❌ {e}")
        return
    except Exception as e:
        logger.error(f"Error saving {message}: {e}")
        st.error(f"❌ {t('error')}: {e}")
        return
    auth.invalidate()
    st.toast(f"✅ {message}")
    st.rerun()


# === CREATE MATCH DIALOG ===
@st.dialog(t('createMatch'))
def create_match_dialog():
    with st.form("create_match_form"):
        opponent_team = st.text_input(f"{t('opponentTeam')} *")
        col1, col2 = st.columns(2)
        with col1:
            match_day = st.date_input(f"{t('matchDate')} *")
        with col2:
            kick_off = st.time_input(f"{t('matchTime')} *", value=time(19, 0))
        location = st.text_input(f"{t('location')} *")
        col3, col4 = st.columns(2)
        with col3:
            home_color = st.text_input(t('homeJerseyColor'))
        with col4:
            away_color = st.text_input(t('awayJerseyColor'))
        is_home_game = st.checkbox(t('isHomeGame'), value=True)
        submitted = st.form_submit_button(t('create'), type="primary")

    if submitted:
        match = {
            'opponent_team': opponent_team,
            'match_date': datetime.combine(match_day, kick_off).isoformat(),
            'location': location,
            'home_jersey_color': home_color,
            'away_jersey_color': away_color,
            'is_home_game': is_home_game,
        }
        _save(lambda: db.create_match(auth.client, match, created_by=user_id), t('createMatch'))


# === PAGE HEADER ===
col_title, col_create = st.columns([4, 1])
with col_title:
    st.title(f"⚽ {t('matches')}")
with col_create:
    if st.button(f"➕ {t('createMatch')}", type="primary", use_container_width=True):
        create_match_dialog()

try:
    data = db.get_matches(auth.client, auth.cache_token)
    players = db.get_players(auth.client, auth.cache_token)
except Exception as e:
    db.show_db_error("matches", e)
    st.stop()

matches = data['matches']
participants_by_match = data['participants']
players_by_id = {p['id']: p for p in players}

if matches:
    st.download_button(
        f"📆 {t('exportCalendar')}",
        data=build_matches_calendar(matches),
        file_name="matches.ics",
        mime="text/calendar",
    )
else:
    st.info(t('noMatches'))


def _player_label(player_id):
    player = players_by_id.get(player_id, {})
    return player.get('full_name') or player_id


def render_rsvp(match, participants):
    status = participation_status(participants, user_id)
    st.markdown(f"**{t('yourStatus')}:** {t(status)}")
    if status != 'pending':
        return
    col_accept, col_decline, _ = st.columns([1, 1, 3])
    if col_accept.button(f"✅ {t('accept')}", key=f"accept_{match['id']}"):
        _save(lambda: db.respond_to_match(auth.client, match['id'], user_id, 'accepted'), t('accepted'))
    if col_decline.button(f"❌ {t('decline')}", key=f"decline_{match['id']}"):
        _save(lambda: db.respond_to_match(auth.client, match['id'], user_id, 'declined'), t('declined'))


def render_events(match):
    try:
        events = db.get_match_events(auth.client, match['id'], auth.cache_token)
    except Exception as e:
        db.show_db_error("match events", e)
        events = []

    for event in events:
        label = t(MATCH_EVENT_LABELS.get(event['event_type'], event['event_type']))
        who = (event.get('profiles') or {}).get('full_name')
        st.write(f"⏱️ {event['event_time']}' {label}" + (f" ({who})" if who else ""))

    with st.form(f"event_form_{match['id']}"):
        st.markdown(f"**{t('addEvent')}**")
        col1, col2, col3 = st.columns(3)
        event_type = col1.selectbox(
            t('eventType'), db.MATCH_EVENT_TYPES,
            format_func=lambda code: t(MATCH_EVENT_LABELS[code]),
        )
        event_time = col2.number_input(t('eventTime'), min_value=0, max_value=130, value=0, step=1)
        player_id = col3.selectbox(
            t('players'), [None] + list(players_by_id),
            format_func=lambda pid: "-" if pid is None else _player_label(pid),
        )
        if st.form_submit_button(t('addEvent')):
            _save(
                lambda: db.add_match_event(auth.client, match['id'], event_type, int(event_time), player_id),
                t('addEvent'),
            )


def render_result_form(match):
    with st.form(f"result_form_{match['id']}"):
        st.markdown(f"**{t('recordResult')}**")
        col1, col2 = st.columns(2)
        home = col1.number_input("Home", min_value=0, value=match.get('final_score_home') or 0, step=1)
        away = col2.number_input("Away", min_value=0, value=match.get('final_score_away') or 0, step=1)
        video_link = st.text_input(t('videoLink'), value=match.get('video_link') or "")
        if st.form_submit_button(t('save')):
            _save(
                lambda: db.record_match_result(auth.client, match['id'], int(home), int(away), video_link),
                t('recordResult'),
            )


def render_rating_form(match, participants):
    teammates = [p['player_id'] for p in participants
                 if p.get('status') == 'accepted' and p['player_id'] != user_id]
    if not teammates:
        return
    with st.form(f"rating_form_{match['id']}"):
        st.markdown(f"**{t('ratePlayer')}**")
        rated = st.selectbox(t('players'), teammates, format_func=_player_label)
        low, high = db.RATING_RANGE
        rating = st.slider(t('rating'), min_value=low, max_value=high, value=7)
        comments = st.text_area(t('comments'))
        if st.form_submit_button(t('submitRating')):
            _save(
                lambda: db.submit_player_rating(auth.client, match['id'], rated, user_id, int(rating), comments),
                t('submitRating'),
            )


def render_key_players(match, participants):
    for participant in participants:
        if participant.get('status') != 'accepted':
            continue
        current = bool(participant.get('is_key_player'))
        checked = st.checkbox(
            f"⭐ {participant_name(participant)}",
            value=current,
            key=f"key_{match['id']}_{participant['player_id']}",
        )
        if checked != current:
            _save(
                lambda: db.set_key_player(auth.client, match['id'], participant['player_id'], checked),
                t('keyPlayers'),
            )


# === MATCH CARDS ===
for match in matches:
    participants = participants_by_match.get(match['id'], [])
    with st.container(border=True):
        render_match_summary(match, participants)

        colors = [c for c in (match.get('home_jersey_color'), match.get('away_jersey_color')) if c]
        if colors:
            st.caption(f"👕 {' / '.join(colors)}")
        if match.get('video_link'):
            st.markdown(f"🎥 [{t('videoLink')}]({match['video_link']})")

        render_rsvp(match, participants)

        with st.expander(t('matchDetails')):
            tab_events, tab_result, tab_rating, tab_keys = st.tabs(
                [t('addEvent'), t('recordResult'), t('ratePlayer'), t('keyPlayers')]
            )
            with tab_events:
                render_events(match)
            with tab_result:
                render_result_form(match)
            with tab_rating:
                render_rating_form(match, participants)
            with tab_keys:
                render_key_players(match, participants)

            if match.get('created_by') == user_id:
                if st.button(f"🗑️ {t('delete')}", key=f"delete_{match['id']}"):
                    _save(lambda: db.delete_match(auth.client, match['id']), t('delete'))
