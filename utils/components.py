"""
Shared UI components for the team app
- Create-user form used on the login page and the create-user page
- Match summary card used on the dashboard and the matches page
"""
import streamlit as st

from utils.filters import key_players, participant_preview
from utils.formatting import format_match_datetime, status_badge
from utils.i18n import t

PARTICIPANT_PREVIEW = 3


def render_create_user_form(auth, form_key="create_user_form"):
    """
    Render the registration form and create the account on submit

    Args:
        auth: AuthSession of this browser session
        form_key: Unique form key; the form appears on two pages
    """
    st.caption(t('createUserDescription'))
    with st.form(form_key, clear_on_submit=False):
        col1, col2 = st.columns(2)
        with col1:
            email = st.text_input(f"{t('email')} *")
            username = st.text_input(f"{t('username')} *")
            password = st.text_input(f"{t('password')} *", type="password")
        with col2:
            full_name = st.text_input(f"{t('fullName')} *")
            jersey_number = st.number_input(t('jerseyNumber'), min_value=0, max_value=99, value=None, step=1)
            position = st.text_input(t('position'))
            phone = st.text_input(t('phone'))
        submitted = st.form_submit_button(t('create'), type="primary")

    if not submitted:
        return

    if not all([email.strip(), username.strip(), password, full_name.strip()]):
        st.error("❌ Please fill in all required fields (*)")
        return

    with st.spinner(t('loading')):
        error = auth.create_user(
            email=email.strip(),
            username=username.strip(),
            password=password,
            full_name=full_name.strip(),
            jersey_number=int(jersey_number) if jersey_number is not None else None,
            position=position,
            phone=phone,
        )
    if error:
        st.error(f"❌ {error}")
    else:
        auth.invalidate()
        st.success(f"✅ {t('createUserSuccess')}")


def participant_name(participant):
    profile = participant.get('profiles') or {}
    return profile.get('full_name') or participant.get('player_id', '')


def render_match_summary(match, participants=None):
    """
    Render the headline of a match: opponent, kick-off, location and status

    When participants are given, the first few names are listed with their RSVP
    status followed by "+N more", and key players are highlighted.
    """
    st.markdown(f"#### {t('vs', opponent_team=match.get('opponent_team', ''))}")
    meta = [
        f"📅 {format_match_datetime(match.get('match_date'))}",
        f"📍 {match.get('location', '')}",
        "🏠" if match.get('is_home_game') else "✈️",
        status_badge(match.get('status'), t(match.get('status') or 'scheduled')),
    ]
    st.caption(' • '.join(meta))

    if match.get('status') == 'completed' and match.get('final_score_home') is not None:
        st.markdown(f"**{t('finalScore')}:** {match['final_score_home']} - {match.get('final_score_away')}")

    if participants is None:
        return

    shown, remaining = participant_preview(participants, PARTICIPANT_PREVIEW)
    if shown:
        line = ', '.join(
            f"{participant_name(p)} {status_badge(p.get('status'), t(p.get('status') or 'pending'))}"
            for p in shown
        )
        if remaining > 0:
            line += f" +{remaining} more"
        st.caption(f"👥 {t('participants')}: {line}")

    stars = key_players(participants)
    if stars:
        st.caption(f"⭐ {t('keyPlayers')}: {', '.join(participant_name(p) for p in stars)}")
