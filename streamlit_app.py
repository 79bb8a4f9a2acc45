"""
================================================================================
FOOTBALL TEAM STREAMLIT APPLICATION
================================================================================

Purpose: Main entry point for the football team manager.
Architecture: Browser → Streamlit → utils modules → Supabase

Main Features:
- Dashboard: team stats and the next matches
- Matches: create matches, RSVP, record results, events and ratings
- Players: roster with search and statistics
- Availability: per-day availability for training and matches
- Pitch Booking: public LCSD turf pitch sessions
- Profile: edit your own profile; create accounts for new team members

How it works:
1. One AuthSession per browser session decides which pages exist
2. Signed out → only the login page is registered
3. Signed in → all team pages plus the sidebar user block and logout button
4. Every rerun re-checks the auth session (throttled)
================================================================================
"""

# =============================================================================
# PART 1: IMPORTS & CONFIGURATION
# =============================================================================

import logging

import streamlit as st

from utils.auth import get_auth_session, handle_logout
from utils.config import ConfigError, configure_logging
from utils.filters import initialize_filter_state
from utils.formatting import format_jersey, initials
from utils.i18n import LANGUAGE_KEY, LANGUAGES, get_language, set_language, t

st.set_page_config(
    page_title="Football Team",
    page_icon="⚽",
    layout="wide",
    initial_sidebar_state="expanded"
)

configure_logging()
logger = logging.getLogger(__name__)

# =============================================================================
# PART 2: SESSION STATE
# =============================================================================

if LANGUAGE_KEY not in st.session_state:
    set_language(get_language())
initialize_filter_state()

try:
    auth = get_auth_session()
except ConfigError as e:
    logger.error(f"Configuration error: {e}")
    st.error(f"⚠️ **Configuration Error**\n\n{e}")
    st.stop()

# =============================================================================
# PART 3: SIDEBAR
# =============================================================================

with st.sidebar:
    language_codes = list(LANGUAGES.keys())
    selected_language = st.selectbox(
        f"🌐 {t('language')}",
        options=language_codes,
        index=language_codes.index(get_language()),
        format_func=lambda code: LANGUAGES[code],
    )
    if selected_language != get_language():
        set_language(selected_language)
        st.rerun()

    if auth.status == "signed_in":
        profile = auth.profile
        st.divider()
        col_avatar, col_info = st.columns([1, 3])
        with col_avatar:
            st.markdown(f"### {initials(profile.get('full_name'))}")
        with col_info:
            st.markdown(f"**{profile.get('full_name', '')}**")
            st.caption(format_jersey(profile.get('jersey_number')))

        if st.button(f"🚪 {t('logout')}", use_container_width=True):
            handle_logout()

# =============================================================================
# PART 4: NAVIGATION
# =============================================================================
# Pages only exist for the state the session is in

if auth.status == "loading":
    st.info(t('loading'))
    st.stop()

if auth.status == "signed_in":
    pages = [
        st.Page("pages/dashboard.py", title=t('dashboard'), icon="🏠", default=True),
        st.Page("pages/matches.py", title=t('matches'), icon="⚽"),
        st.Page("pages/players.py", title=t('players'), icon="👥"),
        st.Page("pages/availability.py", title=t('availability'), icon="📅"),
        st.Page("pages/booking.py", title=t('booking'), icon="🏟️"),
        st.Page("pages/profile.py", title=t('profile'), icon="👤"),
        st.Page("pages/create_user.py", title=t('createUser'), icon="➕"),
    ]
else:
    pages = [st.Page("pages/login.py", title=t('login'), icon="🔐", default=True)]

st.navigation(pages).run()
