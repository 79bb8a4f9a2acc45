"""pages.dashboard

Landing page after sign-in: greeting, four team stat cards and the next
scheduled matches.
"""

import streamlit as st

from utils.auth import check_auth, get_auth_session
from utils.components import render_match_summary
from utils.db import get_dashboard_data, show_db_error
from utils.i18n import t

check_auth()
auth = get_auth_session()
profile = auth.profile

st.title(t('welcomeBack', name=profile.get('full_name', '')))
st.caption(t('teamStatus'))

try:
    data = get_dashboard_data(auth.client, auth.user_id, auth.cache_token)
except Exception as e:
    show_db_error("dashboard", e)
    st.stop()

stats = data['stats']
col1, col2, col3, col4 = st.columns(4)
col1.metric(f"📅 {t('upcomingMatches')}", stats['upcoming_matches'])
col2.metric(f"👥 {t('totalPlayers')}", stats['total_players'])
col3.metric(f"🏁 {t('matchesPlayed')}", stats['matches_played'])
col4.metric(f"✉️ {t('pendingInvitations')}", stats['pending_invitations'])

st.divider()

st.subheader(t('upcomingMatches'))
st.caption(t('nextMatches'))

if not data['upcoming_matches']:
    st.info(t('noUpcomingMatches'))
for match in data['upcoming_matches']:
    with st.container(border=True):
        render_match_summary(match)
