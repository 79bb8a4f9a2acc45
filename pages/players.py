"""pages.players

Team roster with search, per-player statistics and a goals/assists chart.
"""

import streamlit as st

from utils.auth import check_auth, get_auth_session
from utils.db import get_player_stats, get_players, show_db_error
from utils.filters import filter_players
from utils.formatting import format_jersey, initials, players_stats_frame
from utils.i18n import t
from utils.visualizations import create_player_stats_chart

check_auth()
auth = get_auth_session()

st.title(f"👥 {t('players')}")

search = st.text_input(
    t('searchPlayers'),
    key='player_search',
    placeholder=t('searchPlayers'),
    label_visibility="collapsed",
)

try:
    players = get_players(auth.client, auth.cache_token)
    stats = get_player_stats(auth.client, tuple(p['id'] for p in players), auth.cache_token)
except Exception as e:
    show_db_error("players", e)
    st.stop()

visible = filter_players(players, search)
if not visible:
    st.info(t('noPlayers'))
    st.stop()

COLUMNS = 3
for start in range(0, len(visible), COLUMNS):
    cols = st.columns(COLUMNS)
    for col, player in zip(cols, visible[start:start + COLUMNS]):
        player_stats = stats.get(player['id'], {})
        with col, st.container(border=True):
            is_me = player['id'] == auth.user_id
            name = player.get('full_name', '')
            st.markdown(f"### {initials(name)} {name}" + (f" · _{t('you')}_" if is_me else ""))
            st.caption(f"{format_jersey(player.get('jersey_number'))} • {player.get('position') or '-'}")
            m1, m2, m3, m4 = st.columns(4)
            m1.metric(t('matches'), player_stats.get('matches_played', 0))
            m2.metric(t('goal'), player_stats.get('goals', 0))
            m3.metric(t('assist'), player_stats.get('assists', 0))
            rating = player_stats.get('average_rating', 0)
            m4.metric(t('rating'), rating if rating > 0 else "-")

st.divider()

stats_df = players_stats_frame(visible, stats)
st.plotly_chart(create_player_stats_chart(stats_df), use_container_width=True)
st.dataframe(stats_df, hide_index=True, use_container_width=True)
