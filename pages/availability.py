"""pages.availability

Team availability per day. Players set their own availability for training
or match days; the page shows everyone's answers for a selected date and the
current player's next seven days.
"""

import logging
from datetime import date

import streamlit as st

from utils import db
from utils.auth import check_auth, get_auth_session
from utils.filters import availability_for_date, upcoming_availability
from utils.formatting import availability_badge
from utils.i18n import t

logger = logging.getLogger(__name__)

check_auth()
auth = get_auth_session()

if 'selected_date' not in st.session_state or st.session_state['selected_date'] is None:
    st.session_state['selected_date'] = date.today()


def _save(write):
    """Run a database write; show validation and Supabase errors on the page."""
    try:
        write()
    except ValueError as e:
        st.error(f"❌ {e}")
        return
    except Exception as e:
        logger.error(f"Error saving availability: {e}")
        st.error(f"❌ {t('error')}: {e}")
        return
    auth.invalidate()
    st.rerun()


def _badge(is_available):
    return availability_badge(is_available, t('available'), t('unavailable'), t('notSet'))


@st.dialog(t('addAvailability'))
def add_availability_dialog():
    with st.form("availability_form"):
        day = st.date_input(t('date'), value=st.session_state['selected_date'])
        choice = st.radio(t('availability'), [True, False],
                          format_func=lambda value: t('available') if value else t('unavailable'),
                          horizontal=True)
        event_type = st.selectbox(t('eventType'), db.EVENT_TYPES, format_func=t)
        notes = st.text_area(t('notes'))
        submitted = st.form_submit_button(t('save'), type="primary")

    if submitted:
        _save(lambda: db.upsert_availability(auth.client, auth.user_id, day, choice, event_type, notes))


col_title, col_add = st.columns([4, 1])
with col_title:
    st.title(f"📅 {t('availability')}")
with col_add:
    if st.button(f"➕ {t('addAvailability')}", type="primary", use_container_width=True):
        add_availability_dialog()

try:
    rows = db.get_availability(auth.client, auth.cache_token)
except Exception as e:
    db.show_db_error("availability", e)
    st.stop()

col_day, col_upcoming = st.columns([3, 2])

# === SELECTED DAY ===
with col_day:
    selected = st.date_input(t('pickDate'), key='selected_date')
    day_rows = availability_for_date(rows, selected)
    if not day_rows:
        st.info(t('noAvailability'))
    for row in day_rows:
        with st.container(border=True):
            name = (row.get('profiles') or {}).get('full_name', '')
            st.markdown(f"**{name}** · {_badge(row.get('is_available'))}")
            st.caption(t(row.get('event_type') or 'training') + (f" • {row['notes']}" if row.get('notes') else ""))
            if row.get('player_id') == auth.user_id:
                if st.button(f"🗑️ {t('delete')}", key=f"delete_availability_{row['id']}"):
                    _save(lambda: db.delete_availability(auth.client, row['id']))

# === NEXT 7 DAYS ===
with col_upcoming:
    st.subheader(t('upcomingAvailability'))
    for day, row in upcoming_availability(rows, auth.user_id):
        status = row.get('is_available') if row else None
        st.write(f"{day.strftime('%a %d.%m.')} · {_badge(status)}")
