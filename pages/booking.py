"""pages.booking

Turf soccer pitch sessions from the LCSD open-data feed, with filters and a
sortable table. Column names follow the selected language (_EN / _TC fields).
"""

import pandas as pd
import streamlit as st

from utils.auth import check_auth
from utils.booking import load_bookings
from utils.filters import (
    DEFAULT_BOOKING_SORT,
    filter_bookings,
    get_districts,
    next_sort_config,
    sort_bookings,
)
from utils.i18n import get_language, t

check_auth()
language = get_language()
suffix = "TC" if language == "zh" else "EN"

if 'booking_sort' not in st.session_state:
    st.session_state['booking_sort'] = dict(DEFAULT_BOOKING_SORT)

st.title(f"🏟️ {t('bookingInformation')}")
st.caption(t('bookingDescription'))

with st.spinner(t('loading')):
    bookings, error = load_bookings()
if error:
    st.error(f"❌ {error}")
    st.stop()

# === FILTERS ===
with st.container(border=True):
    st.subheader(t('filters'))
    st.caption(t('filterDescription'))
    col1, col2, col3, col4 = st.columns([3, 2, 2, 2])
    with col1:
        search = st.text_input(t('venue'), key='booking_search', placeholder=t('searchVenue'))
    with col2:
        districts = ["all"] + get_districts(bookings, language)
        if st.session_state.get('booking_district') not in districts:
            st.session_state['booking_district'] = "all"
        district = st.selectbox(
            t('district'), districts, key='booking_district',
            format_func=lambda d: t('allDistricts') if d == "all" else d,
        )
    with col3:
        day = st.date_input(t('pickDate'), key='booking_date')
    with col4:
        st.write("")
        available_only = st.checkbox(t('showAvailableOnly'), key='booking_available_only')

visible = filter_bookings(bookings, search, district, day, available_only, language)

# === SORTING ===
columns = {
    f"District_Name_{suffix}": ('District_Name_EN', t('district')),
    f"Venue_Name_{suffix}": ('Venue_Name_EN', t('venue')),
    'Available_Date': ('Available_Date', t('date')),
    'Session_Start_Time': ('Session_Start_Time', t('session')),
    'Available_Courts': ('Available_Courts', t('availableCourts')),
}

sort_config = st.session_state['booking_sort']
st.caption(t('sortBy'))
sort_cols = st.columns(len(columns))
for col, (field, (sort_key, label)) in zip(sort_cols, columns.items()):
    arrow = ""
    if sort_config.get('key') == sort_key:
        arrow = " ↑" if sort_config.get('direction') == 'asc' else " ↓"
    if col.button(f"{label}{arrow}", key=f"sort_{sort_key}", use_container_width=True):
        st.session_state['booking_sort'] = next_sort_config(sort_config, sort_key)
        st.rerun()

# Sort keys are stored with their _EN name; sort on the column of the active language
sort_field = sort_config['key']
if suffix == "TC" and sort_field.endswith("_EN"):
    sort_field = sort_field[:-3] + "_TC"
visible = sort_bookings(visible, sort_field, sort_config['direction'])

if not visible:
    st.info(t('noResults'))
    st.stop()

table = pd.DataFrame(
    [{label: row.get(field) for field, (_, label) in columns.items()} for row in visible]
)
st.dataframe(table, hide_index=True, use_container_width=True)
