"""pages.profile

Streamlit page for viewing and editing the current player's profile.
Email and username are shown read-only; name, jersey number, position and
phone can be edited.
"""

import logging

import streamlit as st

from utils.auth import check_auth, get_auth_session
from utils.db import update_profile
from utils.formatting import format_jersey, format_short_datetime, render_user_avatar
from utils.i18n import t

logger = logging.getLogger(__name__)

check_auth()
auth = get_auth_session()
profile = auth.profile

if 'profile_editing' not in st.session_state:
    st.session_state['profile_editing'] = False

st.title(f"👤 {t('profile')}")
st.divider()

col1, col2 = st.columns([1, 3])

with col1:
    render_user_avatar(profile.get('full_name'))

with col2:
    st.markdown(f"### {profile.get('full_name', 'N/A')}")
    metadata = [f"📧 {profile.get('email', '')}", f"@{profile.get('username', '')}"]
    if profile.get('created_at'):
        metadata.append(f"📅 Member since {profile['created_at'][:10]}")
    if profile.get('updated_at'):
        metadata.append(f"🕐 Updated {format_short_datetime(profile['updated_at'])}")
    st.caption(' • '.join(metadata))

st.divider()

if not st.session_state['profile_editing']:
    st.markdown(f"**{t('jerseyNumber')}:** {format_jersey(profile.get('jersey_number'))}")
    st.markdown(f"**{t('position')}:** {profile.get('position') or '-'}")
    st.markdown(f"**{t('phone')}:** {profile.get('phone') or '-'}")
    if st.button(f"✏️ {t('edit')}"):
        st.session_state['profile_editing'] = True
        st.rerun()
else:
    with st.form("profile_form"):
        st.text_input(t('email'), value=profile.get('email', ''), disabled=True)
        st.text_input(t('username'), value=profile.get('username', ''), disabled=True)
        full_name = st.text_input(f"{t('fullName')} *", value=profile.get('full_name', ''))
        jersey_number = st.number_input(
            t('jerseyNumber'), min_value=0, max_value=99,
            value=profile.get('jersey_number'), step=1,
        )
        position = st.text_input(t('position'), value=profile.get('position') or '')
        phone = st.text_input(t('phone'), value=profile.get('phone') or '')

        col_save, col_cancel = st.columns(2)
        save = col_save.form_submit_button(t('save'), type="primary", use_container_width=True)
        cancel = col_cancel.form_submit_button(t('cancel'), use_container_width=True)

    if cancel:
        st.session_state['profile_editing'] = False
        st.rerun()

    if save:
        try:
            update_profile(auth.client, auth.user_id, full_name, jersey_number, position, phone)
        except ValueError as e:
            st.error(f"❌ {e}")
        except Exception as e:
            logger.error(f"Error updating profile: {e}")
            st.error(f"❌ {t('error')}: {e}")
        else:
            auth.reload_profile()
            st.session_state['profile_editing'] = False
            st.rerun()
