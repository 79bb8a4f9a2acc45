"""pages.create_user

Register a new team member while signed in.
"""

import streamlit as st

from utils.auth import check_auth, get_auth_session
from utils.components import render_create_user_form
from utils.i18n import t

check_auth()

st.title(f"➕ {t('createUser')}")
render_create_user_form(get_auth_session())
