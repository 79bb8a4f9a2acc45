"""pages.login

Sign-in page shown while nobody is signed in. A second tab registers a new
team member (auth account plus profile row).
"""

import streamlit as st

from utils.auth import get_auth_session
from utils.components import render_create_user_form
from utils.i18n import t

auth = get_auth_session()

st.title(f"⚽ {t('appName')}")

tab_login, tab_create = st.tabs([f"🔐 {t('login')}", f"➕ {t('createUser')}"])

# === TAB 1: LOGIN ===
with tab_login:
    st.caption(t('loginDescription'))
    with st.form("login_form"):
        email = st.text_input(t('email'), placeholder="name@example.com")
        password = st.text_input(t('password'), type="password")
        submitted = st.form_submit_button(t('signIn'), type="primary", use_container_width=True)

    if submitted:
        if not email or not password:
            st.error(f"❌ {t('email')} / {t('password')}")
        else:
            with st.spinner(t('loading')):
                error = auth.sign_in(email.strip(), password)
            if error:
                st.error(f"❌ {error}")
            elif auth.status == "signed_in":
                st.rerun()
            else:
                st.error("❌ Profile not found. Please contact your team admin.")

# === TAB 2: CREATE USER ===
with tab_create:
    render_create_user_form(auth, form_key="login_create_user_form")
