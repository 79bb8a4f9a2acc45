"""
================================================================================
AUTHENTICATION MODULE
================================================================================

Purpose: Email/password authentication against Supabase Auth and a per-session
cache of the signed-in user and their profile row.

How it works:
1. Every browser session owns one AuthSession (stored in st.session_state)
2. On first access it asks the SDK for the current session and loads the profile
3. Auth events (sign in, sign out, token refresh) republish (user, profile)
4. Every rerun counts as the tab regaining focus: the session is re-checked,
   throttled by SESSION_REFRESH_SECONDS
5. Each publish increments session_key; cached queries key on it and refetch
================================================================================
"""

import logging
import time

import streamlit as st
from supabase_auth.errors import AuthError, AuthRetryableError

from utils import db
from utils.config import SESSION_REFRESH_SECONDS

logger = logging.getLogger(__name__)

AUTH_SESSION_KEY = "auth_session"

# =============================================================================
# SESSION CACHE
# =============================================================================
# PURPOSE: Three-state cache (signed out / loading / signed in with profile)


class AuthSession:
    """Signed-in user and profile for one browser session.

    Attributes:
        client: Supabase client owned by this browser session.
        user: Supabase auth user, or None when signed out.
        profile (dict | None): Row of the ``profiles`` table for ``user``.
        loading (bool): True until the first session check finished and while
            a sign-in or sign-out is in flight.
        session_key (int): Incremented on every publish of (user, profile).
            Views pass it (through ``cache_token``) to cached queries so they
            refetch after any auth change.
    """

    def __init__(self, client, refresh_interval=SESSION_REFRESH_SECONDS, clock=time.monotonic):
        self.client = client
        self.user = None
        self.profile = None
        self.loading = True
        self.session_key = 0
        self.last_checked = None
        self._refresh_interval = refresh_interval
        self._clock = clock
        self._initialized = False

    @property
    def user_id(self):
        return getattr(self.user, "id", None)

    @property
    def status(self):
        if self.loading:
            return "loading"
        if self.user is not None and self.profile is not None:
            return "signed_in"
        return "signed_out"

    @property
    def cache_token(self):
        return f"{self.user_id or 'anonymous'}:{self.session_key}"

    def _fetch_profile(self, user_id):
        try:
            return db.get_profile(self.client, user_id)
        except Exception as e:
            logger.error(f"Error fetching profile for {user_id}: {e}")
            return None

    def _publish(self, user):
        self.user = user
        self.profile = self._fetch_profile(user.id) if user is not None else None
        self.session_key += 1

    def _current_user(self):
        session = self.client.auth.get_session()
        return session.user if session else None

    def initialize(self):
        """Load the persisted session once and subscribe to auth events."""
        if self._initialized:
            return
        self._initialized = True

        try:
            user = self._current_user()
        except Exception as e:
            logger.error(f"Error reading auth session: {e}")
            user = None

        self._publish(user)
        self.last_checked = self._clock()
        self.loading = False
        self.client.auth.on_auth_state_change(self.handle_auth_event)

    def handle_auth_event(self, event, session):
        """Auth state listener; the last event wins."""
        logger.info(f"Auth event: {event}")
        self._publish(session.user if session else None)

    def refresh(self, force=False):
        """Re-check the session, the equivalent of the tab regaining focus.

        ``get_session`` refreshes an expired token, which fires the auth
        listener. A changed identity is also republished directly in case the
        SDK did not emit an event for it.
        """
        if not self._initialized:
            self.initialize()
            return

        now = self._clock()
        if not force and self.last_checked is not None and now - self.last_checked < self._refresh_interval:
            return
        self.last_checked = now

        try:
            user = self._current_user()
        except AuthRetryableError as e:
            logger.warning(f"Session refresh failed, keeping current session: {e}")
            return
        except AuthError as e:
            # Revoked or missing refresh token: the session cannot recover
            logger.warning(f"Session refresh rejected, signing out: {e}")
            if self.user is not None or self.profile is not None:
                self._publish(None)
            return
        except Exception as e:
            logger.warning(f"Session refresh failed: {e}")
            return

        if getattr(user, "id", None) != self.user_id:
            self._publish(user)

    def sign_in(self, email, password):
        """Sign in with email and password.

        Returns:
            str or None: Error message on failure, None on success.
        """
        self.loading = True
        try:
            response = self.client.auth.sign_in_with_password({"email": email, "password": password})
        except Exception as e:
            logger.warning(f"Sign-in failed for {email}: {e}")
            return getattr(e, "message", None) or str(e)
        else:
            # The SIGNED_IN listener normally published this user already
            if response.user is not None and response.user.id != self.user_id:
                self._publish(response.user)
            return None
        finally:
            self.loading = False

    def sign_out(self):
        self.loading = True
        try:
            self.client.auth.sign_out()
        except Exception as e:
            logger.error(f"Sign-out failed: {e}")
        finally:
            if self.user is not None or self.profile is not None:
                self._publish(None)
            self.loading = False

    def create_user(self, email, username, password, full_name,
                    jersey_number=None, position=None, phone=None):
        """Register an auth identity and insert its profile row.

        Returns:
            str or None: Error message on failure, None on success.
        """
        try:
            response = self.client.auth.sign_up({"email": email, "password": password})
        except Exception as e:
            logger.warning(f"Sign-up failed for {email}: {e}")
            return getattr(e, "message", None) or str(e)

        new_user = response.user
        if new_user is None:
            return None

        try:
            db.insert_profile(
                self.client,
                user_id=new_user.id,
                email=email,
                username=username,
                full_name=full_name,
                jersey_number=jersey_number,
                position=position,
                phone=phone,
            )
        except Exception as e:
            logger.error(f"Error creating profile for {email}: {e}")
            return getattr(e, "message", None) or str(e)

        # Sign-up may have signed the new user in before the profile existed
        if new_user.id == self.user_id:
            self.reload_profile()
        return None

    def reload_profile(self):
        """Re-read the current user's profile after an edit."""
        if self.user is not None:
            self.profile = self._fetch_profile(self.user.id)
        self.session_key += 1

    def invalidate(self):
        """Force dependent views to refetch after a mutation."""
        self.session_key += 1


# =============================================================================
# STREAMLIT INTEGRATION
# =============================================================================
# PURPOSE: One AuthSession per browser session, refreshed on every rerun


def get_auth_session():
    """Return this browser session's AuthSession, creating it on first use.

    Raises:
        ConfigError: When Supabase credentials are missing.
    """
    auth = st.session_state.get(AUTH_SESSION_KEY)
    if auth is None:
        auth = AuthSession(db.create_supabase_client())
        st.session_state[AUTH_SESSION_KEY] = auth
        auth.initialize()
    else:
        auth.refresh()
    return auth


def is_logged_in():
    return get_auth_session().status == "signed_in"


def check_auth():
    """Stop the page script when nobody is signed in."""
    if not is_logged_in():
        st.error("❌ Please sign in.")
        st.stop()
    return True


def clear_user_session():
    """Remove the previous user's state so the next user starts clean.

    The language choice is kept. Cached query results are dropped too.
    """
    from utils.filters import get_filter_session_keys

    for key in get_filter_session_keys():
        if key in st.session_state:
            del st.session_state[key]

    app_keys = ['profile_editing', 'selected_date', 'booking_sort']
    for key in app_keys:
        if key in st.session_state:
            del st.session_state[key]

    st.cache_data.clear()


def handle_logout():
    """Clear session data, sign out and rerun into the login page."""
    clear_user_session()
    get_auth_session().sign_out()
    st.rerun()
