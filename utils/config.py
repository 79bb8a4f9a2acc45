"""
================================================================================
CONFIGURATION MODULE
================================================================================

Purpose: Central place for credentials and tunables of the team app.
Values come from environment variables (a local .env file is loaded with
python-dotenv) and, for the Supabase credentials, fall back to
.streamlit/secrets.toml so the same secrets work locally and on Streamlit Cloud.
================================================================================
"""

import logging
import os

from dotenv import load_dotenv

load_dotenv()

# =============================================================================
# TUNABLES
# =============================================================================

# Public LCSD open-data feed with turf soccer pitch sessions
BOOKING_API_URL = os.environ.get(
    "BOOKING_API_URL",
    "https://data.smartplay.lcsd.gov.hk/rest/cms/api/v1/publ/contents/open-data/turf-soccer-pitch/file",
)
BOOKING_TIMEOUT_SECONDS = float(os.environ.get("BOOKING_TIMEOUT_SECONDS", "15"))

# Minimum seconds between two session checks triggered by reruns
SESSION_REFRESH_SECONDS = float(os.environ.get("SESSION_REFRESH_SECONDS", "30"))

DEFAULT_LANGUAGE = os.environ.get("DEFAULT_LANGUAGE", "en")
LOG_LEVEL = os.environ.get("LOG_LEVEL", "INFO")

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"

_logging_configured = False


class ConfigError(RuntimeError):
    """Raised when required configuration is missing."""


# =============================================================================
# CREDENTIALS
# =============================================================================

def get_supabase_credentials() -> tuple[str, str]:
    """Return ``(url, anon_key)`` for the Supabase project.

    Environment variables win. Otherwise the values are read from
    ``st.secrets["connections"]["supabase"]``.

    Raises:
        ConfigError: When neither source provides both values.
    """
    url = os.environ.get("SUPABASE_URL")
    key = os.environ.get("SUPABASE_KEY")

    if not url or not key:
        try:
            import streamlit as st
            supabase_secrets = st.secrets["connections"]["supabase"]
            url = url or supabase_secrets["SUPABASE_URL"]
            key = key or supabase_secrets["SUPABASE_KEY"]
        except (AttributeError, KeyError, FileNotFoundError):
            # No secrets file or no supabase section; reported below
            pass

    if not url or not key:
        raise ConfigError(
            "Supabase credentials not found. Please set either:\n"
            "1. SUPABASE_URL and SUPABASE_KEY in a .env file, or\n"
            "2. connections.supabase credentials in .streamlit/secrets.toml"
        )
    return url, key


def get_service_credentials() -> tuple[str, str]:
    """Return ``(url, service_role_key)`` for server-side jobs such as the API."""
    url = os.environ.get("SUPABASE_URL")
    key = os.environ.get("SUPABASE_SERVICE_ROLE_KEY")
    if not url or not key:
        raise ConfigError("SUPABASE_URL and SUPABASE_SERVICE_ROLE_KEY must be set")
    return url, key


# =============================================================================
# LOGGING
# =============================================================================

def configure_logging(level: str | None = None) -> None:
    """Configure root logging once per process.

    Streamlit reruns the main script on each interaction, so repeated calls
    must not stack handlers.
    """
    global _logging_configured
    if _logging_configured:
        return
    logging.basicConfig(level=(level or LOG_LEVEL).upper(), format=LOG_FORMAT)
    _logging_configured = True
