"""Tests for credential lookup."""

import pytest

from utils import config


def test_supabase_credentials_from_environment(monkeypatch):
    monkeypatch.setenv("SUPABASE_URL", "https://project.supabase.co")
    monkeypatch.setenv("SUPABASE_KEY", "anon-key")
    assert config.get_supabase_credentials() == ("https://project.supabase.co", "anon-key")


def test_service_credentials_missing(monkeypatch):
    monkeypatch.setenv("SUPABASE_URL", "https://project.supabase.co")
    monkeypatch.delenv("SUPABASE_SERVICE_ROLE_KEY", raising=False)
    with pytest.raises(config.ConfigError):
        config.get_service_credentials()


def test_service_credentials(monkeypatch):
    monkeypatch.setenv("SUPABASE_URL", "https://project.supabase.co")
    monkeypatch.setenv("SUPABASE_SERVICE_ROLE_KEY", "service-key")
    assert config.get_service_credentials() == ("https://project.supabase.co", "service-key")
