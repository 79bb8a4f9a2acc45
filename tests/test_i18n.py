"""Tests for UI translations."""

import pytest

from utils.i18n import MATCH_EVENT_LABELS, TRANSLATIONS, normalize_language, t


def test_both_languages_define_the_same_keys():
    assert set(TRANSLATIONS["en"]) == set(TRANSLATIONS["zh"])


def test_match_event_labels_are_translated():
    for key in MATCH_EVENT_LABELS.values():
        assert key in TRANSLATIONS["en"]


@pytest.mark.parametrize("code, expected", [
    ("en", "en"),
    ("zh", "zh"),
    ("zh-TW", "zh"),
    ("fr", "en"),
])
def test_normalize_language(code, expected):
    assert normalize_language(code) == expected


def test_translate():
    assert t("matches", language="en") == "Matches"
    assert t("matches", language="zh") == "比賽"


def test_parameters_are_interpolated():
    assert t("welcomeBack", language="en", name="Alex") == "Welcome back, Alex!"
    assert t("vs", language="zh", opponent_team="Kowloon FC") == "對 Kowloon FC"


def test_unknown_key_falls_back_to_key():
    assert t("noSuchKey", language="zh") == "noSuchKey"


def test_missing_translation_falls_back_to_english(monkeypatch):
    monkeypatch.setitem(TRANSLATIONS["en"], "onlyEnglish", "Only English")
    assert t("onlyEnglish", language="zh") == "Only English"
