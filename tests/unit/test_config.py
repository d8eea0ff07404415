"""Tests for phrase_validation.config module."""

import pytest
from pydantic import ValidationError

from phrase_validation.config import PollOptions, PollSettings, get_settings


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for name in ("PHRASE_TIMEOUT", "PHRASE_INTERVAL", "EXPECT_TIMEOUT", "EXPECT_INTERVAL"):
        monkeypatch.delenv(f"PHRASE_VALIDATION_{name}", raising=False)
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


def test_defaults():
    settings = PollSettings()

    assert settings.phrase_options() == PollOptions(timeout=5.0, interval=0.5)
    assert settings.expect_options() == PollOptions(timeout=5.0, interval=0.1)


def test_environment_overrides(monkeypatch):
    monkeypatch.setenv("PHRASE_VALIDATION_PHRASE_TIMEOUT", "2.5")
    monkeypatch.setenv("PHRASE_VALIDATION_EXPECT_INTERVAL", "0.05")

    settings = PollSettings()

    assert settings.phrase_timeout == 2.5
    assert settings.expect_interval == 0.05
    assert settings.phrase_interval == 0.5


def test_explicit_arguments_override_defaults():
    settings = PollSettings(phrase_timeout=1.0)

    assert settings.phrase_options(interval=0.2) == PollOptions(timeout=1.0, interval=0.2)
    assert settings.expect_options(timeout=3.0) == PollOptions(timeout=3.0, interval=0.1)


@pytest.mark.parametrize("field", ["phrase_timeout", "phrase_interval", "expect_timeout", "expect_interval"])
def test_non_positive_timing_is_rejected(field):
    with pytest.raises(ValidationError):
        PollSettings(**{field: 0})


def test_unknown_setting_is_rejected():
    with pytest.raises(ValidationError):
        PollSettings(retries=3)


def test_poll_options_are_frozen_and_validated():
    options = PollOptions(timeout=1.0, interval=0.1)

    with pytest.raises(ValidationError):
        options.timeout = 2.0
    with pytest.raises(ValidationError):
        PollOptions(timeout=1.0, interval=-1)


def test_get_settings_is_cached_until_cleared(monkeypatch):
    first = get_settings()
    assert get_settings() is first

    monkeypatch.setenv("PHRASE_VALIDATION_PHRASE_TIMEOUT", "9")
    assert get_settings().phrase_timeout == 5.0

    get_settings.cache_clear()
    assert get_settings().phrase_timeout == 9.0
