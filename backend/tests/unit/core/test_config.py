"""Tests for configuration helpers."""

from __future__ import annotations

from datetime import timedelta

import pytest

from tubehub.core import config
from tubehub.core.config import DevelopmentConfig, TestingConfig, get_config, parse_duration


class TestParseDuration:
    @pytest.mark.parametrize(
        ("raw", "expected"),
        [
            ("15m", timedelta(minutes=15)),
            ("10d", timedelta(days=10)),
            ("2h", timedelta(hours=2)),
            ("45s", timedelta(seconds=45)),
            ("900", timedelta(seconds=900)),
            (" 1D ", timedelta(days=1)),
        ],
    )
    def test_accepts_suffixes_and_plain_seconds(self, raw, expected):
        assert parse_duration(raw) == expected

    @pytest.mark.parametrize("raw", ["", "ten minutes", "5w", "-3m"])
    def test_rejects_garbage(self, raw):
        with pytest.raises(ValueError):
            parse_duration(raw)


class TestGetConfig:
    def test_selects_class_from_app_env(self, monkeypatch):
        monkeypatch.setenv(config.ENV_VAR, "testing")
        assert get_config() is TestingConfig

    def test_unknown_env_falls_back_to_development(self, monkeypatch):
        monkeypatch.setenv(config.ENV_VAR, "staging")
        assert get_config() is DevelopmentConfig


def test_testing_config_keeps_everything_local():
    assert TestingConfig.MEDIA_BACKEND == "memory"
    assert TestingConfig.REFRESH_TOKEN_STORE == "database"
    assert TestingConfig.JWT_SECRET_KEY == TestingConfig.ACCESS_TOKEN_SECRET
    assert TestingConfig.ACCESS_TOKEN_SECRET != TestingConfig.REFRESH_TOKEN_SECRET


def test_token_lifetimes_default_to_fifteen_minutes_and_ten_days():
    assert TestingConfig.ACCESS_TOKEN_EXPIRY == timedelta(minutes=15)
    assert TestingConfig.REFRESH_TOKEN_EXPIRY == timedelta(days=10)
