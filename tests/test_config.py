"""Unit tests for core/config.py -- Settings validation.

Covers:
- SECRET_KEY is required and must be at least 32 characters
- Token lifetime defaults to 60 minutes and must be positive
- Argon2 cost parameters are read from the environment
"""

import pytest
from pydantic import ValidationError

from core.config import Settings

_KEY = "k" * 32


def test_missing_secret_key_refuses_to_start(monkeypatch):
    monkeypatch.delenv("SECRET_KEY", raising=False)
    with pytest.raises(ValidationError, match="SECRET_KEY is required"):
        Settings(_env_file=None)


def test_short_secret_key_rejected():
    with pytest.raises(ValidationError, match="at least 32 characters"):
        Settings(secret_key="short", _env_file=None)


def test_default_token_lifetime_is_one_hour(monkeypatch):
    monkeypatch.delenv("TOKEN_EXPIRE_SECONDS", raising=False)
    assert Settings(secret_key=_KEY, _env_file=None).token_expire_seconds == 3600


def test_non_positive_token_lifetime_rejected():
    with pytest.raises(ValidationError, match="TOKEN_EXPIRE_SECONDS"):
        Settings(secret_key=_KEY, token_expire_seconds=0, _env_file=None)


def test_argon2_costs_from_environment(monkeypatch):
    monkeypatch.setenv("ARGON2_TIME_COST", "2")
    monkeypatch.setenv("ARGON2_MEMORY_COST", "4096")
    settings = Settings(secret_key=_KEY, _env_file=None)
    assert settings.argon2_time_cost == 2
    assert settings.argon2_memory_cost == 4096
