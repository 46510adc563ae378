"""Tests for environment driven configuration."""

import pytest

from foliot.core.config import _env_flag


@pytest.mark.parametrize("value", ["true", "1", "yes", "on", " TRUE "])
def test_env_flag_enabled(monkeypatch, value):
    monkeypatch.setenv("FOLIOT_REJECT_NONPOSITIVE", value)
    assert _env_flag("FOLIOT_REJECT_NONPOSITIVE") is True


@pytest.mark.parametrize("value", ["false", "0", "no", ""])
def test_env_flag_disabled(monkeypatch, value):
    monkeypatch.setenv("FOLIOT_REJECT_NONPOSITIVE", value)
    assert _env_flag("FOLIOT_REJECT_NONPOSITIVE") is False


def test_env_flag_default(monkeypatch):
    monkeypatch.delenv("FOLIOT_REJECT_NONPOSITIVE", raising=False)
    assert _env_flag("FOLIOT_REJECT_NONPOSITIVE") is False
    assert _env_flag("FOLIOT_REJECT_NONPOSITIVE", default=True) is True
