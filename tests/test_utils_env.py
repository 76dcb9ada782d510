"""Tests for the environment variable utility."""

import pytest

from cm5probe.utils.env import (
    ENV_GPIO_SETTLE_SECONDS,
    ENV_ROOT,
    EnvVarTypeError,
    get_env,
)


def test_get_env_basic(monkeypatch):
    """Test getting set variables and missing variables with defaults."""
    monkeypatch.setenv(ENV_ROOT, "/mnt/target")
    monkeypatch.delenv("CM5PROBE_MISSING_VAR", raising=False)

    assert get_env(ENV_ROOT) == "/mnt/target"
    assert get_env("CM5PROBE_MISSING_VAR", default="/") == "/"
    assert get_env("CM5PROBE_MISSING_VAR") is None


def test_get_env_coercion(monkeypatch):
    """Test type coercion for common types."""
    monkeypatch.setenv("CM5PROBE_BOOL_TRUE", "true")
    monkeypatch.setenv("CM5PROBE_BOOL_FALSE", "off")
    monkeypatch.setenv("CM5PROBE_INT", "123")
    monkeypatch.setenv(ENV_GPIO_SETTLE_SECONDS, "0.25")
    monkeypatch.setenv("CM5PROBE_LIST", "cpu, gpio ")

    assert get_env("CM5PROBE_BOOL_TRUE", as_type=bool) is True
    assert get_env("CM5PROBE_BOOL_FALSE", as_type=bool) is False
    assert get_env("CM5PROBE_INT", as_type=int) == 123
    assert get_env(ENV_GPIO_SETTLE_SECONDS, default=0.1, as_type=float) == 0.25
    assert get_env("CM5PROBE_LIST", as_type=list) == ["cpu", "gpio"]


def test_get_env_coercion_failure(monkeypatch):
    monkeypatch.setenv(ENV_GPIO_SETTLE_SECONDS, "soon")

    with pytest.raises(EnvVarTypeError) as exc_info:
        get_env(ENV_GPIO_SETTLE_SECONDS, as_type=float)

    assert exc_info.value.name == ENV_GPIO_SETTLE_SECONDS
    assert "float" in str(exc_info.value)


def test_default_is_not_coerced(monkeypatch):
    """Defaults are returned as given when the variable is unset."""
    monkeypatch.delenv(ENV_GPIO_SETTLE_SECONDS, raising=False)
    assert get_env(ENV_GPIO_SETTLE_SECONDS, default=0.1, as_type=float) == 0.1
