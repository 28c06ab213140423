"""Pytest configuration and shared fixtures for triad tests."""

import pytest


@pytest.fixture
def sample_some():
    """Sample Some value for testing."""
    from triad import Some

    return Some('hello')


@pytest.fixture
def sample_nothing():
    """Sample Nothing value for testing."""
    from triad import Nothing

    return Nothing


@pytest.fixture
def sample_ok():
    """Sample Ok value for testing."""
    from triad import Ok

    return Ok(42)


@pytest.fixture
def sample_err():
    """Sample Err value for testing."""
    from triad import Err

    return Err(ValueError('test error'))


@pytest.fixture
def fresh_config(monkeypatch):
    """Clear TRIAD_* env vars and the cached config around a test."""
    from triad import reset_config

    for name in ('TRIAD_LOG_LEVEL', 'TRIAD_LOG_JSON', 'TRIAD_TRACE_EFFECTS'):
        monkeypatch.delenv(name, raising=False)
    reset_config()
    yield
    reset_config()
