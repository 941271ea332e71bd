"""Pytest configuration and fixtures."""

import os
from unittest.mock import patch

import pytest

from supabase_mcp.credentials import SupabaseConfig
from supabase_mcp.ratelimit import RateGate, reset_rate_gate

SUPABASE_ENV_VARS = (
    "SUPABASE_URL",
    "SUPABASE_SERVICE_KEY",
    "SUPABASE_ANON_KEY",
    "SUPABASE_TIMEOUT",
)


@pytest.fixture(autouse=True)
def clean_env():
    """Keep the developer's Supabase settings out of the tests."""
    env = {k: v for k, v in os.environ.items() if k not in SUPABASE_ENV_VARS}
    with patch.dict(os.environ, env, clear=True):
        yield


@pytest.fixture(autouse=True)
def fresh_rate_gate():
    reset_rate_gate()
    yield
    reset_rate_gate()


@pytest.fixture
def config():
    return SupabaseConfig(url="https://test.supabase.co", key="test-key")


@pytest.fixture
def gate():
    """Gate without pacing so client tests stay fast."""
    return RateGate(min_interval=0)

