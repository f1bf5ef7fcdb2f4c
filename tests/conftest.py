"""Pytest configuration and shared fixtures."""

import pytest

from obn_advisor.catalog import PatternEntry


@pytest.fixture(autouse=True)
def mock_env_vars(monkeypatch):
    """Isolate tests from advisor settings in the caller's environment."""
    for var in ("OBN_OPENCLAW_VERSION", "OBN_CONFIG_PATH", "OBN_CATALOG_PATH", "OBN_CATALOG_URL"):
        monkeypatch.delenv(var, raising=False)
    monkeypatch.setenv("LOG_LEVEL", "DEBUG")


@pytest.fixture
def temp_dir(tmp_path):
    """Create a temporary directory for test files."""
    return tmp_path


@pytest.fixture
def full_catalog():
    """A catalog publishing every pattern the default rules know about."""
    return [
        PatternEntry(slug="gateway-hardening", title="Gateway Hardening",
                     minimum_version=None, category="security"),
        PatternEntry(slug="ssrf-defense", title="SSRF Defense",
                     minimum_version="2026.2.12+", category="security"),
        PatternEntry(slug="hook-security", title="Hook Security",
                     minimum_version="2026.2.12+", category="security"),
        PatternEntry(slug="cron-reliability-hardening", title="Cron Reliability Hardening",
                     minimum_version=None, category="reliability"),
        PatternEntry(slug="native-guardrails-integration", title="Native Guardrails Integration",
                     minimum_version="2026.2.1", category="security"),
    ]


@pytest.fixture
def hardened_config():
    """A config that already satisfies every default pattern."""
    return {
        "gateway": {
            "host": "127.0.0.1",
            "files": {"urlAllowlist": ["cdn.example.com"]},
        },
        "hooks": {
            "defaultSessionKey": "hooks:incoming",
            "allowRequestSessionKey": False,
        },
        "cron": {"jobs": {"heartbeat": {"isolated": True}}},
        "agents": {"defaults": {"guardrails": {"enabled": True}}},
    }
