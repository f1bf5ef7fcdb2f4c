"""Tests for pattern detection rules."""

import pytest

from obn_advisor.catalog import PatternEntry
from obn_advisor.detectors import (
    DEFAULT_DETECTION_RULES,
    AppliedPattern,
    DetectionRule,
    PatternDetector,
)


class TestPatternDetector:
    """Test suite for PatternDetector."""

    @pytest.fixture
    def detector(self):
        """Create a detector with the default rules."""
        return PatternDetector()

    def test_detects_all_patterns_in_hardened_config(self, detector, hardened_config, full_catalog):
        applied = detector.detect(hardened_config, full_catalog)

        assert [p.slug for p in applied] == [
            "gateway-hardening",
            "ssrf-defense",
            "hook-security",
            "cron-reliability-hardening",
            "native-guardrails-integration",
        ]

    def test_uses_catalog_title_and_rule_provenance(self, detector, full_catalog):
        applied = detector.detect({"gateway": {"host": "127.0.0.1"}}, full_catalog)

        assert applied == [AppliedPattern(
            title="Gateway Hardening",
            slug="gateway-hardening",
            detected_via="gateway.host is not 0.0.0.0",
        )]

    def test_open_gateway_not_detected(self, detector, full_catalog):
        applied = detector.detect({"gateway": {"host": "0.0.0.0"}}, full_catalog)
        assert applied == []

    def test_skips_patterns_missing_from_catalog(self, detector, hardened_config):
        catalog = [PatternEntry(slug="ssrf-defense", title="SSRF Defense")]
        applied = detector.detect(hardened_config, catalog)
        assert [p.slug for p in applied] == ["ssrf-defense"]

    def test_cron_detected_with_one_isolated_job(self, detector, full_catalog):
        config = {"cron": {"jobs": {"a": {"isolated": True}, "b": {"isolated": False}}}}
        applied = detector.detect(config, full_catalog)
        assert [p.slug for p in applied] == ["cron-reliability-hardening"]

    def test_cron_not_detected_without_isolated_jobs(self, detector, full_catalog):
        configs = [
            {"cron": {"jobs": {}}},
            {"cron": {"jobs": {"a": {"isolated": "true"}}}},  # must be boolean true
            {"cron": {"jobs": {"a": None, "b": "oops"}}},
            {"cron": {"jobs": ["a", "b"]}},
        ]
        for config in configs:
            assert detector.detect(config, full_catalog) == [], f"Unexpected detection for {config}"

    def test_hook_security_requires_literal_false(self, detector, full_catalog):
        assert detector.detect({"hooks": {"allowRequestSessionKey": 0}}, full_catalog) == []
        assert detector.detect({"hooks": {"allowRequestSessionKey": None}}, full_catalog) == []
        applied = detector.detect({"hooks": {"allowRequestSessionKey": False}}, full_catalog)
        assert [p.slug for p in applied] == ["hook-security"]

    def test_guardrails_requires_literal_true(self, detector, full_catalog):
        config = {"agents": {"defaults": {"guardrails": {"enabled": 1}}}}
        assert detector.detect(config, full_catalog) == []

    def test_empty_url_allowlist_still_counts(self, detector, full_catalog):
        applied = detector.detect({"gateway": {"files": {"urlAllowlist": []}}}, full_catalog)
        assert [p.slug for p in applied] == ["ssrf-defense"]

    def test_detection_is_idempotent(self, detector, hardened_config, full_catalog):
        first = detector.detect(hardened_config, full_catalog)
        second = detector.detect(hardened_config, full_catalog)
        assert first == second

    def test_does_not_mutate_config(self, detector, hardened_config, full_catalog):
        snapshot = repr(hardened_config)
        detector.detect(hardened_config, full_catalog)
        assert repr(hardened_config) == snapshot

    def test_empty_inputs(self, detector):
        assert detector.detect({}, []) == []

    def test_custom_rules(self):
        rule = DetectionRule(
            pattern_slug="telemetry-off",
            check=lambda c: c.get("telemetry") is False,
            detected_via="telemetry is false",
        )
        detector = PatternDetector(rules=[rule])
        catalog = [PatternEntry(slug="telemetry-off", title="Telemetry Off")]

        applied = detector.detect({"telemetry": False}, catalog)

        assert applied == [AppliedPattern("Telemetry Off", "telemetry-off", "telemetry is false")]

    def test_default_rules_cover_known_slugs(self):
        slugs = [rule.pattern_slug for rule in DEFAULT_DETECTION_RULES]
        assert len(slugs) == len(set(slugs))
        assert "native-guardrails-integration" in slugs
