"""Detection rules that prove a pattern is already reflected in a config."""

import logging
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Callable, List, Sequence

from ..catalog import PatternEntry, find_pattern
from ..nested_path import ConfigTree, get_nested_value, has_nested_key

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DetectionRule:
    """Maps a configuration shape to the pattern it proves."""
    pattern_slug: str
    check: Callable[[ConfigTree], bool]
    detected_via: str  # shown to the user as provenance


@dataclass(frozen=True)
class AppliedPattern:
    """A catalog pattern found in the current configuration."""
    title: str
    slug: str
    detected_via: str


def _gateway_host_restricted(config: ConfigTree) -> bool:
    return (has_nested_key(config, 'gateway.host')
            and get_nested_value(config, 'gateway.host') != '0.0.0.0')


def _has_url_allowlist(config: ConfigTree) -> bool:
    return has_nested_key(config, 'gateway.files.urlAllowlist')


def _session_key_override_disabled(config: ConfigTree) -> bool:
    return get_nested_value(config, 'hooks.allowRequestSessionKey') is False


def _any_cron_job_isolated(config: ConfigTree) -> bool:
    jobs = get_nested_value(config, 'cron.jobs')
    if not isinstance(jobs, Mapping):
        return False
    return any(isinstance(job, Mapping) and job.get('isolated') is True
               for job in jobs.values())


def _guardrails_enabled(config: ConfigTree) -> bool:
    return get_nested_value(config, 'agents.defaults.guardrails.enabled') is True


DEFAULT_DETECTION_RULES: List[DetectionRule] = [
    DetectionRule(
        pattern_slug='gateway-hardening',
        check=_gateway_host_restricted,
        detected_via='gateway.host is not 0.0.0.0',
    ),
    DetectionRule(
        pattern_slug='ssrf-defense',
        check=_has_url_allowlist,
        detected_via='gateway.files.urlAllowlist configured',
    ),
    DetectionRule(
        pattern_slug='hook-security',
        check=_session_key_override_disabled,
        detected_via='hooks.allowRequestSessionKey is false',
    ),
    DetectionRule(
        pattern_slug='cron-reliability-hardening',
        check=_any_cron_job_isolated,
        detected_via='cron jobs have isolated: true',
    ),
    DetectionRule(
        pattern_slug='native-guardrails-integration',
        check=_guardrails_enabled,
        detected_via='agents.defaults.guardrails.enabled is true',
    ),
]


class PatternDetector:
    """Runs detection rules over a config and reports applied patterns."""

    def __init__(self, rules: Sequence[DetectionRule] = None):
        self.rules = list(DEFAULT_DETECTION_RULES if rules is None else rules)

    def detect(self, config: ConfigTree, catalog: Sequence[PatternEntry]) -> List[AppliedPattern]:
        """Detect which catalog patterns are reflected in ``config``.

        Rules are evaluated in declaration order. A rule that fires for a slug
        the catalog does not publish is skipped.
        """
        applied = []

        for rule in self.rules:
            if not rule.check(config):
                continue

            pattern = find_pattern(catalog, rule.pattern_slug)
            if pattern is None:
                logger.debug(f"Rule for '{rule.pattern_slug}' fired but pattern is not in catalog")
                continue

            logger.debug(f"Detected {rule.pattern_slug}: {rule.detected_via}")
            applied.append(AppliedPattern(
                title=pattern.title,
                slug=rule.pattern_slug,
                detected_via=rule.detected_via,
            ))

        logger.info(f"Detected {len(applied)} applied patterns")
        return applied
