"""Update rules that turn a missing pattern into a reviewable config diff."""

import logging
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any, Callable, Dict, List, Optional, Sequence, Union

from ..catalog import PatternEntry, find_pattern
from ..nested_path import ConfigTree, get_nested_value, has_nested_key
from ..versioning import satisfies

logger = logging.getLogger(__name__)
GapFacts = Dict[str, Any]


@dataclass(frozen=True)
class ConfigUpdate:
    """A proposed configuration change. Never applied automatically."""
    pattern_title: str
    pattern_slug: str
    reason: str
    config_diff: str


@dataclass(frozen=True)
class UpdateRule:
    """Describes when a pattern applies, what the gap is, and how to close it.

    ``find_gap`` returns ``None`` when the config already has the desired
    shape, otherwise a dict of facts used to fill in ``reason`` (a
    ``str.format`` template) and ``diff`` (literal text or a callable over
    the same facts).
    """
    pattern_slug: str
    default_title: str
    find_gap: Callable[[ConfigTree], Optional[GapFacts]]
    reason: str
    diff: Union[str, Callable[[GapFacts], str]]
    minimum_version: Optional[str] = None
    prerequisite: Optional[str] = None
    applies: Optional[Callable[[ConfigTree, str], bool]] = None

    def is_applicable(self, config: ConfigTree, version: str) -> bool:
        if not satisfies(version, self.minimum_version):
            return False
        if self.prerequisite and not has_nested_key(config, self.prerequisite):
            return False
        if self.applies is not None and not self.applies(config, version):
            return False
        return True

    def render_reason(self, facts: GapFacts) -> str:
        return self.reason.format(**facts)

    def render_diff(self, facts: GapFacts) -> str:
        if callable(self.diff):
            return self.diff(facts)
        return self.diff


def _missing_url_allowlist(config: ConfigTree) -> Optional[GapFacts]:
    if has_nested_key(config, 'gateway.files.urlAllowlist'):
        return None
    return {}


def _missing_default_session_key(config: ConfigTree) -> Optional[GapFacts]:
    if has_nested_key(config, 'hooks.defaultSessionKey'):
        return None
    return {}


def _non_isolated_cron_jobs(config: ConfigTree) -> Optional[GapFacts]:
    jobs = get_nested_value(config, 'cron.jobs')
    if not isinstance(jobs, Mapping):
        return None

    job_names = [name for name, job in jobs.items()
                 if not (isinstance(job, Mapping) and job.get('isolated') is True)]
    if not job_names:
        return None
    return {'count': len(job_names), 'job_names': job_names}


def _gateway_bound_to_all_interfaces(config: ConfigTree) -> Optional[GapFacts]:
    host = get_nested_value(config, 'gateway.host')
    if host != '0.0.0.0':
        return None
    return {'host': host}


def _cron_isolation_diff(facts: GapFacts) -> str:
    return '\n'.join(f'  "{name}": {{\n+   "isolated": true\n  }}'
                     for name in facts['job_names'])


SSRF_DEFENSE_DIFF = """+ "gateway": {
+   "files": {
+     "urlAllowlist": ["your-cdn.example.com"]
+   },
+   "images": {
+     "urlAllowlist": ["i.imgur.com"]
+   }
+ }"""

HOOK_SECURITY_DIFF = """+ "hooks": {
+   "defaultSessionKey": "hooks:incoming",
+   "allowedSessionKeyPrefixes": ["hook:"],
+   "allowRequestSessionKey": false
+ }"""

GATEWAY_HARDENING_DIFF = """- "gateway": { "host": "0.0.0.0" }
+ "gateway": { "host": "127.0.0.1" }"""


DEFAULT_UPDATE_RULES: List[UpdateRule] = [
    UpdateRule(
        pattern_slug='ssrf-defense',
        default_title='SSRF Defense',
        minimum_version='2026.2.12+',
        find_gap=_missing_url_allowlist,
        reason='v2026.2.12 adds SSRF deny policy — you should configure urlAllowlist',
        diff=SSRF_DEFENSE_DIFF,
    ),
    UpdateRule(
        pattern_slug='hook-security',
        default_title='Hook Security',
        minimum_version='2026.2.12+',
        prerequisite='hooks',
        find_gap=_missing_default_session_key,
        reason='v2026.2.12 rejects sessionKey overrides by default — configure defaultSessionKey',
        diff=HOOK_SECURITY_DIFF,
    ),
    UpdateRule(
        pattern_slug='cron-reliability-hardening',
        default_title='Cron Reliability Hardening',
        prerequisite='cron.jobs',
        find_gap=_non_isolated_cron_jobs,
        reason='{count} cron job(s) missing isolated: true — errors can cascade',
        diff=_cron_isolation_diff,
    ),
    UpdateRule(
        pattern_slug='gateway-hardening',
        default_title='Gateway Hardening',
        find_gap=_gateway_bound_to_all_interfaces,
        reason='Gateway is bound to {host} (all interfaces) — should be 127.0.0.1 or Tailscale IP',
        diff=GATEWAY_HARDENING_DIFF,
    ),
]


class UpdateRecommender:
    """Evaluates update rules and collects the recommended config changes."""

    def __init__(self, rules: Sequence[UpdateRule] = None):
        self.rules = list(DEFAULT_UPDATE_RULES if rules is None else rules)

    def recommend(self,
                  config: ConfigTree,
                  catalog: Sequence[PatternEntry],
                  version: str) -> List[ConfigUpdate]:
        """Find patterns that should be applied to ``config`` but aren't."""
        updates = []

        for rule in self.rules:
            pattern = find_pattern(catalog, rule.pattern_slug)
            if pattern is None:
                logger.debug(f"Skipping update rule '{rule.pattern_slug}' - not in catalog")
                continue

            if not rule.is_applicable(config, version):
                logger.debug(f"Update rule '{rule.pattern_slug}' not applicable for v{version}")
                continue

            facts = rule.find_gap(config)
            if facts is None:
                continue

            updates.append(ConfigUpdate(
                pattern_title=pattern.title or rule.default_title,
                pattern_slug=rule.pattern_slug,
                reason=rule.render_reason(facts),
                config_diff=rule.render_diff(facts),
            ))
            logger.debug(f"Recommending update for {rule.pattern_slug}")

        logger.info(f"Found {len(updates)} available updates")
        return updates
