"""Dotted numeric version comparison.

Versions look like ``2026.2.12``. A requirement may carry a trailing ``+``
(``2026.2.12+``) meaning "this version or later"; the marker is documentary
and does not change the comparison.

Parsing is deliberately lenient: a segment that is not a plain run of digits
counts as ``0`` instead of raising, so a garbled version string reads as
"older" rather than crashing the audit.
"""

import logging
import re
from itertools import zip_longest
from typing import Optional, Tuple

logger = logging.getLogger(__name__)

Version = Tuple[int, ...]

_DIGITS = re.compile(r'^[0-9]+$')


def strip_plus(spec: str) -> str:
    """Drop a single trailing ``+`` from a requirement string."""
    spec = spec.strip()
    return spec[:-1] if spec.endswith('+') else spec


def parse_version(text: str) -> Version:
    """Parse ``"2026.2.12"`` into ``(2026, 2, 12)``; bad segments become 0."""
    parts = []
    for segment in str(text).split('.'):
        segment = segment.strip()
        if _DIGITS.match(segment):
            parts.append(int(segment))
        else:
            if segment:
                logger.debug(f"Non-numeric version segment '{segment}' in '{text}' treated as 0")
            parts.append(0)
    return tuple(parts)


def compare_versions(a: Version, b: Version) -> int:
    """Return -1, 0 or 1; the shorter version is padded with zeros."""
    for left, right in zip_longest(a, b, fillvalue=0):
        if left > right:
            return 1
        if left < right:
            return -1
    return 0


def is_at_least(installed: str, required: str) -> bool:
    """True if ``installed`` >= ``required``."""
    return compare_versions(parse_version(installed), parse_version(required)) >= 0


def satisfies(installed: str, required_spec: Optional[str]) -> bool:
    """Check ``installed`` against a requirement such as ``"2026.2.12+"``.

    ``None`` or an empty requirement means "no minimum" and is always met.
    """
    if required_spec is None or not str(required_spec).strip():
        return True
    return is_at_least(installed, strip_plus(str(required_spec)))
