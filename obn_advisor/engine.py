"""Pattern compliance engine: detection plus update recommendation."""

import logging
from collections.abc import Mapping
from dataclasses import asdict, dataclass, field
from typing import Any, Dict, List, Optional, Sequence

from .catalog import PatternEntry
from .detectors import AppliedPattern, PatternDetector
from .recommenders import ConfigUpdate, UpdateRecommender

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ComplianceReport:
    """Applied patterns and recommended updates for one configuration."""
    applied: List[AppliedPattern] = field(default_factory=list)
    updates: List[ConfigUpdate] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            'applied': [asdict(pattern) for pattern in self.applied],
            'updates': [asdict(update) for update in self.updates],
        }


class ComplianceEngine:
    """Evaluates a configuration tree against a pattern catalog.

    Holds no state between calls; the same (config, catalog, version)
    always produces the same report.
    """

    def __init__(self,
                 detector: Optional[PatternDetector] = None,
                 recommender: Optional[UpdateRecommender] = None):
        self.detector = detector or PatternDetector()
        self.recommender = recommender or UpdateRecommender()

    def evaluate(self,
                 config: Mapping,
                 catalog: Sequence[PatternEntry],
                 version: str) -> ComplianceReport:
        """Detect applied patterns and recommend updates for ``config``."""
        applied = self.detector.detect(config, catalog)
        updates = self.recommender.recommend(config, catalog, version)
        logger.debug(f"Evaluated config for v{version}: "
                     f"{len(applied)} applied, {len(updates)} updates")
        return ComplianceReport(applied=applied, updates=updates)
