"""Pattern detection modules."""

from .pattern_detectors import (
    PatternDetector,
    DetectionRule,
    AppliedPattern,
    DEFAULT_DETECTION_RULES
)

__all__ = [
    'PatternDetector',
    'DetectionRule',
    'AppliedPattern',
    'DEFAULT_DETECTION_RULES'
]
