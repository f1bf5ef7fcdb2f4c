"""OBN pattern advisor: audits agent configs against best-practice patterns."""

from .advisor import audit, load_catalog
from .catalog import (
    CatalogError,
    PatternEntry,
    PatternIndex,
    catalog_from_records,
    filter_by_version,
    find_pattern,
    load_catalog_file
)
from .detectors import AppliedPattern, DetectionRule, PatternDetector
from .engine import ComplianceEngine, ComplianceReport
from .nested_path import ABSENT, PathState, get_nested_value, has_nested_key, resolve
from .recommenders import ConfigUpdate, UpdateRecommender, UpdateRule
from .versioning import is_at_least, parse_version, satisfies

__version__ = "0.1.0"

__all__ = [
    'audit',
    'load_catalog',
    'ABSENT',
    'AppliedPattern',
    'CatalogError',
    'ComplianceEngine',
    'ComplianceReport',
    'ConfigUpdate',
    'DetectionRule',
    'PathState',
    'PatternDetector',
    'PatternEntry',
    'PatternIndex',
    'UpdateRecommender',
    'UpdateRule',
    'catalog_from_records',
    'filter_by_version',
    'find_pattern',
    'get_nested_value',
    'has_nested_key',
    'is_at_least',
    'load_catalog_file',
    'parse_version',
    'resolve',
    'satisfies'
]
