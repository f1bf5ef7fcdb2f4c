"""Pattern catalog entries and the cached pattern index."""

import json
import logging
import time
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Callable, Dict, Iterable, List, Optional, Sequence

import yaml

from .versioning import satisfies

logger = logging.getLogger(__name__)

DEFAULT_CATALOG_TTL = 24 * 60 * 60  # 24 hours
BASELINE_VERSION = "0.40+"  # compatible with every runtime


class CatalogError(Exception):
    """Raised when catalog records are malformed or cannot be fetched."""


@dataclass(frozen=True)
class PatternEntry:
    """A single published best-practice pattern."""
    slug: str
    title: str
    minimum_version: Optional[str] = None  # None means no minimum
    category: str = ""
    category_label: str = ""
    status: str = ""
    description: str = ""
    problem_statement: str = ""
    url: str = ""

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "PatternEntry":
        """Build an entry from a catalog record (camelCase or snake_case keys)."""
        if not isinstance(data, dict):
            raise CatalogError(f"Catalog record must be an object, got {type(data).__name__}")

        slug = data.get('slug')
        title = data.get('title')
        if not slug or not title:
            raise CatalogError(f"Catalog record missing slug or title: {data!r}")

        minimum = data.get('minimumVersion', data.get('minimum_version', data.get('openclawVersion')))
        if minimum is not None:
            minimum = str(minimum).strip() or None

        return cls(
            slug=str(slug),
            title=str(title),
            minimum_version=minimum,
            category=str(data.get('category', '')),
            category_label=str(data.get('categoryLabel', data.get('category_label', ''))),
            status=str(data.get('status', '')),
            description=str(data.get('description', '')),
            problem_statement=str(data.get('problemStatement', data.get('problem_statement', ''))),
            url=str(data.get('url', '')),
        )


def catalog_from_records(records: Iterable[Dict[str, Any]]) -> List[PatternEntry]:
    """Parse raw catalog records, keeping their order."""
    if records is None:
        return []
    if isinstance(records, dict):
        # Accept {"patterns": [...]} wrappers as well as bare lists
        records = records.get('patterns', [])
    if not isinstance(records, (list, tuple)):
        raise CatalogError(f"Catalog must be a list of records, got {type(records).__name__}")
    return [PatternEntry.from_dict(record) for record in records]


def find_pattern(catalog: Sequence[PatternEntry], slug: str) -> Optional[PatternEntry]:
    """Return the first catalog entry with ``slug``, if any."""
    for entry in catalog:
        if entry.slug == slug:
            return entry
    return None


def filter_by_version(catalog: Sequence[PatternEntry], version: str) -> List[PatternEntry]:
    """Keep patterns compatible with the installed runtime ``version``.

    Baseline patterns (``0.40+``) are kept even when ``version`` is garbled.
    """
    return [entry for entry in catalog
            if entry.minimum_version == BASELINE_VERSION or satisfies(version, entry.minimum_version)]


def load_catalog_file(path: str) -> List[PatternEntry]:
    """Load a catalog from a local JSON or YAML file."""
    catalog_path = Path(path)
    try:
        content = catalog_path.read_text(encoding='utf-8')
    except (OSError, UnicodeDecodeError) as e:
        raise CatalogError(f"Failed to read pattern catalog {catalog_path}: {e}") from e

    try:
        if catalog_path.suffix.lower() in ('.yaml', '.yml'):
            records = yaml.safe_load(content)
        else:
            records = json.loads(content)
    except (yaml.YAMLError, json.JSONDecodeError) as e:
        raise CatalogError(f"Failed to parse pattern catalog {catalog_path}: {e}") from e

    catalog = catalog_from_records(records)
    logger.info(f"Loaded {len(catalog)} patterns from {catalog_path}")
    return catalog


class PatternIndex:
    """Caches the pattern catalog returned by an injected fetch callable.

    The fetch callable returns raw catalog records (for example the decoded
    body of ``pattern-index.json``). Results are kept for ``ttl_seconds``.
    """

    def __init__(self,
                 fetch: Callable[[], Iterable[Dict[str, Any]]],
                 ttl_seconds: float = DEFAULT_CATALOG_TTL,
                 clock: Callable[[], float] = time.monotonic):
        self._fetch = fetch
        self.ttl_seconds = ttl_seconds
        self._clock = clock
        self._cache: Optional[List[PatternEntry]] = None
        self._cache_time = 0.0

    def fetch(self) -> List[PatternEntry]:
        """Return the catalog, refreshing it once the cache has expired."""
        now = self._clock()
        if self._cache is not None and now - self._cache_time < self.ttl_seconds:
            logger.debug("Using cached pattern catalog")
            return list(self._cache)

        try:
            records = self._fetch()
        except CatalogError:
            raise
        except Exception as e:
            raise CatalogError(f"Failed to fetch pattern index: {e}") from e

        self._cache = catalog_from_records(records)
        self._cache_time = now
        logger.info(f"Fetched pattern catalog with {len(self._cache)} entries")
        return list(self._cache)

    def invalidate(self):
        """Drop the cached catalog so the next fetch goes to the source."""
        self._cache = None
        self._cache_time = 0.0

    def filter_by_version(self, version: str) -> List[PatternEntry]:
        """Fetch the catalog and keep patterns compatible with ``version``."""
        return filter_by_version(self.fetch(), version)
