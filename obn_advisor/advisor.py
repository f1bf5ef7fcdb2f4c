"""Wires settings, config and catalog sources into a compliance audit."""

import logging
from typing import Any, Callable, Dict, Iterable, List, Optional

from .catalog import CatalogError, PatternEntry, PatternIndex, load_catalog_file
from .config_loader import AgentConfigLoader
from .engine import ComplianceEngine, ComplianceReport
from .logging_setup import configure_logging
from .settings import AdvisorSettings

logger = logging.getLogger(__name__)

CatalogFetcher = Callable[[str], Iterable[Dict[str, Any]]]


def load_catalog(settings: AdvisorSettings, fetch: Optional[CatalogFetcher] = None) -> List[PatternEntry]:
    """Load the catalog from ``catalog_path``, else from ``fetch(catalog_url)``."""
    if settings.catalog_path:
        return load_catalog_file(settings.catalog_path)
    if fetch is not None:
        return PatternIndex(lambda: fetch(settings.catalog_url)).fetch()
    raise CatalogError("No pattern catalog configured: set catalog_path or supply a fetcher")


def audit(settings: AdvisorSettings,
          fetch: Optional[CatalogFetcher] = None,
          engine: Optional[ComplianceEngine] = None,
          setup_logging: bool = True) -> ComplianceReport:
    """Evaluate the configured agent config against the pattern catalog.

    Args:
        settings: Where to find the config and catalog, and the runtime version.
        fetch: Called with ``settings.catalog_url`` when no local catalog is set.
        engine: Engine to use; defaults to the standard rule sets.
        setup_logging: Configure rich logging at ``settings.log_level`` first.
    """
    if setup_logging:
        configure_logging(settings.log_level)

    config = AgentConfigLoader(settings.config_path).load()
    catalog = load_catalog(settings, fetch)
    logger.info(f"Auditing {settings.config_path} against {len(catalog)} patterns "
                f"for v{settings.openclaw_version}")

    engine = engine or ComplianceEngine()
    return engine.evaluate(config, catalog, settings.openclaw_version)
