"""Advisor settings from a YAML file and the environment."""

import logging
import os
from dataclasses import dataclass, fields
from pathlib import Path
from typing import Optional

import yaml
from dotenv import load_dotenv

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_PATH = '~/.openclaw/openclaw.json'
DEFAULT_CATALOG_URL = 'https://obn.wiki/pattern-index.json'
VALID_LOG_LEVELS = ['DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL']

# Environment variable -> settings field
ENV_OVERRIDES = {
    'OBN_OPENCLAW_VERSION': 'openclaw_version',
    'OBN_CONFIG_PATH': 'config_path',
    'OBN_CATALOG_PATH': 'catalog_path',
    'OBN_CATALOG_URL': 'catalog_url',
    'LOG_LEVEL': 'log_level',
}


@dataclass
class AdvisorSettings:
    """Runtime settings for the pattern advisor."""
    openclaw_version: str = "0.0.0"
    config_path: str = DEFAULT_CONFIG_PATH
    catalog_path: Optional[str] = None
    catalog_url: str = DEFAULT_CATALOG_URL
    log_level: str = "INFO"


def load_settings(config_file: Optional[str] = None) -> AdvisorSettings:
    """Build settings from defaults, an optional YAML file, then env vars.

    Later sources win. Unknown YAML keys are ignored; an unreadable YAML
    file is logged and skipped.
    """
    load_dotenv()
    settings = AdvisorSettings()
    known = {f.name for f in fields(AdvisorSettings)}

    if config_file:
        try:
            with open(Path(config_file).expanduser(), 'r', encoding='utf-8') as f:
                config_data = yaml.safe_load(f) or {}
        except (OSError, UnicodeDecodeError, yaml.YAMLError) as e:
            logger.warning(f"Failed to load settings from {config_file}: {e}")
            config_data = {}

        if isinstance(config_data, dict):
            for key, value in config_data.items():
                if key not in known:
                    logger.debug(f"Ignoring unknown setting '{key}'")
                    continue
                if value is not None:
                    setattr(settings, key, str(value))

    for env_var, attr in ENV_OVERRIDES.items():
        value = os.getenv(env_var)
        if value:
            setattr(settings, attr, value)

    settings.log_level = settings.log_level.upper()
    if settings.log_level not in VALID_LOG_LEVELS:
        logger.warning(f"Invalid log level '{settings.log_level}', using INFO")
        settings.log_level = "INFO"

    return settings
