"""Loads the agent's openclaw.json configuration."""

import json
import logging
from pathlib import Path
from typing import Any, Dict

logger = logging.getLogger(__name__)


class AgentConfigLoader:
    """Reads an agent config file, falling back to an empty tree on failure."""

    def __init__(self, config_path: str):
        self.config_path = Path(config_path).expanduser()

    def load(self) -> Dict[str, Any]:
        """Load the config as a dict; missing or malformed files yield ``{}``."""
        if not self.config_path.exists():
            logger.warning(f"Agent config not found at {self.config_path}")
            return {}

        try:
            with open(self.config_path, 'r', encoding='utf-8') as f:
                config = json.load(f)
        except (OSError, UnicodeDecodeError, json.JSONDecodeError) as e:
            logger.warning(f"Failed to load agent config: {e}")
            return {}

        if not isinstance(config, dict):
            logger.warning(f"Agent config at {self.config_path} is not a JSON object")
            return {}

        return config
