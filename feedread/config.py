"""
Configuration for feedread.

Values come from config.json next to this module, with environment
variables taking precedence.
"""

import json
import logging
import os
from typing import Any, Dict

logger = logging.getLogger(__name__)


def load_config(config_filename: str = "config.json") -> Dict[str, Any]:
    """Loads configuration from a JSON file."""
    # Build absolute path relative to this module
    base_dir = os.path.dirname(os.path.abspath(__file__))
    config_path = os.path.join(base_dir, config_filename)

    try:
        with open(config_path, "r", encoding="utf-8") as f:
            return json.load(f)
    except FileNotFoundError:
        logger.warning("Config file not found at %s. Using defaults.", config_path)
        return {}



def get_timeout(cfg: Dict[str, Any]) -> float:
    """Request timeout in seconds; FEEDREAD_TIMEOUT overrides the config file."""
    default = float(cfg.get("request_timeout", 5))
    value = os.environ.get("FEEDREAD_TIMEOUT")
    if value is None:
        return default
    try:
        timeout = float(value)
    except ValueError:
        timeout = 0.0
    if timeout <= 0:
        logger.warning("Invalid FEEDREAD_TIMEOUT %r. Using %s.", value, default)
        return default
    return timeout


CONFIG: Dict[str, Any] = load_config()

# Env Vars
REQUEST_TIMEOUT: float = get_timeout(CONFIG)
USER_AGENT: str = os.environ.get(
    "FEEDREAD_USER_AGENT", CONFIG.get("user_agent", "feedread/1.0")
)
MAX_WORKERS: int = int(CONFIG.get("max_workers", 4))
