"""Configuration loading.

Settings come from ``config/metricloom.yaml`` merged over built-in defaults.
The directory can be moved with ``METRICLOOM_CONFIG_DIR``; a ``.env`` file
is loaded first so the variable can live there.
"""

import copy
import logging
import os
import sys
import threading
from pathlib import Path
from typing import Any, Dict, Optional

import yaml
from dotenv import load_dotenv

load_dotenv()

logger = logging.getLogger(__name__)

CONFIG_FILE_NAME = "metricloom.yaml"
LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

DEFAULT_CONFIG: Dict[str, Any] = {
    "logging": {
        "level": "INFO",
        "format": LOG_FORMAT,
    },
    "runner": {
        "num_jobs": None,  # None → executor default
        "max_file_size_mb": 5,
        "skip_directories": [],  # added to the built-in list
        "include": [],
        "exclude": [],
    },
}

# Cache for the merged configuration
_config_cache: Optional[Dict[str, Any]] = None
_config_lock = threading.Lock()


def get_config_path() -> Path:
    """Directory holding the YAML configuration files."""
    env_dir = os.getenv("METRICLOOM_CONFIG_DIR")
    if env_dir:
        return Path(env_dir)
    # Find config/ relative to project root
    return Path(__file__).parent.parent.parent.parent / "config"


def _deep_merge(base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
    merged = copy.deepcopy(base)
    for key, value in override.items():
        if isinstance(value, dict) and isinstance(merged.get(key), dict):
            merged[key] = _deep_merge(merged[key], value)
        else:
            merged[key] = value
    return merged


def _read_config_file(config_file: Path) -> Dict[str, Any]:
    if not config_file.exists():
        logger.debug(f"{config_file} not found, using default configuration")
        return {}

    try:
        with open(config_file, "r") as f:
            loaded = yaml.safe_load(f) or {}
    except (OSError, yaml.YAMLError) as e:
        logger.error(f"Error loading {config_file}: {e}")
        return {}

    if not isinstance(loaded, dict):
        logger.error(f"{config_file} must contain a mapping, got {type(loaded).__name__}")
        return {}
    return loaded


def load_unified_config() -> Dict[str, Any]:
    """Return the merged configuration, loading it on first use.

    Returns:
        Defaults deep-merged with the contents of ``metricloom.yaml``
    """
    global _config_cache
    with _config_lock:
        if _config_cache is None:
            config_file = get_config_path() / CONFIG_FILE_NAME
            _config_cache = _deep_merge(DEFAULT_CONFIG, _read_config_file(config_file))
            logger.debug(f"Loaded configuration from {config_file}")
        return _config_cache


def reload_configs() -> Dict[str, Any]:
    """Drop the cached configuration and load it again."""
    global _config_cache
    with _config_lock:
        _config_cache = None
    return load_unified_config()


def setup_logging(log_level: Optional[str] = None) -> None:
    """Configure application logging.

    The level comes from the argument, then ``METRICLOOM_LOG_LEVEL``, then
    the ``logging.level`` setting.
    """
    settings = load_unified_config()["logging"]
    level_name = log_level or os.getenv("METRICLOOM_LOG_LEVEL") or settings["level"]
    level = getattr(logging, str(level_name).upper(), None)
    if not isinstance(level, int):
        raise ValueError(f"Unknown log level: {level_name}")

    logging.basicConfig(
        level=level,
        format=settings.get("format") or LOG_FORMAT,
        handlers=[
            logging.StreamHandler(sys.stdout)
        ]
    )
    # Grammar kind resolution is chatty at DEBUG
    logging.getLogger("metricloom.core.grammar.symbols").setLevel(max(level, logging.INFO))
