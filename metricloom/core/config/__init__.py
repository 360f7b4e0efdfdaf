"""Configuration and logging setup."""

from .config_loader import (
    DEFAULT_CONFIG,
    get_config_path,
    load_unified_config,
    reload_configs,
    setup_logging,
)

__all__ = [
    "DEFAULT_CONFIG",
    "get_config_path",
    "load_unified_config",
    "reload_configs",
    "setup_logging",
]
