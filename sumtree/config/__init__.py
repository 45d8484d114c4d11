"""
Runtime Configuration Module

Provides configuration loading and management for the sum tree library and CLI.
"""

from .runtime import (
    ENV_PREFIX,
    RuntimeConfig,
    get_default_config,
    get_default_config_template,
    load_config,
    set_default_config,
)

__all__ = [
    "ENV_PREFIX",
    "RuntimeConfig",
    "get_default_config",
    "get_default_config_template",
    "load_config",
    "set_default_config",
]
