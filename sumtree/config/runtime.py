"""
Runtime Configuration

Central configuration for logging, batch proof workers and CLI output.

Sources, lowest to highest precedence:
- Defaults
- JSON config file (explicit path, ./sumtree.json, ./.sumtree.json,
  ~/.config/sumtree/config.json)
- Environment variables (SUMTREE_* prefix, .env supported)
"""

from __future__ import annotations

import copy
import json
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Optional

from dotenv import load_dotenv

load_dotenv()


# Environment variable prefix
ENV_PREFIX = "SUMTREE_"

OUTPUT_FORMATS = ("human", "json")


@dataclass
class RuntimeConfig:
    """
    Complete runtime configuration.

    Can be loaded from:
    - Environment variables
    - JSON file
    - Programmatic construction
    """
    log_level: str = "INFO"
    log_file: Optional[str] = None
    # Thread pool size for prove_many / verify_many; 1 runs inline
    proof_workers: int = 4
    output_format: str = "human"
    extra: dict[str, Any] = field(default_factory=dict)

    def __post_init__(self) -> None:
        if self.proof_workers < 1:
            raise ValueError(f"proof_workers must be >= 1, got {self.proof_workers}")
        if self.output_format not in OUTPUT_FORMATS:
            raise ValueError(
                f"output_format must be one of {OUTPUT_FORMATS}, got {self.output_format!r}"
            )

    @staticmethod
    def _get_env_overrides() -> dict[str, Any]:
        """
        Get configuration overrides from environment variables.

        Supported variables:
        - SUMTREE_LOG_LEVEL: Log level name
        - SUMTREE_LOG_FILE: Optional log file path
        - SUMTREE_PROOF_WORKERS: Worker threads for batch proving/verifying
        - SUMTREE_OUTPUT_FORMAT: human | json
        """
        overrides: dict[str, Any] = {}

        if os.getenv(f"{ENV_PREFIX}LOG_LEVEL"):
            overrides["log_level"] = os.getenv(f"{ENV_PREFIX}LOG_LEVEL")
        if os.getenv(f"{ENV_PREFIX}LOG_FILE"):
            overrides["log_file"] = os.getenv(f"{ENV_PREFIX}LOG_FILE")
        if os.getenv(f"{ENV_PREFIX}PROOF_WORKERS"):
            overrides["proof_workers"] = int(os.getenv(f"{ENV_PREFIX}PROOF_WORKERS", "4"))
        if os.getenv(f"{ENV_PREFIX}OUTPUT_FORMAT"):
            overrides["output_format"] = os.getenv(f"{ENV_PREFIX}OUTPUT_FORMAT")

        return overrides

    @classmethod
    def from_env(cls) -> "RuntimeConfig":
        """Load configuration purely from environment variables."""
        return cls.from_dict(cls._get_env_overrides())

    @classmethod
    def from_json(cls, path: str | Path) -> "RuntimeConfig":
        """Load configuration from a JSON file."""
        path = Path(path)
        if not path.exists():
            raise FileNotFoundError(f"Config file not found: {path}")

        with open(path, "r") as f:
            data = json.load(f)

        return cls.from_dict(data)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "RuntimeConfig":
        """Load configuration from a dictionary (supports partial data)."""
        defaults = cls()
        return cls(
            log_level=data.get("log_level", defaults.log_level),
            log_file=data.get("log_file", defaults.log_file),
            proof_workers=int(data.get("proof_workers", defaults.proof_workers)),
            output_format=data.get("output_format", defaults.output_format),
            extra=data.get("extra", {}),
        )

    def with_env_overrides(self) -> "RuntimeConfig":
        """Return a new config with environment variable overrides applied."""
        overrides = self._get_env_overrides()
        if not overrides:
            return self

        new_config = copy.deepcopy(self)
        for key, value in overrides.items():
            setattr(new_config, key, value)
        new_config.__post_init__()
        return new_config

    def to_dict(self) -> dict[str, Any]:
        """Convert configuration to a dictionary."""
        return {
            "log_level": self.log_level,
            "log_file": self.log_file,
            "proof_workers": self.proof_workers,
            "output_format": self.output_format,
            "extra": self.extra,
        }


def default_config_paths() -> list[Path]:
    return [
        Path.cwd() / "sumtree.json",
        Path.cwd() / ".sumtree.json",
        Path.home() / ".config" / "sumtree" / "config.json",
    ]


def load_config(config_path: Path | None = None) -> RuntimeConfig:
    """
    Load configuration from file and/or environment.

    Environment variables override file settings. An explicit path that
    does not exist is an error; default locations are optional.
    """
    config = RuntimeConfig()

    if config_path is not None:
        config = RuntimeConfig.from_json(config_path)
    else:
        for default_path in default_config_paths():
            if default_path.exists():
                config = RuntimeConfig.from_json(default_path)
                break

    return config.with_env_overrides()


def get_default_config_template() -> str:
    """Get a template configuration file."""
    return json.dumps(RuntimeConfig().to_dict(), indent=2) + "\n"


# Global default configuration
_default_config: Optional[RuntimeConfig] = None


def get_default_config() -> RuntimeConfig:
    """Get the default runtime configuration."""
    global _default_config
    if _default_config is None:
        _default_config = RuntimeConfig.from_env()
    return _default_config


def set_default_config(config: Optional[RuntimeConfig]) -> None:
    """Set (or with None, reset) the default runtime configuration."""
    global _default_config
    _default_config = config
