"""
Runtime Configuration

Central configuration for verification: default hash algorithm,
input-size ceilings and logging.
"""

from __future__ import annotations

import copy
import json
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Optional

from dotenv import load_dotenv

from mpverify.crypto.hashing import DEFAULT_ALGORITHM, HASH_ALGORITHMS
from mpverify.schemas.errors import SchemaValidationException

load_dotenv()


# Environment variable prefix
ENV_PREFIX = "MPVERIFY_"

_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR")


@dataclass
class LimitsConfig:
    """
    Input-size ceilings enforced before any hashing.

    Verification cost is linear in leaves + proof length, so bounding
    the inputs bounds the work. A value of 0 disables that ceiling.
    """
    max_proof_length: int = 256
    max_leaves: int = 1024

    def __post_init__(self):
        for name in ("max_proof_length", "max_leaves"):
            value = getattr(self, name)
            if not isinstance(value, int) or isinstance(value, bool) or value < 0:
                raise SchemaValidationException(
                    f"{name} must be a non-negative integer, got {value!r}",
                    field_path=f"limits.{name}",
                )


@dataclass
class VerifierConfig:
    """
    Complete runtime configuration for the verifier.

    Can be loaded from:
    - Environment variables (and a .env file)
    - YAML or JSON file
    - Programmatic construction
    """
    hash_algorithm: str = DEFAULT_ALGORITHM
    limits: LimitsConfig = field(default_factory=LimitsConfig)
    log_level: str = "WARNING"
    log_file: Optional[str] = None
    extra: dict[str, Any] = field(default_factory=dict)

    def __post_init__(self):
        for name in ("hash_algorithm", "log_level"):
            value = getattr(self, name)
            if not isinstance(value, str):
                raise SchemaValidationException(
                    f"{name} must be a string, got {value!r}",
                    field_path=name,
                )
        if self.log_file is not None and not isinstance(self.log_file, str):
            raise SchemaValidationException(
                f"log_file must be a string, got {self.log_file!r}",
                field_path="log_file",
            )
        if not isinstance(self.extra, dict):
            raise SchemaValidationException(
                f"extra must be a mapping, got {type(self.extra).__name__}",
                field_path="extra",
            )
        if self.hash_algorithm not in HASH_ALGORITHMS:
            raise SchemaValidationException(
                f"Unknown hash algorithm {self.hash_algorithm!r}, "
                f"expected one of {sorted(HASH_ALGORITHMS)}",
                field_path="hash_algorithm",
            )
        self.log_level = self.log_level.upper()
        if self.log_level not in _LOG_LEVELS:
            raise SchemaValidationException(
                f"Unknown log level {self.log_level!r}",
                field_path="log_level",
            )

    @staticmethod
    def _get_env_overrides() -> dict[str, Any]:
        """
        Get configuration overrides from environment variables.

        Supported variables:
        - MPVERIFY_HASH_ALGORITHM: sha256 or keccak256
        - MPVERIFY_MAX_PROOF_LENGTH: proof element ceiling (0 = unlimited)
        - MPVERIFY_MAX_LEAVES: leaf count ceiling (0 = unlimited)
        - MPVERIFY_LOG_LEVEL: DEBUG, INFO, WARNING or ERROR
        - MPVERIFY_LOG_FILE: optional log file path
        """
        overrides: dict[str, Any] = {}

        if os.getenv(f"{ENV_PREFIX}HASH_ALGORITHM"):
            overrides["hash_algorithm"] = os.getenv(f"{ENV_PREFIX}HASH_ALGORITHM")

        for name in ("max_proof_length", "max_leaves"):
            raw = os.getenv(f"{ENV_PREFIX}{name.upper()}")
            if raw:
                try:
                    overrides.setdefault("limits", {})[name] = int(raw)
                except ValueError:
                    raise SchemaValidationException(
                        f"{ENV_PREFIX}{name.upper()} must be an integer, got {raw!r}",
                        field_path=f"limits.{name}",
                    ) from None

        if os.getenv(f"{ENV_PREFIX}LOG_LEVEL"):
            overrides["log_level"] = os.getenv(f"{ENV_PREFIX}LOG_LEVEL")
        if os.getenv(f"{ENV_PREFIX}LOG_FILE"):
            overrides["log_file"] = os.getenv(f"{ENV_PREFIX}LOG_FILE")

        return overrides

    @classmethod
    def from_env(cls) -> "VerifierConfig":
        """
        Load configuration purely from environment variables.

        Uses defaults for any values not specified in env vars.
        """
        return cls.from_dict(cls._get_env_overrides())

    @classmethod
    def from_yaml(cls, path: str | Path) -> "VerifierConfig":
        """Load configuration from a YAML file."""
        import yaml
        path = Path(path)
        if not path.exists():
            raise FileNotFoundError(f"Config file not found: {path}")

        with open(path) as f:
            try:
                data = yaml.safe_load(f)
            except yaml.YAMLError as e:
                raise SchemaValidationException(
                    f"Invalid YAML in {path}: {e}"
                ) from e

        return cls.from_dict(data or {})

    @classmethod
    def from_file(cls, path: str | Path) -> "VerifierConfig":
        """Load configuration from a .json, .yaml or .yml file."""
        path = Path(path)
        if path.suffix in (".yaml", ".yml"):
            return cls.from_yaml(path)
        if not path.exists():
            raise FileNotFoundError(f"Config file not found: {path}")
        with open(path, "r") as f:
            data = json.load(f)
        return cls.from_dict(data)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "VerifierConfig":
        """Load configuration from a dictionary (supports partial data)."""
        if not isinstance(data, dict):
            raise SchemaValidationException(
                f"Configuration must be a mapping, got {type(data).__name__}"
            )
        limits_data = data.get("limits", {}) or {}
        try:
            limits = LimitsConfig(**limits_data) if limits_data else LimitsConfig()
        except TypeError as e:
            raise SchemaValidationException(
                f"Invalid limits section: {e}", field_path="limits"
            ) from e

        return cls(
            hash_algorithm=data.get("hash_algorithm") or DEFAULT_ALGORITHM,
            limits=limits,
            log_level=data.get("log_level") or "WARNING",
            log_file=data.get("log_file"),
            extra=data.get("extra") or {},
        )

    def with_env_overrides(self) -> "VerifierConfig":
        """
        Return a new config with environment variable overrides applied.

        This allows loading from a config file first, then overlaying env vars.
        """
        overrides = self._get_env_overrides()
        if not overrides:
            return self

        data = self.to_dict()
        for key, value in overrides.items():
            if key == "limits":
                data["limits"].update(value)
            else:
                data[key] = value
        return self.from_dict(data)

    def to_dict(self) -> dict[str, Any]:
        """Convert configuration to a dictionary."""
        return {
            "hash_algorithm": self.hash_algorithm,
            "limits": {
                "max_proof_length": self.limits.max_proof_length,
                "max_leaves": self.limits.max_leaves,
            },
            "log_level": self.log_level,
            "log_file": self.log_file,
            "extra": copy.deepcopy(self.extra),
        }


# Global default configuration
_default_config: Optional[VerifierConfig] = None


def get_default_config() -> VerifierConfig:
    """Get the default runtime configuration."""
    global _default_config
    if _default_config is None:
        _default_config = VerifierConfig.from_env()
    return _default_config


def set_default_config(config: Optional[VerifierConfig]) -> None:
    """Set the default runtime configuration (None resets to env on next get)."""
    global _default_config
    _default_config = config
