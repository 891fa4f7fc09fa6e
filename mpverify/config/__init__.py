"""
Runtime Configuration Module

Provides configuration loading and management for the verifier.
"""

from .runtime import (
    ENV_PREFIX,
    LimitsConfig,
    VerifierConfig,
    get_default_config,
    set_default_config,
)

__all__ = [
    "ENV_PREFIX",
    "LimitsConfig",
    "VerifierConfig",
    "get_default_config",
    "set_default_config",
]
