"""
Runtime Configuration Module

Provides configuration loading and management for the shield library.
"""

from .runtime import (
    DEFAULT_FIELD_MODULUS,
    LedgerConfig,
    RuntimeConfig,
    ShieldConfig,
    load_runtime_config,
)

__all__ = [
    "DEFAULT_FIELD_MODULUS",
    "LedgerConfig",
    "RuntimeConfig",
    "ShieldConfig",
    "load_runtime_config",
]
