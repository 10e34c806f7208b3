"""
Module 08 - API Dependencies

Dependency injection for the API.
Provides the runtime configuration and the leaf lookup used by /verify.
"""

from __future__ import annotations

import logging
from typing import Iterator

from fastapi import Depends

from core.config.runtime import RuntimeConfig, ShieldConfig, load_runtime_config
from core.ledger.lookup import HttpLeafLookup, LeafLookup

logger = logging.getLogger(__name__)


def get_runtime_config() -> RuntimeConfig:
    """Load RuntimeConfig from shield.json (if any), then overlay environment variables.

    Search order for config file:
      1. ./shield.json
      2. ~/.config/shield/config.json

    Environment variables ALWAYS override config file values.
    The .env file is loaded automatically by core.config.runtime on import.
    """
    return load_runtime_config()


def get_shield_config(
    config: RuntimeConfig = Depends(get_runtime_config),
) -> ShieldConfig:
    return config.shield


def get_leaf_lookup(
    config: RuntimeConfig = Depends(get_runtime_config),
) -> Iterator[LeafLookup]:
    """
    Create an HTTP leaf lookup for the configured ledger endpoint.

    Raises:
        LedgerNotConfiguredError: If SHIELD_LEDGER_ENDPOINT is unset
    """
    if not config.ledger.endpoint:
        from api.errors import LedgerNotConfiguredError
        logger.warning("Verification requested but no ledger endpoint is configured")
        raise LedgerNotConfiguredError(
            "Ledger endpoint is not configured (set SHIELD_LEDGER_ENDPOINT)"
        )

    lookup = HttpLeafLookup.from_config(config.ledger)
    try:
        yield lookup
    finally:
        lookup.close()
