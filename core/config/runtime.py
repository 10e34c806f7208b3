"""
Runtime Configuration

Central configuration for field encoding, commitment hashing, the
commitment tree and the external leaf-lookup service.

All configuration values are immutable once constructed. Components
receive a ShieldConfig explicitly instead of reading module globals.
"""

from __future__ import annotations

import json
import os
from dataclasses import dataclass, field, replace
from pathlib import Path
from typing import Any, Optional

from dotenv import load_dotenv

from core.schemas.errors import ConfigurationException

load_dotenv()


# Environment variable prefix
ENV_PREFIX = "SHIELD_"

# Decimal representation of the prime p of GF(p) used by the proving system (BN254).
DEFAULT_FIELD_MODULUS = (
    "21888242871839275222246405745257275088548364400416034343698204186575808495617"
)

# The modulus is just shy of 254 bits, so values are packed into 128-bit chunks.
DEFAULT_PACKING_SIZE = 128
DEFAULT_DIGEST_LENGTH_BYTES = 27
DEFAULT_HASH_CHUNK_BITS = DEFAULT_DIGEST_LENGTH_BYTES * 16
DEFAULT_TREE_DEPTH = 33


@dataclass(frozen=True)
class ShieldConfig:
    """
    Numeric parameters shared by the encoder, the hasher and the tree.

    These must match the parameters compiled into the external proving
    circuits; any difference produces commitments the circuits reject.
    """
    field_modulus: str = DEFAULT_FIELD_MODULUS
    packing_size: int = DEFAULT_PACKING_SIZE
    hash_chunk_bits: int = DEFAULT_HASH_CHUNK_BITS
    digest_length_bytes: int = DEFAULT_DIGEST_LENGTH_BYTES
    tree_depth: int = DEFAULT_TREE_DEPTH

    def __post_init__(self) -> None:
        # Integer moduli (as JSON files write them) are stored as decimal strings
        if isinstance(self.field_modulus, int) and not isinstance(self.field_modulus, bool):
            object.__setattr__(self, "field_modulus", str(self.field_modulus))
        if not isinstance(self.field_modulus, str):
            raise ConfigurationException(
                f"field_modulus must be a decimal string or integer, "
                f"got {type(self.field_modulus).__name__}",
                field_name="field_modulus",
            )
        for name in ("packing_size", "hash_chunk_bits", "digest_length_bytes", "tree_depth"):
            value = getattr(self, name)
            if not isinstance(value, int) or isinstance(value, bool):
                raise ConfigurationException(
                    f"{name} must be an integer, got {type(value).__name__} {value!r}",
                    field_name=name,
                )
        if not self.field_modulus.isdigit() or int(self.field_modulus) < 2:
            raise ConfigurationException(
                f"field_modulus must be a decimal integer >= 2, got {self.field_modulus!r}",
                field_name="field_modulus",
            )
        if self.packing_size <= 0 or self.packing_size % 8 != 0:
            raise ConfigurationException(
                f"packing_size must be a positive multiple of 8, got {self.packing_size}",
                field_name="packing_size",
            )
        if self.packing_size >= self.modulus_bits:
            raise ConfigurationException(
                f"packing_size ({self.packing_size}) must be smaller than the "
                f"field modulus bit length ({self.modulus_bits})",
                field_name="packing_size",
            )
        if self.hash_chunk_bits <= 0 or self.hash_chunk_bits % 8 != 0:
            raise ConfigurationException(
                f"hash_chunk_bits must be a positive multiple of 8, got {self.hash_chunk_bits}",
                field_name="hash_chunk_bits",
            )
        if not 1 <= self.digest_length_bytes <= 32:
            raise ConfigurationException(
                f"digest_length_bytes must be between 1 and 32, got {self.digest_length_bytes}",
                field_name="digest_length_bytes",
            )
        if self.hash_chunk_bits < 16 * self.digest_length_bytes:
            raise ConfigurationException(
                "hash_chunk_bits must hold at least two digests "
                f"({16 * self.digest_length_bytes} bits), got {self.hash_chunk_bits}",
                field_name="hash_chunk_bits",
            )
        if self.tree_depth < 1:
            raise ConfigurationException(
                f"tree_depth must be at least 1, got {self.tree_depth}",
                field_name="tree_depth",
            )

    @property
    def modulus(self) -> int:
        """The field modulus as an integer."""
        return int(self.field_modulus)

    @property
    def modulus_bits(self) -> int:
        return int(self.field_modulus).bit_length()

    @property
    def hash_chunk_bytes(self) -> int:
        return self.hash_chunk_bits // 8


@dataclass(frozen=True)
class LedgerConfig:
    """Configuration for the external leaf-lookup service."""
    endpoint: Optional[str] = None
    timeout: float = 30.0


@dataclass(frozen=True)
class RuntimeConfig:
    """
    Complete runtime configuration.

    Can be loaded from:
    - Environment variables
    - JSON file
    - Programmatic construction
    """
    shield: ShieldConfig = field(default_factory=ShieldConfig)
    ledger: LedgerConfig = field(default_factory=LedgerConfig)
    log_level: str = "INFO"

    @staticmethod
    def _get_env_overrides() -> dict[str, Any]:
        """
        Get configuration overrides from environment variables.

        This is the SINGLE source of truth for all env var reading.

        Supported variables:
        - SHIELD_FIELD_MODULUS: Field modulus (decimal)
        - SHIELD_PACKING_SIZE: Bits per field element chunk
        - SHIELD_HASH_CHUNK_BITS: Bits consumed per hash primitive call
        - SHIELD_DIGEST_LENGTH_BYTES: Commitment digest length
        - SHIELD_TREE_DEPTH: Commitment tree depth
        - SHIELD_LEDGER_ENDPOINT: Base URL of the leaf-lookup service
        - SHIELD_LEDGER_TIMEOUT: Leaf-lookup timeout in seconds
        - SHIELD_LOG_LEVEL: Log level
        """
        overrides: dict[str, Any] = {}

        if os.getenv(f"{ENV_PREFIX}FIELD_MODULUS"):
            overrides.setdefault("shield", {})["field_modulus"] = os.getenv(
                f"{ENV_PREFIX}FIELD_MODULUS"
            )
        for key in ("packing_size", "hash_chunk_bits", "digest_length_bytes", "tree_depth"):
            raw = os.getenv(f"{ENV_PREFIX}{key.upper()}")
            if raw:
                overrides.setdefault("shield", {})[key] = _parse_int(raw, key)

        if os.getenv(f"{ENV_PREFIX}LEDGER_ENDPOINT"):
            overrides.setdefault("ledger", {})["endpoint"] = os.getenv(
                f"{ENV_PREFIX}LEDGER_ENDPOINT"
            )
        raw_timeout = os.getenv(f"{ENV_PREFIX}LEDGER_TIMEOUT")
        if raw_timeout:
            try:
                overrides.setdefault("ledger", {})["timeout"] = float(raw_timeout)
            except ValueError:
                raise ConfigurationException(
                    f"ledger timeout must be a number, got {raw_timeout!r}",
                    field_name="timeout",
                ) from None

        if os.getenv(f"{ENV_PREFIX}LOG_LEVEL"):
            overrides["log_level"] = os.getenv(f"{ENV_PREFIX}LOG_LEVEL")

        return overrides

    @classmethod
    def from_env(cls) -> "RuntimeConfig":
        """
        Load configuration purely from environment variables.

        Uses defaults for any values not specified in env vars.
        """
        return cls.from_dict(cls._get_env_overrides())

    @classmethod
    def from_file(cls, path: str | Path) -> "RuntimeConfig":
        """Load configuration from a JSON file."""
        path = Path(path)
        if not path.exists():
            raise FileNotFoundError(f"Config file not found: {path}")

        with open(path) as f:
            data = json.load(f)

        return cls.from_dict(data)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "RuntimeConfig":
        """Load configuration from a dictionary (supports partial data)."""
        shield_data = data.get("shield", {})
        ledger_data = data.get("ledger", {})

        try:
            shield = ShieldConfig(**shield_data) if shield_data else ShieldConfig()
            ledger = LedgerConfig(**ledger_data) if ledger_data else LedgerConfig()
        except TypeError as e:
            raise ConfigurationException(f"Unknown configuration key: {e}") from e

        return cls(
            shield=shield,
            ledger=ledger,
            log_level=data.get("log_level", "INFO"),
        )

    def with_env_overrides(self) -> "RuntimeConfig":
        """
        Return a new config with environment variable overrides applied.

        This allows loading from a config file first, then overlaying env vars.
        """
        overrides = self._get_env_overrides()
        if not overrides:
            return self

        new_config = self
        if "shield" in overrides:
            new_config = replace(new_config, shield=replace(new_config.shield, **overrides["shield"]))
        if "ledger" in overrides:
            new_config = replace(new_config, ledger=replace(new_config.ledger, **overrides["ledger"]))
        if "log_level" in overrides:
            new_config = replace(new_config, log_level=overrides["log_level"])

        return new_config

    def to_dict(self) -> dict[str, Any]:
        """Convert configuration to a dictionary."""
        return {
            "shield": {
                "field_modulus": self.shield.field_modulus,
                "packing_size": self.shield.packing_size,
                "hash_chunk_bits": self.shield.hash_chunk_bits,
                "digest_length_bytes": self.shield.digest_length_bytes,
                "tree_depth": self.shield.tree_depth,
            },
            "ledger": {
                "endpoint": self.ledger.endpoint,
                "timeout": self.ledger.timeout,
            },
            "log_level": self.log_level,
        }


def _parse_int(raw: str, key: str) -> int:
    try:
        return int(raw)
    except ValueError:
        raise ConfigurationException(
            f"{key} must be an integer, got {raw!r}",
            field_name=key,
        ) from None


def load_runtime_config(config_path: str | Path | None = None) -> RuntimeConfig:
    """
    Load configuration from file and/or environment.

    Search order for config file when no path is given:
      1. ./shield.json
      2. ~/.config/shield/config.json

    Environment variables ALWAYS override config file values.
    """
    if config_path is not None:
        return RuntimeConfig.from_file(config_path).with_env_overrides()

    search_paths = [
        Path.cwd() / "shield.json",
        Path.home() / ".config" / "shield" / "config.json",
    ]
    for path in search_paths:
        if path.exists():
            return RuntimeConfig.from_file(path).with_env_overrides()

    return RuntimeConfig().with_env_overrides()
