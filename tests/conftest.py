"""
Pytest configuration and shared fixtures for the shield library tests.

This conftest.py:
1. Adds project root to sys.path for imports
2. Provides commonly-used fixtures via pytest's autodiscovery
3. Configures pytest markers and settings
"""

import sys
from pathlib import Path

import pytest

# =============================================================================
# Path Setup - Must happen before any local imports
# =============================================================================

# Get the project root (parent of tests/)
_PROJECT_ROOT = Path(__file__).resolve().parent.parent

if str(_PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(_PROJECT_ROOT))

from core.config.runtime import ShieldConfig  # noqa: E402
from core.crypto.hashing import CommitmentHasher  # noqa: E402
from core.ledger.lookup import InMemoryLeafLookup  # noqa: E402


# =============================================================================
# Sample Values
# =============================================================================

SAMPLE_FIELDS = ["0x1234", "0xabcd", "0xffff"]

# A 32-byte token id; only its rightmost 27 bytes enter the commitment.
SAMPLE_ASSET_ID = "0x" + "11" * 5 + "22" * 27
SAMPLE_PUBLIC_KEY = "0x" + "ab" * 27
SAMPLE_SALT = "0x" + "5a" * 27

_SHIELD_ENV_VARS = (
    "SHIELD_FIELD_MODULUS",
    "SHIELD_PACKING_SIZE",
    "SHIELD_HASH_CHUNK_BITS",
    "SHIELD_DIGEST_LENGTH_BYTES",
    "SHIELD_TREE_DEPTH",
    "SHIELD_LEDGER_ENDPOINT",
    "SHIELD_LEDGER_TIMEOUT",
    "SHIELD_LOG_LEVEL",
)


# =============================================================================
# Pytest Fixtures (autodiscovered by pytest)
# =============================================================================

@pytest.fixture(autouse=True)
def clean_shield_env(monkeypatch):
    """Keep SHIELD_* variables from the developer's shell out of the tests."""
    for name in _SHIELD_ENV_VARS:
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def shield_config():
    """Provide the production ShieldConfig."""
    return ShieldConfig()


@pytest.fixture
def small_tree_config():
    """A ShieldConfig with a depth-3 tree (4 leaves)."""
    return ShieldConfig(tree_depth=3)


@pytest.fixture
def ledger():
    """Provide an empty in-memory ledger with the production tree depth."""
    return InMemoryLeafLookup()


@pytest.fixture
def sample_fields():
    return list(SAMPLE_FIELDS)


@pytest.fixture
def sample_commitment(shield_config):
    """The commitment of SAMPLE_FIELDS under the production parameters."""
    return CommitmentHasher(shield_config).hash_items(*SAMPLE_FIELDS)


# =============================================================================
# Pytest Configuration
# =============================================================================

def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line(
        "markers", "slow: marks tests as slow (deselect with '-m \"not slow\"')"
    )
    config.addinivalue_line(
        "markers", "unit: marks tests as unit tests"
    )


# =============================================================================
# Test Helpers (available to all tests via fixtures)
# =============================================================================

@pytest.fixture
def assert_check_passed():
    """Helper to assert a specific check passed in VerificationResult."""
    def _assert(result, check_id: str):
        checks = [c for c in result.checks if c.check_id == check_id]
        assert len(checks) == 1, f"Expected check '{check_id}' not found in {[c.check_id for c in result.checks]}"
        assert checks[0].ok, f"Check '{check_id}' failed: {checks[0].message}"
    return _assert


@pytest.fixture
def assert_check_failed():
    """Helper to assert a specific check failed in VerificationResult."""
    def _assert(result, check_id: str):
        checks = [c for c in result.checks if c.check_id == check_id]
        assert len(checks) == 1, f"Expected check '{check_id}' not found in {[c.check_id for c in result.checks]}"
        assert not checks[0].ok, f"Check '{check_id}' unexpectedly passed"
    return _assert
