"""
Module 06 - Commitment Correctness Protocol
Cross-checks a received commitment against its fields and the ledger.

Module ID: M06

When a commitment is minted or transferred to us, we receive its fields
(asset or value, owner public key, salt) together with the commitment z
and its position in insertion order. Two independent checks are run:

1. digest check:  h(fields) == z
2. on-chain check: the leaf stored at leaf_index(count) == z

Both results are always reported. A failed leaf lookup is recorded as a
LOOKUP_UNAVAILABLE error on the result and leaves onchain_matches as None,
so "not reachable" is never confused with "recorded incorrectly".
"""
from __future__ import annotations

import logging
from typing import Optional, Sequence

from core.config.runtime import ShieldConfig
from core.crypto.hashing import CommitmentHasher
from core.encoding.base import is_hex, strip_0x
from core.ledger.lookup import LeafLookupLike, as_leaf_lookup
from core.merkle.leaf_index import leaf_index
from core.schemas.commitment import CommitmentCheck
from core.schemas.errors import (
    InvalidEncodingException,
    LookupUnavailableException,
    ShieldError,
)


logger = logging.getLogger(__name__)


def normalize_digest(value: str) -> str:
    """Lowercase a hex digest and give it a 0x marker."""
    if not isinstance(value, str) or not is_hex(value):
        raise InvalidEncodingException(
            f"Commitment digest is not a hex string: {str(value)[:40]!r}",
            value=value,
            base=16,
        )
    return "0x" + strip_0x(value).lower()


def _lookup_leaf(
    lookup: LeafLookupLike,
    index: int,
) -> tuple[Optional[str], Optional[ShieldError]]:
    """Fetch and normalize a leaf, converting every failure into an error value."""
    try:
        raw = as_leaf_lookup(lookup).get_leaf(index)
    except LookupUnavailableException as e:
        logger.warning(f"Leaf lookup unavailable for index {index}: {e.message}")
        return None, e.to_error_model()
    except OSError as e:
        logger.warning(f"Leaf lookup failed for index {index}: {e}")
        return None, LookupUnavailableException(
            f"Leaf lookup failed: {e}",
            leaf_index=index,
        ).to_error_model()

    try:
        return normalize_digest(raw), None
    except InvalidEncodingException as e:
        logger.warning(f"Leaf lookup returned a malformed value for index {index}")
        return None, LookupUnavailableException(
            e.message,
            leaf_index=index,
        ).to_error_model()


def verify_commitment(
    fields: Sequence[str],
    claimed_digest: str,
    sequential_count: int,
    leaf_lookup: LeafLookupLike,
    config: Optional[ShieldConfig] = None,
) -> CommitmentCheck:
    """
    Recompute a commitment and compare it with the claim and the ledger.

    Args:
        fields: Hex fields hashed into the commitment, in hashing order
        claimed_digest: The commitment z we were given
        sequential_count: Insertion position of z in the commitment tree
        leaf_lookup: LeafLookup (or plain ``index -> hex`` callable)
        config: Shield parameters (defaults to the production values)

    Returns:
        CommitmentCheck reporting digest_matches and onchain_matches

    Raises:
        InvalidEncodingException: If a field or the claimed digest is not hex
        TreeFullException: If sequential_count is past the last leaf
    """
    config = config or ShieldConfig()
    hasher = CommitmentHasher(config)

    claimed = normalize_digest(claimed_digest)

    logger.info("Checking h(fields) = z...")
    expected = hasher.hash_items(*fields)
    digest_matches = expected == claimed
    logger.info(f"z: {claimed}")
    logger.info(f"zCheck: {expected}")
    if not digest_matches:
        logger.warning(f"Commitment digest mismatch: expected {expected}, claimed {claimed}")

    logger.info("Checking z exists on-chain...")
    index = leaf_index(sequential_count, config.tree_depth)
    onchain, lookup_error = _lookup_leaf(leaf_lookup, index)

    onchain_matches: Optional[bool] = None
    if onchain is not None:
        onchain_matches = onchain == claimed
        logger.info(f"zOnchain: {onchain}")
        if not onchain_matches:
            logger.warning(f"Leaf {index} holds {onchain}, expected {claimed}")

    return CommitmentCheck(
        digest_matches=digest_matches,
        onchain_matches=onchain_matches,
        claimed_digest=claimed,
        expected_digest=expected,
        onchain_digest=onchain,
        leaf_index=index,
        lookup_error=lookup_error,
    )


# =============================================================================
# Token Commitments
# =============================================================================

def _truncate_asset_id(asset_id: str, digest_length_bytes: int) -> str:
    """Keep the rightmost digest_length_bytes of a token id."""
    body = strip_0x(asset_id)
    return "0x" + body[-(digest_length_bytes * 2):]


def nf_token_commitment(
    asset_id: str,
    public_key: str,
    salt: str,
    config: Optional[ShieldConfig] = None,
) -> str:
    """
    Commitment z = h(A | pk | S) for a non-fungible token.

    The token id A is truncated to its rightmost digest-length bytes before
    hashing, matching what the mint and transfer circuits do.
    """
    config = config or ShieldConfig()
    asset = _truncate_asset_id(asset_id, config.digest_length_bytes)
    return CommitmentHasher(config).hash_items(asset, public_key, salt)


def ft_token_commitment(
    value: str,
    public_key: str,
    salt: str,
    config: Optional[ShieldConfig] = None,
) -> str:
    """Commitment z = h(C | pk | S) for a fungible coin of value C."""
    return CommitmentHasher(config).hash_items(value, public_key, salt)


def check_nf_token_correctness(
    asset_id: str,
    public_key: str,
    salt: str,
    commitment: str,
    sequential_count: int,
    leaf_lookup: LeafLookupLike,
    config: Optional[ShieldConfig] = None,
) -> CommitmentCheck:
    """Check an incoming non-fungible token commitment."""
    config = config or ShieldConfig()
    asset = _truncate_asset_id(asset_id, config.digest_length_bytes)
    return verify_commitment(
        [asset, public_key, salt],
        commitment,
        sequential_count,
        leaf_lookup,
        config,
    )


def check_ft_token_correctness(
    value: str,
    public_key: str,
    salt: str,
    commitment: str,
    sequential_count: int,
    leaf_lookup: LeafLookupLike,
    config: Optional[ShieldConfig] = None,
) -> CommitmentCheck:
    """Check an incoming fungible coin commitment."""
    return verify_commitment(
        [value, public_key, salt],
        commitment,
        sequential_count,
        leaf_lookup,
        config,
    )


class CommitmentVerifier:
    """
    Convenience wrapper binding a config and a leaf lookup.

    Usage:
        verifier = CommitmentVerifier(InMemoryLeafLookup())
        result = verifier.verify([A, pk, S], z, count)
    """

    def __init__(
        self,
        leaf_lookup: LeafLookupLike,
        config: Optional[ShieldConfig] = None,
    ) -> None:
        self.leaf_lookup = as_leaf_lookup(leaf_lookup)
        self.config = config or ShieldConfig()

    def verify(
        self,
        fields: Sequence[str],
        claimed_digest: str,
        sequential_count: int,
    ) -> CommitmentCheck:
        return verify_commitment(
            fields,
            claimed_digest,
            sequential_count,
            self.leaf_lookup,
            self.config,
        )

    def check_nf_token(
        self,
        asset_id: str,
        public_key: str,
        salt: str,
        commitment: str,
        sequential_count: int,
    ) -> CommitmentCheck:
        return check_nf_token_correctness(
            asset_id, public_key, salt, commitment,
            sequential_count, self.leaf_lookup, self.config,
        )

    def check_ft_token(
        self,
        value: str,
        public_key: str,
        salt: str,
        commitment: str,
        sequential_count: int,
    ) -> CommitmentCheck:
        return check_ft_token_correctness(
            value, public_key, salt, commitment,
            sequential_count, self.leaf_lookup, self.config,
        )
