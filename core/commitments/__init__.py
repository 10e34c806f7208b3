"""
Module 06 - Commitment Correctness Protocol

Usage:
    from core.commitments import verify_commitment
    from core.ledger import InMemoryLeafLookup

    ledger = InMemoryLeafLookup()
    result = verify_commitment([A, pk, S], z, count, ledger)
    if not result.digest_matches:
        ...
"""
from .correctness import (
    CommitmentVerifier,
    check_ft_token_correctness,
    check_nf_token_correctness,
    ft_token_commitment,
    nf_token_commitment,
    normalize_digest,
    verify_commitment,
)

__all__ = [
    "CommitmentVerifier",
    "check_ft_token_correctness",
    "check_nf_token_correctness",
    "ft_token_commitment",
    "nf_token_commitment",
    "normalize_digest",
    "verify_commitment",
]
