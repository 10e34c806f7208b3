"""
Module 08 - Verify Route

Check a received commitment against its fields and the ledger.
"""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends

from api.deps import get_leaf_lookup, get_shield_config
from api.models.requests import VerifyRequest
from api.models.responses import VerifyResponse
from core.commitments.correctness import verify_commitment
from core.config.runtime import ShieldConfig
from core.ledger.lookup import LeafLookup


logger = logging.getLogger(__name__)

router = APIRouter(tags=["verification"])


@router.post("/verify", response_model=VerifyResponse)
async def verify(
    request: VerifyRequest,
    config: ShieldConfig = Depends(get_shield_config),
    lookup: LeafLookup = Depends(get_leaf_lookup),
) -> VerifyResponse:
    """
    Verify a commitment.

    Performs:
    1. Digest check: h(fields) == commitment
    2. On-chain check: leaf at leaf_index(sequential_count) == commitment

    An unreachable ledger yields onchain_matches = null and an error entry,
    not an HTTP error.
    """
    logger.info(f"Verifying commitment at sequential count {request.sequential_count}")
    check = verify_commitment(
        request.fields,
        request.commitment,
        request.sequential_count,
        lookup,
        config,
    )
    result = check.to_verification_result()

    checks = []
    if request.include_checks:
        checks = [c.model_dump() for c in result.checks]

    errors = []
    if check.lookup_error is not None:
        errors.append(f"{check.lookup_error.code}: {check.lookup_error.message}")

    return VerifyResponse(
        ok=check.ok,
        digest_matches=check.digest_matches,
        onchain_matches=check.onchain_matches,
        claimed_digest=check.claimed_digest,
        expected_digest=check.expected_digest,
        onchain_digest=check.onchain_digest,
        leaf_index=check.leaf_index,
        checks=checks,
        errors=errors,
    )
