"""
Module 08 - Hashing Routes

Commitment hashing and leaf-index resolution over HTTP.
"""

from fastapi import APIRouter, Depends

from api.deps import get_shield_config
from api.errors import InvalidRequestError
from api.models.requests import HashRequest
from api.models.responses import HashResponse, LeafIndexResponse
from core.config.runtime import ShieldConfig
from core.crypto.hashing import CommitmentHasher
from core.merkle.leaf_index import leaf_index


router = APIRouter(tags=["hashing"])


@router.post("/hash", response_model=HashResponse)
async def hash_items(
    request: HashRequest,
    config: ShieldConfig = Depends(get_shield_config),
) -> HashResponse:
    """Chained commitment hash of the concatenated hex items."""
    digest = CommitmentHasher(config).hash_items(*request.items)
    return HashResponse(digest=digest)


@router.get("/leaf-index/{count}", response_model=LeafIndexResponse)
async def resolve_leaf_index(
    count: int,
    config: ShieldConfig = Depends(get_shield_config),
) -> LeafIndexResponse:
    """Node index of the count-th inserted commitment."""
    if count < 0:
        raise InvalidRequestError(
            f"count must be non-negative, got {count}",
            details={"count": count},
        )
    return LeafIndexResponse(
        sequential_count=count,
        tree_depth=config.tree_depth,
        leaf_index=leaf_index(count, config.tree_depth),
    )
