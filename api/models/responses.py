"""
Module 08 - API Response Models

Pydantic models for API response serialization.
"""

from typing import Any

from pydantic import BaseModel, Field


class HealthResponse(BaseModel):
    """Response for GET /health endpoint."""

    ok: bool = True
    service: str = "shield-api"
    version: str = "v1"


class ConvertResponse(BaseModel):
    ok: bool = True
    value: str = Field(..., description="Converted digit string")


class EncodeResponse(BaseModel):
    ok: bool = True
    elements: list[str] = Field(..., description="Decimal field elements, most significant first")
    packing_size: int


class DecodeResponse(BaseModel):
    ok: bool = True
    decimal: str = Field(..., description="Reassembled magnitude, decimal")
    hex: str = Field(..., description="Reassembled magnitude, 0x hex")


class HashResponse(BaseModel):
    ok: bool = True
    digest: str = Field(..., description="0x-prefixed truncated digest")


class LeafIndexResponse(BaseModel):
    ok: bool = True
    sequential_count: int
    tree_depth: int
    leaf_index: int


class VerifyResponse(BaseModel):
    """Response for POST /verify endpoint."""

    ok: bool = Field(..., description="Both the digest and the on-chain leaf match")
    digest_matches: bool
    onchain_matches: bool | None = Field(
        default=None,
        description="None when the leaf lookup could not be performed",
    )
    claimed_digest: str
    expected_digest: str
    onchain_digest: str | None = None
    leaf_index: int
    checks: list[dict[str, Any]] = Field(default_factory=list)
    errors: list[str] = Field(default_factory=list)


class ErrorDetail(BaseModel):
    """Detailed error information."""

    code: str = Field(..., description="Error code")
    message: str = Field(..., description="Human-readable error message")
    details: dict[str, Any] = Field(default_factory=dict)


class ErrorResponse(BaseModel):
    """Standard error response."""

    ok: bool = False
    error: ErrorDetail = Field(..., description="Error details")
