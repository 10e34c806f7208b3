"""
Module 08 - API Request Models

Pydantic models for API request validation.
"""

from typing import Literal

from pydantic import BaseModel, Field


BaseName = Literal["bin", "dec", "hex"]


class ConvertRequest(BaseModel):
    """Request body for POST /convert endpoint."""

    value: str = Field(
        ...,
        min_length=1,
        description="Digit string to convert (hex may carry a 0x marker)",
    )
    from_base: BaseName = Field(..., description="Base of the input")
    to_base: BaseName = Field(..., description="Base of the output")


class EncodeRequest(BaseModel):
    """Request body for POST /encode endpoint."""

    value: str | int = Field(
        ...,
        description="0x-prefixed hex string, decimal string, or non-negative integer",
    )
    packing_size: int | None = Field(
        default=None,
        gt=0,
        description="Bits per element; defaults to the server configuration",
    )
    required_count: int | None = Field(
        default=None,
        ge=1,
        description="Exact number of elements to return",
    )


class DecodeRequest(BaseModel):
    """Request body for POST /decode endpoint."""

    elements: list[str] = Field(
        ...,
        min_length=1,
        description="Decimal field elements, most significant first",
    )
    packing_size: int | None = Field(default=None, gt=0)


class HashRequest(BaseModel):
    """Request body for POST /hash endpoint."""

    items: list[str] = Field(
        ...,
        min_length=1,
        description="Hex items to concatenate and hash, in order",
    )


class VerifyRequest(BaseModel):
    """Request body for POST /verify endpoint."""

    fields: list[str] = Field(
        ...,
        min_length=1,
        description="Hex fields hashed into the commitment, in hashing order",
    )
    commitment: str = Field(..., min_length=1, description="Claimed commitment z")
    sequential_count: int = Field(
        ...,
        ge=0,
        description="Insertion position of the commitment in the tree",
    )
    include_checks: bool = Field(
        default=False,
        description="Include detailed verification checks in response",
    )
