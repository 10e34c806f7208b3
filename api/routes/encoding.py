"""
Module 08 - Encoding Routes

Base conversion and field-element packing over HTTP.
"""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends

from api.deps import get_shield_config
from api.errors import InvalidRequestError
from api.models.requests import ConvertRequest, DecodeRequest, EncodeRequest
from api.models.responses import ConvertResponse, DecodeResponse, EncodeResponse
from core.config.runtime import ShieldConfig
from core.encoding.base import convert_named, dec_to_hex
from core.encoding.packing import (
    decode_field_elements_to_magnitude,
    encode_magnitude_as_field_elements,
)


logger = logging.getLogger(__name__)

router = APIRouter(tags=["encoding"])


def _resolve_packing_size(requested: int | None, config: ShieldConfig) -> int:
    if requested is None:
        return config.packing_size
    if requested % 8 != 0:
        raise InvalidRequestError(
            f"packing_size must be a multiple of 8, got {requested}",
            details={"packing_size": requested},
        )
    return requested


@router.post("/convert", response_model=ConvertResponse)
async def convert(request: ConvertRequest) -> ConvertResponse:
    """Convert a digit string between binary, decimal and hex."""
    value = convert_named(request.value, request.from_base, request.to_base)
    return ConvertResponse(value=value)


@router.post("/encode", response_model=EncodeResponse)
async def encode(
    request: EncodeRequest,
    config: ShieldConfig = Depends(get_shield_config),
) -> EncodeResponse:
    """Pack a magnitude into decimal field elements."""
    packing_size = _resolve_packing_size(request.packing_size, config)
    elements = encode_magnitude_as_field_elements(
        request.value,
        packing_size,
        request.required_count,
    )
    logger.debug(f"Encoded value into {len(elements)} elements of {packing_size} bits")
    return EncodeResponse(elements=elements, packing_size=packing_size)


@router.post("/decode", response_model=DecodeResponse)
async def decode(
    request: DecodeRequest,
    config: ShieldConfig = Depends(get_shield_config),
) -> DecodeResponse:
    """Reassemble a magnitude from decimal field elements."""
    packing_size = _resolve_packing_size(request.packing_size, config)
    decimal = decode_field_elements_to_magnitude(request.elements, packing_size)
    return DecodeResponse(decimal=decimal, hex=dec_to_hex(decimal))
