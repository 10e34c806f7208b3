"""API request and response models."""

from api.models.requests import (
    ConvertRequest,
    DecodeRequest,
    EncodeRequest,
    HashRequest,
    VerifyRequest,
)
from api.models.responses import (
    HealthResponse,
    ConvertResponse,
    EncodeResponse,
    DecodeResponse,
    HashResponse,
    LeafIndexResponse,
    VerifyResponse,
    ErrorDetail,
    ErrorResponse,
)

__all__ = [
    "ConvertRequest",
    "DecodeRequest",
    "EncodeRequest",
    "HashRequest",
    "VerifyRequest",
    "HealthResponse",
    "ConvertResponse",
    "EncodeResponse",
    "DecodeResponse",
    "HashResponse",
    "LeafIndexResponse",
    "VerifyResponse",
    "ErrorDetail",
    "ErrorResponse",
]
