"""
Module 01 - Schemas
File: errors.py

Purpose: Standard error taxonomy for the encoding and commitment library.
Defines both Pydantic models for structured error communication
and Python exceptions for control flow.
"""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field


# =============================================================================
# Error Codes (Machine-Readable Constants)
# =============================================================================

class ErrorCodes:
    """Stable machine-readable error codes used across the library."""

    # Encoding Errors
    INVALID_ENCODING = "INVALID_ENCODING"
    CAPACITY_EXCEEDED = "CAPACITY_EXCEEDED"

    # Tree Errors
    TREE_FULL = "TREE_FULL"

    # External Collaborator Errors
    LOOKUP_UNAVAILABLE = "LOOKUP_UNAVAILABLE"

    # Configuration Errors
    INVALID_CONFIGURATION = "INVALID_CONFIGURATION"

    # Commitment Check Outcomes
    DIGEST_MISMATCH = "DIGEST_MISMATCH"
    ONCHAIN_MISMATCH = "ONCHAIN_MISMATCH"


# =============================================================================
# Pydantic Error Models (Structured Communication)
# =============================================================================

class ShieldError(BaseModel):
    """
    Base error model for structured error communication.

    Used for passing errors between modules without exceptions, e.g. when
    a commitment check must report a failed leaf lookup alongside a
    successful digest comparison.
    """

    model_config = ConfigDict(
        extra="forbid",
        frozen=False,
        validate_assignment=True,
    )

    code: str = Field(
        ...,
        description="Stable machine-readable error code",
        examples=[ErrorCodes.INVALID_ENCODING],
    )
    message: str = Field(
        ...,
        description="Human-readable error message",
    )
    details: dict[str, Any] = Field(
        default_factory=dict,
        description="Additional structured details about the error",
    )
    retryable: bool = Field(
        default=False,
        description="Whether the operation can be retried",
    )

    def to_exception(self) -> "ShieldException":
        """Convert this error model to a raised exception."""
        exc_type = _EXCEPTIONS_BY_CODE.get(self.code)
        if exc_type is None:
            return ShieldException(
                message=self.message,
                code=self.code,
                details=dict(self.details),
                retryable=self.retryable,
            )
        return exc_type(message=self.message, details=dict(self.details))


class EncodingError(ShieldError):
    """Error model for malformed digit strings."""

    code: str = Field(default=ErrorCodes.INVALID_ENCODING)
    value: str | None = Field(
        default=None,
        description="The offending input (possibly truncated)",
    )
    base: int | None = Field(
        default=None,
        description="The numeric base the input was declared in",
    )


class LeafLookupError(ShieldError):
    """Error model for an unavailable leaf lookup."""

    code: str = Field(default=ErrorCodes.LOOKUP_UNAVAILABLE)
    retryable: bool = Field(default=True)
    leaf_index: int | None = Field(default=None)


# =============================================================================
# Python Exceptions (Control Flow)
# =============================================================================

class ShieldException(Exception):
    """
    Base exception for all library errors.

    This exception carries structured error information and can be
    converted to/from ShieldError models.
    """

    def __init__(
        self,
        message: str,
        code: str = "SHIELD_ERROR",
        details: dict[str, Any] | None = None,
        retryable: bool = False,
    ) -> None:
        super().__init__(message)
        self.code = code
        self.message = message
        self.details = details or {}
        self.retryable = retryable

    def to_error_model(self) -> ShieldError:
        """Convert this exception to a ShieldError model."""
        return ShieldError(
            code=self.code,
            message=self.message,
            details=self.details,
            retryable=self.retryable,
        )

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(code={self.code!r}, message={self.message!r})"


def _preview(value: Any, limit: int = 80) -> str:
    text = str(value)
    if len(text) > limit:
        return text[:limit] + "..."
    return text


class InvalidEncodingException(ShieldException):
    """Exception raised when a digit string is invalid for its declared base."""

    def __init__(
        self,
        message: str,
        value: Any = None,
        base: int | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        full_details = details or {}
        if value is not None:
            full_details["value"] = _preview(value)
        if base is not None:
            full_details["base"] = base
        super().__init__(
            message=message,
            code=ErrorCodes.INVALID_ENCODING,
            details=full_details,
            retryable=False,
        )


class CapacityExceededException(ShieldException):
    """Exception raised when a magnitude does not fit the available bits."""

    def __init__(
        self,
        message: str,
        bit_length: int | None = None,
        capacity_bits: int | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        full_details = details or {}
        if bit_length is not None:
            full_details["bit_length"] = bit_length
        if capacity_bits is not None:
            full_details["capacity_bits"] = capacity_bits
        super().__init__(
            message=message,
            code=ErrorCodes.CAPACITY_EXCEEDED,
            details=full_details,
            retryable=False,
        )


class TreeFullException(ShieldException):
    """Exception raised when a commitment count maps past the last leaf."""

    def __init__(
        self,
        message: str,
        sequential_count: int | None = None,
        tree_depth: int | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        full_details = details or {}
        if sequential_count is not None:
            full_details["sequential_count"] = sequential_count
        if tree_depth is not None:
            full_details["tree_depth"] = tree_depth
        super().__init__(
            message=message,
            code=ErrorCodes.TREE_FULL,
            details=full_details,
            retryable=False,
        )


class LookupUnavailableException(ShieldException):
    """Exception raised when the external leaf lookup fails or times out."""

    def __init__(
        self,
        message: str,
        leaf_index: int | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        full_details = details or {}
        if leaf_index is not None:
            full_details["leaf_index"] = leaf_index
        super().__init__(
            message=message,
            code=ErrorCodes.LOOKUP_UNAVAILABLE,
            details=full_details,
            retryable=True,
        )

    def to_error_model(self) -> LeafLookupError:
        return LeafLookupError(
            message=self.message,
            details=self.details,
            leaf_index=self.details.get("leaf_index"),
        )


class ConfigurationException(ShieldException):
    """Exception raised when configuration values are inconsistent."""

    def __init__(
        self,
        message: str,
        field_name: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        full_details = details or {}
        if field_name:
            full_details["field"] = field_name
        super().__init__(
            message=message,
            code=ErrorCodes.INVALID_CONFIGURATION,
            details=full_details,
            retryable=False,
        )


_EXCEPTIONS_BY_CODE: dict[str, type[ShieldException]] = {
    ErrorCodes.INVALID_ENCODING: InvalidEncodingException,
    ErrorCodes.CAPACITY_EXCEEDED: CapacityExceededException,
    ErrorCodes.TREE_FULL: TreeFullException,
    ErrorCodes.LOOKUP_UNAVAILABLE: LookupUnavailableException,
    ErrorCodes.INVALID_CONFIGURATION: ConfigurationException,
}
