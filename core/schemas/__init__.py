"""
Module 01 - Schemas
File: __init__.py

Purpose: Export the public API for the schemas module.
This is the main entry point for other modules to import schema definitions.
"""

# Error models and exceptions
from .errors import (
    CapacityExceededException,
    ConfigurationException,
    EncodingError,
    ErrorCodes,
    InvalidEncodingException,
    LeafLookupError,
    LookupUnavailableException,
    ShieldError,
    ShieldException,
    TreeFullException,
)

# Commitment schemas
from .commitment import (
    CheckResult,
    CheckSeverity,
    CommitmentCheck,
    CommitmentCheckId,
    FieldElementSequence,
    VerificationResult,
)

__all__ = [
    # Errors
    "CapacityExceededException",
    "ConfigurationException",
    "EncodingError",
    "ErrorCodes",
    "InvalidEncodingException",
    "LeafLookupError",
    "LookupUnavailableException",
    "ShieldError",
    "ShieldException",
    "TreeFullException",
    # Commitments
    "CheckResult",
    "CheckSeverity",
    "CommitmentCheck",
    "CommitmentCheckId",
    "FieldElementSequence",
    "VerificationResult",
]
