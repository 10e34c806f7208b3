"""
Module 01 - Schemas
File: commitment.py

Purpose: Value types exchanged with the external proving system and
returned by the commitment correctness protocol, plus the report form
of a commitment check used by the CLI and the API.
"""

from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator

from .errors import ErrorCodes, ShieldError


# The two checks every commitment report carries
CommitmentCheckId = Literal["commitment_digest", "commitment_onchain"]

# "warn" marks a check that could not be performed
CheckSeverity = Literal["info", "warn", "error"]


class FieldElementSequence(BaseModel):
    """
    An ordered sequence of field elements representing one magnitude.

    Elements are decimal strings, most-significant chunk first. Each
    element carries exactly ``packing_size`` bits of the magnitude.
    """

    model_config = ConfigDict(extra="forbid", frozen=True)

    elements: list[str] = Field(
        ...,
        min_length=1,
        description="Decimal field elements, most significant first",
    )
    packing_size: int = Field(
        ...,
        gt=0,
        description="Bits carried by each element",
    )

    @field_validator("elements")
    @classmethod
    def _elements_are_decimal(cls, v: list[str]) -> list[str]:
        for element in v:
            if not element.isascii() or not element.isdigit():
                raise ValueError(f"field element must be a decimal string, got {element!r}")
        return v

    @field_validator("packing_size")
    @classmethod
    def _packing_is_whole_bytes(cls, v: int) -> int:
        if v % 8 != 0:
            raise ValueError(f"packing_size must be a multiple of 8, got {v}")
        return v

    def __len__(self) -> int:
        return len(self.elements)


class CheckResult(BaseModel):
    """Outcome of the digest check or the on-chain check of a commitment."""

    model_config = ConfigDict(extra="forbid")

    check_id: CommitmentCheckId
    ok: bool = Field(
        ...,
        description="Whether the check passed; an unperformed check is not a failure",
    )
    severity: CheckSeverity
    message: str
    details: dict[str, Any] = Field(default_factory=dict)


class VerificationResult(BaseModel):
    """Report form of a CommitmentCheck."""

    model_config = ConfigDict(extra="forbid")

    ok: bool
    checks: list[CheckResult] = Field(default_factory=list)
    error: ShieldError | None = Field(
        default=None,
        description="Why the on-chain check could not be performed",
    )


class CommitmentCheck(BaseModel):
    """
    Outcome of checking a commitment against its fields and the ledger.

    Both checks are always reported. ``onchain_matches`` is None when the
    leaf lookup could not be performed; ``lookup_error`` then explains why.
    """

    model_config = ConfigDict(extra="forbid")

    digest_matches: bool = Field(
        ...,
        description="Whether the recomputed digest equals the claimed digest",
    )
    onchain_matches: bool | None = Field(
        ...,
        description="Whether the ledger leaf equals the claimed digest",
    )
    claimed_digest: str
    expected_digest: str
    onchain_digest: str | None = None
    leaf_index: int
    lookup_error: ShieldError | None = None

    @property
    def ok(self) -> bool:
        """Both the digest and the on-chain leaf match."""
        return self.digest_matches and self.onchain_matches is True

    def _digest_check(self) -> CheckResult:
        if self.digest_matches:
            return CheckResult(
                check_id="commitment_digest",
                ok=True,
                severity="info",
                message="Recomputed digest matches the claimed commitment",
                details={"digest": self.expected_digest},
            )
        return CheckResult(
            check_id="commitment_digest",
            ok=False,
            severity="error",
            message="Recomputed digest does not match the claimed commitment",
            details={
                "code": ErrorCodes.DIGEST_MISMATCH,
                "expected": self.expected_digest,
                "claimed": self.claimed_digest,
            },
        )

    def _onchain_check(self) -> CheckResult:
        if self.onchain_matches is None:
            return CheckResult(
                check_id="commitment_onchain",
                ok=True,
                severity="warn",
                message="Leaf lookup unavailable; on-chain presence not checked",
                details={"leaf_index": self.leaf_index},
            )
        if self.onchain_matches:
            return CheckResult(
                check_id="commitment_onchain",
                ok=True,
                severity="info",
                message="Commitment found at the expected leaf",
                details={"leaf_index": self.leaf_index},
            )
        return CheckResult(
            check_id="commitment_onchain",
            ok=False,
            severity="error",
            message="Leaf at the expected index does not hold the commitment",
            details={
                "code": ErrorCodes.ONCHAIN_MISMATCH,
                "leaf_index": self.leaf_index,
                "onchain": self.onchain_digest,
                "claimed": self.claimed_digest,
            },
        )

    def to_verification_result(self) -> VerificationResult:
        """Express this check as a digest check and an on-chain check."""
        return VerificationResult(
            ok=self.ok,
            checks=[self._digest_check(), self._onchain_check()],
            error=self.lookup_error,
        )
