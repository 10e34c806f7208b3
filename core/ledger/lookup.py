"""
Module 05 - Leaf Lookup Collaborators
Read access to commitment-tree leaves stored on the ledger.

Module ID: M05

The ledger (and the tree it maintains) is external. This module defines the
lookup contract and two implementations:
- InMemoryLeafLookup: dict-backed leaves for tests and offline use
- HttpLeafLookup: GET {endpoint}/leaves/{index} -> {"value": "0x..."}

Any failure to obtain a leaf surfaces as LookupUnavailableException, never
as a wrong value, so callers can tell "unreachable" from "mismatch".
"""
from __future__ import annotations

import logging
from typing import Callable, Optional, Protocol, Union, runtime_checkable

from core.config.runtime import DEFAULT_DIGEST_LENGTH_BYTES, DEFAULT_TREE_DEPTH, LedgerConfig
from core.encoding.base import ensure_0x, is_hex
from core.http.client import HttpClient, HttpError
from core.merkle.leaf_index import leaf_index
from core.schemas.errors import LookupUnavailableException


logger = logging.getLogger(__name__)


@runtime_checkable
class LeafLookup(Protocol):
    """Anything that can return the hex value stored at a leaf index."""

    def get_leaf(self, index: int) -> str:
        ...


LeafLookupLike = Union[LeafLookup, Callable[[int], str]]


def as_leaf_lookup(lookup: LeafLookupLike) -> LeafLookup:
    """Wrap a plain ``index -> hex`` callable so it satisfies LeafLookup."""
    if isinstance(lookup, LeafLookup):
        return lookup
    if callable(lookup):
        return CallableLeafLookup(lookup)
    raise TypeError(f"Expected a LeafLookup or callable, got {type(lookup).__name__}")


class CallableLeafLookup:
    """Adapter for a bare function."""

    def __init__(self, func: Callable[[int], str]) -> None:
        self._func = func

    def get_leaf(self, index: int) -> str:
        return self._func(index)


class InMemoryLeafLookup:
    """
    Dict-backed leaf store.

    Unset leaves read as the all-zero digest, matching an empty ledger slot.

    Usage:
        ledger = InMemoryLeafLookup(tree_depth=33)
        idx = ledger.append("0x...")    # stored at leaf_index(0, 33)
        ledger.get_leaf(idx)
    """

    def __init__(
        self,
        leaves: Optional[dict[int, str]] = None,
        *,
        tree_depth: int = DEFAULT_TREE_DEPTH,
        digest_length_bytes: int = DEFAULT_DIGEST_LENGTH_BYTES,
    ) -> None:
        self.tree_depth = tree_depth
        self.empty_value = "0x" + "00" * digest_length_bytes
        self._leaves: dict[int, str] = dict(leaves or {})
        self._count = 0

    def __len__(self) -> int:
        return self._count

    def set_leaf(self, index: int, value: str) -> None:
        self._leaves[index] = value

    def append(self, commitment: str) -> int:
        """Store a commitment at the next free leaf and return its index."""
        index = leaf_index(self._count, self.tree_depth)
        self._leaves[index] = commitment
        self._count += 1
        return index

    def get_leaf(self, index: int) -> str:
        return self._leaves.get(index, self.empty_value)


class HttpLeafLookup:
    """
    Leaf lookup against an HTTP ledger gateway.

    The gateway is expected to answer ``GET {endpoint}/leaves/{index}`` with
    a JSON body ``{"value": "0x<hex>"}``.
    """

    def __init__(
        self,
        endpoint: str,
        *,
        client: Optional[HttpClient] = None,
        timeout: float = 30.0,
    ) -> None:
        if not endpoint:
            raise ValueError("HttpLeafLookup requires a ledger endpoint")
        self.endpoint = endpoint.rstrip("/")
        self.client = client or HttpClient(timeout=timeout)

    @classmethod
    def from_config(cls, config: LedgerConfig) -> "HttpLeafLookup":
        if not config.endpoint:
            raise ValueError("Ledger endpoint is not configured (set SHIELD_LEDGER_ENDPOINT)")
        return cls(config.endpoint, timeout=config.timeout)

    def get_leaf(self, index: int) -> str:
        """
        Fetch the value stored at a leaf index.

        Raises:
            LookupUnavailableException: On network errors, timeouts,
                non-2xx responses or malformed payloads
        """
        url = f"{self.endpoint}/leaves/{index}"
        try:
            response = self.client.get(url)
        except HttpError as e:
            reason = "timed out" if e.timed_out else "failed"
            raise LookupUnavailableException(
                f"Leaf lookup {reason}: {e}",
                leaf_index=index,
                details={"url": url},
            ) from e

        if not response.ok:
            logger.warning(f"Leaf lookup for index {index} returned HTTP {response.status_code}")
            raise LookupUnavailableException(
                f"Leaf lookup returned HTTP {response.status_code}",
                leaf_index=index,
                details={"url": url, "status_code": response.status_code},
            )
        logger.debug(f"Leaf {index} fetched in {response.elapsed_ms:.0f}ms")

        try:
            value = response.json()["value"]
        except (ValueError, KeyError, TypeError) as e:
            raise LookupUnavailableException(
                "Leaf lookup returned a malformed payload",
                leaf_index=index,
                details={"url": url},
            ) from e

        if not isinstance(value, str) or not is_hex(value):
            raise LookupUnavailableException(
                f"Leaf lookup returned a non-hex value: {str(value)[:40]!r}",
                leaf_index=index,
                details={"url": url},
            )
        return ensure_0x(value)

    def close(self) -> None:
        self.client.close()
