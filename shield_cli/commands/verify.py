"""
Module 07 - CLI Verify Command

Check a received commitment:
- Recompute h(fields) and compare with the claimed commitment
- Look up the leaf at leaf_index(count) and compare it too

The leaf is read from a JSON leaves file (offline) or from the configured
ledger endpoint.

Usage:
    shield verify --fields A PK S --commitment Z --count N [--leaves FILE] [--json] [--debug]
    shield verify --nf --fields A PK S --commitment Z --count N --ledger http://...
"""

from __future__ import annotations

import json
import logging
import sys
from argparse import Namespace
from dataclasses import dataclass, field, asdict
from pathlib import Path
from typing import Any

from core.commitments.correctness import check_nf_token_correctness, verify_commitment
from core.config.runtime import RuntimeConfig
from core.ledger.lookup import HttpLeafLookup, InMemoryLeafLookup, LeafLookup
from core.schemas.commitment import CommitmentCheck


logger = logging.getLogger(__name__)


# Exit codes
EXIT_SUCCESS = 0
EXIT_RUNTIME_ERROR = 1
EXIT_VERIFICATION_FAILED = 2


@dataclass
class VerifySummary:
    """Summary of a commitment check for CLI output."""
    commitment: str = ""
    expected: str = ""
    leaf_index: int = 0
    digest_ok: bool = False
    onchain_ok: bool | None = None
    onchain_value: str | None = None
    checks: list[dict[str, Any]] = field(default_factory=list)
    errors: list[str] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        d = asdict(self)
        if not d["checks"]:
            del d["checks"]
        if not d["errors"]:
            del d["errors"]
        return d

    @property
    def all_ok(self) -> bool:
        return self.digest_ok and self.onchain_ok is True


def load_leaves_file(path: Path) -> dict[int, str]:
    """Read a ``{"<leaf index>": "0x..."}`` JSON map."""
    with open(path) as f:
        data = json.load(f)
    if not isinstance(data, dict):
        raise ValueError(f"Leaves file must contain a JSON object: {path}")
    return {int(k): v for k, v in data.items()}


def build_leaf_lookup(args: Namespace, config: RuntimeConfig) -> LeafLookup | None:
    """Pick the leaf source: --leaves file, --ledger URL, or the configured endpoint."""
    if args.leaves:
        leaves = load_leaves_file(Path(args.leaves))
        logger.info(f"Loaded {len(leaves)} leaves from {args.leaves}")
        return InMemoryLeafLookup(
            leaves,
            tree_depth=config.shield.tree_depth,
            digest_length_bytes=config.shield.digest_length_bytes,
        )

    endpoint = args.ledger or config.ledger.endpoint
    if endpoint:
        return HttpLeafLookup(endpoint, timeout=config.ledger.timeout)

    return None


def build_summary(check: CommitmentCheck, debug: bool = False) -> VerifySummary:
    """Build a VerifySummary from a CommitmentCheck."""
    summary = VerifySummary(
        commitment=check.claimed_digest,
        expected=check.expected_digest,
        leaf_index=check.leaf_index,
        digest_ok=check.digest_matches,
        onchain_ok=check.onchain_matches,
        onchain_value=check.onchain_digest,
    )

    result = check.to_verification_result()
    for c in result.checks:
        if not c.ok:
            summary.errors.append(c.message)
    if check.lookup_error is not None:
        summary.errors.append(f"{check.lookup_error.code}: {check.lookup_error.message}")

    if debug:
        summary.checks = [
            {"check_id": c.check_id, "ok": c.ok, "severity": c.severity, "message": c.message}
            for c in result.checks
        ]

    return summary


def print_summary_human(summary: VerifySummary) -> None:
    """Print summary in human-readable format."""
    print(f"commitment: {summary.commitment}")
    print(f"expected: {summary.expected}")
    print(f"leaf_index: {summary.leaf_index}")
    print(f"digest_ok: {str(summary.digest_ok).lower()}")
    if summary.onchain_ok is None:
        print("onchain_ok: unknown")
    else:
        print(f"onchain_ok: {str(summary.onchain_ok).lower()}")

    if summary.errors:
        print(f"\nerrors ({len(summary.errors)}):")
        for err in summary.errors:
            print(f"  ✗ {err}")

    if summary.checks:
        print(f"\nchecks ({len(summary.checks)}):")
        for check in summary.checks:
            mark = "✓" if check["ok"] else "✗"
            print(f"  {mark} {check['check_id']}: {check['message']}")


def verify_cmd(args: Namespace) -> int:
    """
    Execute the verify command.

    Returns:
        0 if both checks pass, 2 if either comparison fails, 1 if the
        on-chain check could not be performed
    """
    config: RuntimeConfig = args.runtime_config

    lookup = build_leaf_lookup(args, config)
    if lookup is None:
        print(
            "Error: no leaf source (pass --leaves FILE, --ledger URL or set SHIELD_LEDGER_ENDPOINT)",
            file=sys.stderr,
        )
        return EXIT_RUNTIME_ERROR

    try:
        if args.nf:
            if len(args.fields) != 3:
                print("Error: --nf expects exactly three fields: A PK S", file=sys.stderr)
                return EXIT_RUNTIME_ERROR
            asset_id, public_key, salt = args.fields
            check = check_nf_token_correctness(
                asset_id, public_key, salt,
                args.commitment, args.count, lookup, config.shield,
            )
        else:
            check = verify_commitment(
                args.fields, args.commitment, args.count, lookup, config.shield,
            )
    finally:
        if isinstance(lookup, HttpLeafLookup):
            lookup.close()

    summary = build_summary(check, debug=args.debug)
    if args.json:
        print(json.dumps(summary.to_dict(), indent=2))
    else:
        print_summary_human(summary)

    if summary.all_ok:
        return EXIT_SUCCESS
    if not summary.digest_ok or summary.onchain_ok is False:
        return EXIT_VERIFICATION_FAILED
    return EXIT_RUNTIME_ERROR
