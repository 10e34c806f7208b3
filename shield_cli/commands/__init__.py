"""
CLI command modules.
"""

from shield_cli.commands import encode, hashing, verify

__all__ = ["encode", "hashing", "verify"]
