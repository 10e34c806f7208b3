"""API route handlers."""

from api.routes import health, encoding, hashing, verify

__all__ = ["health", "encoding", "hashing", "verify"]
