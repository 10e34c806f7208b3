"""
HTTP Client Module

HTTP client for reaching external collaborators.
"""

from .client import HttpClient, HttpError, HttpResponse

__all__ = [
    "HttpClient",
    "HttpError",
    "HttpResponse",
]
