"""
HTTP Client Module

requests-based transport for talking to a vault service.
"""

from .client import HttpClient, HttpResponse, HttpError

__all__ = [
    "HttpClient",
    "HttpResponse",
    "HttpError",
]
