"""
External integrations package.
"""

from .http_client import HTTPClient

__all__ = [
    "HTTPClient",
]
