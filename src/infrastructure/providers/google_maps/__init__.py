"""
Google Maps location verifier.
"""

from .verifier import GoogleMapsLocationVerifier

__all__ = [
    "GoogleMapsLocationVerifier",
]
