"""
Domain entities package.
"""

from .proposal import Proposal

__all__ = [
    "Proposal",
]
