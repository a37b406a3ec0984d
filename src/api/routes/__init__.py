"""
API routes package.
"""

from .approvals import router as approvals_router
from .health import router as health_router
from .payments import router as payments_router
from .proposals import router as proposals_router
from .quotes import router as quotes_router

__all__ = [
    "approvals_router",
    "health_router",
    "payments_router",
    "proposals_router",
    "quotes_router",
]
