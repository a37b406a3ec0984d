"""
Background tasks package.
"""

from .expire_proposals import expire_due_proposals_task, run_expiry_sweep

__all__ = [
    "expire_due_proposals_task",
    "run_expiry_sweep",
]
