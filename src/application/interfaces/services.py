"""
Service interfaces for dependency inversion.
"""

from abc import ABC, abstractmethod
from typing import Any, Awaitable, Callable, Dict, TypeVar

T = TypeVar("T")


class TokenSignerInterface(ABC):
    """Signs and verifies compact token payloads.

    Implementations raise ``TokenExpiredError`` for a correctly signed but
    expired token and ``TokenInvalidError`` for anything else they reject.
    """

    @abstractmethod
    def sign(self, claims: Dict[str, Any]) -> str:
        """Sign claims into a token string."""
        pass

    @abstractmethod
    def verify(self, token: str) -> Dict[str, Any]:
        """Verify a token and return its claims."""
        pass


class TransactionServiceInterface(ABC):
    """Unit-of-work boundary."""

    @abstractmethod
    async def execute_in_transaction(self, operation: Callable[[], Awaitable[T]]) -> T:
        """Run ``operation`` and commit, or roll back and re-raise."""
        pass
