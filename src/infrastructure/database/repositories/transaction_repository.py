"""
Transaction service for managing database transactions centrally.
"""

from typing import Awaitable, Callable, TypeVar

from sqlalchemy.ext.asyncio import AsyncSession

from src.application.interfaces.services import TransactionServiceInterface
from src.config.logging import get_logger

logger = get_logger(__name__)

T = TypeVar("T")


class TransactionService(TransactionServiceInterface):
    """Centralized transaction management service."""

    def __init__(self, session: AsyncSession):
        self.session = session
        self.logger = logger

    async def execute_in_transaction(self, operation: Callable[[], Awaitable[T]]) -> T:
        """
        Execute an operation within a transaction.

        Args:
            operation: Async function to execute

        Returns:
            Result of the operation

        Raises:
            Exception: Any exception that occurs during execution
        """
        try:
            result = await operation()
            await self.session.commit()

            self.logger.debug("Transaction committed successfully")
            return result

        except Exception as e:
            # Rollback on any error, including domain rejections
            await self.session.rollback()
            self.logger.info(
                "Transaction rolled back",
                error_type=type(e).__name__,
                error=str(e),
            )
            raise
