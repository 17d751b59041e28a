"""
Shared plumbing for session-backed stores.
"""

from typing import Any

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from src.kernel.errors import StorageError
from src.logging_config import get_logger

logger = get_logger(__name__)


class SessionStore:
    """
    Base class for stores that talk to the database through one session.

    The session (and therefore the transaction) belongs to the caller;
    stores flush but never commit.
    """

    def __init__(self, session: AsyncSession):
        self.session = session

    async def _execute(self, statement: Any) -> Any:
        try:
            return await self.session.execute(statement)
        except SQLAlchemyError as exc:
            logger.error("Storage statement failed: %s", exc.__class__.__name__)
            raise StorageError(str(exc)) from exc

    async def _flush(self) -> None:
        try:
            await self.session.flush()
        except SQLAlchemyError as exc:
            logger.error("Storage flush failed: %s", exc.__class__.__name__)
            raise StorageError(str(exc)) from exc

    async def _get(self, model: Any, ident: Any) -> Any:
        try:
            return await self.session.get(model, ident)
        except SQLAlchemyError as exc:
            logger.error("Storage lookup failed: %s", exc.__class__.__name__)
            raise StorageError(str(exc)) from exc
