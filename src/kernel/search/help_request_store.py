"""
Help requests sent by users who could not find what they needed.
"""

from typing import List, Optional

from sqlalchemy import select

from src.kernel.errors import InvalidOperationError
from src.kernel.models.help_request import HelpRequest
from src.kernel.storage import SessionStore
from src.logging_config import get_logger

logger = get_logger(__name__)


class HelpRequestStore(SessionStore):
    """Append and list help requests."""

    async def add_request(self, username: str, message: str) -> HelpRequest:
        message = (message or "").strip()
        if not message:
            raise InvalidOperationError("Help request message must not be empty")

        request = HelpRequest(username=username, message=message)
        self.session.add(request)
        await self._flush()
        logger.info("Help request recorded", extra={"help_request_id": request.id})
        return request

    async def list_requests(self, username: Optional[str] = None) -> List[HelpRequest]:
        """All requests, or one user's, oldest first."""
        statement = select(HelpRequest).order_by(HelpRequest.id)
        if username is not None:
            statement = statement.where(HelpRequest.username == username)
        result = await self._execute(statement)
        return list(result.scalars().all())
