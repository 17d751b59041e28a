"""
Request correlation middleware.

Every request gets an X-Request-ID (taken from the client when supplied) that
is echoed on the response and bound into the logging context. The username
context is cleared per request so a reused task never logs a stale caller.
"""

import time
import uuid
from typing import Callable

from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware

from src.logging_config import get_logger, request_id_var, username_var

logger = get_logger(__name__)

REQUEST_ID_HEADER = "X-Request-ID"
SLOW_REQUEST_MS = 1000


class RequestIdMiddleware(BaseHTTPMiddleware):
    """Bind a request ID to the request, its logs and its response."""

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        request_id = request.headers.get(REQUEST_ID_HEADER) or str(uuid.uuid4())
        request.state.request_id = request_id

        rid_token = request_id_var.set(request_id)
        user_token = username_var.set(None)
        start = time.perf_counter()
        try:
            response = await call_next(request)
            response.headers[REQUEST_ID_HEADER] = request_id

            duration_ms = round((time.perf_counter() - start) * 1000, 1)
            log = logger.warning if duration_ms > SLOW_REQUEST_MS else logger.debug
            log(
                "%s %s -> %s",
                request.method,
                request.url.path,
                response.status_code,
                extra={"duration_ms": duration_ms},
            )
            return response
        finally:
            username_var.reset(user_token)
            request_id_var.reset(rid_token)
