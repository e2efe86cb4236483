"""
Request context middleware for structured logging.
"""

from __future__ import annotations

import time
from typing import Callable
from uuid import uuid4

from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware

from deckforge.infra.config.logging_config import bind_context, clear_context, get_logger

REQUEST_ID_HEADER = "X-Request-ID"
QUIET_PATHS = frozenset({"/health"})


class RequestContextMiddleware(BaseHTTPMiddleware):
    """Correlates every log line of a request and reports its duration.

    Use cases bind provider and slide ids on top of the request context, so one
    request id ties a render batch's log lines together.
    """

    async def dispatch(self, request: Request, call_next: Callable[[Request], Response]) -> Response:  # type: ignore[override]
        if request.url.path in QUIET_PATHS:
            return await call_next(request)

        request_id = request.headers.get(REQUEST_ID_HEADER) or uuid4().hex
        bind_context(request_id=request_id, path=request.url.path, method=request.method)
        logger = get_logger("http")
        started = time.perf_counter()

        try:
            response = await call_next(request)
        except Exception as exc:  # pragma: no cover
            logger.exception("request.error", error=str(exc))
            raise
        else:
            response.headers[REQUEST_ID_HEADER] = request_id
            logger.info(
                "request.end",
                status_code=response.status_code,
                duration_ms=round((time.perf_counter() - started) * 1000, 1),
            )
            return response
        finally:
            clear_context()
