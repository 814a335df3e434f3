"""Per-request trace IDs for OTP Guard.

Every request gets a trace ID, taken from the caller's X-Trace-Id header
when it is short enough to log safely, otherwise freshly generated. The ID
is:
- echoed back in the X-Trace-Id response header
- bound into structlog context vars, so OTP and reset-token log events of
  the request can be correlated
- available through get_trace_id() for problem detail responses
"""

from __future__ import annotations

from contextvars import ContextVar
from typing import Awaitable, Callable
from uuid import uuid4

import structlog
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import Response

from otp_guard.core.constants import TRACE_ID_MAX_LENGTH

TRACE_HEADER = "X-Trace-Id"

trace_id_context: ContextVar[str | None] = ContextVar("trace_id", default=None)


def get_trace_id() -> str | None:
    """Trace ID of the request being handled (None between requests)."""
    return trace_id_context.get()


def _inbound_trace_id(request: Request) -> str | None:
    value = request.headers.get(TRACE_HEADER)
    if not value or len(value) > TRACE_ID_MAX_LENGTH:
        return None
    return value


class TraceMiddleware(BaseHTTPMiddleware):
    """Tags each OTP Guard request with a trace ID."""

    async def dispatch(
        self, request: Request, call_next: Callable[[Request], Awaitable[Response]]
    ) -> Response:
        """Run the request with its trace ID bound, then tag the response.

        Args:
            request (Request): Incoming request.
            call_next (Callable[[Request], Awaitable[Response]]): Next handler.

        Returns:
            Response: Downstream response carrying the trace header.
        """
        trace_id = _inbound_trace_id(request) or str(uuid4())
        token = trace_id_context.set(trace_id)
        request.state.trace_id = trace_id
        structlog.contextvars.bind_contextvars(trace_id=trace_id)
        try:
            response = await call_next(request)
            response.headers[TRACE_HEADER] = trace_id
            return response
        finally:
            structlog.contextvars.unbind_contextvars("trace_id")
            trace_id_context.reset(token)
