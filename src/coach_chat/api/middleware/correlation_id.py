"""Per-request id for HTTP calls.

The id is taken from the caller's ``X-Request-ID`` header or minted here. It
is echoed on the response and exposed through ``correlation_id_ctx`` so the
request-timing log line can be matched with the frontend's request. WebSocket
traffic does not pass through this middleware.
"""
from __future__ import annotations

import uuid
from contextvars import ContextVar

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

REQUEST_ID_HEADER = "X-Request-ID"
MAX_REQUEST_ID_LENGTH = 128

correlation_id_ctx: ContextVar[str] = ContextVar("correlation_id", default="")


def resolve_request_id(incoming: str | None) -> str:
    """Reuse a caller-supplied id when it is printable and short, else mint one."""
    if incoming and len(incoming) <= MAX_REQUEST_ID_LENGTH and incoming.isprintable():
        return incoming
    return uuid.uuid4().hex


class CorrelationIdMiddleware(BaseHTTPMiddleware):
    async def dispatch(
        self,
        request: Request,
        call_next: RequestResponseEndpoint,
    ) -> Response:
        request_id = resolve_request_id(request.headers.get(REQUEST_ID_HEADER))
        token = correlation_id_ctx.set(request_id)
        try:
            response = await call_next(request)
        finally:
            correlation_id_ctx.reset(token)
        response.headers[REQUEST_ID_HEADER] = request_id
        return response
