"""Access log plus request-id propagation.

A well-formed ``X-Request-ID`` sent by the caller (or a proxy in front of us)
is kept; otherwise a fresh ``req_<12 hex>`` id is minted. The id lands on
``request.state.request_id`` for the response envelope and is echoed back in
the ``X-Request-ID`` header.

    INFO [POST] /api/trade-orders 200 23ms req_a1b2c3d4e5f6
"""

import logging
import re
import time
import uuid

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

logger = logging.getLogger("bt.request")

REQUEST_ID_HEADER = "X-Request-ID"
_INCOMING_ID_RE = re.compile(r"^[A-Za-z0-9._:-]{8,64}$")


def resolve_request_id(incoming: str | None) -> str:
    if incoming and _INCOMING_ID_RE.match(incoming):
        return incoming
    return f"req_{uuid.uuid4().hex[:12]}"


class RequestLogMiddleware(BaseHTTPMiddleware):
    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        request_id = resolve_request_id(request.headers.get(REQUEST_ID_HEADER))
        request.state.request_id = request_id

        started = time.perf_counter()
        response = await call_next(request)
        took_ms = (time.perf_counter() - started) * 1000

        response.headers[REQUEST_ID_HEADER] = request_id
        level = logging.WARNING if response.status_code >= 500 else logging.INFO
        logger.log(
            level,
            "[%s] %s %d %.0fms %s",
            request.method,
            request.url.path,
            response.status_code,
            took_ms,
            request_id,
        )
        return response
