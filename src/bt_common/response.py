"""API response envelope.

Every endpoint, success or failure, returns:
{
    "code": 0,               // 0 = success, otherwise an AppError code
    "message": "success",
    "error": null,           // symbolic name on failure, e.g. "INSUFFICIENT_FUNDS"
    "data": { ... },         // null on failure
    "timestamp": "...",
    "request_id": "req_..."  // same value as the X-Request-ID header
}
"""

import uuid
from datetime import datetime, timezone
from typing import Any

from pydantic import BaseModel, Field
from starlette.requests import Request


class ApiResponse(BaseModel):
    code: int = 0
    message: str = "success"
    error: str | None = None
    data: Any = None
    timestamp: str = Field(default_factory=lambda: datetime.now(timezone.utc).isoformat())
    request_id: str = Field(default_factory=lambda: f"req_{uuid.uuid4().hex[:12]}")


def _bind_request_id(resp: ApiResponse, request: Request | None) -> ApiResponse:
    # RequestLogMiddleware stores the id on request.state
    if request is not None:
        resp.request_id = getattr(request.state, "request_id", resp.request_id)
    return resp


def success_response(data: Any = None, request: Request | None = None) -> ApiResponse:
    return _bind_request_id(ApiResponse(data=data), request)


def error_response(
    code: int, message: str, error: str | None = None, request: Request | None = None
) -> ApiResponse:
    return _bind_request_id(ApiResponse(code=code, message=message, error=error), request)
