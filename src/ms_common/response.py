"""Response envelope shared by every accounts endpoint and error handler.

    {"code": 0, "message": "success", "data": {...},
     "timestamp": "<ISO-8601 UTC>", "request_id": "req_<12 hex>"}

code 0 means success; any other value is an AppError code and data is null.
"""

import uuid
from datetime import datetime, timezone
from typing import Any

from pydantic import BaseModel, Field


def new_request_id() -> str:
    return f"req_{uuid.uuid4().hex[:12]}"


def _utc_timestamp() -> str:
    return datetime.now(timezone.utc).isoformat()


class ApiResponse(BaseModel):
    code: int = 0
    message: str = "success"
    data: Any = None
    timestamp: str = Field(default_factory=_utc_timestamp)
    request_id: str = Field(default_factory=new_request_id)


def success_response(data: Any = None) -> ApiResponse:
    return ApiResponse(data=data)


def error_response(code: int, message: str) -> ApiResponse:
    return ApiResponse(code=code, message=message)
