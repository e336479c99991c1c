"""Access log for the accounts API.

One line per request, written even when the handler raises (the status is
then reported as 500, which is what CustomerContextMiddleware renders).
The short request id is stored on request.state so routes can echo it in
the response envelope.

    INFO ms.request [cust1] GET /api/v1/accounts/cust1 200 4ms req_a1b2c3d4e5f6
"""

import logging
import time

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

from src.ms_common.response import new_request_id

logger = logging.getLogger("ms.request")


class RequestLogMiddleware(BaseHTTPMiddleware):
    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        request.state.request_id = new_request_id()
        status_code = 500
        start = time.perf_counter()
        try:
            response = await call_next(request)
            status_code = response.status_code
            return response
        finally:
            logger.info(
                "%s %s %d %.0fms %s",
                request.method,
                request.url.path,
                status_code,
                (time.perf_counter() - start) * 1000,
                request.state.request_id,
            )
