"""Customer context middleware.

Opens an empty RequestContext for every request and clears it after the
whole request, error handling included, has finished. Routes fill in the
customer id (see ms_account.api.router.bind_customer_id).

Exceptions that are not AppError are rendered here, while the customer
id is still available, as a 9002 error envelope with HTTP 500.
"""

import logging

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import JSONResponse, Response

from src.ms_common.errors import InternalError
from src.ms_common.request_context import request_scope
from src.ms_common.response import error_response

logger = logging.getLogger("ms.errors")


class CustomerContextMiddleware(BaseHTTPMiddleware):
    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        with request_scope() as ctx:
            try:
                return await call_next(request)
            except Exception:
                customer_id = ctx.get()
                logger.exception("Unhandled error for customer ID [%s]", customer_id)
                err = InternalError(f"An unexpected error occurred for customer ID: {customer_id}")
                return JSONResponse(
                    status_code=err.http_status,
                    content=error_response(err.code, err.message).model_dump(),
                )
