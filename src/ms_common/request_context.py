"""Request-scoped customer context.

One RequestContext is opened per inbound request by
CustomerContextMiddleware and carried in a ContextVar, so concurrent
requests on the same event loop never see each other's customer id.
The route layer binds the customer id once; the error handler and the
logging filter read it back without it being passed around.

Usage:
    ctx = current_request_context()
    ctx.set("cust1")
    ctx.get()    # "cust1"
    ctx.clear()
    ctx.get()    # "unknown"
"""

from collections.abc import Iterator
from contextlib import contextmanager
from contextvars import ContextVar

UNKNOWN_CUSTOMER = "unknown"


class RequestContext:
    __slots__ = ("_customer_id",)

    def __init__(self) -> None:
        self._customer_id: str | None = None

    def set(self, customer_id: str | None) -> None:
        self._customer_id = customer_id

    def get(self) -> str:
        return self._customer_id if self._customer_id else UNKNOWN_CUSTOMER

    def clear(self) -> None:
        self._customer_id = None


_current: ContextVar[RequestContext | None] = ContextVar("request_context", default=None)


def current_request_context() -> RequestContext:
    """Return the context of the in-flight request.

    Outside a request scope a detached, empty context is returned: writes
    to it are discarded and get() reports "unknown".
    """
    ctx = _current.get()
    return ctx if ctx is not None else RequestContext()


@contextmanager
def request_scope() -> Iterator[RequestContext]:
    """Open a fresh context for one request; always cleared on exit."""
    ctx = RequestContext()
    token = _current.set(ctx)
    try:
        yield ctx
    finally:
        ctx.clear()
        _current.reset(token)
