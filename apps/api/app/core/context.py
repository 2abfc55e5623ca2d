from dataclasses import dataclass

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request


@dataclass
class RequestContext:
    """Per-request identity and tracing data, filled in by the session gate."""

    request_id: str
    correlation_id: str
    user_id: str | None = None
    email: str | None = None
    role: str | None = None

    @property
    def is_authenticated(self) -> bool:
        return self.user_id is not None


class RequestContextMiddleware(BaseHTTPMiddleware):
    async def dispatch(self, request: Request, call_next):  # type: ignore[no-untyped-def]
        correlation_id = getattr(request.state, "correlation_id", None)
        request.state.context = RequestContext(
            request_id=correlation_id or "",
            correlation_id=correlation_id or "",
        )
        response = await call_next(request)
        response.headers["x-request-id"] = request.state.context.request_id
        return response


def get_request_context(request: Request) -> RequestContext:
    context = getattr(request.state, "context", None)
    if context is None:
        context = RequestContext(request_id="", correlation_id="")
        request.state.context = context
    return context
