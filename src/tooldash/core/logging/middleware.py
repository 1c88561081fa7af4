"""Request logging middleware.

One structured line per request, carrying who called and, when a guard
ran, which profile and role the call was authorised as.
"""

import time
from typing import Any

import structlog
from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint


logger = structlog.get_logger()

DEFAULT_EXCLUDE_PATHS = (
    "/health/live",
    "/health/ready",
    "/docs",
    "/redoc",
    "/openapi.json",
)

# Statuses that mean a guard turned the caller away
DENIAL_STATUSES = frozenset({401, 403})


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """Log each request once it has completed.

    Successful and failed calls are logged as ``request_completed``.
    Calls turned away with 401 or 403 are logged as ``request_denied`` so
    access problems can be filtered out of the stream. When a permission
    dependency resolved the caller, its profile ID and role are attached.
    """

    def __init__(
        self,
        app: Any,
        exclude_paths: list[str] | None = None,
    ) -> None:
        super().__init__(app)
        self.exclude_paths = tuple(exclude_paths or DEFAULT_EXCLUDE_PATHS)

    async def dispatch(
        self,
        request: Request,
        call_next: RequestResponseEndpoint,
    ) -> Response:
        if request.url.path.startswith(self.exclude_paths):
            return await call_next(request)

        start_time = time.perf_counter()
        try:
            response = await call_next(request)
        except Exception:
            logger.exception(
                "request_failed",
                **request_fields(request),
                duration_ms=_elapsed_ms(start_time),
            )
            raise

        fields = {
            **request_fields(request),
            "status_code": response.status_code,
            "duration_ms": _elapsed_ms(start_time),
        }

        if response.status_code in DENIAL_STATUSES:
            logger.warning("request_denied", **fields)
        elif response.status_code >= 500:
            logger.error("request_completed", **fields)
        elif response.status_code >= 400:
            logger.warning("request_completed", **fields)
        else:
            logger.info("request_completed", **fields)

        return response


def _elapsed_ms(start_time: float) -> float:
    return round((time.perf_counter() - start_time) * 1000, 2)


def request_fields(request: Request) -> dict[str, Any]:
    """Collect the log fields known about ``request`` so far."""
    fields: dict[str, Any] = {
        "method": request.method,
        "path": request.url.path,
        "client_ip": get_client_ip(request),
    }
    if request.url.query:
        fields["query"] = str(request.url.query)

    request_id = getattr(request.state, "request_id", None)
    if request_id:
        fields["request_id"] = request_id

    principal_id = getattr(request.state, "principal_id", None)
    if principal_id:
        fields["principal_id"] = str(principal_id)

    auth = getattr(request.state, "auth", None)
    if auth is not None:
        fields["profile_id"] = str(auth.profile_id)
        fields["role"] = auth.role_kind.value

    return fields


def get_client_ip(request: Request) -> str | None:
    """Extract the real client IP from a request.

    Handles X-Forwarded-For header for proxied requests.
    """
    forwarded = request.headers.get("X-Forwarded-For")
    if forwarded:
        # The first entry is the original client
        return forwarded.split(",")[0].strip()

    real_ip = request.headers.get("X-Real-IP")
    if real_ip:
        return real_ip

    if request.client:
        return request.client.host

    return None
