"""FastAPI adapter for ``ServiceError``."""

import structlog
from fastapi import FastAPI, Request
from starlette.responses import Response

from service_errors.errors.exceptions import ServiceError

logger = structlog.get_logger(__name__)


def to_response(error: ServiceError) -> Response:
    """Build a Starlette response from the error's rendered body, content type and status."""
    rendered = error.into_response()
    return Response(
        content=rendered.body,
        status_code=rendered.status_code,
        media_type=rendered.content_type,
    )


def register_error_handlers(app: FastAPI) -> None:
    """Register the ``ServiceError`` exception handler on a FastAPI application.

    Args:
        app: The FastAPI application instance to register handlers on.
    """

    @app.exception_handler(ServiceError)
    async def handle_service_error(request: Request, exc: ServiceError) -> Response:
        log_method = logger.error if exc.http_status >= 500 else logger.warning
        log_method("service_error", error=exc, method=request.method, path=request.url.path)
        return to_response(exc)
