"""Service errors - typed application errors rendered as HTTP responses."""

__version__ = "0.1.0"

from service_errors.config import ServiceSettings
from service_errors.errors import (
    ErrorResponse,
    JsonResponseBuilder,
    PlainTextResponseBuilder,
    ResponseBuilder,
    ServiceError,
    builder_for_format,
    set_default_response_builder,
)
from service_errors.errors.handlers import register_error_handlers, to_response
from service_errors.logging import get_logger, setup_logging


def configure(settings: ServiceSettings) -> None:
    """Set up logging and install the configured default response builder.

    Raises:
        ValueError: If ``settings.response_format`` is not a known format.
    """
    builder = builder_for_format(settings.response_format)
    setup_logging(settings)
    set_default_response_builder(builder)


__all__ = [
    "ErrorResponse",
    "JsonResponseBuilder",
    "PlainTextResponseBuilder",
    "ResponseBuilder",
    "ServiceError",
    "ServiceSettings",
    "builder_for_format",
    "configure",
    "get_logger",
    "register_error_handlers",
    "set_default_response_builder",
    "setup_logging",
    "to_response",
]
