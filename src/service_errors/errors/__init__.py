"""Structured service errors and their response builders."""

from service_errors.errors.builders import (
    JSON_CONTENT_TYPE,
    PLAIN_TEXT_CONTENT_TYPE,
    JsonResponseBuilder,
    PlainTextResponseBuilder,
    ResponseBuilder,
    builder_for_format,
)
from service_errors.errors.defaults import (
    get_default_response_builder,
    resolve_response_builder,
    set_default_response_builder,
)
from service_errors.errors.exceptions import ErrorResponse, ServiceError

__all__ = [
    "JSON_CONTENT_TYPE",
    "PLAIN_TEXT_CONTENT_TYPE",
    "ErrorResponse",
    "JsonResponseBuilder",
    "PlainTextResponseBuilder",
    "ResponseBuilder",
    "ServiceError",
    "builder_for_format",
    "get_default_response_builder",
    "resolve_response_builder",
    "set_default_response_builder",
]
