"""Structlog processors for service error events."""

from typing import Any

from service_errors.errors.exceptions import ServiceError


def expand_service_error(logger: Any, method: str, event_dict: dict[str, Any]) -> dict[str, Any]:
    """Replace an ``error=<ServiceError>`` entry with its loggable fields.

    The rendered message and the parameters are logged. Bound arguments and
    the builder override are not.
    """
    error = event_dict.get("error")
    if not isinstance(error, ServiceError):
        return event_dict

    del event_dict["error"]
    event_dict["error_code"] = error.code
    event_dict["error_name"] = error.name
    event_dict["status_code"] = error.http_status
    event_dict["message"] = error.render_message()
    if error.parameters:
        event_dict["parameters"] = dict(error.parameters)
    return event_dict


def add_service_name(service_name: str) -> Any:
    """Return a processor that binds service=<name> to every event."""

    def processor(logger: Any, method: str, event_dict: dict[str, Any]) -> dict[str, Any]:
        event_dict.setdefault("service", service_name)
        return event_dict

    return processor
