"""Response builders -- turn a ``ServiceError`` into a body and content type."""

import json
from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from service_errors.errors.exceptions import ServiceError

PLAIN_TEXT_CONTENT_TYPE = "text/plain"
JSON_CONTENT_TYPE = "application/json"


@runtime_checkable
class ResponseBuilder(Protocol):
    """Contract for rendering a ``ServiceError``.

    Implementations must not mutate the error and must be safe to call from
    many requests at once; calls are never serialized.
    """

    def build(self, error: "ServiceError") -> tuple[str, str]: ...


class PlainTextResponseBuilder:
    """Render the error message as ``text/plain``.

    With ``verbose=True`` the body also carries the code, the name and a
    ``Parameters:`` block.
    """

    def __init__(self, verbose: bool = False) -> None:
        self.verbose = verbose

    def build(self, error: "ServiceError") -> tuple[str, str]:
        message = error.render_message()
        if not self.verbose:
            return message, PLAIN_TEXT_CONTENT_TYPE

        lines = [f"Error {error.code} ({error.name}): {message}"]
        if error.parameters:
            lines.append("Parameters:")
            lines.extend(f"  {key}: {value}" for key, value in sorted(error.parameters.items()))
        return "\n".join(lines), PLAIN_TEXT_CONTENT_TYPE


class JsonResponseBuilder:
    """Render the error as a compact JSON object (see ``ServiceError.to_dict``)."""

    def build(self, error: "ServiceError") -> tuple[str, str]:
        body = json.dumps(error.to_dict(), separators=(",", ":"), ensure_ascii=False)
        return body, JSON_CONTENT_TYPE


_FORMATS = {
    "text": PlainTextResponseBuilder,
    "json": JsonResponseBuilder,
}


def builder_for_format(name: str) -> ResponseBuilder:
    """Return a new built-in builder for a configuration name (``text`` or ``json``).

    Raises:
        ValueError: If ``name`` is not a known format.
    """
    try:
        factory = _FORMATS[name.lower()]
    except KeyError:
        known = ", ".join(sorted(_FORMATS))
        raise ValueError(f"Unknown error response format {name!r}; expected one of: {known}") from None
    return factory()
