"""The ``ServiceError`` value and its message formatting."""

import re
from types import MappingProxyType
from typing import TYPE_CHECKING, Any, Mapping, NamedTuple

from service_errors.errors.defaults import resolve_response_builder

if TYPE_CHECKING:
    from service_errors.errors.builders import ResponseBuilder

_PLACEHOLDER = re.compile(r"\{([0-9]+)\}")

_FALLBACK_STATUS = 500

_FIELDS = (
    "code",
    "name",
    "http_status",
    "message_template",
    "arguments",
    "parameters",
    "response_builder",
)
_PRIVATE = frozenset(f"_{field}" for field in _FIELDS)


def _coerce_status(http_status: Any) -> int:
    if isinstance(http_status, bool) or not isinstance(http_status, int):
        return _FALLBACK_STATUS
    if not 100 <= http_status <= 999:
        return _FALLBACK_STATUS
    return http_status


def _restore(cls: type["ServiceError"], fields: dict[str, Any]) -> "ServiceError":
    error = cls.__new__(cls)
    error._assign(**fields)
    return error


class ErrorResponse(NamedTuple):
    """Rendered error ready to be handed to an HTTP framework."""

    body: str
    content_type: str
    status_code: int


class ServiceError(Exception):
    """Application error with a numeric code, a symbolic name and an HTTP status.

    Instances are immutable once constructed: the fields below are read-only
    and ``parameters`` is a read-only mapping. ``bind``, ``parameter`` and
    ``with_response_builder`` return a new error carrying the change, so an
    error defined once at module level can be specialised per request.
    Errors survive ``copy`` and ``pickle``.

    Attributes:
        code: Caller-defined numeric identifier.
        name: Machine-readable category, e.g. ``VALIDATION_ERROR``.
        http_status: Status code sent to the client. Invalid values become 500.
        message_template: Message with optional ``{0}``, ``{1}``... placeholders.
        arguments: Values bound to the placeholders, in ``bind`` order.
        parameters: Extra key/value context included in structured output.
        response_builder: Per-error override of the process-wide builder.
    """

    def __init__(self, code: int, name: str, http_status: int, message_template: str) -> None:
        super().__init__(message_template)
        self._assign(
            code=code,
            name=name,
            http_status=_coerce_status(http_status),
            message_template=message_template,
            arguments=(),
            parameters={},
            response_builder=None,
        )

    def _assign(
        self,
        code: int,
        name: str,
        http_status: int,
        message_template: str,
        arguments: tuple[str, ...],
        parameters: Mapping[str, str],
        response_builder: "ResponseBuilder | None",
    ) -> None:
        self.args = (message_template,)
        self._code = code
        self._name = name
        self._http_status = http_status
        self._message_template = message_template
        self._arguments = tuple(arguments)
        self._parameters = MappingProxyType(dict(parameters))
        self._response_builder = response_builder

    def _fields(self) -> dict[str, Any]:
        fields = {field: getattr(self, f"_{field}") for field in _FIELDS}
        fields["parameters"] = dict(self._parameters)
        return fields

    def _extra_state(self) -> dict[str, Any]:
        return {key: value for key, value in self.__dict__.items() if key not in _PRIVATE}

    def _evolve(self, **changes: Any) -> "ServiceError":
        clone = _restore(type(self), {**self._fields(), **changes})
        clone.__dict__.update(self._extra_state())
        return clone

    def __reduce__(self) -> tuple[Any, ...]:
        return _restore, (type(self), self._fields()), self._extra_state() or None

    @property
    def code(self) -> int:
        return self._code

    @property
    def name(self) -> str:
        return self._name

    @property
    def http_status(self) -> int:
        return self._http_status

    @property
    def message_template(self) -> str:
        return self._message_template

    @property
    def arguments(self) -> tuple[str, ...]:
        return self._arguments

    @property
    def parameters(self) -> Mapping[str, str]:
        return self._parameters

    @property
    def response_builder(self) -> "ResponseBuilder | None":
        return self._response_builder

    def bind(self, value: Any) -> "ServiceError":
        """Return a copy with ``str(value)`` bound to the next placeholder index."""
        return self._evolve(arguments=(*self.arguments, str(value)))

    def parameter(self, key: str, value: Any) -> "ServiceError":
        """Return a copy with ``key`` set to ``str(value)``, replacing any previous value."""
        return self._evolve(parameters={**self.parameters, str(key): str(value)})

    def with_response_builder(self, builder: "ResponseBuilder") -> "ServiceError":
        """Return a copy that always renders through ``builder``."""
        return self._evolve(response_builder=builder)

    def render_message(self) -> str:
        """Substitute bound arguments into the template.

        Only ASCII ``{<digits>}`` placeholders are substituted. Placeholders
        without a bound argument are left as literal text.
        """
        if not self.arguments:
            return self.message_template

        def substitute(match: re.Match[str]) -> str:
            index = int(match.group(1))
            if index < len(self.arguments):
                return self.arguments[index]
            return match.group(0)

        return _PLACEHOLDER.sub(substitute, self.message_template)

    def to_dict(self) -> dict[str, Any]:
        """Serializable view of the error; ``parameters`` only when present."""
        data: dict[str, Any] = {
            "code": self.code,
            "name": self.name,
            "message": self.render_message(),
        }
        if self.parameters:
            data["parameters"] = dict(self.parameters)
        return data

    def into_response(self) -> ErrorResponse:
        """Render through the resolved builder and attach the HTTP status."""
        builder = resolve_response_builder(self)
        body, content_type = builder.build(self)
        return ErrorResponse(body=body, content_type=content_type, status_code=self.http_status)

    def __str__(self) -> str:
        return self.render_message()

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}(code={self.code!r}, name={self.name!r}, "
            f"http_status={self.http_status!r}, message_template={self.message_template!r})"
        )
