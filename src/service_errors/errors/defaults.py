"""Process-wide default response builder."""

import threading
from typing import TYPE_CHECKING

import structlog

from service_errors.errors.builders import PlainTextResponseBuilder, ResponseBuilder

if TYPE_CHECKING:
    from service_errors.errors.exceptions import ServiceError

logger = structlog.get_logger(__name__)


class _BuilderSlot:
    """Single reference to the default builder.

    Reads are a plain attribute load and never take the lock; writes are
    serialized so each one publishes a complete reference.
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._builder: ResponseBuilder | None = None

    def get(self) -> ResponseBuilder | None:
        return self._builder

    def set(self, builder: ResponseBuilder) -> None:
        with self._lock:
            self._builder = builder


_slot = _BuilderSlot()
_fallback = PlainTextResponseBuilder()


def set_default_response_builder(builder: ResponseBuilder) -> None:
    """Install ``builder`` for every error that has no override of its own.

    Usually called once at startup. Later calls replace the previous builder
    and also affect errors created earlier but not rendered yet. The change is
    logged only once structlog has been configured (see ``configure``).
    """
    _slot.set(builder)
    if structlog.is_configured():
        logger.debug("default_response_builder_set", builder=type(builder).__name__)


def get_default_response_builder() -> ResponseBuilder | None:
    """Return the current process-wide builder, or ``None`` if none was set."""
    return _slot.get()


def resolve_response_builder(error: "ServiceError") -> ResponseBuilder:
    """Pick the builder for ``error``: its override, then the default, then plain text."""
    if error.response_builder is not None:
        return error.response_builder
    default = _slot.get()
    if default is not None:
        return default
    return _fallback
