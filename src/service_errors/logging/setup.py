"""Structlog configuration driven by ``ServiceSettings``."""

import logging
import sys

import structlog

from service_errors.config import ServiceSettings
from service_errors.logging.processors import add_service_name, expand_service_error


def _renderer(log_format: str) -> structlog.types.Processor:
    if log_format == "dev":
        return structlog.dev.ConsoleRenderer(colors=False)
    return structlog.processors.JSONRenderer()


def setup_logging(settings: ServiceSettings) -> None:
    """Route structlog and stdlib records through one stderr handler.

    ``settings.log_format`` selects ``json`` (one object per line) or ``dev``
    (console columns). Loggers are not cached, so calling this again swaps the
    configuration for module-level loggers too.
    """
    pre_chain: list[structlog.types.Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        add_service_name(settings.service_name),
        structlog.processors.TimeStamper(fmt="iso", utc=True),
        expand_service_error,
        structlog.processors.format_exc_info,
    ]
    structlog.configure(
        processors=[*pre_chain, structlog.stdlib.ProcessorFormatter.wrap_for_formatter],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=False,
    )

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(
        structlog.stdlib.ProcessorFormatter(
            foreign_pre_chain=[structlog.stdlib.ExtraAdder(), *pre_chain],
            processors=[
                structlog.stdlib.ProcessorFormatter.remove_processors_meta,
                _renderer(settings.log_format),
            ],
        )
    )
    root_logger = logging.getLogger()
    root_logger.handlers.clear()
    root_logger.addHandler(handler)
    root_logger.setLevel(getattr(logging, settings.log_level, logging.INFO))


def get_logger(**initial_bindings: object) -> structlog.stdlib.BoundLogger:
    """Return a structlog bound logger."""
    return structlog.get_logger(**initial_bindings)
