"""Service configuration."""

from service_errors.config.settings import ServiceSettings

__all__ = ["ServiceSettings"]
