"""Environment-based configuration for service error rendering."""

import os
from dataclasses import dataclass, field


@dataclass(frozen=True)
class ServiceSettings:
    """Immutable settings read from environment variables."""

    service_name: str
    log_level: str = field(default_factory=lambda: os.getenv("LOG_LEVEL", "INFO"))
    log_format: str = field(default_factory=lambda: os.getenv("LOG_FORMAT", "json"))
    response_format: str = field(
        default_factory=lambda: os.getenv("ERROR_RESPONSE_FORMAT", "text")
    )

    def __post_init__(self) -> None:
        object.__setattr__(self, "log_level", self.log_level.upper())
        object.__setattr__(self, "response_format", self.response_format.lower())
