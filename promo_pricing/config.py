"""Environment-driven settings and structlog setup."""

import logging
import os
from dataclasses import dataclass
from typing import Optional

import structlog

LOG_LEVEL_ENV = "PROMO_PRICING_LOG_LEVEL"
LOG_FORMAT_ENV = "PROMO_PRICING_LOG_FORMAT"


@dataclass(frozen=True)
class Settings:
    log_level: str = "info"
    log_format: str = "json"

    @classmethod
    def from_env(cls) -> "Settings":
        return cls(
            log_level=os.environ.get(LOG_LEVEL_ENV, "info").lower(),
            log_format=os.environ.get(LOG_FORMAT_ENV, "json").lower(),
        )

    def level_number(self) -> int:
        level = logging.getLevelName(self.log_level.upper())
        if not isinstance(level, int):
            raise ValueError(f"Unknown log level: {self.log_level}")
        return level


def configure_logging(settings: Optional[Settings] = None) -> Settings:
    """Configure structlog for the host process; returns the settings used.

    The package only logs through ``structlog.get_logger()`` and never
    configures structlog itself. Until the host calls this (or its own
    ``structlog.configure``), structlog's defaults print every event,
    including the calculator's per-call debug event, to stdout.
    """
    settings = settings or Settings.from_env()

    if settings.log_format == "console":
        renderer = structlog.dev.ConsoleRenderer()
    else:
        renderer = structlog.processors.JSONRenderer()

    structlog.configure(
        processors=[
            structlog.stdlib.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            renderer,
        ],
        wrapper_class=structlog.make_filtering_bound_logger(settings.level_number()),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(),
    )

    return settings
