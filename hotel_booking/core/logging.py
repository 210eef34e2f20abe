"""
structlog setup for the booking service.

Every line carries the service context (name, version, environment and
whether room rows are locked during decisions) next to whatever the request
middleware binds through contextvars: request_id, method and path.
Production writes JSON lines; any other environment a coloured console.
"""

import logging
import sys

import structlog
from structlog.types import EventDict, Processor

from hotel_booking.core.config import Settings, get_settings

QUIET_LOGGERS = ("uvicorn.access", "sqlalchemy.engine", "aiosqlite")


def add_service_context(settings: Settings) -> Processor:
    context = settings.service_context

    def processor(logger, method_name: str, event_dict: EventDict) -> EventDict:
        for key, value in context.items():
            event_dict.setdefault(key, value)
        return event_dict

    return processor


def build_processors(settings: Settings) -> list[Processor]:
    processors: list[Processor] = [
        structlog.contextvars.merge_contextvars,
        add_service_context(settings),
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.UnicodeDecoder(),
    ]
    if settings.is_production:
        processors.append(structlog.processors.format_exc_info)
    return processors


def setup_logging(settings: Settings | None = None) -> None:
    settings = settings or get_settings()

    structlog.configure(
        processors=[
            *build_processors(settings),
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    if settings.is_production:
        renderer = structlog.processors.JSONRenderer()
    else:
        renderer = structlog.dev.ConsoleRenderer(colors=True)

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(
        structlog.stdlib.ProcessorFormatter(
            processors=[structlog.stdlib.ProcessorFormatter.remove_processors_meta, renderer],
        )
    )

    root_logger = logging.getLogger()
    # Lifespan may run more than once per process (tests); keep a single handler.
    root_logger.handlers = [handler]
    root_logger.setLevel(settings.LOG_LEVEL)

    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)


def get_logger(name: str = __name__) -> structlog.stdlib.BoundLogger:
    return structlog.get_logger(name)
