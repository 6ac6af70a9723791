"""Structured logging configuration using structlog.

JSON lines in production, colored console output everywhere else. Moderated
text never reaches the log sink: fields that could carry it are replaced by
their length before rendering.
"""

import logging
import sys

import structlog
from structlog.types import EventDict, Processor, WrappedLogger

APP_NAME = "toxicity-filter"

# Event keys that may hold user-submitted content
USER_TEXT_KEYS = ("text", "analyzed_text", "normalized_text", "texts")

# Third-party loggers that log every request or poll at INFO
QUIET_LOGGERS = ("httpx", "httpcore", "asyncio", "uvicorn.access")


def add_app_context(
    logger: WrappedLogger, method_name: str, event_dict: EventDict
) -> EventDict:
    """Tag every event with the service name."""
    event_dict["app"] = APP_NAME
    return event_dict


def redact_user_text(
    logger: WrappedLogger, method_name: str, event_dict: EventDict
) -> EventDict:
    """Replace user-submitted text with `<key>_length`."""
    for key in USER_TEXT_KEYS:
        if key not in event_dict:
            continue
        value = event_dict.pop(key)
        if isinstance(value, (list, tuple)):
            event_dict[f"{key}_count"] = len(value)
        elif isinstance(value, str):
            event_dict[f"{key}_length"] = len(value)
    return event_dict


def build_processors() -> list[Processor]:
    """Processors shared by structlog loggers and foreign stdlib records."""
    return [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt="iso", utc=True),
        structlog.processors.StackInfoRenderer(),
        redact_user_text,
        add_app_context,
    ]


def configure_logging(log_level: str = "INFO", environment: str = "development") -> None:
    """Configure structlog and route stdlib logging through it.

    Args:
        log_level: Logging level name; unknown names fall back to INFO
        environment: "production" selects JSON output
    """
    level = logging.getLevelName(log_level.upper())
    if not isinstance(level, int):
        level = logging.INFO

    is_production = environment.lower() == "production"
    processors = build_processors()

    if is_production:
        processors.append(structlog.processors.format_exc_info)
        renderer: Processor = structlog.processors.JSONRenderer()
    else:
        renderer = structlog.dev.ConsoleRenderer(colors=sys.stdout.isatty())

    structlog.configure(
        processors=[*processors, structlog.stdlib.ProcessorFormatter.wrap_for_formatter],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(
        structlog.stdlib.ProcessorFormatter(processor=renderer, foreign_pre_chain=processors)
    )

    root_logger = logging.getLogger()
    root_logger.handlers.clear()
    root_logger.addHandler(handler)
    root_logger.setLevel(level)

    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(max(level, logging.WARNING))

    structlog.get_logger(__name__).info(
        "Logging configured",
        log_level=logging.getLevelName(level),
        environment=environment,
        renderer="json" if is_production else "console",
    )
