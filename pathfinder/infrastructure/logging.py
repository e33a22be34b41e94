import logging
import sys
from typing import Any, Optional

import structlog
from structlog.types import Processor

from pathfinder.core.config import Settings, get_settings
from pathfinder.infrastructure.logging_processors import (
    add_caller_info,
    add_service_context,
    format_exception_info,
    set_log_severity,
    stringify_paths,
)

# Silent until setup_logging() or the host attaches handlers
logging.getLogger("pathfinder").addHandler(logging.NullHandler())


def setup_logging(settings: Optional[Settings] = None) -> None:
    settings = settings or get_settings()
    timestamper = structlog.processors.TimeStamper(fmt="iso")

    # Build processor chain
    shared_processors: list[Processor] = [
        # Add contextvars (operation, path, etc.)
        structlog.contextvars.merge_contextvars,

        # Add custom context
        add_service_context,
        stringify_paths,

        # Add log level
        structlog.processors.add_log_level,
        set_log_severity,

        # Add caller info in development
        add_caller_info if settings.is_development else lambda *args: args[-1],

        # Format exceptions
        format_exception_info,

        # Add timestamp
        timestamper,
    ]

    if settings.log_format == "json":
        renderer = structlog.processors.JSONRenderer()
    else:
        renderer = structlog.dev.ConsoleRenderer(
            colors=True,
            exception_formatter=structlog.dev.rich_traceback
        )

    structlog.configure(
        processors=shared_processors + [
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    formatter = structlog.stdlib.ProcessorFormatter(
        foreign_pre_chain=shared_processors,
        processors=[
            structlog.stdlib.ProcessorFormatter.remove_processors_meta,
            renderer,
        ],
    )

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(formatter)

    # Only the package logger is configured; the root logger is left alone
    package_logger = logging.getLogger("pathfinder")
    package_logger.handlers.clear()
    package_logger.addHandler(handler)
    package_logger.setLevel(getattr(logging, settings.log_level))
    package_logger.propagate = False


def get_logger(name: str) -> structlog.stdlib.BoundLogger:
    """Logger backed by the stdlib logger ``name``.

    Events follow stdlib levels and handlers, so nothing is printed until
    ``setup_logging()`` or the host application configures logging.
    """
    return structlog.wrap_logger(
        logging.getLogger(name),
        wrapper_class=structlog.stdlib.BoundLogger,
    )


def bind_context(**kwargs: Any) -> None:
    structlog.contextvars.bind_contextvars(**kwargs)


def clear_context() -> None:
    structlog.contextvars.clear_contextvars()


def unbind_context(*keys: str) -> None:
    structlog.contextvars.unbind_contextvars(*keys)
