"""Structured logging configuration for LexRipple.

JSON output for services, colored console output for local work. Every
line written while an event propagates carries the event's identity
(``source_object_id``, ``update_type``, ``component``), so one learner
response can be followed through traversal, merging and writes.

Example:
    ```python
    from lexripple.logging import configure_logging, get_logger, propagation_context

    configure_logging(level="DEBUG", format="text")
    logger = get_logger(__name__)

    with propagation_context(event):
        logger.info("propagation_started")
    ```
"""

from __future__ import annotations

import logging
import sys
from collections.abc import Iterator
from contextlib import contextmanager
from enum import Enum
from typing import TYPE_CHECKING

import structlog

if TYPE_CHECKING:
    from structlog.typing import EventDict, Processor, WrappedLogger

    from lexripple.models import ObjectUpdateEvent

_configured = False

# Keys bound for the duration of one event's propagation
PROPAGATION_CONTEXT_KEYS = ("source_object_id", "update_type", "component")


def _enum_values(_logger: WrappedLogger, _method: str, event_dict: EventDict) -> EventDict:
    """Render enum fields (transfer types, stages, components) by value."""
    for key, value in event_dict.items():
        if isinstance(value, Enum):
            event_dict[key] = value.value
    return event_dict


def configure_logging(
    level: str | None = None,
    format: str | None = None,
) -> None:
    """Configure structured logging for LexRipple.

    Args:
        level: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL). Defaults
            to ``LEXRIPPLE_LOG_LEVEL``.
        format: "json" for services, "text" for development. Defaults to
            ``LEXRIPPLE_LOG_FORMAT``.
    """
    global _configured

    if level is None or format is None:
        from lexripple.config import settings

        level = level or settings.log_level
        format = format or settings.log_format

    log_level = getattr(logging, level.upper(), logging.INFO)

    logging.basicConfig(
        format="%(message)s",
        stream=sys.stdout,
        level=log_level,
    )

    shared_processors: list[Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        _enum_values,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
    ]

    if format.lower() == "json":
        processors: list[Processor] = [
            *shared_processors,
            structlog.processors.format_exc_info,
            structlog.processors.JSONRenderer(),
        ]
    else:
        processors = [
            *shared_processors,
            structlog.dev.ConsoleRenderer(colors=True),
        ]

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    _configured = True


def get_logger(name: str | None = None) -> structlog.stdlib.BoundLogger:
    """Get a structured logger, configuring defaults on first use."""
    if not _configured:
        configure_logging()

    return structlog.get_logger(name)  # type: ignore[no-any-return]


def bind_context(**kwargs: object) -> None:
    """Bind key-value pairs to all subsequent log lines in this context.

    Useful for tagging a whole session, e.g. with a learner or session ID.
    """
    structlog.contextvars.bind_contextvars(**kwargs)


def unbind_context(*keys: str) -> None:
    """Remove keys from the logging context."""
    structlog.contextvars.unbind_contextvars(*keys)


@contextmanager
def propagation_context(event: ObjectUpdateEvent) -> Iterator[None]:
    """Tag log lines with the event being propagated.

    Keys bound by the caller (learner, session) are left in place; only
    the event keys are removed on exit.
    """
    bind_context(
        source_object_id=event.source_object_id,
        update_type=event.update_type.value,
        component=event.component.value,
    )
    try:
        yield
    finally:
        unbind_context(*PROPAGATION_CONTEXT_KEYS)


logger = get_logger("lexripple")
