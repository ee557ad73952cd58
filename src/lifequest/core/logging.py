"""Structured logging for the LifeQuest engine.

Engine modules log through structlog at debug level only; nothing they log
feeds back into a result. Applications call ``configure_logging`` once at
startup, usually with the loaded ``Settings``.

Example:
    >>> from lifequest.core.logging import get_logger
    >>> logger = get_logger(__name__)
    >>> logger.debug("Roll resolved", ability="creation", total=17)
"""

from __future__ import annotations

import logging
import sys
from collections.abc import Iterator
from contextlib import contextmanager
from typing import TYPE_CHECKING, Any

import structlog
from structlog.types import Processor


if TYPE_CHECKING:
    from structlog.types import EventDict, WrappedLogger

    from lifequest.core.config import Settings


_STDLIB_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"


class EngineContext:
    """Processor stamping every event with the application name and version."""

    def __init__(self, app_name: str = "lifequest", app_version: str | None = None) -> None:
        self.app_name = app_name
        self.app_version = app_version

    def __call__(
        self,
        logger: WrappedLogger,
        method_name: str,
        event_dict: EventDict,
    ) -> EventDict:
        event_dict.setdefault("app", self.app_name)
        if self.app_version is not None:
            event_dict.setdefault("app_version", self.app_version)
        return event_dict


def _renderer(json_format: bool) -> list[Processor]:
    if json_format:
        return [structlog.processors.format_exc_info, structlog.processors.JSONRenderer()]
    return [
        structlog.dev.ConsoleRenderer(
            colors=sys.stdout.isatty(),
            exception_formatter=structlog.dev.plain_traceback,
        )
    ]


def configure_logging(
    settings: Settings | None = None,
    *,
    level: str | None = None,
    json_format: bool | None = None,
    log_file: str | None = None,
) -> None:
    """Configure structlog and stdlib logging for the process.

    Explicit keyword arguments win over the values carried by ``settings``.

    Args:
        settings: Loaded application settings; may be None.
        level: Log level name. Defaults to ``settings.log_level`` or INFO.
        json_format: Emit JSON lines instead of console output.
        log_file: Optional path that also receives stdlib log records.
    """
    if settings is not None:
        level = level or settings.log_level
        json_format = settings.json_logs if json_format is None else json_format
        context = EngineContext(settings.app_name, settings.app_version)
    else:
        context = EngineContext()
    log_level = logging.getLevelName((level or "INFO").upper())
    if not isinstance(log_level, int):
        log_level = logging.INFO

    processors: list[Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        context,
        structlog.processors.StackInfoRenderer(),
        structlog.processors.UnicodeDecoder(),
        *_renderer(bool(json_format)),
    ]
    structlog.configure(
        processors=processors,
        wrapper_class=structlog.make_filtering_bound_logger(log_level),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(),
        cache_logger_on_first_use=True,
    )

    handlers: list[logging.Handler] = [logging.StreamHandler(sys.stdout)]
    if log_file:
        handlers.append(logging.FileHandler(log_file))
    logging.basicConfig(format=_STDLIB_FORMAT, level=log_level, handlers=handlers, force=True)


def get_logger(name: str | None = None) -> structlog.BoundLogger:
    """Return a structlog logger, typically for ``__name__``."""
    return structlog.get_logger(name)


def bind_context(**kwargs: Any) -> None:
    """Bind values included in every subsequent log event of this context.

    Example:
        >>> bind_context(character_id="c-1")
        >>> logger.debug("Recalculating abilities")  # includes character_id
    """
    structlog.contextvars.bind_contextvars(**kwargs)


def clear_context() -> None:
    """Drop all bound context values."""
    structlog.contextvars.clear_contextvars()


@contextmanager
def character_context(character_id: str, **extra: Any) -> Iterator[None]:
    """Bind a character id for the duration of a block.

    Useful around a mutation batch followed by ``recalculate``. Values bound
    before the block are restored afterwards.

    Args:
        character_id: Character the enclosed events refer to.
        **extra: Additional values to bind.
    """
    with structlog.contextvars.bound_contextvars(character_id=character_id, **extra):
        yield


__all__ = [
    "EngineContext",
    "configure_logging",
    "get_logger",
    "bind_context",
    "clear_context",
    "character_context",
]
