"""Structured logging configuration using structlog.

Library modules log through the standard ``logging`` module. Once
``configure_logging`` has run, those records are rendered by structlog
(colored console for dev, JSON for production) and carry the tile
correlation ids held in context variables:

- ``request_id``: set by the caller serving a fetch or render request.
- ``tile_key`` / ``tile_level``: set by quadtile itself while it works on a
  tile, via ``tile_context``.
"""

import logging
import sys
from collections.abc import Iterator, MutableMapping
from contextlib import contextmanager
from contextvars import ContextVar
from typing import Any, cast

import structlog
from structlog.types import Processor

from quadtile.config import settings

# Name of the root handler installed by configure_logging
_HANDLER_NAME = "quadtile"

_request_id: ContextVar[str | None] = ContextVar("request_id", default=None)
_tile_key: ContextVar[str | None] = ContextVar("tile_key", default=None)
_tile_level: ContextVar[int | None] = ContextVar("tile_level", default=None)


def set_correlation_context(request_id: str | None = None) -> None:
    """Set the request id for the current context.

    Args:
        request_id: Identifier of the fetch or render request being served.
    """
    if request_id is not None:
        _request_id.set(request_id)


def clear_correlation_context() -> None:
    """Clear the request id and any tile ids left in the current context."""
    _request_id.set(None)
    _tile_key.set(None)
    _tile_level.set(None)


@contextmanager
def tile_context(tile_key: str, tile_level: int) -> Iterator[None]:
    """Tag log records emitted inside the block with a tile's identity.

    The previous values are restored on exit, so contexts nest.

    Args:
        tile_key: Identity string of the tile, e.g. "3_5_2".
        tile_level: Level of detail of the tile.
    """
    key_token = _tile_key.set(tile_key)
    level_token = _tile_level.set(tile_level)
    try:
        yield
    finally:
        _tile_level.reset(level_token)
        _tile_key.reset(key_token)


def _add_correlation_ids(
    logger: logging.Logger,
    method_name: str,
    event_dict: MutableMapping[str, Any],
) -> MutableMapping[str, Any]:
    """Structlog processor to add correlation IDs to log events."""
    _ = logger, method_name  # Required by structlog processor signature
    for key, var in (
        ("request_id", _request_id),
        ("tile_key", _tile_key),
        ("tile_level", _tile_level),
    ):
        value = var.get()
        if value is not None:
            event_dict.setdefault(key, value)
    return event_dict


def configure_logging(
    level: str | None = None,
    log_format: str | None = None,
) -> None:
    """Route structlog and stdlib records through one structlog renderer.

    Calling this again replaces the handler installed by the previous call.

    Args:
        level: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL).
               Defaults to settings.LOG_LEVEL.
        log_format: Output format ("console" or "json").
                    Defaults to settings.LOG_FORMAT.
    """
    level = level or settings.LOG_LEVEL
    log_format = log_format or settings.LOG_FORMAT

    # Applied to structlog events and, as foreign_pre_chain, to stdlib records
    shared_processors: list[Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.UnicodeDecoder(),
        _add_correlation_ids,
    ]

    if log_format == "json":
        renderers: list[Processor] = [
            structlog.processors.format_exc_info,
            structlog.processors.JSONRenderer(),
        ]
    else:
        renderers = [structlog.dev.ConsoleRenderer(colors=True)]

    structlog.configure(
        processors=[
            *shared_processors,
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    handler = logging.StreamHandler(sys.stdout)
    handler.set_name(_HANDLER_NAME)
    handler.setFormatter(
        structlog.stdlib.ProcessorFormatter(
            foreign_pre_chain=shared_processors,
            processors=[
                structlog.stdlib.ProcessorFormatter.remove_processors_meta,
                *renderers,
            ],
        )
    )

    reset_logging()
    root = logging.getLogger()
    root.addHandler(handler)
    root.setLevel(getattr(logging, level.upper()))


def reset_logging() -> None:
    """Remove the handler installed by configure_logging, if any."""
    root = logging.getLogger()
    for handler in list(root.handlers):
        if handler.get_name() == _HANDLER_NAME:
            root.removeHandler(handler)
            handler.close()


def get_logger(name: str | None = None) -> structlog.stdlib.BoundLogger:
    """Get a structlog logger instance.

    Args:
        name: Logger name. If None, uses the calling module's name.

    Returns:
        A bound structlog logger instance.
    """
    return cast(structlog.stdlib.BoundLogger, structlog.get_logger(name))
