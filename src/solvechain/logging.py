"""Structured logging for Solvechain.

Engine modules log through structlog (key-value events). Rules, the
registry and the settings loader use standard library loggers; both end
up on the same stdout stream at the same level.

Level and format come from Settings (SOLVECHAIN_LOG_LEVEL,
SOLVECHAIN_LOG_FORMAT) unless configure_logging() is called with
explicit values. The first get_logger() call configures logging from
settings if nothing has configured it yet.
"""

from __future__ import annotations

import logging
import sys
from typing import TYPE_CHECKING

import structlog

from solvechain import config as _config

if TYPE_CHECKING:
    from structlog.typing import Processor

_configured = False


def _level_number(level: str) -> int:
    # Unknown names fall back to INFO rather than failing at import time
    value = logging.getLevelName(level.upper())
    return value if isinstance(value, int) else logging.INFO


def _processors(format: str) -> list[Processor]:
    processors: list[Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
    ]
    if format.lower() == "text":
        processors.append(structlog.dev.ConsoleRenderer(colors=True))
    else:
        processors.append(structlog.processors.format_exc_info)
        processors.append(structlog.processors.JSONRenderer())
    return processors


def configure_logging(level: str | None = None, format: str | None = None) -> None:
    """Configure logging for Solvechain.

    Args:
        level: Level name (DEBUG, INFO, ...). Defaults to settings.log_level.
        format: "json" or "text". Defaults to settings.log_format.

    Example:
        ```python
        from solvechain.logging import configure_logging, get_logger

        configure_logging(level="DEBUG", format="text")
        get_logger(__name__).info("Propagation started", graph_id="g_1")
        ```
    """
    global _configured

    settings = _config.settings
    log_level = _level_number(level or settings.log_level)

    logging.basicConfig(format="%(message)s", stream=sys.stdout, level=log_level)
    # basicConfig is a no-op once the root logger has handlers
    logging.getLogger().setLevel(log_level)

    structlog.configure(
        processors=_processors(format or settings.log_format),
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )
    _configured = True


def get_logger(name: str | None = None) -> structlog.stdlib.BoundLogger:
    """Return a structlog logger, configuring logging from settings on first use."""
    if not _configured:
        configure_logging()
    return structlog.get_logger(name)  # type: ignore[no-any-return]


def bind_context(**kwargs: object) -> None:
    """Attach key-value pairs to every later log line in this context.

    Example:
        ```python
        bind_context(graph_id="g_1", scene_id="s_3")
        engine.run(nodes, edges)  # engine log lines carry graph_id and scene_id
        ```
    """
    structlog.contextvars.bind_contextvars(**kwargs)


def unbind_context(*keys: str) -> None:
    """Drop the given keys from the logging context."""
    structlog.contextvars.unbind_contextvars(*keys)


def clear_context() -> None:
    """Drop every bound context key."""
    structlog.contextvars.clear_contextvars()


logger = get_logger("solvechain")
