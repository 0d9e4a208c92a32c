"""Structlog rendering for chronofmt's stdlib log records.

Library modules log through `logging.getLogger(__name__)`, which stays silent
until a host application opts in with `configure_logging`.
"""

from __future__ import annotations

import logging as std_logging
import sys
from typing import TextIO

import structlog

PACKAGE_LOGGER = "chronofmt"
_HANDLER_NAME = "chronofmt-structlog"


def _level_from_verbosity(verbosity: int) -> int:
    if verbosity <= 0:
        return std_logging.WARNING
    if verbosity == 1:
        return std_logging.INFO
    return std_logging.DEBUG


def _shared_processors() -> list[structlog.typing.Processor]:
    return [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.processors.TimeStamper(fmt="iso", utc=True),
    ]


def reset_logging() -> None:
    """Detach the handler installed by `configure_logging`."""

    package_logger = std_logging.getLogger(PACKAGE_LOGGER)
    for handler in list(package_logger.handlers):
        if handler.get_name() == _HANDLER_NAME:
            package_logger.removeHandler(handler)
            handler.close()
    package_logger.setLevel(std_logging.NOTSET)


def configure_logging(
    json_mode: bool = False,
    verbosity: int = 0,
    *,
    stream: TextIO | None = None,
) -> None:
    """Render `chronofmt.*` records through structlog onto `stream` (stderr by default).

    Only the package logger is touched; the root logger and its handlers
    belong to the host. Calling this again replaces the previous handler.
    """

    level = _level_from_verbosity(verbosity)
    renderer: structlog.typing.Processor = (
        structlog.processors.JSONRenderer() if json_mode else structlog.dev.ConsoleRenderer()
    )

    handler = std_logging.StreamHandler(stream if stream is not None else sys.stderr)
    handler.set_name(_HANDLER_NAME)
    handler.setFormatter(
        structlog.stdlib.ProcessorFormatter(
            foreign_pre_chain=[*_shared_processors(), structlog.stdlib.ExtraAdder()],
            processors=[
                structlog.stdlib.ProcessorFormatter.remove_processors_meta,
                renderer,
            ],
        )
    )

    reset_logging()
    package_logger = std_logging.getLogger(PACKAGE_LOGGER)
    package_logger.addHandler(handler)
    package_logger.setLevel(level)

    # structlog loggers named under `chronofmt` share the same handler.
    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            *_shared_processors(),
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=False,
    )
