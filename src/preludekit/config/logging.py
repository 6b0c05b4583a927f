"""structlog rendering for preludekit's own log records.

The library logs through ``logging.getLogger(__name__)`` at debug level
and leaves handler setup to the application. :func:`configure_logging`
is an opt-in helper that renders the ``preludekit`` logger tree with
structlog's ``ProcessorFormatter``. It touches that logger only, so the
root logger and any handlers the host application installed stay as they
were.

Two output modes:
- Human (default): colored console output to stderr
- JSON (log_json=True): Structured JSON lines to stderr
"""

from __future__ import annotations

import logging
import sys

import structlog

from preludekit.config.settings import get_settings

LOGGER_NAME = "preludekit"


class PreludeHandler(logging.StreamHandler):
    """The stderr handler installed by :func:`configure_logging`."""


def _formatter(log_json: bool) -> structlog.stdlib.ProcessorFormatter:
    pre_chain: list[structlog.types.Processor] = [
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.UnicodeDecoder(),
    ]
    if log_json:
        renderer: structlog.types.Processor = structlog.processors.JSONRenderer()
    else:
        renderer = structlog.dev.ConsoleRenderer(colors=sys.stderr.isatty())
    return structlog.stdlib.ProcessorFormatter(
        foreign_pre_chain=pre_chain,
        processors=[
            structlog.stdlib.ProcessorFormatter.remove_processors_meta,
            renderer,
        ],
    )


def configure_logging(
    *,
    verbose: bool | None = None,
    log_json: bool | None = None,
) -> logging.Logger:
    """Route ``preludekit`` records to stderr through structlog.

    Replaces the handler from any earlier call and stops propagation, so
    records are not also emitted by the root logger's handlers.

    Args:
        verbose: Enable DEBUG-level output for ``preludekit``. When False,
            only WARNING+. Defaults to the ``verbose`` setting.
        log_json: Use JSON renderer instead of console renderer. Defaults
            to the ``log_json`` setting.

    Returns:
        The configured ``preludekit`` logger.
    """
    settings = get_settings()
    if verbose is None:
        verbose = settings.verbose
    if log_json is None:
        log_json = settings.log_json

    handler = PreludeHandler(sys.stderr)
    handler.setFormatter(_formatter(log_json))

    prelude_logger = logging.getLogger(LOGGER_NAME)
    for old in [h for h in prelude_logger.handlers if isinstance(h, PreludeHandler)]:
        prelude_logger.removeHandler(old)
        old.close()
    prelude_logger.addHandler(handler)
    prelude_logger.setLevel(logging.DEBUG if verbose else logging.WARNING)
    prelude_logger.propagate = False
    return prelude_logger
