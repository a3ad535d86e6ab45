"""structlog configuration for headr.

stdout carries file content only, so every log record goes to stderr:
console-formatted by default, JSON lines with ``--log-json``. The
``head: <name>: ...`` diagnostics are echoed directly and never depend on
the log level.

Records emitted while an input is processed carry a ``source`` field bound
through :mod:`structlog.contextvars` by the head executor.
"""

from __future__ import annotations

import logging
import sys

import structlog

_PRE_CHAIN: list[structlog.types.Processor] = [
    structlog.contextvars.merge_contextvars,
    structlog.stdlib.add_log_level,
    structlog.stdlib.add_logger_name,
    structlog.processors.TimeStamper(fmt="iso"),
]


def _renderer(log_json: bool) -> structlog.types.Processor:
    if log_json:
        return structlog.processors.JSONRenderer()
    return structlog.dev.ConsoleRenderer(colors=sys.stderr.isatty())


def configure_logging(*, verbose: bool = False, log_json: bool = False) -> None:
    """Route structlog and stdlib ``headr.*`` records to stderr.

    Safe to call once per run: handlers are replaced, not stacked, and
    context left bound by an earlier run in the same process is dropped.

    Args:
        verbose: Let ``headr`` loggers emit DEBUG. When False, only WARNING+.
        log_json: Render JSON lines instead of console output.
    """
    structlog.contextvars.clear_contextvars()
    structlog.configure(
        processors=[*_PRE_CHAIN, structlog.stdlib.ProcessorFormatter.wrap_for_formatter],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=False,
    )

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(
        structlog.stdlib.ProcessorFormatter(
            foreign_pre_chain=_PRE_CHAIN,
            processors=[
                structlog.stdlib.ProcessorFormatter.remove_processors_meta,
                _renderer(log_json),
            ],
        )
    )

    root_logger = logging.getLogger()
    root_logger.handlers.clear()
    root_logger.addHandler(handler)
    root_logger.setLevel(logging.WARNING)

    logging.getLogger("headr").setLevel(logging.DEBUG if verbose else logging.WARNING)
