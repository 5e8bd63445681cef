"""structlog setup for the reformcal CLI.

Both structlog loggers and the stdlib loggers used by the domain modules
end up in one stderr handler, rendered as console text or, with
``--log-json``, as JSON lines.  Each record carries the active reform
policy so a warning can be read without the command line at hand.
"""

from __future__ import annotations

import logging
import sys

import structlog

PACKAGE_LOGGER = "reformcal"


def _shared_processors() -> list[structlog.types.Processor]:
    return [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.UnicodeDecoder(),
    ]


def _renderer(log_json: bool) -> structlog.types.Processor:
    if log_json:
        return structlog.processors.JSONRenderer()
    return structlog.dev.ConsoleRenderer(colors=sys.stderr.isatty())


def configure_logging(
    *,
    verbose: bool = False,
    log_json: bool = False,
    reform: str | None = None,
) -> None:
    """Route all logging through structlog on stderr.

    Args:
        verbose: DEBUG for the ``reformcal`` loggers; otherwise WARNING.
            Other libraries stay at WARNING either way.
        log_json: Render JSON lines instead of console text.
        reform: Policy label bound to every record as ``reform``.
    """
    shared = _shared_processors()
    structlog.configure(
        processors=[*shared, structlog.stdlib.ProcessorFormatter.wrap_for_formatter],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=False,
    )

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(
        structlog.stdlib.ProcessorFormatter(
            foreign_pre_chain=shared,
            processors=[
                structlog.stdlib.ProcessorFormatter.remove_processors_meta,
                _renderer(log_json),
            ],
        )
    )

    root = logging.getLogger()
    root.handlers.clear()
    root.addHandler(handler)
    root.setLevel(logging.WARNING)
    logging.getLogger(PACKAGE_LOGGER).setLevel(logging.DEBUG if verbose else logging.WARNING)

    structlog.contextvars.clear_contextvars()
    if reform is not None:
        structlog.contextvars.bind_contextvars(reform=reform)
