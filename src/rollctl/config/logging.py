"""structlog setup for the CLI.

What rollctl logs is small: services emit ``rule.rejected`` (info) for
every failed guard, and ``@traced`` emits ``span.complete`` (debug) when
``--verbose`` turns telemetry on.  Both are hidden unless ``-v`` lowers the
``rollctl`` logger to DEBUG.  Log lines always go to stderr so that
``--json`` results on stdout stay machine-readable; ``--log-json`` switches
the lines themselves to JSON.
"""

from __future__ import annotations

import logging
import sys

import structlog

# Processors shared by structlog events and foreign stdlib records.
_SHARED_PROCESSORS: list[structlog.types.Processor] = [
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
) -> None:
    """Route structlog and stdlib records through one stderr handler.

    Safe to call once per CLI invocation: the root handler list is replaced,
    not appended to.  Third-party loggers stay at WARNING whatever
    *verbose* says.
    """
    structlog.configure(
        processors=[*_SHARED_PROCESSORS, structlog.stdlib.ProcessorFormatter.wrap_for_formatter],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=False,
    )

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(
        structlog.stdlib.ProcessorFormatter(
            foreign_pre_chain=_SHARED_PROCESSORS,
            processors=[
                structlog.stdlib.ProcessorFormatter.remove_processors_meta,
                _renderer(log_json),
            ],
        )
    )

    root = logging.getLogger()
    root.handlers = [handler]
    root.setLevel(logging.WARNING)
    logging.getLogger("rollctl").setLevel(logging.DEBUG if verbose else logging.WARNING)
