"""Structured logging configuration using structlog.

Logs always go to stderr so they never mix with change output on stdout.
Events are named after what happened and carry the component that emitted
them:

    ledger.diff          diff_complete (debug): era stamped, change count
    ledger.era_document  update_committed (info), update_unchanged (debug)
    ledger.era_tree      era_tree_entry_ignored (warning): a malformed
                         persisted entry dropped in permissive mode
    ledger.store         document_loaded, era_document_missing,
                         era_document_loaded, era_document_saved (debug)
    cli.update           era_document_created (info)

The default level is ``warning``, so a healthy run only logs dropped era
entries.
"""

from __future__ import annotations

import logging
import sys

import structlog

LOG_FORMATS = ("json", "console")


def setup_logging(level: str = "warning", fmt: str = "json") -> None:
    """Configure structlog for the CLI.

    ``fmt`` selects JSON lines (for machines) or structlog's console
    renderer (for a terminal).
    """
    log_level = getattr(logging, level.upper(), logging.WARNING)
    renderer: structlog.typing.Processor
    if fmt == "console":
        renderer = structlog.dev.ConsoleRenderer(colors=False)
    else:
        renderer = structlog.processors.JSONRenderer()

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.add_log_level,
            structlog.processors.StackInfoRenderer(),
            structlog.dev.set_exc_info,
            structlog.processors.TimeStamper(fmt="iso", utc=True, key="ts"),
            renderer,
        ],
        wrapper_class=structlog.make_filtering_bound_logger(log_level),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(file=sys.stderr),
        cache_logger_on_first_use=True,
    )


def get_logger(component: str) -> structlog.stdlib.BoundLogger:
    """Get a logger bound with a component name."""
    return structlog.get_logger(component=component)  # type: ignore[return-value]
