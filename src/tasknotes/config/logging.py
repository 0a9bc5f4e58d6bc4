"""structlog configuration for tasknotes.

All log output goes to stderr so stdout stays clean for results:
- Human (default): console renderer, colored when stderr is a terminal
- JSON (--log-json): one JSON object per line

Records from the stdlib ``logging`` loggers used across the package pass
through the same processor chain, so every line carries the vault name
bound by :func:`configure_logging`.
"""

from __future__ import annotations

import logging
import sys

import structlog

PACKAGE_LOGGER = "tasknotes"


def package_level(*, verbose: bool = False, quiet: bool = False) -> int:
    """Level for the ``tasknotes`` logger: DEBUG with -v, ERROR with -q."""
    if verbose:
        return logging.DEBUG
    if quiet:
        return logging.ERROR
    return logging.WARNING


def configure_logging(
    *,
    verbose: bool = False,
    quiet: bool = False,
    log_json: bool = False,
    vault_name: str | None = None,
) -> None:
    """Route tasknotes logging to stderr through structlog.

    Args:
        verbose: DEBUG output for tasknotes loggers (wins over *quiet*).
        quiet: Only errors, so rename warnings do not clutter ``-q`` runs.
        log_json: Use the JSON renderer instead of the console renderer.
        vault_name: Bound into every record as ``vault``.
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

    # Third-party libraries stay at WARNING whatever the flags say.
    root_logger = logging.getLogger()
    root_logger.handlers.clear()
    root_logger.addHandler(handler)
    root_logger.setLevel(logging.WARNING)
    logging.getLogger(PACKAGE_LOGGER).setLevel(package_level(verbose=verbose, quiet=quiet))

    structlog.contextvars.clear_contextvars()
    if vault_name:
        structlog.contextvars.bind_contextvars(vault=vault_name)


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
        # Note names carry emoji; emit them unescaped.
        return structlog.processors.JSONRenderer(ensure_ascii=False)
    return structlog.dev.ConsoleRenderer(colors=sys.stderr.isatty())
