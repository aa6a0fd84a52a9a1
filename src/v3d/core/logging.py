"""
Structured logging configuration for v3d.

Uses structlog (https://www.structlog.org/) for structured, event-style log
lines. The kernel itself only ever calls ``get_logger``. The embedding
application decides the output format by calling ``configure_logging`` once.

Usage::

    from v3d.core.logging import configure_logging, get_logger

    configure_logging(level="DEBUG")
    logger = get_logger(__name__)
    logger.debug("hull_built", points=12, vertices=5)
"""

import logging
import sys
from decimal import Decimal
from fractions import Fraction
from typing import Any, Optional

import structlog


def render_rationals(
    logger: Any, method_name: str, event_dict: dict[str, Any]
) -> dict[str, Any]:
    """
    structlog processor rendering exact numbers as strings.

    ``Fraction`` and ``Decimal`` values are not JSON serialisable. They are
    written as ``"n/d"`` and plain decimal strings so that no precision is
    lost in the log.
    """
    for key, value in event_dict.items():
        if isinstance(value, (Fraction, Decimal)):
            event_dict[key] = str(value)
    return event_dict


def add_precision(
    logger: Any, method_name: str, event_dict: dict[str, Any]
) -> dict[str, Any]:
    """
    structlog processor stamping the default precision on each event.

    Events that pass their own ``oom`` or ``rm`` keep them.
    """
    from v3d.core.environment import default_environment

    env = default_environment()
    event_dict.setdefault("oom", env.oom)
    event_dict.setdefault("rm", env.rm.name)
    return event_dict


def configure_logging(
    level: str = "INFO",
    json_output: bool = False,
    log_file: Optional[str] = None,
) -> None:
    """
    Configure structured logging for the kernel and its host application.

    Args:
        level: Minimum log level (DEBUG, INFO, WARNING, ERROR, CRITICAL).
        json_output: If True, output JSON lines. If False, output
                     console-friendly lines.
        log_file: Optional path to write logs to a file in addition to stderr.
    """
    log_level = getattr(logging, level.upper(), logging.INFO)

    handlers: list[logging.Handler] = [logging.StreamHandler(sys.stderr)]
    if log_file:
        handlers.append(logging.FileHandler(log_file))

    logging.basicConfig(
        format="%(message)s",
        level=log_level,
        handlers=handlers,
        force=True,
    )

    shared_processors: list[structlog.types.Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt="iso"),
        add_precision,
        render_rationals,
        structlog.processors.StackInfoRenderer(),
    ]

    if json_output:
        renderer: structlog.types.Processor = structlog.processors.JSONRenderer()
    else:
        renderer = structlog.dev.ConsoleRenderer()

    structlog.configure(
        processors=[
            *shared_processors,
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    formatter = structlog.stdlib.ProcessorFormatter(
        processors=[
            structlog.stdlib.ProcessorFormatter.remove_processors_meta,
            renderer,
        ],
    )

    for handler in logging.root.handlers:
        handler.setFormatter(formatter)


def configure_from_config(config: Any) -> None:
    """Configure logging from a ``KernelConfig`` (``log_level``, ``json_logs``, ``log_file``)."""
    configure_logging(
        level=config.log_level,
        json_output=config.json_logs,
        log_file=config.log_file,
    )


def get_logger(name: str) -> structlog.stdlib.BoundLogger:
    """
    Get a structlog logger for the given module name.

    Args:
        name: Module name, typically ``__name__``.

    Returns:
        A bound structlog logger instance.
    """
    return structlog.get_logger(name)
