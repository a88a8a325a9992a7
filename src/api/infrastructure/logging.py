"""Structlog setup for the dashboard shell."""

import logging
import os
import sys
from typing import Literal

import structlog

LogFormat = Literal["auto", "console", "json"]


def _use_console_renderer(log_format: LogFormat) -> bool:
    if log_format != "auto":
        return log_format == "console"
    # FORCE_COLOR=1 keeps colors in containers without a TTY
    if os.environ.get("FORCE_COLOR", "").lower() in ("1", "true", "yes"):
        return True
    return sys.stdout.isatty()


def _service_stamper(service: str) -> structlog.types.Processor:
    def stamp(
        logger: object, method_name: str, event_dict: structlog.types.EventDict
    ) -> structlog.types.EventDict:
        event_dict.setdefault("service", service)
        return event_dict

    return stamp


def build_processors(
    log_format: LogFormat = "auto", service: str = "dashboard-shell"
) -> list[structlog.types.Processor]:
    """Return the processor chain for the chosen output format.

    Console output is colored; JSON output renders tracebacks inline so a
    failed tenant switch stays on one line in log aggregators.
    """
    processors: list[structlog.types.Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        _service_stamper(service),
    ]
    if _use_console_renderer(log_format):
        processors.append(structlog.dev.ConsoleRenderer(colors=True))
    else:
        processors.extend(
            [
                structlog.processors.dict_tracebacks,
                structlog.processors.JSONRenderer(),
            ]
        )
    return processors


def configure_logging(
    level: str = "INFO",
    log_format: LogFormat = "auto",
    service: str = "dashboard-shell",
) -> None:
    """Configure structlog for the process.

    Args:
        level: Minimum level name (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        log_format: "console", "json", or "auto" to pick from the terminal
        service: Value of the ``service`` key added to every event
    """
    min_level = logging.getLevelNamesMapping().get(level.upper(), logging.INFO)

    structlog.configure(
        processors=build_processors(log_format, service),
        wrapper_class=structlog.make_filtering_bound_logger(min_level),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(),
        cache_logger_on_first_use=True,
    )
