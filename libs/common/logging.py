"""Structured logging configuration for the injector.

This module standardizes logging using ``structlog``. It produces either JSON
(for machines) or a pretty console format (for humans) and binds where the
injector reads its credentials from, so logs are useful when aggregated with
the rest of the controller.

Typical usage
- Call ``setup_logging(config)`` once the ``InjectorConfig`` is loaded
- Acquire loggers via ``structlog.get_logger(name)`` or ``get_logger``
"""

import logging
import sys
from typing import Any, List

import structlog
from structlog.stdlib import LoggerFactory, add_logger_name

from libs.common.config import BaseConfig, InjectorConfig

SERVICE_NAME = "model-initializer-injector"


def build_processors(log_format: str) -> List[Any]:
    """Processor chain ending in a JSON or console renderer."""
    processors: List[Any] = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        add_logger_name,
    ]

    if log_format == "json":
        processors.append(structlog.processors.JSONRenderer())
    elif log_format == "console":
        processors.append(structlog.dev.ConsoleRenderer(colors=True))
    else:
        raise ValueError(f"Unsupported log format: {log_format}")
    return processors


def setup_logging(config: BaseConfig, service_name: str = SERVICE_NAME) -> None:
    """Configure structured logging from ``config``.

    Reads ``mi_log_level`` and ``mi_log_format`` and binds ``service`` and
    ``env`` to every log line. For an ``InjectorConfig`` the credentials config
    map location is bound too (``controller_namespace``, ``config_map``).
    """
    level = getattr(logging, config.mi_log_level.upper(), None)
    if not isinstance(level, int):
        raise ValueError(f"Unsupported log level: {config.mi_log_level}")

    logging.basicConfig(format="%(message)s", stream=sys.stdout, level=level)
    logging.getLogger().setLevel(level)

    structlog.configure(
        processors=build_processors(config.mi_log_format),
        wrapper_class=structlog.stdlib.BoundLogger,
        logger_factory=LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    context = {"service": service_name, "env": config.mi_env}
    if isinstance(config, InjectorConfig):
        context["controller_namespace"] = config.mi_controller_namespace
        context["config_map"] = config.mi_config_map_name

    structlog.contextvars.clear_contextvars()
    structlog.contextvars.bind_contextvars(**context)


def get_logger(name: str) -> structlog.BoundLogger:
    """Get a structured logger instance."""
    return structlog.get_logger(name)
