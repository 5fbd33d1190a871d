"""Structured logging for error mapping.

Every event carries the service name and version from settings. Classes
using ``LoggerMixin`` also tag events with their class name as
``component``; ``ErrorMapping`` binds the provider ``code`` and ``state``
of the request it is classifying.
"""

import logging
import sys
from collections.abc import Callable, MutableMapping
from typing import Any

import structlog
from structlog.processors import JSONRenderer, TimeStamper, add_log_level
from structlog.stdlib import add_logger_name, filter_by_level

from error_mapping.core.config import LogRecordFormat, Settings

EventDict = MutableMapping[str, Any]
Processor = Callable[[Any, str, EventDict], EventDict]


def service_context(service_name: str, version: str) -> Processor:
    """Processor stamping events with the service that produced them."""

    def processor(_logger: Any, _method_name: str, event_dict: EventDict) -> EventDict:
        event_dict.setdefault("service", service_name)
        event_dict.setdefault("version", version)
        return event_dict

    return processor


def setup_logging(settings: Settings) -> None:
    """Route structlog events through stdlib logging at the configured level."""
    log_level = settings.app.log_level.value

    processors: list[Any] = [
        filter_by_level,
        add_log_level,
        add_logger_name,
        service_context(settings.observability.service_name, settings.app.version),
        TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
    ]

    if settings.observability.log_record_format is LogRecordFormat.JSON:
        processors.append(JSONRenderer())
    else:
        processors.append(structlog.dev.ConsoleRenderer())

    structlog.configure(
        wrapper_class=structlog.make_filtering_bound_logger(log_level),
        processors=processors,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    logging.basicConfig(format="%(message)s", stream=sys.stdout, level=log_level)


def get_logger(name: str) -> structlog.BoundLogger:
    return structlog.get_logger(name)


class LoggerMixin:
    """Gives a class a logger bound to its module and class name."""

    @property
    def logger(self) -> structlog.BoundLogger:
        return get_logger(self.__class__.__module__).bind(component=self.__class__.__name__)
