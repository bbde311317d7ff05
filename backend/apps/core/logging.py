"""
structlog setup.

Events are snake_case names with key/value context:

    from apps.core.logging import get_logger

    logger = get_logger(__name__)
    logger.info("otp_sent", phone_last4="1234", verification_sid="VE123")

Request context (correlation_id, network.client.ip) is bound by
CorrelationIdMiddleware through structlog.contextvars.
"""

import logging
import sys

import structlog
from structlog.types import EventDict, Processor

from apps.core.utils import phone_last4

PHONE_FIELDS = ("phone", "phone_number", "to")


def _mask_phone_fields(logger: logging.Logger, method_name: str, event_dict: EventDict) -> EventDict:
    """Replace full phone numbers with their last four digits."""
    for field in PHONE_FIELDS:
        value = event_dict.pop(field, None)
        if isinstance(value, str):
            event_dict["phone_last4"] = phone_last4(value)
    return event_dict


def configure_logging(json_format: bool = True, log_level: str = "INFO") -> None:
    """
    Route structlog and stdlib logging (Django included) through one handler.

    Args:
        json_format: JSON lines when True, colored console output otherwise.
        log_level: Root level name; unknown names fall back to INFO.
    """
    shared: list[Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.processors.TimeStamper(fmt="iso", utc=True),
        _mask_phone_fields,
    ]

    renderer: Processor
    if json_format:
        shared.append(structlog.processors.format_exc_info)
        renderer = structlog.processors.JSONRenderer()
    else:
        renderer = structlog.dev.ConsoleRenderer()

    structlog.configure(
        processors=[*shared, structlog.stdlib.ProcessorFormatter.wrap_for_formatter],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(
        structlog.stdlib.ProcessorFormatter(
            foreign_pre_chain=shared,
            processors=[structlog.stdlib.ProcessorFormatter.remove_processors_meta, renderer],
        )
    )

    root = logging.getLogger()
    root.handlers = [handler]
    root.setLevel(getattr(logging, log_level.upper(), logging.INFO))


def get_logger(name: str | None = None) -> structlog.stdlib.BoundLogger:
    return structlog.get_logger(name)
