"""Structured logging for the middleware.

Events are structlog key/value events handed to stdlib ``logging`` under the
``json_error_middleware`` logger, so the host service's handlers, formatters
and levels decide where they go. Nothing here touches structlog's global
configuration or the root logger.
"""

import logging

import structlog
from pydantic_settings import BaseSettings, SettingsConfigDict
from structlog.stdlib import BoundLogger

PACKAGE_LOGGER = "json_error_middleware"

_PROCESSORS: list[structlog.typing.Processor] = [
    structlog.stdlib.filter_by_level,
    structlog.contextvars.merge_contextvars,  # request-scoped context bound by the host
    structlog.stdlib.render_to_log_kwargs,
]


class LoggingSettings(BaseSettings):
    """Package log level, read from JSON_ERROR_MIDDLEWARE_LOG_LEVEL.

    Unset means the level is inherited from the host's logging config.
    """

    log_level: str | None = None

    model_config = SettingsConfigDict(
        env_prefix="JSON_ERROR_MIDDLEWARE_",
        extra="ignore",
    )


def configure_logging(settings: LoggingSettings) -> None:
    """Apply ``settings`` to the package logger only."""
    if settings.log_level:
        logging.getLogger(PACKAGE_LOGGER).setLevel(settings.log_level.upper())


def get_logger(name: str) -> BoundLogger:
    """Get a structured logger backed by the stdlib logger ``name``.

    Example:
        logger = get_logger(__name__)
        logger.debug("error_envelope_synthesized", status_code=404)
        # LogRecord: msg="error_envelope_synthesized", record.status_code == 404
    """
    return structlog.wrap_logger(  # type: ignore[no-any-return]
        logging.getLogger(name),
        processors=_PROCESSORS,
        wrapper_class=BoundLogger,
    )
