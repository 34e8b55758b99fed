"""Settings and structlog configuration for vdomap.

Settings come from init kwargs, then ``VDOMAP_*`` environment variables, then
code defaults. Logging is never configured on import; applications call
:func:`configure_logging` once.
"""

from __future__ import annotations

import logging
import sys

import structlog
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Runtime settings.

    Attributes:
        serialize_cache: Lock stand-in cache population so concurrent first
            requests agree on one stand-in.
        verbose: Emit DEBUG output from ``vdomap`` loggers.
        log_json: Render log lines as JSON instead of console output.
    """

    model_config = SettingsConfigDict(env_prefix="VDOMAP_", frozen=True)

    serialize_cache: bool = True
    verbose: bool = False
    log_json: bool = False


LOGGER_NAME = "vdomap"


def _renderer(log_json: bool) -> structlog.types.Processor:
    if log_json:
        return structlog.processors.JSONRenderer()
    return structlog.dev.ConsoleRenderer(colors=sys.stderr.isatty())


def configure_logging(*, verbose: bool = False, log_json: bool = False) -> logging.Logger:
    """Route vdomap log events to stderr.

    Only the ``vdomap`` logger gets a handler and it stops propagating, so the
    host application's root logging setup is left as it was. Calling this
    again replaces the previous handler.

    Args:
        verbose: Emit DEBUG events (stand-in creation, evictions, traces).
        log_json: One JSON object per line instead of console output.
    """
    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=False,
    )

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(
        structlog.stdlib.ProcessorFormatter(
            processors=[
                structlog.stdlib.ProcessorFormatter.remove_processors_meta,
                _renderer(log_json),
            ],
        )
    )

    logger = logging.getLogger(LOGGER_NAME)
    logger.handlers = [handler]
    logger.propagate = False
    logger.setLevel(logging.DEBUG if verbose else logging.WARNING)
    return logger


def configure_from_settings(settings: Settings) -> logging.Logger:
    return configure_logging(verbose=settings.verbose, log_json=settings.log_json)
