"""structlog configuration for applications embedding the discovery engine.

The library itself only obtains loggers via ``structlog.get_logger()`` and logs
at debug level; the host application decides the output format by calling
``configure_logging`` once at startup.
"""

import logging
import sys

import structlog

from discovery.config import get_settings


def configure_logging(log_level: str | None = None, json_logs: bool | None = None) -> None:
    """Configure stdlib logging and structlog.

    Args:
        log_level: Level name, defaults to the ``DISCOVERY_LOG_LEVEL`` setting
        json_logs: Render JSON lines instead of the console renderer
    """
    settings = get_settings()
    level_name = (log_level or settings.log_level).upper()
    use_json = settings.json_logs if json_logs is None else json_logs

    logging.basicConfig(
        format="%(message)s",
        stream=sys.stdout,
        level=getattr(logging, level_name, logging.INFO),
    )

    renderer = (
        structlog.processors.JSONRenderer()
        if use_json
        else structlog.dev.ConsoleRenderer()
    )

    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            renderer,
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )
