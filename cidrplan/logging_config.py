"""Logging setup for the API.

Text format is meant for local development. JSON format writes one object
per line for log forwarders (Fluent Bit, Vector, Container Apps log
analytics). Modules keep using ``logging.getLogger(__name__)``; records are
rendered by structlog, and fields passed with ``extra={...}`` become
top-level keys.
"""

import logging

import structlog

from .config import LogFormat, get_log_format, get_log_level

# Applied to stdlib records before rendering
SHARED_PROCESSORS = [
    structlog.stdlib.add_logger_name,
    structlog.stdlib.add_log_level,
    structlog.stdlib.ExtraAdder(),
    structlog.processors.TimeStamper(fmt="iso", utc=True),
    structlog.processors.StackInfoRenderer(),
    structlog.processors.format_exc_info,
    structlog.processors.UnicodeDecoder(),
]


def build_formatter(log_format: LogFormat) -> structlog.stdlib.ProcessorFormatter:
    if log_format == LogFormat.JSON:
        renderer = structlog.processors.JSONRenderer()
    else:
        renderer = structlog.dev.ConsoleRenderer(colors=False)

    return structlog.stdlib.ProcessorFormatter(
        foreign_pre_chain=SHARED_PROCESSORS,
        processors=[structlog.stdlib.ProcessorFormatter.remove_processors_meta, renderer],
    )


def configure_logging(logger_name: str = "cidrplan") -> logging.Logger:
    """Attach a single structlog-rendered stream handler to the package logger.

    Safe to call more than once; the previous handler is replaced.
    """
    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.stdlib.PositionalArgumentsFormatter(),
            structlog.processors.TimeStamper(fmt="iso", utc=True),
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    logger = logging.getLogger(logger_name)
    logger.setLevel(get_log_level())

    handler = logging.StreamHandler()
    handler.setFormatter(build_formatter(get_log_format()))

    for existing in list(logger.handlers):
        logger.removeHandler(existing)
    logger.addHandler(handler)

    return logger
