"""
Structured logging setup.

Every write to the ledger is logged as a JSON line with the ids involved
bound as key/values, so a single expense can be traced from creation through
each contribution.
"""

import logging
import sys

import structlog

from houseledger.core.config import settings


def configure_logging(level: str | None = None) -> None:
    """Configure stdlib logging and structlog. Safe to call more than once."""
    log_level = getattr(logging, (level or settings.LOG_LEVEL).upper(), logging.INFO)

    logging.basicConfig(
        format="%(message)s",
        stream=sys.stdout,
        level=log_level,
    )
    logging.getLogger().setLevel(log_level)

    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.stdlib.PositionalArgumentsFormatter(),
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.processors.UnicodeDecoder(),
            structlog.processors.JSONRenderer()
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )


def get_logger(name: str) -> structlog.stdlib.BoundLogger:
    return structlog.get_logger(name)
