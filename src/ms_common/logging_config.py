"""Logging setup.

Every record gets a ``customer_id`` attribute from the current request
context so log lines can be correlated per customer:

    2026-10-19 10:00:00 INFO ms.account.cache [cust1] Cache HIT: accounts:cust1
"""

import logging
import logging.config

from src.ms_common.request_context import current_request_context

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s [%(customer_id)s] %(message)s"


class CustomerContextFilter(logging.Filter):
    def filter(self, record: logging.LogRecord) -> bool:
        record.customer_id = current_request_context().get()
        return True


def configure_logging(level: str = "INFO") -> None:
    logging.config.dictConfig(
        {
            "version": 1,
            "disable_existing_loggers": False,
            "filters": {
                "customer_context": {"()": CustomerContextFilter},
            },
            "formatters": {
                "default": {"format": LOG_FORMAT},
            },
            "handlers": {
                "console": {
                    "class": "logging.StreamHandler",
                    "formatter": "default",
                    "filters": ["customer_context"],
                },
            },
            "loggers": {
                "ms": {"handlers": ["console"], "level": level.upper(), "propagate": False},
            },
        }
    )
