"""Logging configuration for the service process."""

import logging.config
import sys


def setup_logging(log_level: str = "INFO") -> None:
    """Install console handlers; service warnings and above are copied to stderr."""

    log_level = log_level.upper()

    logging.config.dictConfig(
        {
            "version": 1,
            "disable_existing_loggers": False,
            "formatters": {
                "simple": {
                    "format": "%(asctime)s | %(levelname)-8s | %(name)-32s | %(message)s",
                },
            },
            "handlers": {
                "console": {
                    "formatter": "simple",
                    "class": "logging.StreamHandler",
                    "stream": sys.stdout,
                },
                "error_console": {
                    "formatter": "simple",
                    "class": "logging.StreamHandler",
                    "stream": sys.stderr,
                    "level": "WARNING",
                },
            },
            "loggers": {
                "": {
                    "handlers": ["console"],
                    "level": log_level,
                },
                "loyalty_ledger": {
                    "handlers": ["error_console"],
                    "level": log_level,
                },
                "apscheduler": {
                    "handlers": ["console"],
                    "level": "WARNING",
                    "propagate": False,
                },
            },
        }
    )
