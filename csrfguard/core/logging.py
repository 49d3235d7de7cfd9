import logging
from logging.config import dictConfig
from typing import Optional


def configure_logging(log_level: str = "INFO", csrf_log_level: Optional[str] = None) -> None:
    """Configure application logging.

    The ``csrfguard`` logger tree gets its own handler and level so token
    rejections (``csrf_token_missing``, ``csrf_token_mismatch``) can be kept
    at WARNING while the rest of the app logs more or less.
    """
    csrf_log_level = csrf_log_level or log_level
    dictConfig(
        {
            "version": 1,
            "disable_existing_loggers": False,
            "formatters": {
                "standard": {
                    "format": "%(asctime)s %(levelname)s [%(name)s] %(message)s",
                    "datefmt": "%Y-%m-%dT%H:%M:%S%z",
                },
                "csrf": {
                    "format": "%(asctime)s %(levelname)s [%(name)s] csrf event=%(message)s",
                    "datefmt": "%Y-%m-%dT%H:%M:%S%z",
                },
            },
            "handlers": {
                "default": {
                    "level": log_level,
                    "formatter": "standard",
                    "class": "logging.StreamHandler",
                },
                "csrf": {
                    "level": csrf_log_level,
                    "formatter": "csrf",
                    "class": "logging.StreamHandler",
                },
            },
            "loggers": {
                "": {
                    "handlers": ["default"],
                    "level": log_level,
                },
                "csrfguard": {
                    "handlers": ["csrf"],
                    "level": csrf_log_level,
                    "propagate": False,
                },
                "uvicorn": {
                    "handlers": ["default"],
                    "level": log_level,
                    "propagate": False,
                },
            },
        }
    )

    logging.getLogger("csrfguard").info(
        "logging_configured", extra={"level": log_level, "csrf_level": csrf_log_level}
    )
