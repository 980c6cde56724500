"""
Logging configuration shared by the API server and uvicorn.
"""

import logging.config
from typing import Any, Dict


def get_logging_config(level: str = "INFO") -> Dict[str, Any]:
    """Build a dictConfig mapping with every logger writing to stdout."""
    return {
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": {
            "default": {
                "format": "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
            },
            "access": {
                "format": "%(message)s"
            }
        },
        "handlers": {
            "default": {
                "class": "logging.StreamHandler",
                "formatter": "default",
                "stream": "ext://sys.stdout"
            },
            "access": {
                "class": "logging.StreamHandler",
                "formatter": "access",
                "stream": "ext://sys.stdout"
            }
        },
        "loggers": {
            "uvicorn": {
                "handlers": ["default"],
                "level": level,
                "propagate": False
            },
            "uvicorn.error": {
                "handlers": ["default"],
                "level": level,
                "propagate": False
            },
            "uvicorn.access": {
                "handlers": ["access"],
                "level": level,
                "propagate": False
            },
            "jolokia_api_server": {
                "handlers": ["default"],
                "level": level,
                "propagate": False
            }
        },
        "root": {
            "level": level,
            "handlers": ["default"]
        }
    }


def setup_logging(level: str = "INFO") -> None:
    logging.config.dictConfig(get_logging_config(level.upper()))
