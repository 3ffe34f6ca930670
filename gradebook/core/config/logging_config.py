import logging.config
import os

from gradebook.core.config.settings import get_settings

ROTATE_BYTES = 10 * 1024 * 1024
ROTATE_BACKUPS = 5

def _rotating(filename: str, level: str = "NOTSET") -> dict:
    return {
        "class": "logging.handlers.RotatingFileHandler",
        "formatter": "json",
        "filename": filename,
        "maxBytes": ROTATE_BYTES,
        "backupCount": ROTATE_BACKUPS,
        "encoding": "utf-8",
        "level": level,
    }

def setup_logging():
    """
    Configure console + JSON file logging.

    gradebook.log   everything from the gradebook package
    grading.log     service-level audit trail (columns, assignments, results)
    error.log       ERROR and above from anywhere
    """
    settings = get_settings()
    log_dir = settings.LOG_DIR
    os.makedirs(log_dir, exist_ok=True)

    config = {
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": {
            "console": {
                "format": "%(asctime)s - %(name)s - %(levelname)s - %(message)s",
                "datefmt": "%Y-%m-%d %H:%M:%S",
            },
            "json": {
                "()": "pythonjsonlogger.json.JsonFormatter",
                "fmt": "%(asctime)s %(name)s %(levelname)s %(module)s %(lineno)d %(message)s",
                "rename_fields": {"asctime": "timestamp", "levelname": "level"},
            },
        },
        "handlers": {
            "console": {
                "class": "logging.StreamHandler",
                "formatter": "console",
                "stream": "ext://sys.stdout",
            },
            "app_file": _rotating(os.path.join(log_dir, "gradebook.log")),
            "grading_file": _rotating(os.path.join(log_dir, "grading.log")),
            "error_file": _rotating(os.path.join(log_dir, "error.log"), level="ERROR"),
        },
        "loggers": {
            "": {
                "handlers": ["console", "error_file"],
                "level": "WARNING",
            },
            "gradebook": {
                "handlers": ["console", "app_file", "error_file"],
                "level": settings.LOG_LEVEL,
                "propagate": False,
            },
            # Also reaches app_file through the parent gradebook logger
            "gradebook.services": {
                "handlers": ["grading_file"],
                "level": settings.LOG_LEVEL,
                "propagate": True,
            },
            "sqlalchemy.engine": {
                "handlers": ["app_file"],
                "level": "INFO" if settings.DATABASE_ECHO else "WARNING",
                "propagate": False,
            },
        },
    }

    logging.config.dictConfig(config)
    return logging.getLogger("gradebook")
