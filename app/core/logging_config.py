"""
Logging setup shared by the UniSearch API and the notification relay.

Both processes log to stdout and to their own rotating file under LOG_DIR.
Payloads that may carry credentials or rendered email bodies go through
`sanitize_log_data` first.
"""
import logging
import sys
from pathlib import Path
from logging.handlers import RotatingFileHandler

from app.core import config

CONSOLE_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
FILE_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(funcName)s:%(lineno)d - %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

# boto3 and requests log every request at INFO/DEBUG
QUIET_LOGGERS = ("uvicorn", "uvicorn.access", "botocore", "boto3", "s3transfer", "urllib3")

SENSITIVE_KEYS = ("password", "token", "secret", "key", "authorization", "database_url")
BODY_KEYS = ("html", "text")


def _handler(handler: logging.Handler, level: int, fmt: str) -> logging.Handler:
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter(fmt, datefmt=DATE_FORMAT))
    return handler


def setup_logging(log_level: str = "INFO", log_file: str = "unisearch.log", log_dir: str = None):
    """
    Configure the root logger for one process.

    Args:
        log_level: Logging level name; unknown names fall back to INFO
        log_file: File name inside the log directory (the relay uses relay.log)
        log_dir: Directory for rotating log files, LOG_DIR by default
    """
    level = getattr(logging, log_level.upper(), logging.INFO)

    directory = Path(log_dir or config.LOG_DIR)
    directory.mkdir(parents=True, exist_ok=True)

    root = logging.getLogger()
    root.setLevel(level)
    root.handlers.clear()
    root.addHandler(_handler(logging.StreamHandler(sys.stdout), level, CONSOLE_FORMAT))
    root.addHandler(_handler(
        RotatingFileHandler(directory / log_file, maxBytes=10 * 1024 * 1024, backupCount=5),
        level,
        FILE_FORMAT,
    ))

    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)


def sanitize_log_data(data: dict) -> dict:
    """
    Copy of `data` that is safe to log.

    Secret-looking keys are redacted, rendered email bodies are replaced by
    their length, and nested dicts and lists of dicts are handled the same way.
    """
    sanitized = {}
    for key, value in data.items():
        name = str(key).lower()
        if any(sensitive in name for sensitive in SENSITIVE_KEYS):
            sanitized[key] = "***REDACTED***"
        elif name in BODY_KEYS and isinstance(value, str):
            sanitized[key] = f"<{len(value)} chars>"
        elif isinstance(value, dict):
            sanitized[key] = sanitize_log_data(value)
        elif isinstance(value, list):
            sanitized[key] = [sanitize_log_data(v) if isinstance(v, dict) else v for v in value]
        else:
            sanitized[key] = value
    return sanitized
