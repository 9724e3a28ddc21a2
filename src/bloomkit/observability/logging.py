"""
Structured Logging for bloomkit.

Provides JSON-structured or plain-text logging for the library and CLI.
"""

import json
import logging
import re
import sys
from dataclasses import asdict, dataclass, field
from datetime import datetime, timezone

# Matches CR, LF, null bytes, and other control chars except tab
_CONTROL_CHAR_PATTERN = re.compile(r"[\x00-\x08\x0b\x0c\x0e-\x1f\x7f]")

PLAIN_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"


def _sanitize_log_message(message: str) -> str:
    """
    Sanitize log message to prevent log injection.

    Escapes newlines and carriage returns, and drops other control characters
    that could forge log entries or corrupt log parsers.
    """
    if not isinstance(message, str):
        message = str(message)

    message = message.replace("\r\n", "\\r\\n")
    message = message.replace("\n", "\\n")
    message = message.replace("\r", "\\r")

    return _CONTROL_CHAR_PATTERN.sub("", message)


@dataclass
class LogContext:
    """Structured log context."""
    timestamp: str = field(default_factory=lambda: datetime.now(timezone.utc).isoformat())
    level: str = "INFO"
    logger: str = "bloomkit"
    message: str = ""
    extra: dict = field(default_factory=dict)

    def to_json(self) -> str:
        """Convert to JSON string."""
        data = asdict(self)
        # Flatten extra into main dict
        extra = data.pop("extra", {})
        data.update(extra)
        return json.dumps(data, default=str)


class StructuredFormatter(logging.Formatter):
    """JSON formatter for structured logging."""

    def format(self, record: logging.LogRecord) -> str:
        """Format log record as JSON."""
        ctx = LogContext(
            timestamp=datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat(),
            level=record.levelname,
            logger=record.name,
            message=_sanitize_log_message(record.getMessage()),
        )

        if hasattr(record, "extra_fields"):
            ctx.extra = dict(record.extra_fields)

        if record.exc_info:
            ctx.extra["exception"] = self.formatException(record.exc_info)

        return ctx.to_json()


def configure_logging(
    level: str = "INFO",
    json_output: bool = True,
    log_file: str | None = None,
) -> None:
    """
    Configure logging for bloomkit.

    Args:
        level: Log level (DEBUG, INFO, WARNING, ERROR)
        json_output: Use JSON format (default: True)
        log_file: Optional file path for logs
    """
    numeric_level = getattr(logging, level.upper())
    root_logger = logging.getLogger()
    root_logger.setLevel(numeric_level)

    # Remove existing handlers
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setLevel(numeric_level)
    if json_output:
        console_handler.setFormatter(StructuredFormatter())
    else:
        console_handler.setFormatter(logging.Formatter(PLAIN_FORMAT))
    root_logger.addHandler(console_handler)

    if log_file:
        file_handler = logging.FileHandler(log_file)
        file_handler.setLevel(numeric_level)
        file_handler.setFormatter(StructuredFormatter())
        root_logger.addHandler(file_handler)

    for name in ["bloomkit", "bloomkit.filters", "bloomkit.core"]:
        logging.getLogger(name).setLevel(numeric_level)


def configure_from_settings(settings=None) -> None:
    """Apply ``log_level`` / ``log_json`` from settings."""
    from bloomkit.core.config import get_settings

    settings = settings or get_settings()
    configure_logging(level=settings.log_level, json_output=settings.log_json)


def get_logger(name: str) -> logging.Logger:
    """
    Get a logger with structured output.

    Args:
        name: Logger name (usually __name__)

    Returns:
        Configured logger
    """
    return logging.getLogger(name)
