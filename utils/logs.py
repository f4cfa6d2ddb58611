"""Root logger setup for the ipcamsd command line."""

import json
import logging


class _JsonFormatter(logging.Formatter):
    """Emit log records as newline-delimited JSON."""

    def format(self, record: logging.LogRecord) -> str:
        data: dict = {
            "timestamp": self.formatTime(record, "%Y-%m-%dT%H:%M:%S"),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        # Merge extra fields added via logger.info("...", extra={...})
        for key in ("host", "url", "status", "date", "record"):
            if hasattr(record, key):
                data[key] = getattr(record, key)
        if record.exc_info:
            data["exc_info"] = self.formatException(record.exc_info)
        return json.dumps(data)


def configure_logging(log_format: str = "text", level: str = "INFO") -> logging.Handler:
    """Install one stream handler on the root logger.

    Args:
        log_format: "json" for JSON lines, anything else for plain messages
        level: Log level name, e.g. "INFO" or "debug"

    Returns:
        The installed handler
    """
    handler = logging.StreamHandler()
    if log_format == "json":
        handler.setFormatter(_JsonFormatter())
    else:
        handler.setFormatter(logging.Formatter("%(message)s"))
    numeric = getattr(logging, str(level).upper(), logging.INFO)
    logging.basicConfig(handlers=[handler], level=numeric, force=True)
    return handler
