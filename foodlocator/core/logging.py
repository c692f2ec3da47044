"""Structured logging setup."""
import logging, sys, json
from typing import Optional

_EXTRA_FIELDS = ("request_id", "generation", "duration_ms", "service_name")


class JsonFormatter(logging.Formatter):
    def format(self, record):
        base = {
            "level": record.levelname,
            "message": record.getMessage(),
            "logger": record.name,
        }
        for key in _EXTRA_FIELDS:
            value = getattr(record, key, None)
            if value is not None:
                base[key] = value
        if record.exc_info:
            base["exc_info"] = self.formatException(record.exc_info)
        return json.dumps(base, default=str)


def configure_logging(
    level: str = "INFO",
    json_format: bool = True,
    text_format: str = "%(asctime)s %(levelname)s %(name)s %(message)s",
    log_file: Optional[str] = None,
) -> None:
    root = logging.getLogger()
    if root.handlers:
        return
    root.setLevel(level)
    if log_file:
        handler: logging.Handler = logging.FileHandler(log_file)
    else:
        handler = logging.StreamHandler(sys.stdout)
    if json_format:
        handler.setFormatter(JsonFormatter())
    else:
        handler.setFormatter(logging.Formatter(text_format))
    root.addHandler(handler)
