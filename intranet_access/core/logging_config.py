"""Logging setup for the access service.

One stdout handler on the root logger. Production emits one JSON object
per line; development can switch to plain text with ``LOG_FORMAT=text``.
Both formats pass through a filter that masks bearer tokens and secrets,
since denied requests are logged together with what the caller sent.
"""

import contextvars
import json
import logging
import re
import sys
from datetime import datetime, timezone
from typing import Optional

# Request id of the request being served, set by RequestContextMiddleware.
request_id_var: contextvars.ContextVar[str] = contextvars.ContextVar("request_id", default="")

_TEXT_FORMAT = "%(asctime)s %(levelname)-8s [%(name)s] %(message)s"
_NOISY_LOGGERS = ("uvicorn.access", "sqlalchemy.engine")

# Attributes every LogRecord has; anything else on a record came from ``extra``.
_STANDARD_ATTRS = frozenset(vars(logging.makeLogRecord({}))) | {"message", "asctime"}

_MASK = "***REDACTED***"
_SECRET_PATTERNS = (
    re.compile(r"(?i)(bearer\s+)[\w.\-]{20,}"),
    re.compile(r"""(?i)((?:secret|password|token|authorization)[=:]\s*)[^\s,'"]{8,}"""),
)


def redact(text: str) -> str:
    """Mask bearer tokens and ``secret=...`` style values in *text*."""
    for pattern in _SECRET_PATTERNS:
        text = pattern.sub(lambda m: m.group(1) + _MASK, text)
    return text


class JsonLineFormatter(logging.Formatter):
    """Render a record as a single JSON line, ``extra`` fields inlined.

    ``logger.info("Access denied", extra={"reason": "totem"})`` becomes
    ``{"message": "Access denied", "reason": "totem", ...}``.
    """

    def format(self, record: logging.LogRecord) -> str:
        entry = {
            "timestamp": datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        request_id = request_id_var.get()
        if request_id:
            entry["request_id"] = request_id
        entry.update(
            (key, value) for key, value in vars(record).items()
            if key not in _STANDARD_ATTRS and key not in entry
        )
        if record.exc_info:
            entry["exc_info"] = self.formatException(record.exc_info)
        return json.dumps(entry, default=str)


class RedactingFilter(logging.Filter):
    """Apply :func:`redact` to the message and any cached traceback text."""

    def filter(self, record: logging.LogRecord) -> bool:
        record.msg = redact(str(record.msg))
        if record.exc_text:
            record.exc_text = redact(record.exc_text)
        return True


def setup_logging(log_level: Optional[str] = None, log_format: Optional[str] = None) -> None:
    """Install the stdout handler on the root logger, replacing any others.

    Args:
        log_level: Standard level name. Defaults to INFO.
        log_format: ``"json"`` (default) or ``"text"``.
    """
    level = (log_level or "INFO").upper()
    fmt = (log_format or "json").lower()

    handler = logging.StreamHandler(sys.stdout)
    handler.addFilter(RedactingFilter())
    handler.setFormatter(JsonLineFormatter() if fmt == "json" else logging.Formatter(_TEXT_FORMAT))

    root = logging.getLogger()
    root.handlers[:] = [handler]
    root.setLevel(level)
    for name in _NOISY_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)

    logging.getLogger(__name__).info("Logging configured", extra={"level": level, "format": fmt})
