"""Structured JSON logging configuration.

Configures Python logging to emit JSON-formatted log entries with required
fields: request_id, level, timestamp. Per-request fields are added
contextually (method, url, status, error_code, duration_ms).

SECURITY: Never logs bearer tokens, Authorization headers or stored credentials.
"""

from __future__ import annotations

import json
import logging
import re
from datetime import datetime, timezone
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from homekrew_api.config.settings import ClientSettings


# Patterns that should be redacted from log output
_SENSITIVE_PATTERNS = re.compile(
    r"(access.token|auth.token|token|secret|password|credential|otp|authorization)"
    r"[\"']?[\s]*[=:]\s*[\"']?(?:bearer\s+)?[^\s,}\"']+",
    re.IGNORECASE,
)
_BEARER_PATTERN = re.compile(r"bearer\s+[A-Za-z0-9\-._~+/]+=*", re.IGNORECASE)

_CONTEXT_FIELDS = ("method", "url", "status", "error_code", "duration_ms", "is_multipart")


class JsonFormatter(logging.Formatter):
    """Formats log records as JSON with structured fields.

    Each entry contains at minimum: request_id, level, timestamp, message.
    Additional fields can be attached via the ``extra`` dict on log calls.
    """

    def format(self, record: logging.LogRecord) -> str:
        entry: dict = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": self._sanitize(record.getMessage()),
            "request_id": getattr(record, "request_id", None),
        }

        for name in _CONTEXT_FIELDS:
            if hasattr(record, name):
                value = getattr(record, name)
                entry[name] = self._sanitize(value) if isinstance(value, str) else value

        if record.exc_info and record.exc_info[1]:
            entry["exception"] = self._sanitize(
                self.formatException(record.exc_info)
            )

        return json.dumps(entry, default=str)

    @staticmethod
    def _sanitize(text: str) -> str:
        """Remove sensitive values from log text."""
        text = _SENSITIVE_PATTERNS.sub("[REDACTED]", text)
        return _BEARER_PATTERN.sub("[REDACTED]", text)


def configure_logging(level: str = "INFO", json_logs: bool = True) -> None:
    """Configure the root logger.

    Parameters
    ----------
    level:
        Log level string (DEBUG, INFO, WARNING, ERROR, CRITICAL).
    json_logs:
        Emit JSON lines when True, plain text otherwise.
    """
    root = logging.getLogger()
    root.setLevel(getattr(logging, level.upper(), logging.INFO))

    # Remove existing handlers to avoid duplicates
    root.handlers.clear()

    handler = logging.StreamHandler()
    if json_logs:
        handler.setFormatter(JsonFormatter())
    else:
        handler.setFormatter(
            logging.Formatter("%(asctime)s %(levelname)s %(name)s %(message)s")
        )
    root.addHandler(handler)


def configure_logging_from_settings(settings: ClientSettings) -> None:
    """Apply ``log_level`` and ``json_logs`` from ``ClientSettings``."""
    configure_logging(settings.log_level, json_logs=settings.json_logs)
