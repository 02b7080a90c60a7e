"""Structured logging for mutation outcomes and store failures."""

import json
import logging
from datetime import datetime, timezone
from typing import Any, Dict, Optional

from django.conf import settings


class StructuredLogger:
    """Structured JSON logging for failures and the audit trail."""

    def __init__(self, name: str):
        self.logger = logging.getLogger(name)

    def _build_log(self, level: str, message: str, **context: Any) -> Dict:
        """Build structured log entry."""
        return {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": level,
            "message": message,
            "service": "admindash",
            "environment": "production" if settings.DEBUG is False else "development",
            **context
        }

    def info(self, message: str, **context: Any) -> None:
        log_entry = self._build_log("INFO", message, **context)
        self.logger.info(json.dumps(log_entry, default=str))

    def warning(self, message: str, **context: Any) -> None:
        log_entry = self._build_log("WARNING", message, **context)
        self.logger.warning(json.dumps(log_entry, default=str))

    def error(self, message: str, exception: Optional[BaseException] = None, **context: Any) -> None:
        """Log error with exception details."""
        log_entry = self._build_log("ERROR", message, **context)
        if exception:
            log_entry["exception"] = {
                "type": type(exception).__name__,
                "message": str(exception),
            }
            cause = exception.__cause__
            if cause is not None:
                log_entry["exception"]["cause"] = {
                    "type": type(cause).__name__,
                    "message": str(cause),
                }
        self.logger.error(json.dumps(log_entry, default=str))

    def audit(self, action: str, resource: Optional[str] = None, **details: Any) -> None:
        """Log audit trail entry for a committed mutation."""
        log_entry = self._build_log("AUDIT", action, resource=resource, **details)
        self.logger.info(json.dumps(log_entry, default=str))
