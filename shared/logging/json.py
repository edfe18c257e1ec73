"""Unified JSON logging utilities.

One log record becomes one JSON object per line. The standard ``LogRecord``
bookkeeping attributes are reduced to a fixed envelope (timestamp, level,
logger, event) and anything passed through ``extra=`` is merged in as
top-level fields, after sensitive keys have been redacted.
"""

from __future__ import annotations

import json
import logging
import os
import socket
import traceback
from datetime import datetime, timezone
from typing import Any, Iterable

REDACTED = "[REDACTED]"

# Attributes every LogRecord carries; anything else came in through ``extra=``.
_RECORD_ATTRS = frozenset(
    logging.LogRecord("", 0, "", 0, "", (), None).__dict__.keys()
) | {"message", "asctime", "taskName"}


class SensitiveDataFilter:
    def __init__(self, patterns: Iterable[str]):
        self.patterns = [p.lower() for p in patterns]

    def _is_sensitive(self, key: str) -> bool:
        lk = key.lower()
        return any(p in lk for p in self.patterns)

    def filter(self, data: dict) -> dict:
        out: dict[str, Any] = {}
        for k, v in data.items():
            if self._is_sensitive(str(k)):
                out[k] = REDACTED
            elif isinstance(v, dict):
                out[k] = self.filter(v)
            elif isinstance(v, (list, tuple)):
                out[k] = [self.filter(i) if isinstance(i, dict) else i for i in v]
            else:
                out[k] = v
        return out


class CustomJsonFormatter(logging.Formatter):  # type: ignore[misc]
    def __init__(
        self,
        service: str,
        environment: str,
        redaction_patterns: Iterable[str],
    ):
        super().__init__()
        self.hostname = socket.gethostname()
        self.pid = os.getpid()
        self.service_name = service
        self.environment = environment
        self.sensitive_filter = SensitiveDataFilter(redaction_patterns)

    @staticmethod
    def extra_fields(record: logging.LogRecord) -> dict[str, Any]:
        return {
            k: v
            for k, v in record.__dict__.items()
            if k not in _RECORD_ATTRS and not k.startswith("_")
        }

    def format(self, record: logging.LogRecord) -> str:  # type: ignore[override]
        data: dict[str, Any] = {
            "timestamp": datetime.fromtimestamp(
                record.created, timezone.utc
            ).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "event": record.getMessage(),
            "service": self.service_name,
            "hostname": self.hostname,
            "pid": self.pid,
            "environment": self.environment,
        }
        data.update(self.extra_fields(record))
        if record.exc_info:
            data["exception"] = self.format_exception(record.exc_info)
        data = self.sensitive_filter.filter(data)
        return json.dumps(data, default=str)

    @staticmethod
    def format_exception(exc_info):  # type: ignore[override]
        et, ev, tb = exc_info
        return {
            "type": et.__name__,
            "message": str(ev),
            "stack": traceback.format_tb(tb),
        }


def configure_logging(
    service: str,
    environment: str,
    level: str,
    redaction_patterns: Iterable[str],
):
    handler = logging.StreamHandler()
    handler.setFormatter(CustomJsonFormatter(service, environment, redaction_patterns))
    root = logging.getLogger()
    root.handlers = [handler]  # deterministic single handler
    level_no = getattr(logging, level.upper(), logging.INFO)
    root.setLevel(level_no)

    # botocore dumps every request at DEBUG
    for noisy in ("botocore", "boto3", "urllib3"):
        logging.getLogger(noisy).setLevel(max(level_no, logging.INFO))

    from shared.logging.logger import mark_configured

    mark_configured()
    return root


__all__ = [
    "CustomJsonFormatter",
    "configure_logging",
    "SensitiveDataFilter",
]
