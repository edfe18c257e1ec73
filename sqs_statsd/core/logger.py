from __future__ import annotations

import logging

from shared.logging.json import configure_logging as shared_configure_logging
from shared.logging.logger import get_logger as shared_get_logger

from .config import Settings

_ROOT = "sqs_statsd"


def configure_logging(settings: Settings) -> logging.Logger:
    """Install the shared JSON handler using the relay's settings."""
    return shared_configure_logging(
        service=settings.service_name,
        level=settings.effective_log_level,
        environment=settings.app_environment,
        redaction_patterns=settings.app_log_redaction_patterns,
    )


def get_logger(name: str) -> logging.Logger:
    """Get a logger namespaced under the relay package."""
    return shared_get_logger(f"{_ROOT}.{name}")
