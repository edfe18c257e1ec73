"""Shared logger utility.

``get_logger`` hands out standard library loggers. Until
``shared.logging.json.configure_logging`` runs, a plain stderr handler is
installed so that early startup errors (bad configuration, for instance) are
still visible.
"""

from __future__ import annotations

import logging

_configured = False

_FALLBACK_FORMAT = "%(asctime)s %(levelname)s %(name)s %(message)s"


def get_logger(name: str, auto_configure: bool = True) -> logging.Logger:
    """Get a logger that propagates to the root JSON handler.

    Args:
        name: Logger name (usually the dotted module path)
        auto_configure: Install the fallback handler if nothing is configured

    Returns:
        Logger instance
    """
    global _configured

    if auto_configure and not _configured:
        _configure_fallback_logging()
        _configured = True

    logger = logging.getLogger(name)
    logger.propagate = True
    return logger


def _configure_fallback_logging() -> None:
    root = logging.getLogger()
    if root.handlers:
        return
    handler = logging.StreamHandler()
    handler.setFormatter(logging.Formatter(_FALLBACK_FORMAT))
    root.addHandler(handler)
    root.setLevel(logging.INFO)


def mark_configured():
    """Called by shared.logging.json.configure_logging."""
    global _configured
    _configured = True
