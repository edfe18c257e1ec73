"""Shared utilities and components for the relay services."""

from .config import BaseAwsConfig, BaseLoggingConfig, BaseServiceConfig

__all__ = [
    "BaseServiceConfig",
    "BaseLoggingConfig",
    "BaseAwsConfig",
]
