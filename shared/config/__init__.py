"""Shared configuration base classes.

Provides the logging and AWS settings every relay process needs so that
service-level ``Settings`` classes only declare what is specific to them.
"""

from pydantic import AliasChoices, Field, SecretStr
from pydantic_settings import BaseSettings, SettingsConfigDict


class BaseLoggingConfig(BaseSettings):
    """Common logging configuration for all services."""

    app_log_level: str = "INFO"
    app_log_redaction_patterns: list[str] = [
        "password",
        "token",
        "secret",
        "key",
        "authorization",
        "credential",
    ]
    app_environment: str = "production"


class BaseAwsConfig(BaseSettings):
    """Credentials and region for talking to AWS APIs.

    Both the short legacy variable names (``ACCESS_KEY``/``SECRET_KEY``) and the
    names used by the AWS SDKs are accepted.
    """

    model_config = SettingsConfigDict(populate_by_name=True)

    aws_access_key: SecretStr = Field(
        validation_alias=AliasChoices(
            "aws_access_key", "ACCESS_KEY", "AWS_ACCESS_KEY_ID"
        )
    )
    aws_secret_key: SecretStr = Field(
        validation_alias=AliasChoices(
            "aws_secret_key", "SECRET_KEY", "AWS_SECRET_ACCESS_KEY"
        )
    )
    aws_region: str = Field(
        default="us-east-1",
        validation_alias=AliasChoices("aws_region", "AWS_REGION"),
    )
    # None leaves botocore's own connect/read timeouts in place
    aws_request_timeout_seconds: float | None = Field(default=None, gt=0)


class BaseServiceConfig(BaseLoggingConfig, BaseAwsConfig):
    """Base configuration combining logging and AWS settings.

    Services should inherit from this and add their own specific settings.
    The service_name should be overridden by each service.
    """

    service_name: str = "unknown"  # Should be overridden by service


__all__ = ["BaseLoggingConfig", "BaseAwsConfig", "BaseServiceConfig"]
