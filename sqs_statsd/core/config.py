from typing import Any

from pydantic import AliasChoices, Field, ValidationError, field_validator
from pydantic_settings import SettingsConfigDict

from shared.config import BaseServiceConfig
from sqs_statsd.core.constants import Statsd
from sqs_statsd.exceptions import ConfigurationError


class Settings(BaseServiceConfig):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        populate_by_name=True,
    )

    # StatsD
    statsd_host: str = Field(
        default=Statsd.DEFAULT_HOST,
        validation_alias=AliasChoices("statsd_host", "STATSD_HOST"),
    )
    statsd_prefix: str = Statsd.PREFIX

    # Logging
    verbose: bool = Field(
        default=False,
        validation_alias=AliasChoices("verbose", "DEBUG"),
    )

    # Prometheus endpoint for the relay's own counters, 0 disables it
    metrics_port: int = Field(default=0, ge=0, le=65535)

    service_name: str = "sqs-statsd"

    @field_validator("statsd_host")
    @classmethod
    def _check_statsd_host(cls, value: str) -> str:
        host, sep, port = value.rpartition(":")
        if not sep or not host:
            raise ValueError(f"statsd host must be host:port, got {value!r}")
        if not port.isdigit() or not 0 < int(port) < 65536:
            raise ValueError(f"invalid statsd port in {value!r}")
        return value

    @property
    def statsd_address(self) -> tuple[str, int]:
        host, _, port = self.statsd_host.rpartition(":")
        return host.strip("[]"), int(port)

    @property
    def effective_log_level(self) -> str:
        return "DEBUG" if self.verbose else self.app_log_level


def load_settings(overrides: dict[str, Any] | None = None) -> Settings:
    """Build settings from CLI overrides, the environment and ``.env``.

    Raises:
        ConfigurationError: a required option is missing or a value is invalid.
    """
    try:
        return Settings(**(overrides or {}))
    except ValidationError as exc:
        fields = sorted(
            {".".join(str(p) for p in err["loc"]) for err in exc.errors()}
        )
        raise ConfigurationError(
            f"invalid configuration: {', '.join(fields)}"
        ) from exc
