from datetime import datetime, timezone

import pytest
from sqs_statsd.core.config import Settings
from sqs_statsd.domain.models import Datapoint, Dimension, MetricDescriptor
from sqs_statsd.exceptions import CloudWatchError

RELAY_ENV_VARS = [
    "ACCESS_KEY",
    "SECRET_KEY",
    "AWS_ACCESS_KEY",
    "AWS_SECRET_KEY",
    "AWS_ACCESS_KEY_ID",
    "AWS_SECRET_ACCESS_KEY",
    "AWS_REGION",
    "AWS_REQUEST_TIMEOUT_SECONDS",
    "STATSD_HOST",
    "STATSD_PREFIX",
    "DEBUG",
    "VERBOSE",
    "METRICS_PORT",
    "SERVICE_NAME",
    "APP_LOG_LEVEL",
    "APP_ENVIRONMENT",
    "APP_LOG_REDACTION_PATTERNS",
]


@pytest.fixture(autouse=True)
def clean_environment(monkeypatch, tmp_path):
    """Isolate settings from the host environment and any local .env file."""
    for var in RELAY_ENV_VARS:
        monkeypatch.delenv(var, raising=False)
    monkeypatch.chdir(tmp_path)


@pytest.fixture
def settings() -> Settings:
    return Settings(
        aws_access_key="AKIDEXAMPLE",
        aws_secret_key="wJalrXUtnFEMI",
        aws_region="us-east-1",
    )


@pytest.fixture
def tick() -> datetime:
    return datetime(2024, 3, 1, 12, 30, tzinfo=timezone.utc)


def make_descriptor(queue: str, metric_name: str) -> MetricDescriptor:
    return MetricDescriptor(
        metric_name=metric_name,
        dimensions=(Dimension(name="QueueName", value=queue),),
    )


class FakeSink:
    """Records absolute() calls instead of sending UDP packets."""

    def __init__(self):
        self.points: list[tuple[str, int]] = []
        self.flushes = 0
        self.closed = False

    def absolute(self, name: str, value: int) -> None:
        self.points.append((name, value))

    def flush(self) -> None:
        self.flushes += 1

    def close(self) -> None:
        self.closed = True


class FakeCloudWatch:
    """Captures every query; answers from a table keyed by outbound name."""

    def __init__(self, sums=None, failing=()):
        self.sums: dict[str, list[float]] = dict(sums or {})
        self.failing = set(failing)
        self.queries = []
        self.closed = False

    def get_metric_statistics(self, query):
        self.queries.append(query)
        name = query.descriptor.outbound_name
        if name in self.failing:
            raise CloudWatchError(
                "Rate exceeded", operation="GetMetricStatistics", code="Throttling"
            )
        return [Datapoint(sum=s) for s in self.sums.get(name, [])]

    def close(self) -> None:
        self.closed = True


@pytest.fixture
def fake_sink() -> FakeSink:
    return FakeSink()


@pytest.fixture
def fake_cloudwatch() -> FakeCloudWatch:
    return FakeCloudWatch()


@pytest.fixture
def make_cloudwatch():
    return FakeCloudWatch


@pytest.fixture
def make_sink():
    return FakeSink


@pytest.fixture
def descriptor():
    return make_descriptor
