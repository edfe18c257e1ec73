"""CloudWatch client wrapper."""

from __future__ import annotations

from typing import Any

import boto3
from botocore.config import Config
from botocore.exceptions import BotoCoreError, ClientError

from sqs_statsd.core.config import Settings
from sqs_statsd.core.logger import get_logger
from sqs_statsd.domain.models import Datapoint, StatQuery
from sqs_statsd.exceptions import CloudWatchError

logger = get_logger("cloudwatch.client")


def _client_config(settings: Settings) -> Config | None:
    timeout = settings.aws_request_timeout_seconds
    if timeout is None:
        return None
    # botocore retries are left at their defaults; the relay adds none of its own
    return Config(connect_timeout=timeout, read_timeout=timeout)


def _translate(exc: Exception, operation: str) -> CloudWatchError:
    if isinstance(exc, ClientError):
        code = exc.response.get("Error", {}).get("Code")
        return CloudWatchError(
            f"{operation} failed: {exc}", operation=operation, code=code
        )
    return CloudWatchError(f"{operation} failed: {exc}", operation=operation)


class CloudWatchClient:
    def __init__(self, settings: Settings, client: Any = None):
        self.region = settings.aws_region
        if client is None:
            client = boto3.client(
                "cloudwatch",
                region_name=settings.aws_region,
                aws_access_key_id=settings.aws_access_key.get_secret_value(),
                aws_secret_access_key=settings.aws_secret_key.get_secret_value(),
                config=_client_config(settings),
            )
        self.client = client

    def list_metrics(self, namespace: str) -> list[dict[str, Any]]:
        """Every metric series in ``namespace``, across all result pages."""
        metrics: list[dict[str, Any]] = []
        paginator = self.client.get_paginator("list_metrics")
        try:
            for page in paginator.paginate(Namespace=namespace):
                metrics.extend(page.get("Metrics", []))
        except (BotoCoreError, ClientError) as exc:
            raise _translate(exc, "ListMetrics") from exc
        logger.debug(
            "listed_metrics", extra={"namespace": namespace, "count": len(metrics)}
        )
        return metrics

    def get_metric_statistics(self, query: StatQuery) -> list[Datapoint]:
        descriptor = query.descriptor
        try:
            response = self.client.get_metric_statistics(
                Namespace=descriptor.namespace,
                MetricName=descriptor.metric_name,
                Dimensions=[
                    {"Name": d.name, "Value": d.value} for d in descriptor.dimensions
                ],
                StartTime=query.start_time,
                EndTime=query.end_time,
                Period=descriptor.period,
                Statistics=list(descriptor.statistics),
            )
        except (BotoCoreError, ClientError) as exc:
            raise _translate(exc, "GetMetricStatistics") from exc

        # Only the Sum aggregate is requested; entries without it are ignored
        return [
            Datapoint(
                sum=dp["Sum"], timestamp=dp.get("Timestamp"), unit=dp.get("Unit")
            )
            for dp in response.get("Datapoints", [])
            if "Sum" in dp
        ]

    def close(self) -> None:
        close_fn = getattr(self.client, "close", None)
        if callable(close_fn):
            close_fn()
