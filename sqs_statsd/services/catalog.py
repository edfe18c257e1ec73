"""Metric catalog: the fixed set of series the relay polls."""

from __future__ import annotations

from pydantic import ValidationError

from sqs_statsd.core.constants import CloudWatch
from sqs_statsd.core.logger import get_logger
from sqs_statsd.domain.models import MetricDescriptor
from sqs_statsd.exceptions import CatalogError, CloudWatchError
from sqs_statsd.infrastructure.cloudwatch.client import CloudWatchClient

logger = get_logger("catalog")

Catalog = tuple[MetricDescriptor, ...]


def build_catalog(
    cloudwatch: CloudWatchClient, namespace: str = CloudWatch.NAMESPACE
) -> Catalog:
    """List every series in ``namespace`` once and turn each into a descriptor.

    Ordering follows the ListMetrics response. The result is never refreshed,
    so queues created after startup are not picked up.

    Raises:
        CatalogError: the ListMetrics call failed.
    """
    try:
        listing = cloudwatch.list_metrics(namespace)
    except CloudWatchError as exc:
        logger.error(
            "could_not_build_requests",
            extra={
                "namespace": namespace,
                "region": cloudwatch.region,
                "error": str(exc),
                "code": exc.code,
            },
        )
        raise CatalogError(f"could not list metrics in {namespace}: {exc}") from exc

    descriptors: list[MetricDescriptor] = []
    for metric in listing:
        try:
            descriptors.append(MetricDescriptor.from_listing(metric))
        except (ValidationError, KeyError) as exc:
            # A series without dimensions has no queue name to report under
            logger.warning(
                "metric_skipped",
                extra={
                    "metric_name": metric.get("MetricName"),
                    "dimensions": metric.get("Dimensions", []),
                    "error": str(exc),
                },
            )

    logger.info("built_stats_requests", extra={"num_metrics": len(descriptors)})
    return tuple(descriptors)
