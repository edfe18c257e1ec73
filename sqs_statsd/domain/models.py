"""Immutable value types passed between the catalog, the relay and the sink."""

from __future__ import annotations

from datetime import datetime, timedelta
from typing import Any, Mapping

from pydantic import BaseModel, ConfigDict, Field

from sqs_statsd.core.constants import CloudWatch


class Dimension(BaseModel):
    """One name/value pair qualifying a CloudWatch series."""

    model_config = ConfigDict(frozen=True)

    name: str
    value: str


class MetricDescriptor(BaseModel):
    """Everything needed to fetch one series, except the time window.

    The first dimension's value (the queue name for SQS) becomes the leading
    segment of the outbound StatsD name, so at least one dimension is required.
    """

    model_config = ConfigDict(frozen=True)

    namespace: str = CloudWatch.NAMESPACE
    metric_name: str
    dimensions: tuple[Dimension, ...] = Field(min_length=1)
    period: int = CloudWatch.PERIOD_SECONDS
    statistics: tuple[str, ...] = (CloudWatch.STATISTIC_SUM,)

    @classmethod
    def from_listing(cls, metric: Mapping[str, Any]) -> MetricDescriptor:
        """Build a descriptor from one ``ListMetrics`` entry."""
        return cls(
            namespace=metric.get("Namespace") or CloudWatch.NAMESPACE,
            metric_name=metric["MetricName"],
            dimensions=tuple(
                Dimension(name=d["Name"], value=d["Value"])
                for d in metric.get("Dimensions", [])
            ),
        )

    @property
    def outbound_name(self) -> str:
        return f"{self.dimensions[0].value.lower()}.{self.metric_name.lower()}"

    def query(self, tick: datetime) -> StatQuery:
        """Query covering the trailing window that ends at ``tick``."""
        return StatQuery(
            descriptor=self,
            start_time=tick - timedelta(seconds=CloudWatch.WINDOW_SECONDS),
            end_time=tick,
        )

    def identity(self) -> dict[str, Any]:
        """Loggable description of the series."""
        return {
            "namespace": self.namespace,
            "metric_name": self.metric_name,
            "dimensions": {d.name: d.value for d in self.dimensions},
        }


class StatQuery(BaseModel):
    """A descriptor bound to a concrete ``[start_time, end_time)`` window."""

    model_config = ConfigDict(frozen=True)

    descriptor: MetricDescriptor
    start_time: datetime
    end_time: datetime


class Datapoint(BaseModel):
    """One aggregated value returned for a query window."""

    model_config = ConfigDict(frozen=True)

    sum: float
    timestamp: datetime | None = None
    unit: str | None = None


class MetricPoint(BaseModel):
    """A named absolute value ready for the StatsD sink."""

    model_config = ConfigDict(frozen=True)

    name: str
    value: int

    @classmethod
    def from_datapoint(
        cls, descriptor: MetricDescriptor, datapoint: Datapoint
    ) -> MetricPoint:
        # int() truncates toward zero: 42.9 -> 42
        return cls(name=descriptor.outbound_name, value=int(datapoint.sum))
