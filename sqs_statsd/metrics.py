"""Prometheus metrics describing the relay process itself."""

from shared.metrics import get_counter, get_histogram

SERVICE = "sqs_statsd"

RELAY_TICKS = get_counter("ticks_total", "Total ticks processed", SERVICE)
RELAY_TICKS_SKIPPED = get_counter(
    "ticks_skipped_total", "Ticks dropped because a previous tick overran", SERVICE
)
RELAY_TICK_ERRORS = get_counter(
    "tick_errors_total", "Ticks aborted by an unexpected error", SERVICE
)
RELAY_FETCH_ERRORS = get_counter(
    "fetch_errors_total",
    "Failed GetMetricStatistics calls",
    SERVICE,
    labelnames=("metric_name",),
)
RELAY_POINTS_FORWARDED = get_counter(
    "points_forwarded_total", "Datapoints forwarded to StatsD", SERVICE
)

TICK_DURATION = get_histogram(
    "tick_duration_seconds",
    "Time spent fetching and forwarding every series in one tick",
    SERVICE,
    buckets=[0.1, 0.5, 1.0, 2.5, 5.0, 10.0, 30.0, 60.0, 120.0],
)
