"""Poll loop: fetch the latest one-minute Sum of every series and forward it."""

from __future__ import annotations

import asyncio
import time
from datetime import datetime, timezone
from typing import Callable

from pydantic import BaseModel

from sqs_statsd.core.constants import TICK_INTERVAL_SECONDS
from sqs_statsd.core.logger import get_logger
from sqs_statsd.domain.models import MetricDescriptor, MetricPoint
from sqs_statsd.exceptions import CloudWatchError
from sqs_statsd.infrastructure.cloudwatch.client import CloudWatchClient
from sqs_statsd.infrastructure.statsd.client import StatsdSink
from sqs_statsd.metrics import (
    RELAY_FETCH_ERRORS,
    RELAY_POINTS_FORWARDED,
    RELAY_TICK_ERRORS,
    RELAY_TICKS,
    RELAY_TICKS_SKIPPED,
    TICK_DURATION,
)
from sqs_statsd.utils.concurrency import run_blocking
from sqs_statsd.utils.ticker import Ticker

logger = get_logger("relay")


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


class TickResult(BaseModel):
    tick: datetime
    queried: int = 0
    failed: int = 0
    forwarded: int = 0


class Relay:
    def __init__(
        self,
        cloudwatch: CloudWatchClient,
        sink: StatsdSink,
        catalog: tuple[MetricDescriptor, ...],
        clock: Callable[[], datetime] = utc_now,
        interval: float = TICK_INTERVAL_SECONDS,
    ):
        self.cloudwatch = cloudwatch
        self.sink = sink
        self.catalog = tuple(catalog)
        self.interval = interval
        self._clock = clock

    def poll_once(self, tick: datetime) -> TickResult:
        """Fetch and forward every series for the window ending at ``tick``.

        A failed fetch is logged and skipped; it is not retried until the next
        tick. Buffered points are flushed to StatsD when the tick ends, even if it
        ends early on an unexpected error.
        """
        logger.debug("tick", extra={"now": tick.isoformat()})
        result = TickResult(tick=tick)

        try:
            for descriptor in self.catalog:
                query = descriptor.query(tick)
                try:
                    datapoints = self.cloudwatch.get_metric_statistics(query)
                except CloudWatchError as exc:
                    result.failed += 1
                    RELAY_FETCH_ERRORS.labels(metric_name=descriptor.metric_name).inc()
                    logger.warning(
                        "could_not_retrieve_metric",
                        extra={
                            **descriptor.identity(),
                            "now": tick.isoformat(),
                            "error": str(exc),
                            "code": exc.code,
                        },
                    )
                    continue

                result.queried += 1
                for datapoint in datapoints:
                    point = MetricPoint.from_datapoint(descriptor, datapoint)
                    self.sink.absolute(point.name, point.value)
                    result.forwarded += 1
        finally:
            self.sink.flush()
            RELAY_POINTS_FORWARDED.inc(result.forwarded)
        return result

    async def run(self, shutdown_event: asyncio.Event) -> None:
        """Tick every ``interval`` seconds until ``shutdown_event`` is set.

        The first tick fires one full interval after the call. Ticks missed
        while a slow tick was running are dropped, not replayed.
        """
        ticker = Ticker(self.interval)
        logger.info(
            "relay_started",
            extra={"num_metrics": len(self.catalog), "interval": self.interval},
        )
        try:
            while not shutdown_event.is_set():
                if await _wait_or_shutdown(shutdown_event, ticker.delay()):
                    break

                tick = self._clock()
                cycle_start = time.perf_counter()
                try:
                    result = await run_blocking(self.poll_once, tick)
                    RELAY_TICKS.inc()
                    if result.failed:
                        logger.info(
                            "tick_completed_with_failures",
                            extra=result.model_dump(mode="json"),
                        )
                except asyncio.CancelledError:  # pragma: no cover - control path
                    raise
                except Exception as exc:  # noqa: BLE001
                    RELAY_TICK_ERRORS.inc()
                    logger.exception(
                        "tick_failed",
                        extra={"now": tick.isoformat(), "error": str(exc)},
                    )
                finally:
                    TICK_DURATION.observe(time.perf_counter() - cycle_start)

                skipped = ticker.advance()
                if skipped:
                    RELAY_TICKS_SKIPPED.inc(skipped)
                    logger.warning(
                        "ticks_skipped",
                        extra={"skipped": skipped, "interval": self.interval},
                    )
        finally:
            logger.info("relay_stopped")

    def close(self) -> None:
        for name, resource in (("statsd", self.sink), ("cloudwatch", self.cloudwatch)):
            try:
                resource.close()
            except Exception:  # noqa: BLE001
                logger.exception("error closing resource", extra={"resource": name})


async def _wait_or_shutdown(shutdown_event: asyncio.Event, delay: float) -> bool:
    """Sleep up to ``delay`` seconds; True if shutdown was requested meanwhile."""
    try:
        await asyncio.wait_for(shutdown_event.wait(), timeout=delay)
    except asyncio.TimeoutError:
        return False
    return True
