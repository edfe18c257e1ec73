"""Buffered StatsD sink.

Points are queued in a ``statsd`` pipeline and leave the process only when
``flush`` is called, packed into UDP datagrams in the order they were added.
Delivery is fire-and-forget: the ``statsd`` client swallows socket errors on
send.
"""

from __future__ import annotations

from statsd import StatsClient

from sqs_statsd.core.constants import Statsd
from sqs_statsd.core.logger import get_logger
from sqs_statsd.exceptions import StartupError

logger = get_logger("statsd.client")


class StatsdSink:
    def __init__(self, host: str, port: int, prefix: str = Statsd.PREFIX):
        try:
            self.client = StatsClient(
                host=host,
                port=port,
                prefix=prefix,
                maxudpsize=Statsd.MAX_UDP_SIZE,
                ipv6=":" in host,
            )
        except OSError as exc:
            raise StartupError(
                f"unable to open socket for statsd at {host}:{port}: {exc}"
            ) from exc
        self.address = f"{host}:{port}"
        self._pipeline = self.client.pipeline()
        self._pending = 0

    @property
    def pending(self) -> int:
        return self._pending

    def absolute(self, name: str, value: int) -> None:
        """Queue ``name`` as a gauge: the daemon replaces its current value."""
        self._pipeline.gauge(name, value)
        self._pending += 1

    def flush(self) -> None:
        if not self._pending:
            return
        logger.debug(
            "statsd_flush", extra={"points": self._pending, "address": self.address}
        )
        self._pipeline.send()
        self._pending = 0

    def close(self) -> None:
        self.flush()
        self.client.close()
