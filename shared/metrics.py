"""Unified metrics helpers.

Thin wrappers around prometheus_client primitives with service name
prefixing and basic naming validation. These describe the relay process
itself (ticks, failures, forwarded points); the relayed CloudWatch values go
to StatsD, not here.
"""

from __future__ import annotations

import re
from typing import Sequence

from prometheus_client import REGISTRY, CollectorRegistry, Counter, Histogram

_NAME_RE = re.compile(r"^[a-z_][a-z0-9_]*$")


def _validate(name: str) -> str:
    if not _NAME_RE.match(name):
        raise ValueError(
            f"Invalid metric name '{name}'. Use snake_case alphanumerics/underscores."
        )
    return name


def _prefix(name: str, service: str | None) -> str:
    if service and not name.startswith(service + "_"):
        return f"{service}_{name}"
    return name


def get_counter(
    name: str,
    documentation: str,
    service: str | None = None,
    labelnames: Sequence[str] = (),
    registry: CollectorRegistry = REGISTRY,
) -> Counter:
    return Counter(
        _validate(_prefix(name, service)),
        documentation,
        labelnames=labelnames,
        registry=registry,
    )


def get_histogram(
    name: str,
    documentation: str,
    service: str | None = None,
    buckets: list[float] | None = None,
    registry: CollectorRegistry = REGISTRY,
) -> Histogram:
    full_name = _validate(_prefix(name, service))
    if buckets is None:
        return Histogram(full_name, documentation, registry=registry)
    return Histogram(full_name, documentation, buckets=buckets, registry=registry)


__all__ = [
    "get_counter",
    "get_histogram",
]
