"""
Prometheus Metrics

Defines the request metrics recorded around every registration service call.
"""

from __future__ import annotations

from contextlib import contextmanager
import time
from typing import Iterator

import structlog
from prometheus_client import REGISTRY, CollectorRegistry, Counter, Histogram

from mud.config import get_settings

logger = structlog.get_logger()

# Singleton metrics instance
_metrics: "Metrics | None" = None


class Metrics:
    """
    Prometheus metrics for the registration service.

    Tracks:
    - Service calls per method
    - Service call latency per method
    """

    def __init__(
        self,
        registry: CollectorRegistry | None = None,
        *,
        namespace: str = "api",
        subsystem: str = "registration_service",
    ) -> None:
        self.registry = registry if registry is not None else REGISTRY

        self.request_count = Counter(
            "request_count",
            "Number of received requests.",
            ["method"],
            namespace=namespace,
            subsystem=subsystem,
            registry=self.registry,
        )

        self.request_latency_seconds = Histogram(
            "request_latency_seconds",
            "Elapsed time to complete a request in seconds.",
            ["method"],
            namespace=namespace,
            subsystem=subsystem,
            registry=self.registry,
            buckets=[0.001, 0.005, 0.01, 0.025, 0.05, 0.1, 0.25, 0.5, 1.0, 2.5, 5.0],
        )

        logger.info("Prometheus metrics initialized", namespace=namespace, subsystem=subsystem)

    def track_registration_call(self, method: str, duration: float) -> None:
        """Count one service call and record how long it took."""
        self.request_count.labels(method=method).inc()
        self.request_latency_seconds.labels(method=method).observe(duration)

    @contextmanager
    def time_call(self, method: str) -> Iterator[None]:
        """Context manager that tracks the wrapped block, raised or not."""
        start = time.perf_counter()
        try:
            yield
        finally:
            self.track_registration_call(method, time.perf_counter() - start)


def get_metrics() -> Metrics:
    """Get or create the singleton metrics instance."""
    global _metrics
    if _metrics is None:
        settings = get_settings()
        _metrics = Metrics(
            namespace=settings.metrics_namespace,
            subsystem=settings.metrics_subsystem,
        )
    return _metrics
