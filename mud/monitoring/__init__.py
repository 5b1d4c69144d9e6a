"""
Monitoring Module

Provides Prometheus metrics for the registration service.
"""

from mud.monitoring.metrics import (
    Metrics,
    get_metrics,
)

__all__ = [
    "Metrics",
    "get_metrics",
]
