"""cloudsched metrics tracking.

Point-in-time aggregation and per-step time series.
"""

from cloudsched.metrics.aggregate import compute_metrics
from cloudsched.metrics.accumulator import MetricsAccumulator

__all__ = [
    "compute_metrics",
    "MetricsAccumulator",
]
