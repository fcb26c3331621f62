"""cloudsched simulation runners.

Orchestrates stepping a scheduler and collecting its time series.
"""

from cloudsched.runner.simulation import SimulationRunner

__all__ = [
    "SimulationRunner",
]
