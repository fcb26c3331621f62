"""cloudsched data models.

Core data structures used throughout cloudsched for representing tasks, servers,
step reports, metrics, violations, and simulation results.
"""

from cloudsched.data_models.task import Task, TaskDescriptor, TASK_CATEGORIES
from cloudsched.data_models.server import Server, ServerSnapshot
from cloudsched.data_models.violation import Diagnostic, Violation
from cloudsched.data_models.result import (
    Metrics,
    SimulationResult,
    SimulationSummary,
    StepReport,
    StepSample,
)

__all__ = [
    "Task",
    "TaskDescriptor",
    "TASK_CATEGORIES",
    "Server",
    "ServerSnapshot",
    "Diagnostic",
    "Violation",
    "Metrics",
    "StepReport",
    "StepSample",
    "SimulationSummary",
    "SimulationResult",
]
