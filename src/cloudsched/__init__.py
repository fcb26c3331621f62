"""cloudsched - Discrete-time cluster task scheduling simulator."""

# Data models
from cloudsched.data_models.task import Task, TaskDescriptor
from cloudsched.data_models.server import Server, ServerSnapshot
from cloudsched.data_models.result import (
    Metrics,
    SimulationResult,
    SimulationSummary,
    StepReport,
    StepSample,
)
from cloudsched.data_models.violation import Diagnostic, Violation

# Environment
from cloudsched.environment.scheduler import Scheduler
from cloudsched.environment.policies import list_policies, server_load, server_status
from cloudsched.environment.loader import WorkloadConfig, WorkloadLoader

# Validation
from cloudsched.validation.checker import ConstraintChecker
from cloudsched.validation.validator import TaskValidator

# Metrics
from cloudsched.metrics.accumulator import MetricsAccumulator

# IO
from cloudsched.io.formatter import ReportFormatter

# Runners
from cloudsched.runner.simulation import SimulationRunner

# API
from cloudsched.api import run_simulation, run_workload

__version__ = "0.1.0"

__all__ = [
    # Data models
    "Task",
    "TaskDescriptor",
    "Server",
    "ServerSnapshot",
    "Metrics",
    "StepReport",
    "StepSample",
    "SimulationSummary",
    "SimulationResult",
    "Diagnostic",
    "Violation",
    # Environment
    "Scheduler",
    "list_policies",
    "server_load",
    "server_status",
    "WorkloadConfig",
    "WorkloadLoader",
    # Validation
    "TaskValidator",
    "ConstraintChecker",
    # Metrics
    "MetricsAccumulator",
    # IO
    "ReportFormatter",
    # Runners
    "SimulationRunner",
    # API
    "run_simulation",
    "run_workload",
]
