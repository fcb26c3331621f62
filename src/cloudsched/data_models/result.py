"""Result data models for steps, metrics and simulation outcomes."""

from pydantic import BaseModel, Field

from cloudsched.data_models.server import ServerSnapshot
from cloudsched.data_models.task import Task
from cloudsched.data_models.violation import Diagnostic, Violation


class StepReport(BaseModel):
    """What happened during a single Scheduler.step() call."""

    time: float = Field(ge=0, description="Simulated time after the step")
    admitted: list[int] = Field(
        default_factory=list, description="Task IDs placed directly into a running slot"
    )
    queued: list[int] = Field(
        default_factory=list, description="Task IDs placed into a server backlog"
    )
    completed: list[int] = Field(default_factory=list, description="Task IDs completed")
    promoted: list[int] = Field(
        default_factory=list, description="Task IDs promoted from a backlog to running"
    )
    diagnostics: list[Diagnostic] = Field(
        default_factory=list, description="Reasons admission stopped early"
    )

    def __str__(self) -> str:
        """Human-readable string representation."""
        return (
            f"StepReport(t={self.time:g}, admitted={len(self.admitted)}, "
            f"queued={len(self.queued)}, completed={len(self.completed)}, "
            f"promoted={len(self.promoted)}, diagnostics={len(self.diagnostics)})"
        )


class Metrics(BaseModel):
    """
    Aggregate performance metrics of a scheduler.

    avg_wait_time, avg_turnaround_time and throughput are rounded to two
    decimals; display() renders them with fixed two-decimal precision.
    """

    total_submitted: int = Field(ge=0, description="Tasks submitted since last reset")
    total_completed: int = Field(ge=0, description="Tasks in the completed history")
    pending_count: int = Field(ge=0, description="Tasks waiting for admission")
    avg_wait_time: float = Field(ge=0, description="Mean start - arrival over completed tasks")
    avg_turnaround_time: float = Field(
        default=0.0, ge=0, description="Mean end - start over completed tasks"
    )
    throughput: float = Field(ge=0, description="Completed tasks per unit of simulated time")
    current_time: float = Field(default=0.0, ge=0, description="Simulated clock")

    def display(self) -> dict[str, str | int]:
        """Metrics with the averages formatted to two decimals."""
        return {
            "total_submitted": self.total_submitted,
            "total_completed": self.total_completed,
            "pending_count": self.pending_count,
            "avg_wait_time": f"{self.avg_wait_time:.2f}",
            "avg_turnaround_time": f"{self.avg_turnaround_time:.2f}",
            "throughput": f"{self.throughput:.2f}",
        }

    def __str__(self) -> str:
        """Human-readable string representation."""
        return (
            f"Metrics(completed={self.total_completed}/{self.total_submitted}, "
            f"pending={self.pending_count}, wait={self.avg_wait_time:.2f}, "
            f"throughput={self.throughput:.2f})"
        )


class StepSample(BaseModel):
    """One point of the metrics time series, recorded after each step."""

    time: float = Field(ge=0, description="Simulated time after the step")
    pending: int = Field(ge=0, description="Tasks waiting for admission")
    queued: int = Field(ge=0, description="Tasks waiting in server backlogs")
    running: int = Field(ge=0, description="Occupied running slots")
    completed_this_step: int = Field(ge=0, description="Completions during the step")
    completed_total: int = Field(ge=0, description="Cumulative completions")
    avg_load: float = Field(ge=0, le=1, description="Mean server load across the pool")
    throughput: float = Field(ge=0, description="Completions per unit time so far")


class SimulationSummary(BaseModel):
    """Aggregates over the recorded time series."""

    steps: int = Field(ge=0, description="Number of recorded steps")
    avg_pending: float = Field(ge=0, description="Average admission queue length")
    max_pending: int = Field(ge=0, description="Maximum admission queue length")
    avg_backlog: float = Field(ge=0, description="Average total backlog across servers")
    max_backlog: int = Field(ge=0, description="Maximum total backlog across servers")
    avg_load: float = Field(ge=0, le=1, description="Average pool load")
    peak_load: float = Field(ge=0, le=1, description="Highest pool load observed")

    def __str__(self) -> str:
        """Human-readable string representation."""
        return (
            f"SimulationSummary(steps={self.steps}, "
            f"pending={self.avg_pending:.1f}/{self.max_pending}, "
            f"backlog={self.avg_backlog:.1f}/{self.max_backlog}, "
            f"load={self.avg_load:.2f}/{self.peak_load:.2f})"
        )


class SimulationResult(BaseModel):
    """
    Final output of a simulation run.

    Contains the final metrics, time-series samples, and any invariant
    violations observed along the way.
    """

    policy: str = Field(description="Placement policy active at the end of the run")
    server_count: int = Field(ge=0, description="Size of the server pool")
    steps: int = Field(ge=0, description="Number of steps executed")
    drained: bool = Field(description="True if every submitted task completed")
    metrics: Metrics = Field(description="Final aggregate metrics")
    summary: SimulationSummary = Field(description="Time-series aggregates")
    samples: list[StepSample] = Field(default_factory=list, description="Per-step samples")
    servers: list[ServerSnapshot] = Field(
        default_factory=list, description="Server state at the end of the run"
    )
    completed: list[Task] = Field(
        default_factory=list, description="Completed tasks in completion order"
    )
    violations: list[Violation] = Field(
        default_factory=list, description="Invariant violations (empty for a correct run)"
    )
    execution_time: float | None = Field(default=None, description="Wall-clock seconds")

    @property
    def passed(self) -> bool:
        return not self.violations

    def __str__(self) -> str:
        """Human-readable string representation."""
        status = "DRAINED" if self.drained else "INCOMPLETE"
        violations_str = f" ({len(self.violations)} violations)" if self.violations else ""
        return f"{status}{violations_str} after {self.steps} steps - {self.metrics}"
