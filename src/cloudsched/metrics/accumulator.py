"""Metrics accumulator for recording the per-step time series."""

from typing import TYPE_CHECKING

from cloudsched.data_models.result import SimulationSummary, StepReport, StepSample

if TYPE_CHECKING:
    from cloudsched.environment.scheduler import Scheduler


class MetricsAccumulator:
    """
    Tracks time-series metrics throughout a simulation.

    One StepSample is recorded per step:
    1. Queue sizes - pending admissions, server backlogs, running slots
    2. Completions - this step and cumulative
    3. Pool load - mean server load
    4. Throughput - completions per unit time so far
    """

    def __init__(self):
        """Initialize metric trackers."""
        self.samples: list[StepSample] = []

    def record_step(self, scheduler: "Scheduler", report: StepReport) -> StepSample:
        """
        Record metrics after a scheduler step.

        Args:
            scheduler: Scheduler that just stepped
            report: The report returned by that step

        Returns:
            The recorded sample
        """
        snapshots = scheduler.server_snapshots()
        avg_load = sum(s.load for s in snapshots) / len(snapshots) if snapshots else 0.0
        completed_total = len(scheduler.completed)

        sample = StepSample(
            time=scheduler.current_time,
            pending=len(scheduler.pending),
            queued=scheduler.queued_count,
            running=scheduler.running_count,
            completed_this_step=len(report.completed),
            completed_total=completed_total,
            avg_load=min(avg_load, 1.0),
            throughput=completed_total / max(scheduler.current_time, 1),
        )
        self.samples.append(sample)
        return sample

    def reset(self) -> None:
        self.samples.clear()

    def finalize(self) -> SimulationSummary:
        """
        Compute aggregates over all recorded samples.

        Returns:
            SimulationSummary (all zeros when nothing was recorded)
        """
        if not self.samples:
            return SimulationSummary(
                steps=0,
                avg_pending=0.0,
                max_pending=0,
                avg_backlog=0.0,
                max_backlog=0,
                avg_load=0.0,
                peak_load=0.0,
            )

        count = len(self.samples)
        pending = [s.pending for s in self.samples]
        backlog = [s.queued for s in self.samples]
        loads = [s.avg_load for s in self.samples]

        return SimulationSummary(
            steps=count,
            avg_pending=sum(pending) / count,
            max_pending=max(pending),
            avg_backlog=sum(backlog) / count,
            max_backlog=max(backlog),
            avg_load=sum(loads) / count,
            peak_load=max(loads),
        )
