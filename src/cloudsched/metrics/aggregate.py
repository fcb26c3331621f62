"""Point-in-time metrics aggregation over the completed history."""

from typing import Iterable

from cloudsched.data_models.result import Metrics
from cloudsched.data_models.task import Task


def compute_metrics(
    completed: Iterable[Task],
    total_submitted: int,
    pending_count: int,
    current_time: float,
) -> Metrics:
    """
    Build a Metrics snapshot.

    Average wait time is the mean of (start_time - arrival_time) over completed
    tasks, ignoring negative values. Throughput divides by max(current_time, 1)
    so it is defined at time zero.

    Args:
        completed: Completed tasks
        total_submitted: Number of tasks submitted since the last reset
        pending_count: Number of tasks still awaiting admission
        current_time: Simulated clock

    Returns:
        Metrics with averages rounded to two decimals
    """
    completed = list(completed)

    wait_times = [
        (task.start_time or 0.0) - task.arrival_time for task in completed
    ]
    wait_times = [w for w in wait_times if w >= 0]
    avg_wait = sum(wait_times) / len(wait_times) if wait_times else 0.0

    turnarounds = [t.turnaround_time for t in completed if t.turnaround_time is not None]
    avg_turnaround = sum(turnarounds) / len(turnarounds) if turnarounds else 0.0

    throughput = len(completed) / max(current_time, 1)

    return Metrics(
        total_submitted=total_submitted,
        total_completed=len(completed),
        pending_count=pending_count,
        avg_wait_time=round(avg_wait, 2),
        avg_turnaround_time=round(max(avg_turnaround, 0.0), 2),
        throughput=round(throughput, 2),
        current_time=current_time,
    )
