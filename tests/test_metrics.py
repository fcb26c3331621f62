"""Tests for metrics aggregation and the per-step accumulator."""

import pytest

from cloudsched.data_models.task import Task, TaskDescriptor
from cloudsched.environment.scheduler import Scheduler
from cloudsched.metrics import MetricsAccumulator, compute_metrics


def finished_task(task_id, arrival, start, end):
    """Build a completed task with the given times."""
    task = Task.from_descriptor(task_id, TaskDescriptor(name=f"t{task_id}", arrival_time=arrival))
    task.mark_running(start, 5.0)
    task.mark_completed(end)
    return task


def test_compute_metrics_empty():
    """Test metrics with nothing completed."""
    metrics = compute_metrics([], total_submitted=0, pending_count=0, current_time=0.0)
    assert metrics.total_completed == 0
    assert metrics.avg_wait_time == 0.0
    assert metrics.avg_turnaround_time == 0.0
    assert metrics.throughput == 0.0
    assert metrics.display()["avg_wait_time"] == "0.00"
    assert metrics.display()["throughput"] == "0.00"


def test_compute_metrics_averages():
    """Test wait, turnaround and throughput over completed tasks."""
    completed = [
        finished_task(0, arrival=0.0, start=1.0, end=6.0),
        finished_task(1, arrival=0.0, start=2.0, end=7.0),
        finished_task(2, arrival=1.0, start=2.0, end=7.0),
    ]
    metrics = compute_metrics(completed, total_submitted=5, pending_count=2, current_time=10.0)

    assert metrics.total_submitted == 5
    assert metrics.total_completed == 3
    assert metrics.pending_count == 2
    assert metrics.avg_wait_time == 1.33
    assert metrics.avg_turnaround_time == 5.0
    assert metrics.throughput == 0.3
    assert metrics.display()["avg_wait_time"] == "1.33"


def test_compute_metrics_ignores_negative_waits():
    """Test tasks started before their arrival time do not skew the average."""
    completed = [
        finished_task(0, arrival=4.0, start=1.0, end=6.0),
        finished_task(1, arrival=0.0, start=2.0, end=7.0),
    ]
    metrics = compute_metrics(completed, total_submitted=2, pending_count=0, current_time=7.0)
    assert metrics.avg_wait_time == 2.0


def test_throughput_floor_before_time_one():
    """Test throughput divides by at least one time unit."""
    completed = [finished_task(0, arrival=0.0, start=0.25, end=0.5)]
    metrics = compute_metrics(completed, total_submitted=1, pending_count=0, current_time=0.5)
    assert metrics.throughput == 1.0


def test_scheduler_throughput_with_short_quantum():
    """Test a fractional quantum completes within the first time unit."""
    scheduler = Scheduler(server_count=1, base_quantum=0.5)
    scheduler.submit({"name": "quick"})
    scheduler.step(0.5)

    metrics = scheduler.metrics()
    assert metrics.total_completed == 1
    assert metrics.throughput == 1.0
    assert metrics.current_time == 0.5


@pytest.fixture
def accumulator():
    """Create a fresh accumulator."""
    return MetricsAccumulator()


def test_accumulator_empty_finalize(accumulator):
    """Test finalize with no samples returns zeros."""
    summary = accumulator.finalize()
    assert summary.steps == 0
    assert summary.max_pending == 0
    assert summary.peak_load == 0.0


def test_accumulator_records_step(accumulator):
    """Test a sample reflects queue sizes and pool load."""
    scheduler = Scheduler(server_count=1)
    scheduler.submit({"name": "a", "cpu": 50, "ram": 2048})
    scheduler.submit({"name": "b"})

    report = scheduler.step(1.0)
    sample = accumulator.record_step(scheduler, report)

    assert sample.time == 1.0
    assert sample.pending == 0
    assert sample.queued == 1
    assert sample.running == 1
    assert sample.completed_this_step == 0
    assert sample.avg_load == pytest.approx(0.5)


def test_accumulator_finalize(accumulator):
    """Test aggregates over a full run."""
    scheduler = Scheduler(server_count=1)
    scheduler.submit({"name": "a", "cpu": 50, "ram": 2048})
    scheduler.submit({"name": "b", "cpu": 50, "ram": 2048})

    while not scheduler.is_drained:
        report = scheduler.step(1.0)
        accumulator.record_step(scheduler, report)

    summary = accumulator.finalize()
    assert summary.steps == 10
    assert summary.max_backlog == 1
    assert summary.max_pending == 0
    assert summary.peak_load == pytest.approx(0.5)
    assert accumulator.samples[-1].completed_total == 2
    assert accumulator.samples[-1].throughput == pytest.approx(0.2)


def test_accumulator_reset(accumulator):
    """Test reset drops recorded samples."""
    scheduler = Scheduler(server_count=1)
    accumulator.record_step(scheduler, scheduler.step(1.0))
    accumulator.reset()
    assert accumulator.samples == []
