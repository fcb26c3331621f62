"""Tests for Task and TaskDescriptor data models."""

import pytest
from pydantic import ValidationError

from cloudsched.data_models.task import Task, TaskDescriptor


def make_task(task_id=0, **overrides):
    """Build a pending task from descriptor fields."""
    fields = {"name": f"task{task_id}"}
    fields.update(overrides)
    return Task.from_descriptor(task_id, TaskDescriptor(**fields))


def test_descriptor_defaults():
    """Test that omitted fields take their defaults."""
    descriptor = TaskDescriptor(name="etl")
    assert descriptor.priority == 1
    assert descriptor.cpu == 50
    assert descriptor.ram == 512
    assert descriptor.arrival_time == 0.0
    assert descriptor.deadline == 10.0
    assert descriptor.category == "compute"


def test_descriptor_unparseable_numbers_fall_back():
    """Test that unparseable numeric fields are replaced by defaults."""
    descriptor = TaskDescriptor(
        name="etl",
        priority="urgent",
        cpu=None,
        ram="1024",
        arrival_time="2.5",
        deadline="soon",
    )
    assert descriptor.priority == 1
    assert descriptor.cpu == 50
    assert descriptor.ram == 1024
    assert descriptor.arrival_time == 2.5
    assert descriptor.deadline == 10.0


def test_descriptor_truncates_integer_fields():
    """Test that fractional integer fields are truncated."""
    descriptor = TaskDescriptor(name="etl", priority="3.7", cpu=42.9)
    assert descriptor.priority == 3
    assert descriptor.cpu == 42


def test_descriptor_does_not_check_ranges():
    """Test that out-of-range values pass through untouched."""
    descriptor = TaskDescriptor(name="etl", priority=9, cpu=500, ram=10)
    assert descriptor.priority == 9
    assert descriptor.cpu == 500
    assert descriptor.ram == 10


def test_descriptor_empty_category_defaults():
    """Test that an empty category falls back to compute."""
    assert TaskDescriptor(name="etl", category="").category == "compute"


def test_descriptor_category_validation():
    """Test that category must be a known value."""
    with pytest.raises(ValidationError):
        TaskDescriptor(name="etl", category="gpu")


def test_task_from_descriptor():
    """Test that a new task is pending with no runtime state."""
    task = make_task(7, priority=2, cpu=60, ram=768, category="memory")
    assert task.id == 7
    assert task.name == "task7"
    assert task.priority == 2
    assert task.category == "memory"
    assert task.status == "pending"
    assert task.start_time is None
    assert task.end_time is None
    assert task.remaining_time is None


def test_task_direct_run_and_complete():
    """Test pending -> running -> completed."""
    task = make_task()
    task.mark_running(2.0, 5.0)
    assert task.status == "running"
    assert task.start_time == 2.0
    assert task.remaining_time == 5.0

    task.mark_completed(7.0)
    assert task.status == "completed"
    assert task.end_time == 7.0
    assert task.turnaround_time == 5.0


def test_task_queued_then_running():
    """Test pending -> queued -> running keeps start time unset until running."""
    task = make_task()
    task.mark_queued()
    assert task.status == "queued"
    assert task.start_time is None

    task.mark_running(4.0, 5.0)
    assert task.status == "running"
    assert task.start_time == 4.0


def test_task_status_cannot_regress():
    """Test that backwards or skipping transitions raise."""
    task = make_task()
    with pytest.raises(ValueError, match="cannot move"):
        task.mark_completed(1.0)

    task.mark_running(0.0, 5.0)
    with pytest.raises(ValueError):
        task.mark_queued()

    task.mark_completed(5.0)
    with pytest.raises(ValueError):
        task.mark_running(6.0, 5.0)
    assert task.status == "completed"


def test_task_wait_time():
    """Test wait time is start minus arrival."""
    task = make_task(arrival_time=1.5)
    assert task.wait_time is None
    task.mark_running(4.0, 5.0)
    assert task.wait_time == 2.5


def test_task_negative_id_rejected():
    """Test that negative ids are rejected."""
    with pytest.raises(ValidationError):
        Task.from_descriptor(-1, TaskDescriptor(name="bad"))


def test_task_string_representation():
    """Test task string representation."""
    task = make_task(3, priority=4)
    str_repr = str(task)
    assert "task3" in str_repr
    assert "p4" in str_repr
    assert "status=pending" in str_repr


@pytest.mark.parametrize("value", ["inf", "Infinity", "-inf", float("inf"), 1e999, float("nan")])
def test_descriptor_non_finite_numbers_fall_back(value):
    """Test that infinite or NaN numeric fields are replaced by defaults."""
    descriptor = TaskDescriptor(name="etl", cpu=value, priority=value, arrival_time=value)
    assert descriptor.cpu == 50
    assert descriptor.priority == 1
    assert descriptor.arrival_time == 0.0
