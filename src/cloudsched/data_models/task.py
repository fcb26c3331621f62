"""Task data models for cloudsched."""

import math
from typing import Any, Literal

from pydantic import BaseModel, Field, ValidationInfo, field_validator

from cloudsched.config import (
    DEFAULT_ARRIVAL_TIME,
    DEFAULT_CATEGORY,
    DEFAULT_CPU,
    DEFAULT_DEADLINE,
    DEFAULT_PRIORITY,
    DEFAULT_RAM,
)

TaskStatus = Literal["pending", "queued", "running", "completed"]
TaskCategory = Literal["compute", "memory", "network", "mixed"]

TASK_CATEGORIES: tuple[str, ...] = ("compute", "memory", "network", "mixed")

# Status may only move forward along these edges
_TRANSITIONS: dict[str, tuple[str, ...]] = {
    "pending": ("queued", "running"),
    "queued": ("running",),
    "running": ("completed",),
    "completed": (),
}

_NUMERIC_DEFAULTS: dict[str, float] = {
    "priority": DEFAULT_PRIORITY,
    "cpu": DEFAULT_CPU,
    "ram": DEFAULT_RAM,
    "arrival_time": DEFAULT_ARRIVAL_TIME,
    "deadline": DEFAULT_DEADLINE,
}


def _parse_number(value: Any, default: float, integral: bool) -> float:
    """Parse a loosely-typed numeric field, falling back to the default."""
    if value is None or isinstance(value, bool):
        return default
    try:
        number = float(value)
    except (TypeError, ValueError):
        return default
    if not math.isfinite(number):
        return default
    return int(number) if integral else number


class TaskDescriptor(BaseModel):
    """
    Request descriptor submitted to the scheduler.

    Numeric fields that are missing or cannot be parsed fall back to their
    defaults. Ranges are NOT checked here - use TaskValidator for that.
    """

    name: str = Field(default="", description="Human-readable task name")
    priority: int = Field(default=DEFAULT_PRIORITY, description="Priority level (1-4)")
    cpu: int = Field(default=DEFAULT_CPU, description="CPU demand in percent (1-100)")
    ram: int = Field(default=DEFAULT_RAM, description="Memory demand in MB (100-4096)")
    arrival_time: float = Field(
        default=DEFAULT_ARRIVAL_TIME, description="Simulated time when task becomes eligible"
    )
    deadline: float = Field(
        default=DEFAULT_DEADLINE, description="Relative deadline (informational only)"
    )
    category: TaskCategory = Field(default=DEFAULT_CATEGORY, description="Workload category")

    @field_validator("priority", "cpu", "ram", mode="before")
    @classmethod
    def coerce_int(cls, v: Any, info: ValidationInfo) -> int:
        """Fill unparseable integer fields with defaults."""
        return int(_parse_number(v, _NUMERIC_DEFAULTS[info.field_name], integral=True))

    @field_validator("arrival_time", "deadline", mode="before")
    @classmethod
    def coerce_float(cls, v: Any, info: ValidationInfo) -> float:
        """Fill unparseable time fields with defaults."""
        return float(_parse_number(v, _NUMERIC_DEFAULTS[info.field_name], integral=False))

    @field_validator("name", mode="before")
    @classmethod
    def coerce_name(cls, v: Any) -> str:
        return "" if v is None else str(v)

    @field_validator("category", mode="before")
    @classmethod
    def coerce_category(cls, v: Any) -> Any:
        return v or DEFAULT_CATEGORY


class Task(BaseModel):
    """
    Represents a single task in the cluster.

    The descriptor fields are fixed at submission. Runtime state (status,
    timestamps, remaining time) is mutated only by the Scheduler, and status
    only ever moves forward: pending -> queued | running -> completed.
    """

    id: int = Field(ge=0, description="Unique, monotonically assigned identifier")
    name: str = Field(description="Human-readable task name")
    priority: int = Field(description="Priority level")
    cpu: int = Field(description="CPU demand in percent")
    ram: int = Field(description="Memory demand in MB")
    arrival_time: float = Field(description="Simulated time when task becomes eligible")
    deadline: float = Field(description="Relative deadline (informational only)")
    category: TaskCategory = Field(description="Workload category")
    status: TaskStatus = Field(default="pending", description="Current status of the task")
    start_time: float | None = Field(
        default=None, description="Simulated time when the task first began running"
    )
    end_time: float | None = Field(
        default=None, description="Simulated time when the task completed"
    )
    remaining_time: float | None = Field(
        default=None, description="Execution countdown, set when the task starts running"
    )

    @classmethod
    def from_descriptor(cls, task_id: int, descriptor: TaskDescriptor) -> "Task":
        """Create a pending task from a submitted descriptor."""
        return cls(id=task_id, **descriptor.model_dump())

    @property
    def wait_time(self) -> float | None:
        """Time spent between arrival and first start, if started."""
        if self.start_time is None:
            return None
        return self.start_time - self.arrival_time

    @property
    def turnaround_time(self) -> float | None:
        """Time spent between start and completion, if completed."""
        if self.start_time is None or self.end_time is None:
            return None
        return self.end_time - self.start_time

    def mark_queued(self) -> None:
        self._advance("queued")

    def mark_running(self, now: float, quantum: float) -> None:
        """Start running: record start time and arm the execution countdown."""
        self._advance("running")
        if self.start_time is None:
            self.start_time = now
        self.remaining_time = quantum

    def mark_completed(self, now: float) -> None:
        self._advance("completed")
        self.end_time = now

    def _advance(self, new_status: TaskStatus) -> None:
        if new_status not in _TRANSITIONS[self.status]:
            raise ValueError(
                f"Task {self.id} cannot move from '{self.status}' to '{new_status}'"
            )
        self.status = new_status

    def __str__(self) -> str:
        """Human-readable string representation."""
        return f"Task({self.id}, {self.name}, p{self.priority}, status={self.status})"

    def __repr__(self) -> str:
        """Developer-friendly representation."""
        return (
            f"Task(id={self.id}, name={self.name!r}, priority={self.priority}, "
            f"cpu={self.cpu}, ram={self.ram}, arrival_time={self.arrival_time}, "
            f"status={self.status!r}, start_time={self.start_time}, "
            f"end_time={self.end_time})"
        )
