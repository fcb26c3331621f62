"""Violation and diagnostic data models."""

from typing import Literal

from pydantic import BaseModel, Field


class Violation(BaseModel):
    """
    Represents a broken scheduler invariant.

    Violations are never expected from a correct scheduler; the runner
    collects them so tests and debugging sessions can see what went wrong.
    """

    time: float = Field(ge=0, description="Simulated time when violation was detected")
    type: str = Field(
        description="Type of violation: partition, duplicate_running, "
        "running_in_backlog, status_mismatch, status_regression"
    )
    details: dict = Field(
        default_factory=dict,
        description="Additional context: task_id, server_id, etc."
    )

    def __str__(self) -> str:
        """Human-readable string representation."""
        details_str = ", ".join(f"{k}={v}" for k, v in self.details.items())
        return f"[t={self.time:g}] {self.type}: {details_str}"


class Diagnostic(BaseModel):
    """
    Non-fatal condition that stopped admission during a step.

    - pool_empty: there are no servers to place tasks on
    - arrival_blocked: the head of the pending queue has not arrived yet
    """

    time: float = Field(ge=0, description="Simulated time of the step")
    type: Literal["pool_empty", "arrival_blocked"] = Field(description="Diagnostic kind")
    details: dict = Field(default_factory=dict, description="Additional context")

    def __str__(self) -> str:
        """Human-readable string representation."""
        details_str = ", ".join(f"{k}={v}" for k, v in self.details.items())
        return f"[t={self.time:g}] {self.type}: {details_str}"
