"""Workload loader for cloudsched JSON workload files."""

import json
from pathlib import Path
from typing import Any

from pydantic import BaseModel, Field, field_validator

from cloudsched.config import (
    BASE_EXECUTION_QUANTUM,
    DEFAULT_POLICY,
    DEFAULT_SERVER_COUNT,
    DEFAULT_TIME_STEP,
)
from cloudsched.data_models.task import TaskDescriptor
from cloudsched.environment.policies import POLICIES
from cloudsched.validation.validator import TaskValidator


class WorkloadConfig(BaseModel):
    """Validated workload configuration."""

    servers: int = Field(default=DEFAULT_SERVER_COUNT, ge=0, description="Server pool size")
    policy: str = Field(default=DEFAULT_POLICY, description="Placement policy name")
    base_quantum: float = Field(
        default=BASE_EXECUTION_QUANTUM, gt=0, description="Execution time per task"
    )
    time_step: float = Field(
        default=DEFAULT_TIME_STEP, gt=0, description="Simulated time advanced per step"
    )
    tasks: list[dict[str, Any]] = Field(
        default_factory=list, description="Raw task descriptors in submission order"
    )

    @field_validator("policy")
    @classmethod
    def validate_policy(cls, v: str) -> str:
        if v not in POLICIES:
            raise ValueError(f"Unknown placement policy: {v}")
        return v

    def descriptors(self) -> list[TaskDescriptor]:
        """Task descriptors with defaults filled in."""
        return [TaskDescriptor.model_validate(raw) for raw in self.tasks]


class WorkloadLoader:
    """Loads and validates cloudsched workload files."""

    def __init__(self, workloads_dir: str | Path = "workloads") -> None:
        """
        Initialize the workload loader.

        Args:
            workloads_dir: Path to the workloads directory
        """
        self.workloads_dir = Path(workloads_dir)
        if not self.workloads_dir.exists():
            raise ValueError(f"Workloads directory not found: {self.workloads_dir}")
        self.validator = TaskValidator()

    @classmethod
    def for_path(cls, path: str | Path, workloads_dir: str | Path = "workloads") -> "WorkloadLoader":
        """Loader for ``path``, using its own directory when the file exists as given."""
        workload_path = Path(path)
        if workload_path.exists():
            return cls(workload_path.parent)
        return cls(workloads_dir)

    def load(self, path: str | Path) -> WorkloadConfig:
        """
        Load and validate a workload JSON file.

        Args:
            path: Path to the workload file (absolute or relative to workloads_dir)

        Returns:
            Validated WorkloadConfig object

        Raises:
            FileNotFoundError: If workload file doesn't exist
            ValueError: If workload file or any task descriptor is invalid
            json.JSONDecodeError: If JSON is malformed
        """
        workload_path = Path(path)

        # If path is not absolute, try relative to workloads_dir
        if not workload_path.is_absolute() and not workload_path.exists():
            workload_path = self.workloads_dir / workload_path

        if not workload_path.exists():
            raise FileNotFoundError(f"Workload file not found: {workload_path}")

        with open(workload_path) as f:
            raw_config = json.load(f)

        config = WorkloadConfig.model_validate(raw_config)

        self._validate_tasks(config)

        return config

    def _validate_tasks(self, config: WorkloadConfig) -> None:
        """
        Run every task descriptor through the TaskValidator.

        Raises:
            ValueError: Listing every failure, prefixed by task index and name
        """
        problems = []
        for index, raw in enumerate(config.tasks):
            for error in self.validator.validate(raw):
                problems.append(f"task[{index}] {raw.get('name', '?')}: {error}")

        if problems:
            raise ValueError("Invalid workload:\n  " + "\n  ".join(problems))

    def list_workloads(self) -> list[Path]:
        """
        List all workload files in the workloads directory.

        Returns:
            Sorted list of paths to workload files
        """
        return sorted(self.workloads_dir.rglob("*.json"))
