"""Task descriptor validator for cloudsched."""

import math
from typing import Any, Mapping

from cloudsched.config import (
    MAX_CPU,
    MAX_PRIORITY,
    MAX_RAM,
    MIN_CPU,
    MIN_PRIORITY,
    MIN_RAM,
)
from cloudsched.data_models.task import TASK_CATEGORIES, TaskDescriptor


def _as_number(value: Any) -> float | None:
    """Parse a numeric field; None when missing or unparseable."""
    if value is None or isinstance(value, bool):
        return None
    try:
        number = float(value)
    except (TypeError, ValueError):
        return None
    if not math.isfinite(number):
        return None
    return number


class TaskValidator:
    """
    Validates raw task descriptors before they are submitted.

    The scheduler itself never checks ranges. Callers run descriptors
    through this validator and surface the returned messages to the user.
    """

    def validate(self, raw: Mapping[str, Any]) -> list[str]:
        """
        Validate a single raw descriptor.

        Args:
            raw: Mapping with name, priority, cpu, ram and optionally
                arrival_time, deadline, category

        Returns:
            List of validation failures (empty if valid)
        """
        errors = []

        name = raw.get("name")
        if name is None or not str(name).strip():
            errors.append("Task name is required")

        errors.extend(self._check_int_range(raw.get("priority"), "Priority", MIN_PRIORITY, MAX_PRIORITY))
        errors.extend(self._check_int_range(raw.get("cpu"), "CPU", MIN_CPU, MAX_CPU))
        errors.extend(self._check_int_range(raw.get("ram"), "RAM", MIN_RAM, MAX_RAM))

        for field, label in (("arrival_time", "Arrival time"), ("deadline", "Deadline")):
            if field not in raw:
                continue
            number = _as_number(raw[field])
            if number is None or number < 0:
                errors.append(f"{label} must be a number >= 0")

        category = raw.get("category")
        if category is not None and category not in TASK_CATEGORIES:
            errors.append(f"Category must be one of: {', '.join(TASK_CATEGORIES)}")

        return errors

    def validate_or_raise(self, raw: Mapping[str, Any]) -> TaskDescriptor:
        """
        Validate a descriptor and build it.

        Raises:
            ValueError: If any validation check fails (all messages included)
        """
        errors = self.validate(raw)
        if errors:
            raise ValueError("Invalid task descriptor: " + "; ".join(errors))
        return TaskDescriptor.model_validate(dict(raw))

    def _check_int_range(self, value: Any, label: str, low: int, high: int) -> list[str]:
        number = _as_number(value)
        if number is None or not low <= int(number) <= high:
            return [f"{label} must be between {low} and {high}"]
        return []
