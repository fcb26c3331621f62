"""cloudsched validation utilities.

Task descriptor validation and scheduler invariant checking.
"""

from cloudsched.validation.validator import TaskValidator
from cloudsched.validation.checker import ConstraintChecker

__all__ = [
    "TaskValidator",
    "ConstraintChecker",
]
