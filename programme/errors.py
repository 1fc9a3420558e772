"""Exceptions raised by the planners."""

from typing import Iterable, List


class ValidationError(ValueError):
    """Raised when a planner is handed a configuration the validator rejects."""

    def __init__(self, violations: Iterable[str]):
        self.violations: List[str] = list(violations)
        super().__init__("; ".join(self.violations) or "Invalid configuration")


class PlanningError(RuntimeError):
    """Raised when a generated schedule breaks the one-place-per-slot rule."""
