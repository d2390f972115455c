"""Domain error definitions."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Sequence


class InvalidArgumentError(ValueError):
    """Raised when caller input is rejected before any I/O happens."""


class VariableValidationError(InvalidArgumentError):
    """Raised when a desired variable list violates the upstream rules."""

    def __init__(self, violations: Sequence[str]) -> None:
        self.violations = tuple(violations)
        super().__init__("Invalid variables: " + "; ".join(self.violations))


class StorageError(RuntimeError):
    """Raised when the persistence collaborator fails.

    The original failure is kept as ``__cause__``. ``parent_id`` and
    ``record_count`` are filled in by the reconciliation executor.
    """

    def __init__(
        self,
        message: str,
        *,
        parent_id: str | None = None,
        record_count: int | None = None,
    ) -> None:
        super().__init__(message)
        self.parent_id = parent_id
        self.record_count = record_count
