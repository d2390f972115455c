"""Variable state reconciliation.

``diff`` holds the pure matching logic; ``executor`` applies it against a
``VariableStore`` port.
"""

from __future__ import annotations

from .diff import DefaultDiffCalculator, DiffCalculator, VariableDiff, calculate_variable_diff
from .executor import ReconciliationExecutor

__all__ = [
    "DefaultDiffCalculator",
    "DiffCalculator",
    "ReconciliationExecutor",
    "VariableDiff",
    "calculate_variable_diff",
]
