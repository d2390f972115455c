"""Domain port definitions for adapters."""

from __future__ import annotations

from .persistence import ConflictKey, VariableStore
from .unit_of_work import (
    RepositoryCollection,
    UnitOfWork,
    VariableRepositories,
    VariableUnitOfWork,
)

__all__ = [
    "ConflictKey",
    "RepositoryCollection",
    "UnitOfWork",
    "VariableRepositories",
    "VariableStore",
    "VariableUnitOfWork",
]
