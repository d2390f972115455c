"""SQLAlchemy adapter package for varsync."""

from __future__ import annotations

from .mappings import metadata, prompt_variable_table
from .repositories import SqlAlchemyVariableStore
from .unit_of_work import (
    SqlAlchemyVariableUnitOfWork,
    StartupError,
    is_started,
    shutdown,
    startup,
)

__all__ = [
    "SqlAlchemyVariableStore",
    "SqlAlchemyVariableUnitOfWork",
    "StartupError",
    "is_started",
    "metadata",
    "prompt_variable_table",
    "shutdown",
    "startup",
]
