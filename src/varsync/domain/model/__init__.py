"""Public domain model surface."""

from __future__ import annotations

from varsync.domain.model.enums import VariableType
from varsync.domain.model.primitives import PromptId, VariableId, VariableOptions
from varsync.domain.model.variable import (
    DesiredVariable,
    PersistedVariable,
    UpsertRecord,
    business_fields,
)

__all__ = [
    "DesiredVariable",
    "PersistedVariable",
    "PromptId",
    "UpsertRecord",
    "VariableId",
    "VariableOptions",
    "VariableType",
    "business_fields",
]
