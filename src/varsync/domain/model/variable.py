"""Prompt variable records.

Three shapes share the same business fields:

- ``PersistedVariable`` is a row as stored, owned by one prompt.
- ``DesiredVariable`` is caller input. Its optional ``id`` marks a rename of an
  existing row; without it the variable is matched by name or treated as new.
- ``UpsertRecord`` is what reconciliation hands to storage. It always carries
  ``parent_id`` and a freshly computed ``order_index``; ``id`` is ``None`` only
  for rows storage has not seen yet.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from typing import TYPE_CHECKING

from varsync.domain.model.enums import VariableType

if TYPE_CHECKING:
    from datetime import datetime

    from varsync.domain.model.primitives import PromptId, VariableId, VariableOptions


def _coerce_options(options: Sequence[str] | None) -> VariableOptions | None:
    if options is None:
        return None
    if isinstance(options, str):
        raise TypeError("options must be a sequence of strings, not a string")
    return tuple(options)


@dataclass(frozen=True, slots=True, kw_only=True)
class _VariableFields:
    name: str
    type: VariableType = VariableType.STRING
    required: bool = False
    default_value: str | None = None
    help: str | None = None
    pattern: str | None = None
    options: VariableOptions | None = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "type", VariableType(self.type))
        object.__setattr__(self, "options", _coerce_options(self.options))


@dataclass(frozen=True, slots=True, kw_only=True)
class DesiredVariable(_VariableFields):
    """Desired state for one variable, supplied by the caller."""

    id: VariableId | None = None


@dataclass(frozen=True, slots=True, kw_only=True)
class UpsertRecord(_VariableFields):
    """Record scheduled for insert (no ``id``) or update (``id`` set)."""

    parent_id: PromptId
    order_index: int
    id: VariableId | None = None

    @property
    def is_new(self) -> bool:
        return self.id is None


@dataclass(frozen=True, slots=True, kw_only=True)
class PersistedVariable(_VariableFields):
    """Variable row as it exists in storage."""

    id: VariableId
    parent_id: PromptId
    order_index: int
    created_at: datetime


def business_fields(variable: _VariableFields) -> dict[str, object]:
    """Return the caller-editable fields shared by every variable shape."""

    return {
        "name": variable.name,
        "type": variable.type,
        "required": variable.required,
        "default_value": variable.default_value,
        "help": variable.help,
        "pattern": variable.pattern,
        "options": variable.options,
    }
