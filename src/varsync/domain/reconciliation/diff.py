"""Pure diff between persisted and desired prompt variables.

Matching policy, applied to each incoming entry at list position ``i``:

1. explicit ``id`` that exists in storage -> update/rename, keep that id
2. otherwise an existing row with the same ``name`` -> update, copy its id
3. otherwise -> new record without id (storage assigns one)

Every output record gets ``order_index = i``. An existing row is obsolete only
when neither its id is referenced explicitly nor its name is present.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Protocol

from varsync.domain.model import UpsertRecord, business_fields

if TYPE_CHECKING:
    from collections.abc import Sequence

    from varsync.domain.model import (
        DesiredVariable,
        PersistedVariable,
        PromptId,
        VariableId,
    )


@dataclass(frozen=True, slots=True)
class VariableDiff:
    """Mutations needed to turn persisted state into desired state."""

    to_upsert: tuple[UpsertRecord, ...] = field(default_factory=tuple)
    to_delete_ids: tuple[VariableId, ...] = field(default_factory=tuple)

    @property
    def inserts(self) -> tuple[UpsertRecord, ...]:
        return tuple(record for record in self.to_upsert if record.is_new)

    @property
    def updates(self) -> tuple[UpsertRecord, ...]:
        return tuple(record for record in self.to_upsert if not record.is_new)

    @property
    def is_empty(self) -> bool:
        return not self.to_upsert and not self.to_delete_ids


class DiffCalculator(Protocol):
    """Strategy computing a ``VariableDiff``; implementations must stay pure."""

    def calculate(
        self,
        parent_id: PromptId,
        existing: Sequence[PersistedVariable],
        incoming: Sequence[DesiredVariable],
    ) -> VariableDiff: ...


class DefaultDiffCalculator:
    """Id-then-name matching with two-sided obsolescence check."""

    def calculate(
        self,
        parent_id: PromptId,
        existing: Sequence[PersistedVariable],
        incoming: Sequence[DesiredVariable],
    ) -> VariableDiff:
        return calculate_variable_diff(parent_id, existing, incoming)


def calculate_variable_diff(
    parent_id: PromptId,
    existing: Sequence[PersistedVariable],
    incoming: Sequence[DesiredVariable],
) -> VariableDiff:
    """Compute upserts and deletions for one parent."""

    existing_by_id = {variable.id: variable for variable in existing}
    existing_by_name = {variable.name: variable for variable in existing}

    to_upsert = tuple(
        _prepare_record(
            desired,
            order_index=index,
            parent_id=parent_id,
            existing_by_id=existing_by_id,
            existing_by_name=existing_by_name,
        )
        for index, desired in enumerate(incoming)
    )
    return VariableDiff(
        to_upsert=to_upsert,
        to_delete_ids=_obsolete_ids(existing, incoming),
    )


def _prepare_record(
    desired: DesiredVariable,
    *,
    order_index: int,
    parent_id: PromptId,
    existing_by_id: dict[VariableId, PersistedVariable],
    existing_by_name: dict[str, PersistedVariable],
) -> UpsertRecord:
    record_id: VariableId | None = None
    if desired.id is not None and desired.id in existing_by_id:
        record_id = desired.id
    else:
        name_match = existing_by_name.get(desired.name)
        if name_match is not None:
            record_id = name_match.id

    return UpsertRecord(
        id=record_id,
        parent_id=parent_id,
        order_index=order_index,
        **business_fields(desired),  # pyright: ignore[reportArgumentType]
    )


def _obsolete_ids(
    existing: Sequence[PersistedVariable],
    incoming: Sequence[DesiredVariable],
) -> tuple[VariableId, ...]:
    referenced_ids = {desired.id for desired in incoming if desired.id is not None}
    incoming_names = {desired.name for desired in incoming}
    return tuple(
        variable.id
        for variable in existing
        if variable.id not in referenced_ids and variable.name not in incoming_names
    )
