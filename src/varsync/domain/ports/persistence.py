"""Ports for persisting prompt variables."""

from __future__ import annotations

from typing import TYPE_CHECKING, Literal, Protocol, runtime_checkable

if TYPE_CHECKING:
    from collections.abc import Sequence

    from varsync.domain.model import PersistedVariable, PromptId, UpsertRecord, VariableId

type ConflictKey = Literal["id"]


@runtime_checkable
class VariableStore(Protocol):
    """Persistence contract consumed by the reconciliation executor.

    Every method raises ``StorageError`` on transport, permission or constraint
    failures.
    """

    def fetch_by_parent(self, parent_id: PromptId) -> list[PersistedVariable]:
        """Return the variables of ``parent_id`` ordered by ``order_index``."""
        ...

    def upsert_batch(
        self,
        records: Sequence[UpsertRecord],
        conflict_key: ConflictKey = "id",
    ) -> list[PersistedVariable]:
        """Insert records without ``id`` and update records whose ``id`` exists."""
        ...

    def delete_by_ids(self, ids: Sequence[VariableId]) -> None: ...

    def delete_by_parent(self, parent_id: PromptId) -> None: ...
