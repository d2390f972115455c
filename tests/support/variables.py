"""Reusable fakes and builders for variable reconciliation tests."""

from __future__ import annotations

import itertools
from dataclasses import dataclass, field
from datetime import UTC, datetime
from typing import TYPE_CHECKING, Literal

from varsync.domain.errors import StorageError
from varsync.domain.model import (
    DesiredVariable,
    PersistedVariable,
    VariableType,
    business_fields,
)
from varsync.domain.ports.unit_of_work import VariableRepositories

if TYPE_CHECKING:
    from collections.abc import Sequence
    from types import TracebackType

    from varsync.domain.model import UpsertRecord

FIXED_CREATED_AT = datetime(2025, 1, 1, tzinfo=UTC)

type StoreOperation = Literal["fetch_by_parent", "upsert_batch", "delete_by_ids", "delete_by_parent"]


def persisted(
    variable_id: str,
    name: str,
    *,
    parent_id: str = "prompt-1",
    order_index: int = 0,
    variable_type: VariableType = VariableType.STRING,
    required: bool = False,
    default_value: str | None = None,
    options: Sequence[str] | None = None,
) -> PersistedVariable:
    return PersistedVariable(
        id=variable_id,
        parent_id=parent_id,
        name=name,
        type=variable_type,
        required=required,
        default_value=default_value,
        options=options,
        order_index=order_index,
        created_at=FIXED_CREATED_AT,
    )


def desired(name: str, *, variable_id: str | None = None, **fields: object) -> DesiredVariable:
    return DesiredVariable(id=variable_id, name=name, **fields)  # pyright: ignore[reportArgumentType]


@dataclass
class InMemoryVariableStore:
    """Dict-backed ``VariableStore`` that records calls and can inject failures.

    A batch upsert behaves like one statement: if it would leave two rows of a
    prompt with the same name, nothing is written and ``StorageError`` is raised.
    """

    rows: dict[str, PersistedVariable] = field(default_factory=dict[str, PersistedVariable])
    calls: list[StoreOperation] = field(default_factory=list["StoreOperation"])
    failures: dict[StoreOperation, Exception] = field(
        default_factory=dict["StoreOperation", Exception]
    )
    _ids: itertools.count[int] = field(default_factory=lambda: itertools.count(1))

    def seed(self, *variables: PersistedVariable) -> None:
        for variable in variables:
            self.rows[variable.id] = variable

    def fail(self, operation: StoreOperation, error: Exception | None = None) -> None:
        self.failures[operation] = error or StorageError(f"{operation} unavailable")

    def recover(self) -> None:
        self.failures.clear()

    def fetch_by_parent(self, parent_id: str) -> list[PersistedVariable]:
        self._enter("fetch_by_parent")
        return sorted(
            (row for row in self.rows.values() if row.parent_id == parent_id),
            key=lambda row: row.order_index,
        )

    def upsert_batch(
        self,
        records: Sequence[UpsertRecord],
        conflict_key: Literal["id"] = "id",
    ) -> list[PersistedVariable]:
        self._enter("upsert_batch")
        assert conflict_key == "id"
        staged = dict(self.rows)
        written: list[PersistedVariable] = []
        for record in records:
            current = staged.get(record.id) if record.id is not None else None
            variable_id = record.id or f"generated-{next(self._ids)}"
            row = PersistedVariable(
                id=variable_id,
                parent_id=record.parent_id,
                order_index=record.order_index,
                created_at=current.created_at if current is not None else FIXED_CREATED_AT,
                **business_fields(record),  # pyright: ignore[reportArgumentType]
            )
            staged[variable_id] = row
            written.append(row)

        seen: set[tuple[str, str]] = set()
        for row in staged.values():
            key = (row.parent_id, row.name)
            if key in seen:
                raise StorageError(f"unique violation on {key}")
            seen.add(key)

        self.rows = staged
        return sorted(written, key=lambda row: row.order_index)

    def delete_by_ids(self, ids: Sequence[str]) -> None:
        self._enter("delete_by_ids")
        for variable_id in ids:
            self.rows.pop(variable_id, None)

    def delete_by_parent(self, parent_id: str) -> None:
        self._enter("delete_by_parent")
        self.rows = {key: row for key, row in self.rows.items() if row.parent_id != parent_id}

    def _enter(self, operation: StoreOperation) -> None:
        self.calls.append(operation)
        failure = self.failures.get(operation)
        if failure is not None:
            raise failure


class FakeVariableUnitOfWork:
    """In-memory unit of work sharing one store across instances."""

    def __init__(self, store: InMemoryVariableStore) -> None:
        self._store = store
        self._repositories = VariableRepositories(variables=store)
        self.committed = False
        self.rolled_back = False

    @property
    def repositories(self) -> VariableRepositories:
        return self._repositories

    def __enter__(self) -> FakeVariableUnitOfWork:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_value: BaseException | None,
        traceback: TracebackType | None,
    ) -> Literal[False]:
        if exc_type is not None:
            self.rollback()
        return False

    def commit(self) -> None:
        self.committed = True

    def rollback(self) -> None:
        self.rolled_back = True
