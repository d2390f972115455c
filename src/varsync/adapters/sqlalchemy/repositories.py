"""Repository implementations backed by SQLAlchemy sessions."""

from __future__ import annotations

import logging
from contextlib import contextmanager
from datetime import UTC, datetime
from typing import TYPE_CHECKING

from sqlalchemy import delete, insert, select, update
from sqlalchemy.exc import SQLAlchemyError

from varsync.adapters.sqlalchemy.mappings import new_variable_id, prompt_variable_table
from varsync.domain.errors import InvalidArgumentError, StorageError
from varsync.domain.model import PersistedVariable, business_fields

if TYPE_CHECKING:
    from collections.abc import Callable, Iterator, Sequence

    from sqlalchemy import RowMapping
    from sqlalchemy.orm import Session

    from varsync.domain.model import PromptId, UpsertRecord, VariableId
    from varsync.domain.ports.persistence import ConflictKey

log = logging.getLogger(__name__)

_TEMPORARY_NAME_PREFIX = "~rename~"


@contextmanager
def _translate_errors(action: str) -> Iterator[None]:
    try:
        yield
    except SQLAlchemyError as exc:
        raise StorageError(f"Could not {action}: {exc}") from exc


class SqlAlchemyVariableStore:
    """``VariableStore`` working on the ``prompt_variable`` table."""

    def __init__(
        self,
        session: Session,
        *,
        clock: Callable[[], datetime] | None = None,
    ) -> None:
        self.session = session
        self._clock = clock or (lambda: datetime.now(UTC))

    def fetch_by_parent(self, parent_id: PromptId) -> list[PersistedVariable]:
        stmt = (
            select(prompt_variable_table)
            .where(prompt_variable_table.c.prompt_id == parent_id)
            .order_by(prompt_variable_table.c.order_index)
        )
        with _translate_errors(f"fetch variables of prompt {parent_id}"):
            rows = self.session.execute(stmt).mappings().all()
        return [_to_domain(row) for row in rows]

    def upsert_batch(
        self,
        records: Sequence[UpsertRecord],
        conflict_key: ConflictKey = "id",
    ) -> list[PersistedVariable]:
        if conflict_key != "id":
            raise InvalidArgumentError(f"Unsupported conflict key: {conflict_key!r}")
        if not records:
            return []

        with _translate_errors(f"upsert {len(records)} variables"):
            current_names = self._names_by_id([record.id for record in records if record.id])
            updates = [record for record in records if record.id in current_names]
            inserts = [record for record in records if record.id not in current_names]

            self._release_renamed_names(updates, current_names)
            for record in updates:
                self.session.execute(
                    update(prompt_variable_table)
                    .where(prompt_variable_table.c.id == record.id)
                    .values(**_row_values(record))
                )

            now = self._clock()
            inserted_ids: list[VariableId] = []
            insert_rows: list[dict[str, object]] = []
            for record in inserts:
                variable_id = record.id or new_variable_id()
                inserted_ids.append(variable_id)
                insert_rows.append({**_row_values(record), "id": variable_id, "created_at": now})
            if insert_rows:
                self.session.execute(insert(prompt_variable_table), insert_rows)

            affected_ids = [record.id for record in updates if record.id] + inserted_ids
            stmt = (
                select(prompt_variable_table)
                .where(prompt_variable_table.c.id.in_(affected_ids))
                .order_by(prompt_variable_table.c.order_index)
            )
            rows = self.session.execute(stmt).mappings().all()

        log.debug("Upserted variables: updated=%s, inserted=%s", len(updates), len(inserts))
        return [_to_domain(row) for row in rows]

    def delete_by_ids(self, ids: Sequence[VariableId]) -> None:
        if not ids:
            return
        stmt = delete(prompt_variable_table).where(prompt_variable_table.c.id.in_(list(ids)))
        with _translate_errors(f"delete {len(ids)} variables"):
            self.session.execute(stmt)

    def delete_by_parent(self, parent_id: PromptId) -> None:
        stmt = delete(prompt_variable_table).where(prompt_variable_table.c.prompt_id == parent_id)
        with _translate_errors(f"delete variables of prompt {parent_id}"):
            self.session.execute(stmt)

    def _names_by_id(self, ids: list[VariableId]) -> dict[VariableId, str]:
        if not ids:
            return {}
        stmt = select(prompt_variable_table.c.id, prompt_variable_table.c.name).where(
            prompt_variable_table.c.id.in_(ids)
        )
        return {variable_id: name for variable_id, name in self.session.execute(stmt)}

    def _release_renamed_names(
        self,
        updates: list[UpsertRecord],
        current_names: dict[VariableId, str],
    ) -> None:
        # Unique (prompt_id, name) is checked per statement, so renames that swap
        # names within one batch go through a temporary name first.
        renamed = [
            record.id
            for record in updates
            if record.id is not None and current_names[record.id] != record.name
        ]
        if len(renamed) < 2:  # noqa: PLR2004
            return
        for variable_id in renamed:
            self.session.execute(
                update(prompt_variable_table)
                .where(prompt_variable_table.c.id == variable_id)
                .values(name=f"{_TEMPORARY_NAME_PREFIX}{variable_id}")
            )


def _row_values(record: UpsertRecord) -> dict[str, object]:
    return {
        **business_fields(record),
        "prompt_id": record.parent_id,
        "order_index": record.order_index,
    }


def _to_domain(row: RowMapping) -> PersistedVariable:
    return PersistedVariable(
        id=row["id"],
        parent_id=row["prompt_id"],
        name=row["name"],
        type=row["type"],
        required=bool(row["required"]),
        default_value=row["default_value"],
        help=row["help"],
        pattern=row["pattern"],
        options=row["options"],
        order_index=row["order_index"],
        created_at=row["created_at"],
    )


if TYPE_CHECKING:
    from typing import cast

    from varsync.domain.ports.persistence import VariableStore

    _session_stub = cast("Session", object())
    _store_check: VariableStore = SqlAlchemyVariableStore(_session_stub)
