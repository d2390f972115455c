"""Apply a variable diff against a persistence collaborator.

The executor is a single-attempt orchestrator: it fetches a snapshot, computes
the diff, deletes obsolete rows, then upserts. It holds no state between calls,
so retrying a failed ``reconcile`` with the same input converges on the desired
state. Concurrent calls for the same parent are not serialised here.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from varsync.domain.errors import InvalidArgumentError, StorageError

from .diff import DefaultDiffCalculator

if TYPE_CHECKING:
    from collections.abc import Callable, Sequence

    from varsync.domain.model import DesiredVariable, PersistedVariable, PromptId
    from varsync.domain.ports import VariableStore

    from .diff import DiffCalculator, VariableDiff

log = logging.getLogger(__name__)


class ReconciliationExecutor:
    """Synchronise one prompt's persisted variables with a desired list."""

    def __init__(
        self,
        store: VariableStore,
        *,
        calculator: DiffCalculator | None = None,
    ) -> None:
        self.store = store
        self.calculator: DiffCalculator = calculator or DefaultDiffCalculator()

    def reconcile(
        self,
        parent_id: PromptId,
        incoming: Sequence[DesiredVariable],
    ) -> list[PersistedVariable]:
        """Make the stored variables of ``parent_id`` match ``incoming``."""

        _require_parent_id(parent_id)
        incoming = list(incoming)

        if not incoming:
            self._guarded(
                parent_id,
                0,
                "delete_by_parent",
                lambda: self.store.delete_by_parent(parent_id),
            )
            log.info("Cleared all variables for prompt %s", parent_id)
            return []

        diff = self._compute(parent_id, incoming)

        if diff.to_delete_ids:
            self._guarded(
                parent_id,
                len(incoming),
                "delete_by_ids",
                lambda: self.store.delete_by_ids(list(diff.to_delete_ids)),
            )

        persisted = self._guarded(
            parent_id,
            len(incoming),
            "upsert_batch",
            lambda: self.store.upsert_batch(list(diff.to_upsert), conflict_key="id"),
        )
        log.info(
            "Reconciled variables for prompt %s: inserted=%s, updated=%s, deleted=%s",
            parent_id,
            len(diff.inserts),
            len(diff.updates),
            len(diff.to_delete_ids),
        )
        return sorted(persisted, key=lambda variable: variable.order_index)

    def plan(
        self,
        parent_id: PromptId,
        incoming: Sequence[DesiredVariable],
    ) -> VariableDiff:
        """Compute the diff ``reconcile`` would apply, without mutating anything."""

        _require_parent_id(parent_id)
        return self._compute(parent_id, list(incoming))

    def _compute(self, parent_id: PromptId, incoming: list[DesiredVariable]) -> VariableDiff:
        existing = self._guarded(
            parent_id,
            len(incoming),
            "fetch_by_parent",
            lambda: self.store.fetch_by_parent(parent_id),
        )
        diff = self.calculator.calculate(parent_id, existing, incoming)
        log.debug(
            "Variable diff for prompt %s: existing=%s, upserts=%s, deletions=%s",
            parent_id,
            len(existing),
            len(diff.to_upsert),
            list(diff.to_delete_ids),
        )
        return diff

    def _guarded[T](
        self,
        parent_id: PromptId,
        record_count: int,
        step: str,
        operation: Callable[[], T],
    ) -> T:
        try:
            return operation()
        except Exception as exc:
            log.exception(
                "Variable reconciliation failed at %s (prompt_id=%s, variables=%s)",
                step,
                parent_id,
                record_count,
            )
            if not isinstance(exc, StorageError):
                raise StorageError(
                    f"{step} failed for prompt {parent_id}: {exc}",
                    parent_id=parent_id,
                    record_count=record_count,
                ) from exc
            if exc.parent_id is None:
                exc.parent_id = parent_id
            if exc.record_count is None:
                exc.record_count = record_count
            raise


def _require_parent_id(parent_id: PromptId) -> None:
    if not isinstance(parent_id, str) or not parent_id.strip():
        raise InvalidArgumentError("parent_id must be a non-empty string")
