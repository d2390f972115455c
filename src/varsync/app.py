"""Application orchestration entry points."""

from __future__ import annotations

from collections.abc import Callable
from logging import getLogger
from typing import TYPE_CHECKING

from varsync.adapters.sqlalchemy.unit_of_work import (
    SqlAlchemyVariableUnitOfWork,
    is_started,
    startup,
)
from varsync.config import get_reconcile_config
from varsync.domain.mappers import to_desired_list
from varsync.domain.reconciliation import ReconciliationExecutor
from varsync.domain.validation import validate_desired_variables

if TYPE_CHECKING:
    from collections.abc import Sequence

    from varsync.domain.model import DesiredVariable, PersistedVariable, PromptId
    from varsync.domain.ports.unit_of_work import VariableUnitOfWork
    from varsync.domain.reconciliation import VariableDiff

type UnitOfWorkFactory = Callable[[], VariableUnitOfWork]


log = getLogger(__name__)


def _default_unit_of_work_factory() -> UnitOfWorkFactory:
    if not is_started():
        startup()
    return SqlAlchemyVariableUnitOfWork


def _validate_if_enabled(variables: Sequence[DesiredVariable], *, validate: bool | None) -> None:
    should_validate = get_reconcile_config().validate if validate is None else validate
    if should_validate:
        validate_desired_variables(variables)


def reconcile_prompt_variables(
    prompt_id: PromptId,
    variables: Sequence[DesiredVariable],
    *,
    validate: bool | None = None,
    unit_of_work_factory: UnitOfWorkFactory | None = None,
) -> list[PersistedVariable]:
    """Replace the variable set of ``prompt_id`` with ``variables`` and commit."""

    _validate_if_enabled(variables, validate=validate)

    effective_uow = unit_of_work_factory or _default_unit_of_work_factory()
    with effective_uow() as uow:
        executor = ReconciliationExecutor(uow.repositories.variables)
        persisted = executor.reconcile(prompt_id, variables)
        uow.commit()

    log.info("Stored %s variables for prompt %s", len(persisted), prompt_id)
    return persisted


def plan_prompt_variables(
    prompt_id: PromptId,
    variables: Sequence[DesiredVariable],
    *,
    validate: bool | None = None,
    unit_of_work_factory: UnitOfWorkFactory | None = None,
) -> VariableDiff:
    """Return the mutations a reconcile would apply, leaving storage untouched.

    Input is checked the same way ``reconcile_prompt_variables`` checks it.
    """

    _validate_if_enabled(variables, validate=validate)
    effective_uow = unit_of_work_factory or _default_unit_of_work_factory()
    with effective_uow() as uow:
        return ReconciliationExecutor(uow.repositories.variables).plan(prompt_id, variables)


def list_prompt_variables(
    prompt_id: PromptId,
    *,
    unit_of_work_factory: UnitOfWorkFactory | None = None,
) -> list[PersistedVariable]:
    effective_uow = unit_of_work_factory or _default_unit_of_work_factory()
    with effective_uow() as uow:
        return uow.repositories.variables.fetch_by_parent(prompt_id)


def duplicate_prompt_variables(
    source_prompt_id: PromptId,
    target_prompt_id: PromptId,
    *,
    unit_of_work_factory: UnitOfWorkFactory | None = None,
) -> list[PersistedVariable]:
    """Copy every variable of one prompt onto another under fresh ids.

    Variables already on the target are matched by name; target variables the
    source does not have are removed. An empty source leaves the target untouched.
    """

    effective_uow = unit_of_work_factory or _default_unit_of_work_factory()
    with effective_uow() as uow:
        store = uow.repositories.variables
        originals = store.fetch_by_parent(source_prompt_id)
        if not originals:
            log.info("Prompt %s has no variables to copy", source_prompt_id)
            return []
        copied = ReconciliationExecutor(store).reconcile(
            target_prompt_id,
            to_desired_list(originals),
        )
        uow.commit()

    log.info(
        "Copied %s variables from prompt %s to prompt %s",
        len(copied),
        source_prompt_id,
        target_prompt_id,
    )
    return copied


def clear_prompt_variables(
    prompt_id: PromptId,
    *,
    unit_of_work_factory: UnitOfWorkFactory | None = None,
) -> None:
    effective_uow = unit_of_work_factory or _default_unit_of_work_factory()
    with effective_uow() as uow:
        ReconciliationExecutor(uow.repositories.variables).reconcile(prompt_id, [])
        uow.commit()
