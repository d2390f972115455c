"""Conversions between persisted rows and desired inputs."""

from __future__ import annotations

from typing import TYPE_CHECKING

from varsync.domain.model import DesiredVariable, business_fields

if TYPE_CHECKING:
    from collections.abc import Iterable

    from varsync.domain.model import PersistedVariable


def to_desired(variable: PersistedVariable, *, keep_id: bool = False) -> DesiredVariable:
    """Turn a stored row back into an input.

    Drop the id (the default) when copying variables to another prompt; keep it
    when re-submitting what was read so renames stay attached to the same row.
    """

    return DesiredVariable(
        id=variable.id if keep_id else None,
        **business_fields(variable),  # pyright: ignore[reportArgumentType]
    )


def to_desired_list(
    variables: Iterable[PersistedVariable],
    *,
    keep_id: bool = False,
) -> list[DesiredVariable]:
    ordered = sorted(variables, key=lambda variable: variable.order_index)
    return [to_desired(variable, keep_id=keep_id) for variable in ordered]
