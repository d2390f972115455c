"""Pydantic models describing variable documents exchanged by the CLI."""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from typing import TYPE_CHECKING, cast

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from varsync.domain.model import DesiredVariable, VariableType

if TYPE_CHECKING:
    from varsync.domain.model import PersistedVariable


def _blank_to_none(value: object) -> object:
    if isinstance(value, str):
        stripped = value.strip()
        return stripped or None
    return value


class VarsyncBaseModel(BaseModel):
    model_config = ConfigDict(extra="ignore", populate_by_name=True)


class VariablePayload(VarsyncBaseModel):
    id: str | None = None
    name: str
    type: VariableType = VariableType.STRING
    required: bool = False
    default_value: str | None = Field(default=None, alias="defaultValue")
    help: str | None = None
    pattern: str | None = None
    options: list[str] | None = None
    # informational only; reconciliation derives order from list position
    order_index: int | None = Field(default=None, alias="orderIndex")

    @field_validator("type", mode="before")
    @classmethod
    def _normalize_type(cls, value: object) -> object:
        if value is None:
            return VariableType.STRING
        if isinstance(value, str):
            return value.strip().upper()
        return value

    _normalize_id = field_validator("id", mode="before")(_blank_to_none)
    _normalize_help = field_validator("help", mode="before")(_blank_to_none)
    _normalize_pattern = field_validator("pattern", mode="before")(_blank_to_none)

    def to_domain(self) -> DesiredVariable:
        return DesiredVariable(
            id=self.id,
            name=self.name,
            type=self.type,
            required=self.required,
            default_value=self.default_value,
            help=self.help,
            pattern=self.pattern,
            options=self.options,
        )

    @classmethod
    def from_domain(cls, variable: PersistedVariable) -> VariablePayload:
        return cls(
            id=variable.id,
            name=variable.name,
            type=variable.type,
            required=variable.required,
            default_value=variable.default_value,
            help=variable.help,
            pattern=variable.pattern,
            options=list(variable.options) if variable.options is not None else None,
            order_index=variable.order_index,
        )


class VariableDocument(VarsyncBaseModel):
    """Either a bare list of variables or ``{"variables": [...]}``."""

    variables: list[VariablePayload]

    @model_validator(mode="before")
    @classmethod
    def _wrap_bare_list(cls, value: object) -> object:
        if isinstance(value, Sequence) and not isinstance(value, (str, bytes, Mapping)):
            return {"variables": list(cast(Sequence[object], value))}
        return value

    def to_domain(self) -> list[DesiredVariable]:
        return [payload.to_domain() for payload in self.variables]


def dump_variables(variables: Sequence[PersistedVariable]) -> list[dict[str, object]]:
    return [
        VariablePayload.from_domain(variable).model_dump(mode="json", by_alias=True)
        for variable in variables
    ]
