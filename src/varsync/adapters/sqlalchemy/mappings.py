"""SQLAlchemy table metadata for prompt variables."""

from __future__ import annotations

import json
import uuid
from datetime import UTC, datetime
from typing import Any, cast

from sqlalchemy import (
    Boolean,
    Column,
    DateTime,
    Dialect,
    Enum,
    Index,
    Integer,
    MetaData,
    String,
    Table,
    Text,
    TypeDecorator,
    UniqueConstraint,
)

from varsync.domain.model import VariableType


def new_variable_id() -> str:
    return str(uuid.uuid4())


class UTCDateTime(TypeDecorator[datetime]):
    impl = DateTime(timezone=True)
    cache_ok = True

    def process_bind_param(self, value: datetime | None, dialect: Dialect) -> datetime | None:
        _ = dialect
        if value is None:
            return None
        if value.tzinfo is None:
            value = value.replace(tzinfo=UTC)
        return value.astimezone(UTC)

    def process_result_value(self, value: datetime | None, dialect: Dialect) -> datetime | None:
        _ = dialect
        if value is None:
            return None
        return value if value.tzinfo else value.replace(tzinfo=UTC)


class OptionListType(TypeDecorator[tuple[str, ...]]):
    """Ordered ENUM options stored as a JSON array."""

    impl = Text
    cache_ok = True

    def process_bind_param(
        self, value: tuple[str, ...] | list[str] | None, dialect: Dialect
    ) -> str | None:
        _ = dialect
        if value is None:
            return None
        return json.dumps(list(value))

    def process_result_value(self, value: str | None, dialect: Dialect) -> tuple[str, ...] | None:
        _ = dialect
        if value is None:
            return None
        loaded = json.loads(value)
        if not isinstance(loaded, list):
            return None
        items = cast(list[Any], loaded)
        return tuple(str(item) for item in items)


metadata = MetaData(
    naming_convention={
        "ix": "ix_%(column_0_label)s",
        "uq": "uq_%(table_name)s_%(column_0_name)s_%(column_1_name)s",
        "ck": "ck_%(table_name)s_%(constraint_name)s",
        "fk": "fk_%(table_name)s_%(column_0_label)s_%(referred_table_name)s",
        "pk": "pk_%(table_name)s",
    }
)

prompt_variable_table = Table(
    "prompt_variable",
    metadata,
    Column("id", String(36), primary_key=True, default=new_variable_id),
    Column("prompt_id", String(36), nullable=False),
    Column("name", String(100), nullable=False),
    Column(
        "type",
        Enum(VariableType, native_enum=False, length=16),
        nullable=False,
        default=VariableType.STRING,
    ),
    Column("required", Boolean, nullable=False, default=False),
    Column("default_value", Text, nullable=True),
    Column("help", Text, nullable=True),
    Column("pattern", String(200), nullable=True),
    Column("options", OptionListType(), nullable=True),
    Column("order_index", Integer, nullable=False, default=0),
    Column("created_at", UTCDateTime(), nullable=False),
    UniqueConstraint("prompt_id", "name"),
    Index("ix_prompt_variable_prompt_order", "prompt_id", "order_index"),
)
