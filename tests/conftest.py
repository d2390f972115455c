from __future__ import annotations

import os
from typing import TYPE_CHECKING

import pytest
from sqlalchemy import create_engine
from sqlalchemy.engine import Engine  # noqa: TC002
from sqlalchemy.orm import Session, sessionmaker

from tests.support.variables import FakeVariableUnitOfWork, InMemoryVariableStore
from varsync.adapters.sqlalchemy.migrations import upgrade_head
from varsync.adapters.sqlalchemy.unit_of_work import (
    SqlAlchemyVariableUnitOfWork,
    shutdown,
    startup,
)

os.environ.setdefault("DATABASE_URI", "sqlite+pysqlite:///:memory:")

if TYPE_CHECKING:
    from collections.abc import Callable, Iterator


@pytest.fixture
def memory_store() -> InMemoryVariableStore:
    return InMemoryVariableStore()


@pytest.fixture
def fake_unit_of_work(
    memory_store: InMemoryVariableStore,
) -> Callable[[], FakeVariableUnitOfWork]:
    def factory() -> FakeVariableUnitOfWork:
        return FakeVariableUnitOfWork(memory_store)

    return factory


@pytest.fixture
def sqlite_engine() -> Iterator[Engine]:
    engine = create_engine("sqlite+pysqlite:///:memory:", future=True)
    upgrade_head(engine=engine)
    try:
        yield engine
    finally:
        engine.dispose()


@pytest.fixture
def sqlite_session(sqlite_engine: Engine) -> Iterator[Session]:
    session_factory = sessionmaker(bind=sqlite_engine, future=True)
    session = session_factory()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def sqlite_unit_of_work(
    sqlite_engine: Engine,
) -> Iterator[Callable[[], SqlAlchemyVariableUnitOfWork]]:
    startup(engine=sqlite_engine, force=True)

    def factory() -> SqlAlchemyVariableUnitOfWork:
        return SqlAlchemyVariableUnitOfWork()

    try:
        yield factory
    finally:
        shutdown()
