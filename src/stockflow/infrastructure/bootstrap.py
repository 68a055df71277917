"""Composition root — wires concrete implementations to domain interfaces.

This is the only place in the codebase that knows about *all* layers.
Every other module depends only on abstractions.

An in-memory SQLite database lives on a single shared connection, so
units of work over such an engine run one at a time: each holds the
engine's lock from ``__enter__`` to ``__exit__``. File-backed and server
databases give every unit of work its own connection and rely on the
optimistic version check instead.
"""

from __future__ import annotations

from pathlib import Path
from threading import RLock
from types import TracebackType
from weakref import WeakKeyDictionary

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine, make_url
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from stockflow.application.atomic import UnitOfWorkFactory
from stockflow.application.cancel_order import CancelOrderHandler
from stockflow.application.create_order import CreateOrderHandler
from stockflow.application.update_order_quantity import UpdateOrderQuantityHandler
from stockflow.domain.repository.unit_of_work import UnitOfWork
from stockflow.infrastructure.config import BINDING_ORM, Settings
from stockflow.infrastructure.persistence.orm_models import Base
from stockflow.infrastructure.persistence.orm_unit_of_work import SqlAlchemyUnitOfWork
from stockflow.infrastructure.persistence.sql_unit_of_work import SqlUnitOfWork

_engines: dict[str, Engine] = {}
_memory_locks: WeakKeyDictionary[Engine, RLock] = WeakKeyDictionary()


class SerializedUnitOfWork(UnitOfWork):
    """Runs the wrapped unit of work while holding a shared lock."""

    def __init__(self, inner: UnitOfWork, lock: RLock):
        self._inner = inner
        self._lock = lock

    def __enter__(self) -> SerializedUnitOfWork:
        self._lock.acquire()
        try:
            self._inner.__enter__()
        except BaseException:
            self._lock.release()
            raise
        self.users = self._inner.users
        self.products = self._inner.products
        self.orders = self._inner.orders
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        try:
            self._inner.__exit__(exc_type, exc, tb)
        finally:
            self._lock.release()

    def commit(self) -> None:
        self._inner.commit()

    def rollback(self) -> None:
        self._inner.rollback()


def settings() -> Settings:
    return Settings.from_env()


def _is_memory_sqlite(engine: Engine) -> bool:
    url = engine.url
    return url.get_backend_name() == "sqlite" and url.database in (None, "", ":memory:")


def create_db_engine(database_url: str, echo: bool = False) -> Engine:
    """Build an engine and make sure the schema exists."""
    url = make_url(database_url)
    if url.get_backend_name() == "sqlite":
        if url.database in (None, "", ":memory:"):
            # one shared connection, otherwise every checkout is a new empty db
            engine = create_engine(
                url,
                echo=echo,
                connect_args={"check_same_thread": False},
                poolclass=StaticPool,
            )
        else:
            Path(url.database).parent.mkdir(parents=True, exist_ok=True)
            # pooled connections are handed to whichever thread checks them out
            engine = create_engine(
                url, echo=echo, connect_args={"check_same_thread": False}
            )
    else:
        engine = create_engine(url, echo=echo, pool_pre_ping=True)

    Base.metadata.create_all(engine)
    return engine


def db_engine(config: Settings | None = None) -> Engine:
    config = config or settings()
    engine = _engines.get(config.database_url)
    if engine is None:
        engine = create_db_engine(config.database_url, echo=config.sql_echo)
        _engines[config.database_url] = engine
    return engine


def unit_of_work_factory(config: Settings | None = None) -> UnitOfWorkFactory:
    config = config or settings()
    return binding_factory(db_engine(config), config.binding)


def binding_factory(engine: Engine, binding: str) -> UnitOfWorkFactory:
    if binding == BINDING_ORM:
        session_factory = sessionmaker(engine, expire_on_commit=False)

        def factory() -> UnitOfWork:
            return SqlAlchemyUnitOfWork(session_factory)

    else:

        def factory() -> UnitOfWork:
            return SqlUnitOfWork(engine)

    if not _is_memory_sqlite(engine):
        return factory
    lock = _memory_locks.setdefault(engine, RLock())
    return lambda: SerializedUnitOfWork(factory(), lock)


def create_order_handler(config: Settings | None = None) -> CreateOrderHandler:
    config = config or settings()
    return CreateOrderHandler(
        unit_of_work_factory(config), max_attempts=config.max_attempts
    )


def cancel_order_handler(config: Settings | None = None) -> CancelOrderHandler:
    config = config or settings()
    return CancelOrderHandler(
        unit_of_work_factory(config), max_attempts=config.max_attempts
    )


def update_order_quantity_handler(
    config: Settings | None = None,
) -> UpdateOrderQuantityHandler:
    config = config or settings()
    return UpdateOrderQuantityHandler(
        unit_of_work_factory(config), max_attempts=config.max_attempts
    )


def dispose_engines() -> None:
    for engine in _engines.values():
        engine.dispose()
    _engines.clear()
