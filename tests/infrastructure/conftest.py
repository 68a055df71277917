"""Fixtures running the same tests against both persistence bindings."""

import pytest

from stockflow.infrastructure import bootstrap
from stockflow.infrastructure.config import BINDINGS


@pytest.fixture
def engine(tmp_path):
    engine = bootstrap.create_db_engine(f"sqlite:///{tmp_path / 'stockflow.db'}")
    yield engine
    engine.dispose()


@pytest.fixture(params=BINDINGS)
def uow_factory(request, engine):
    return bootstrap.binding_factory(engine, request.param)
