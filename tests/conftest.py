import pytest

from config import DatabaseConfig
from db.connection import PoolManager
from tests.fakes import FakePool


@pytest.fixture
def db_config():
    return DatabaseConfig(
        user="app",
        host="db.local",
        database="tests",
        password="secret",
        port=5432,
        pool_min=1,
        pool_max=3,
    )


@pytest.fixture
def fake_pool_cls():
    FakePool.instances = []
    yield FakePool
    FakePool.instances = []


@pytest.fixture
def pool_manager(db_config, fake_pool_cls):
    manager = PoolManager(db_config, pool_factory=fake_pool_cls)
    yield manager
    manager.close()
