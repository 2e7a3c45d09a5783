import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker, Session
from sqlalchemy.pool import StaticPool
import os
import uuid
from typing import Generator, Callable, Dict, Any

# Test database URL must be set BEFORE plugin_registry.core.settings is imported,
# otherwise the module-level engine in plugin_registry.database points at the real DB.
os.environ["DATABASE_URL"] = "sqlite:///:memory:"

# Import all model modules first so Base.metadata is populated.
import plugin_registry.models

from plugin_registry.models.base import Base
from plugin_registry.core.constants import PluginType
from plugin_registry.core.settings import settings as app_settings
app_settings.DATABASE_URL = os.getenv("DATABASE_URL", "sqlite:///:memory:")

SQLALCHEMY_DATABASE_URL = app_settings.DATABASE_URL

engine = create_engine(
    SQLALCHEMY_DATABASE_URL,
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)

TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture(scope="session", autouse=True)
def create_test_tables_session_scope():
    """
    Create all tables once per test session. Drops them again after the session.
    """
    Base.metadata.drop_all(bind=engine)
    Base.metadata.create_all(bind=engine)
    yield
    Base.metadata.drop_all(bind=engine)


@pytest.fixture(scope="function")
def db() -> Generator[Session, None, None]:
    """
    Fixture to provide a database session for each test function.
    Rolls back any changes after the test to ensure test isolation.
    """
    connection = engine.connect()
    transaction = connection.begin()
    session = TestingSessionLocal(bind=connection)

    yield session

    session.close()
    if transaction.is_active:
        transaction.rollback()
    connection.close()


@pytest.fixture
def plugin_data_factory() -> Callable[..., Dict[str, Any]]:
    def _factory(**kwargs):
        data = {
            "name": f"test-plugin-{uuid.uuid4().hex[:6]}",
            "type": PluginType.PLUGIN,
            "version": "1.0.0",
            "enabled": True,
            "uninstalled": False,
            "peertube_engine": ">=1.3.0",
            "description": "A test plugin description.",
            "settings": {"greeting": "hello"},
            "storage": {"counter": 1},
        }
        data.update(kwargs)
        return data
    return _factory
