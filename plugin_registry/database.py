# plugin_registry/database.py

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import sessionmaker, scoped_session
from plugin_registry.core.settings import settings
from plugin_registry.models.base import Base

# Создаем движок подключения к БД
engine = create_engine(
    settings.DATABASE_URL,
    pool_pre_ping=True,
    future=True,
)

# Создаем фабрику сессий (scoped_session для потокобезопасности)
SessionLocal = scoped_session(
    sessionmaker(
        autocommit=False,
        autoflush=False,
        bind=engine,
        expire_on_commit=False,
    )
)

def init_db(bind: Engine = engine) -> None:
    """Создаёт все таблицы, описанные моделями (без миграций)."""
    import plugin_registry.models  # noqa: F401  регистрирует модели в Base.metadata
    Base.metadata.create_all(bind=bind)
