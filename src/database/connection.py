"""
Подключение к БД: SQLite для локального запуска, PostgreSQL в проде
"""
import logging
from contextlib import contextmanager
from typing import Iterator
from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import declarative_base, sessionmaker, Session
from src.config import settings

logger = logging.getLogger(__name__)

Base = declarative_base()


def is_sqlite(database_url: str) -> bool:
    return database_url.startswith("sqlite")


def create_db_engine(database_url: str) -> Engine:
    """
    Создать движок для database_url

    SQLite открывается с check_same_thread=False: кэш пишется из пула потоков
    """
    if is_sqlite(database_url):
        return create_engine(database_url, connect_args={"check_same_thread": False})
    return create_engine(database_url, pool_pre_ping=True)


engine = create_db_engine(settings.database_url)
SessionLocal = sessionmaker(autoflush=False, bind=engine)


@contextmanager
def get_db_session() -> Iterator[Session]:
    """Сессия с commit при успехе и rollback при ошибке"""
    db = SessionLocal()
    try:
        yield db
        db.commit()
    except Exception:
        db.rollback()
        raise
    finally:
        db.close()


def init_db() -> None:
    """Создать таблицы без Alembic (локальный запуск на SQLite)"""
    # Модели должны быть импортированы, чтобы попасть в metadata
    from src.models import cache, settings as settings_models  # noqa: F401
    Base.metadata.create_all(bind=engine)
    logger.info(f"✅ Таблицы готовы: {', '.join(sorted(Base.metadata.tables))}")
