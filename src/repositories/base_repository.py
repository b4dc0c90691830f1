"""
Базовый репозиторий для работы с БД
"""
from typing import Callable, ContextManager, Generic, TypeVar, Optional
from sqlalchemy.orm import Session
from src.database.connection import get_db_session

T = TypeVar('T')


class BaseRepository(Generic[T]):
    """Базовый класс для репозиториев"""

    def __init__(self, model_class, session_factory: Optional[Callable[[], ContextManager[Session]]] = None):
        """
        Args:
            model_class: SQLAlchemy модель
            session_factory: Контекстный менеджер сессии (по умолчанию get_db_session)
        """
        self.model_class = model_class
        self._session_factory = session_factory or get_db_session

    def session(self) -> ContextManager[Session]:
        """Открыть сессию (commit/rollback делает фабрика)"""
        return self._session_factory()

    def first_by(self, session: Session, **filters) -> Optional[T]:
        """Первый объект по фильтру"""
        return session.query(self.model_class).filter_by(**filters).first()

    def delete_all(self) -> int:
        """Удалить все объекты, вернуть количество"""
        with self.session() as session:
            deleted = session.query(self.model_class).delete()
            session.commit()
            return deleted
