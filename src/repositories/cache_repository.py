"""
Репозиторий кэша ответов внешних API

Кэш работает по принципу best-effort: любые ошибки хранилища логируются
и превращаются в None/False, в обработчик запроса они не пробрасываются.
"""
import logging
from datetime import datetime
from typing import Any, Optional
from src.models.cache import ApiCacheDB, CacheEntry
from .base_repository import BaseRepository

logger = logging.getLogger(__name__)


class CacheRepository(BaseRepository[ApiCacheDB]):
    """Репозиторий для таблицы api_cache"""

    def __init__(self, session_factory=None):
        super().__init__(ApiCacheDB, session_factory)

    def get(self, key: str) -> Optional[CacheEntry]:
        """
        Получить запись кэша независимо от возраста

        Returns:
            CacheEntry или None (нет записи или ошибка БД)
        """
        try:
            with self.session() as session:
                row = self.first_by(session, cache_key=key)
                if row is None:
                    return None
                return CacheEntry(key=row.cache_key, data=row.cache_data, updated_at=row.fetched_at)
        except Exception as e:
            logger.error(f"Ошибка чтения кэша key={key}: {e}")
            return None

    @staticmethod
    def is_fresh(entry: CacheEntry, max_age_minutes: float, now: Optional[datetime] = None) -> bool:
        """Запись свежая, если её возраст строго меньше max_age_minutes"""
        return entry.age_minutes(now) < max_age_minutes

    def get_fresh(self, key: str, max_age_minutes: float) -> Optional[Any]:
        """Данные из кэша, если запись есть и не устарела"""
        entry = self.get(key)
        if entry is None:
            logger.debug(f"Кэш пуст: {key}")
            return None
        if not self.is_fresh(entry, max_age_minutes):
            logger.debug(f"Кэш устарел: {key} ({entry.age_minutes():.1f} мин)")
            return None
        return entry.data

    def put(self, key: str, data: Any) -> bool:
        """
        Upsert записи: для одного ключа всегда одна строка

        Returns:
            True если запись сохранена
        """
        try:
            with self.session() as session:
                row = self.first_by(session, cache_key=key)
                if row is None:
                    row = ApiCacheDB(cache_key=key)
                    session.add(row)
                row.cache_data = data
                row.fetched_at = datetime.utcnow()
                session.commit()
            logger.debug(f"Кэш сохранен: {key}")
            return True
        except Exception as e:
            logger.error(f"Ошибка записи кэша key={key}: {e}")
            return False

    def delete(self, key: str) -> bool:
        """
        Удалить запись. Отсутствие записи - не ошибка

        Returns:
            True если запись удалена или её не было, False при ошибке БД
        """
        try:
            with self.session() as session:
                deleted = session.query(ApiCacheDB).filter(ApiCacheDB.cache_key == key).delete()
                session.commit()
            if deleted:
                logger.info(f"🗑️ Кэш удален: {key}")
            else:
                logger.info(f"Кэш для удаления не найден: {key}")
            return True
        except Exception as e:
            logger.error(f"Ошибка удаления кэша key={key}: {e}")
            return False

    def delete_all(self) -> bool:
        """Удалить все записи кэша"""
        try:
            deleted = super().delete_all()
            logger.info(f"🗑️ Весь кэш очищен ({deleted} записей)")
            return True
        except Exception as e:
            logger.error(f"Ошибка очистки кэша: {e}")
            return False
