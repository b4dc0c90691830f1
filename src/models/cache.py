from dataclasses import dataclass
from datetime import datetime
from typing import Any, Optional
from sqlalchemy import Column, Integer, String, DateTime, JSON
from src.database.connection import Base


class ApiCacheDB(Base):
    """Кэш нормализованных ответов внешних API (одна строка на датасет)"""
    __tablename__ = "api_cache"

    id = Column(Integer, primary_key=True, index=True)
    cache_key = Column(String, nullable=False, unique=True, index=True)  # Например "crime_data"
    cache_data = Column(JSON, nullable=False)  # Массив нормализованных записей
    fetched_at = Column(DateTime, nullable=False, default=datetime.utcnow)


@dataclass
class CacheEntry:
    """Прочитанная запись кэша"""
    key: str
    data: Any
    updated_at: datetime

    def age_minutes(self, now: Optional[datetime] = None) -> float:
        """Возраст записи в минутах"""
        now = now or datetime.utcnow()
        return (now - self.updated_at).total_seconds() / 60
