from datetime import datetime
from typing import Optional
from sqlalchemy import Column, Integer, String, DateTime, JSON
from pydantic import BaseModel
from src.database.connection import Base

ALL_TIME_WINDOW = 999999  # "За всё время"
MAP_STYLES = ("light", "dark")
DEFAULT_MAP_STYLE = "light"


def default_datasets() -> dict:
    return {"crime": True, "service": True, "fire": True}


class UserSettingsDB(Base):
    """Персональные настройки пользователя"""
    __tablename__ = "user_settings"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(String, nullable=False, unique=True, index=True)

    # Какие слои показывать на карте
    preferred_datasets = Column(JSON, nullable=False, default=default_datasets)
    preferred_time_window = Column(Integer, nullable=False, default=ALL_TIME_WINDOW)  # Часы, 999999 = всё время
    map_style = Column(String, nullable=False, default=DEFAULT_MAP_STYLE)  # light / dark
    home_location = Column(JSON, nullable=True)  # {lat, lng, zoom}

    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)


class PreferredDatasets(BaseModel):
    crime: bool = True
    service: bool = True
    fire: bool = True


class HomeLocation(BaseModel):
    lat: float
    lng: float
    zoom: float


class UserSettings(BaseModel):
    """Pydantic модель для настроек пользователя"""
    user_id: str
    preferred_datasets: PreferredDatasets = PreferredDatasets()
    preferred_time_window: int = ALL_TIME_WINDOW
    map_style: str = DEFAULT_MAP_STYLE
    home_location: Optional[HomeLocation] = None
    updated_at: Optional[datetime] = None

    class Config:
        from_attributes = True
