"""
Pydantic схемы для API настроек
"""
from typing import Optional
from pydantic import BaseModel, Field

from src.models.settings import PreferredDatasets, HomeLocation


class UserSettingsResponse(BaseModel):
    """Схема ответа для настроек пользователя"""
    user_id: str
    preferred_datasets: PreferredDatasets = Field(..., description="Включенные слои карты")
    preferred_time_window: int = Field(..., description="Временное окно (часы), 999999 - всё время")
    map_style: str = Field(..., description="Стиль карты: light или dark")
    home_location: Optional[HomeLocation] = Field(None, description="Домашняя точка карты")

    class Config:
        from_attributes = True
