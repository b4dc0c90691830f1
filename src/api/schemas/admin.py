"""
Pydantic схемы для API администрирования кэша
"""
from typing import Dict
from pydantic import BaseModel


class ClearCacheResponse(BaseModel):
    success: bool
    message: str


class CacheAdminInfoResponse(BaseModel):
    """Справка по эндпоинту очистки кэша"""
    message: str
    usage: Dict[str, str]
