"""
REST API endpoints для администрирования кэша
"""
import logging
from typing import Optional
from fastapi import APIRouter, Depends, Query

from src.api.auth import require_admin
from src.api.schemas.admin import CacheAdminInfoResponse, ClearCacheResponse
from src.application.container import get_container
from src.repositories.cache_repository import CacheRepository
from src.utils.error_handler import AppError, ValidationError

logger = logging.getLogger(__name__)

router = APIRouter()


def get_cache_repository() -> CacheRepository:
    """Получить CacheRepository из DI контейнера"""
    container = get_container()
    return container.cache_repository()


@router.post("/clear-cache", response_model=ClearCacheResponse, dependencies=[Depends(require_admin)])
def clear_cache(
    key: Optional[str] = Query(None, description="Ключ кэша, например crime_data"),
    all: Optional[str] = Query(None, description="true - очистить весь кэш"),
    cache_repository: CacheRepository = Depends(get_cache_repository)
):
    """
    Очистить один ключ или весь кэш

    Требуется заголовок Authorization: Bearer <CACHE_ADMIN_SECRET>
    """
    if all == "true":
        if not cache_repository.delete_all():
            raise AppError("Failed to clear all cache")
        logger.info("Весь кэш очищен администратором")
        return ClearCacheResponse(success=True, message="All cache entries cleared")

    if key:
        if not cache_repository.delete(key):
            raise AppError(f"Failed to clear cache for key: {key}")
        logger.info(f"Кэш очищен администратором: {key}")
        return ClearCacheResponse(success=True, message=f"Cache cleared for key: {key}")

    raise ValidationError("Missing parameter: provide 'key' or 'all=true'")


@router.get("/clear-cache", response_model=CacheAdminInfoResponse)
async def clear_cache_info():
    """Справка по использованию (без авторизации)"""
    return CacheAdminInfoResponse(
        message="Cache admin endpoint",
        usage={
            "clearSpecific": "POST /api/admin/clear-cache?key=crime_data (requires Bearer token)",
            "clearAll": "POST /api/admin/clear-cache?all=true (requires Bearer token)",
        },
    )
