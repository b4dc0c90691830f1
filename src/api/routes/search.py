"""
REST API endpoint для поиска адресов
"""
import logging
from typing import Optional
from fastapi import APIRouter, Depends, Query

from src.api.schemas.search import SearchResponse
from src.application.container import get_container
from src.services.geocoding_service import GeocodingService

logger = logging.getLogger(__name__)

router = APIRouter()


def get_geocoding_service() -> GeocodingService:
    """Получить GeocodingService из DI контейнера"""
    container = get_container()
    return container.geocoding_service()


@router.get("", response_model=SearchResponse)
async def search_places(
    q: Optional[str] = Query(None, description="Адрес или название места (от 2 символов)"),
    geocoding_service: GeocodingService = Depends(get_geocoding_service)
):
    """
    Поиск мест в пределах Сан-Франциско

    Returns:
        До 8 результатов с центром [lng, lat]
    """
    return await geocoding_service.search(q)
