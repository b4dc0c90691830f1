"""
REST API endpoints для слоев карты: преступления, 311, пожары, транспорт
"""
import logging
from typing import Any, Dict, List, Optional
from fastapi import APIRouter, Depends, Query

from src.api.schemas.datasets import SummaryResponse
from src.application.container import get_container
from src.application.datasets import DATASETS
from src.application.services.dataset_service import DatasetService
from src.models.settings import ALL_TIME_WINDOW
from src.utils.error_handler import AppError

logger = logging.getLogger(__name__)

router = APIRouter()

HOURS_QUERY = Query(None, ge=1, description="Только записи за последние N часов (999999 - всё время)")


def get_dataset_service() -> DatasetService:
    """Получить DatasetService из DI контейнера"""
    container = get_container()
    return container.dataset_service()


@router.get("/crime")
async def get_crime(
    hours: Optional[int] = HOURS_QUERY,
    dataset_service: DatasetService = Depends(get_dataset_service)
) -> List[Dict[str, Any]]:
    """Инциденты SFPD (кэш 10 минут)"""
    return await dataset_service.get_filtered_records(DATASETS["crime"], hours)


@router.get("/311")
async def get_service_requests(
    hours: Optional[int] = HOURS_QUERY,
    dataset_service: DatasetService = Depends(get_dataset_service)
) -> List[Dict[str, Any]]:
    """Обращения 311 (кэш 15 минут)"""
    return await dataset_service.get_filtered_records(DATASETS["311"], hours)


@router.get("/fire")
async def get_fire(
    hours: Optional[int] = HOURS_QUERY,
    dataset_service: DatasetService = Depends(get_dataset_service)
) -> List[Dict[str, Any]]:
    """Вызовы пожарной службы (кэш 12 минут)"""
    return await dataset_service.get_filtered_records(DATASETS["fire"], hours)


def parse_transit_hours(value: Optional[str]) -> Optional[int]:
    """Окно для транспорта: некорректное значение означает "без фильтра", а не 400"""
    try:
        hours = int(value)
    except (TypeError, ValueError):
        return None
    return hours if hours >= 1 else None


@router.get("/transit")
async def get_transit(
    hours: Optional[str] = Query(None, description="Только записи за последние N часов"),
    dataset_service: DatasetService = Depends(get_dataset_service)
) -> List[Dict[str, Any]]:
    """
    Позиции транспорта Muni

    При любой ошибке отдается пустой массив, чтобы карта не ломалась
    """
    try:
        return await dataset_service.get_filtered_records(DATASETS["transit"], parse_transit_hours(hours))
    except AppError as e:
        logger.warning(f"Транспорт недоступен: {e.message}")
        return []
    except Exception as e:
        logger.error(f"Ошибка получения транспорта: {e}", exc_info=True)
        return []


@router.get("/summary", response_model=SummaryResponse)
async def get_summary(
    hours: Optional[int] = HOURS_QUERY,
    dataset_service: DatasetService = Depends(get_dataset_service)
):
    """Количество записей по каждому слою за временное окно"""
    counts = await dataset_service.get_summary(list(DATASETS.values()), hours)
    return SummaryResponse(hours=hours or ALL_TIME_WINDOW, counts=counts)
