"""
Сервис получения датасетов: кэш -> внешний API -> нормализация -> кэш

При ошибке внешнего API отдается устаревший кэш (любого возраста).
Запись в кэш выполняется в фоне и на ответ не влияет.
"""
import asyncio
import logging
from typing import Any, Dict, List, Optional, Set

from src.application.datasets import DatasetSource
from src.repositories.cache_repository import CacheRepository
from src.services.coordinate_validator import filter_valid_records
from src.services.open_data_client import OpenDataClient
from src.services.record_normalizer import normalize_records
from src.utils.error_handler import (
    DatasetUnavailableError,
    MalformedUpstreamResponseError,
    ServiceError,
    UpstreamError,
)
from src.utils.time_window import filter_by_time_window

logger = logging.getLogger(__name__)


class DatasetService:
    """Сервис датасетов с кэшированием"""

    def __init__(self, cache_repository: CacheRepository, open_data_client: OpenDataClient):
        """
        Args:
            cache_repository: Хранилище кэша (синхронное, вызывается в потоке)
            open_data_client: Клиент внешних API
        """
        self.cache_repository = cache_repository
        self.open_data_client = open_data_client
        self._background_tasks: Set[asyncio.Task] = set()

    async def get_records(self, source: DatasetSource) -> List[Dict[str, Any]]:
        """
        Получить нормализованные записи датасета

        Raises:
            DatasetUnavailableError: API недоступен и кэша нет
        """
        if source.cached:
            cached = await asyncio.to_thread(
                self.cache_repository.get_fresh, source.cache_key, source.cache_ttl_minutes
            )
            if cached is not None:
                logger.info(f"📦 [{source.name}] ответ из кэша")
                return cached

        logger.info(f"🌐 [{source.name}] запрос к внешнему API")
        try:
            payload = await self.open_data_client.fetch_json(source.url, source.params)
            items = self._extract_items(payload, source)
            records = filter_valid_records(normalize_records(items, source), source.bounds)
        except UpstreamError as e:
            logger.warning(f"⚠️ [{source.name}] {type(e).__name__}: {e.message}")
            return await self._stale_or_fail(source)
        except Exception as e:
            logger.error(f"❌ [{source.name}] ошибка обработки данных: {e}", exc_info=True)
            return await self._stale_or_fail(source, ServiceError(str(e)))

        if not records:
            logger.warning(f"⚠️ [{source.name}] в ответе нет записей с координатами")
            return []

        if source.cached:
            self._schedule_cache_write(source.cache_key, records)

        logger.info(f"✅ [{source.name}] получено {len(records)} записей")
        return records

    async def get_filtered_records(self, source: DatasetSource, hours: Optional[int]) -> List[Dict[str, Any]]:
        """Записи датасета за последние hours часов"""
        records = await self.get_records(source)
        return filter_by_time_window(records, hours)

    async def get_summary(self, sources: List[DatasetSource], hours: Optional[int]) -> Dict[str, Optional[int]]:
        """
        Количество записей по слоям за временное окно

        Returns:
            {имя датасета: количество или None, если датасет недоступен}
        """
        results = await asyncio.gather(
            *(self.get_filtered_records(source, hours) for source in sources),
            return_exceptions=True,
        )
        counts: Dict[str, Optional[int]] = {}
        for source, result in zip(sources, results):
            if isinstance(result, Exception):
                logger.warning(f"[{source.name}] нет данных для сводки: {result}")
                counts[source.name] = None
            else:
                counts[source.name] = len(result)
        return counts

    async def wait_for_background_tasks(self) -> None:
        """Дождаться фоновых записей в кэш (при остановке приложения)"""
        if self._background_tasks:
            await asyncio.gather(*list(self._background_tasks), return_exceptions=True)

    @staticmethod
    def _extract_items(payload: Any, source: DatasetSource) -> List[Any]:
        """Достать массив записей из тела ответа"""
        if source.items_path is not None:
            if not isinstance(payload, dict):
                raise MalformedUpstreamResponseError("Invalid API response: expected object")
            payload = payload.get(source.items_path) or []
            # NextBus отдает один объект вместо массива, если машина одна
            if isinstance(payload, dict):
                payload = [payload]
        if not isinstance(payload, list):
            raise MalformedUpstreamResponseError("Invalid API response: expected array")
        return payload

    async def _stale_or_fail(self, source: DatasetSource, error: Optional[Exception] = None) -> List[Dict[str, Any]]:
        """Вернуть кэш любого возраста или выбросить DatasetUnavailableError"""
        if source.cached:
            entry = await asyncio.to_thread(self.cache_repository.get, source.cache_key)
            if entry is not None:
                logger.info(
                    f"♻️ [{source.name}] отдаем устаревший кэш ({entry.age_minutes():.1f} мин)"
                )
                return entry.data
        raise DatasetUnavailableError(source.label) from error

    def _schedule_cache_write(self, key: str, records: List[Dict[str, Any]]) -> None:
        """Запустить запись в кэш, не дожидаясь результата"""
        task = asyncio.create_task(asyncio.to_thread(self.cache_repository.put, key, records))
        self._background_tasks.add(task)
        task.add_done_callback(lambda t: self._on_cache_write_done(key, t))

    def _on_cache_write_done(self, key: str, task: asyncio.Task) -> None:
        self._background_tasks.discard(task)
        if task.cancelled():
            logger.warning(f"Запись кэша {key} отменена")
            return
        error = task.exception()
        if error is not None:
            logger.error(f"Не удалось сохранить кэш {key}: {error}")
        elif task.result() is False:
            logger.error(f"Не удалось сохранить кэш {key}")
