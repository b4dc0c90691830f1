"""
Поиск адресов и мест через Mapbox Geocoding API

Результаты не кэшируются, повторных запросов нет.
"""
import logging
from typing import Any, Dict, List, Optional
from urllib.parse import quote

from src.config import settings
from src.services.coordinate_validator import parse_coordinate
from src.services.open_data_client import OpenDataClient
from src.utils.error_handler import (
    ConfigError,
    SearchProviderError,
    UpstreamError,
    UpstreamUnavailableError,
    ValidationError,
)

logger = logging.getLogger(__name__)

MIN_QUERY_LENGTH = 2


class GeocodingService:
    """Сервис геокодирования, ограниченный районом карты"""

    def __init__(self, client: OpenDataClient, access_token: Optional[str] = None):
        self.client = client
        self.access_token = access_token if access_token is not None else settings.mapbox_access_token

    @staticmethod
    def validate_query(query: Optional[str]) -> str:
        """Вернуть запрос без пробелов по краям или выбросить ValidationError"""
        text = (query or "").strip()
        if len(text) < MIN_QUERY_LENGTH:
            raise ValidationError(f"Query must be at least {MIN_QUERY_LENGTH} characters")
        return text

    async def search(self, query: Optional[str]) -> Dict[str, Any]:
        """
        Найти места по свободному тексту

        Returns:
            {"features": [...], "query": [...]}, не более settings.search_limit результатов

        Raises:
            ValidationError: запрос короче 2 символов
            ConfigError: не задан MAPBOX_ACCESS_TOKEN
            SearchProviderError: ошибка Mapbox (статус пробрасывается)
        """
        text = self.validate_query(query)

        if not self.access_token:
            raise ConfigError("Search service not configured")

        url = f"{settings.mapbox_geocoding_url}/{quote(text, safe='')}.json"
        params = {
            "access_token": self.access_token,
            "proximity": settings.search_proximity,
            "bbox": settings.search_bbox,
            "limit": settings.search_limit,
            "types": settings.search_types,
            "country": settings.search_country,
        }

        try:
            data = await self.client.fetch_json(url, params)
        except UpstreamUnavailableError as e:
            logger.error(f"Mapbox API error: {e.message}")
            raise SearchProviderError(status_code=e.upstream_status or 503)
        except UpstreamError as e:
            logger.error(f"Mapbox API error: {e.message}")
            raise SearchProviderError(status_code=502)

        if not isinstance(data, dict):
            logger.error("Mapbox API error: unexpected response shape")
            raise SearchProviderError(status_code=502)

        features = self._format_features(data.get("features") or [])
        logger.debug(f"Поиск '{text}': {len(features)} результатов")
        return {"features": features, "query": data.get("query") or []}

    @staticmethod
    def _format_features(raw_features: List[Any]) -> List[Dict[str, Any]]:
        """Привести ответ Mapbox к нашему формату, отбросив результаты без центра"""
        features = []
        for index, feature in enumerate(raw_features):
            if not isinstance(feature, dict):
                continue
            center = feature.get("center")
            if not isinstance(center, (list, tuple)) or len(center) != 2:
                continue
            lng, lat = parse_coordinate(center[0]), parse_coordinate(center[1])
            if lng is None or lat is None:
                continue
            features.append({
                "id": feature.get("id") or f"search-result-{index}",
                "place_name": feature.get("place_name") or "",
                "center": [lng, lat],
                "text": feature.get("text") or "",
                "context": feature.get("context") or [],
            })
            if len(features) >= settings.search_limit:
                break
        return features
