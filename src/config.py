import logging
from typing import List, Optional
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    # Database
    database_url: str = "sqlite:///./civiclens.db"

    # Secrets
    mapbox_access_token: Optional[str] = None
    cache_admin_secret: Optional[str] = None  # Bearer-токен для /api/admin/clear-cache

    # Open data (DataSF / NextBus)
    crime_api_url: str = "https://data.sfgov.org/resource/wg3w-h783.json"
    service_requests_api_url: str = "https://data.sfgov.org/resource/vw6y-z8j6.json"
    fire_api_url: str = "https://data.sfgov.org/resource/wr8u-xric.json"
    transit_api_url: str = "https://retro.umoiq.com/service/publicJSONFeed"
    transit_agency: str = "sf-muni"

    crime_limit: int = 100
    service_requests_limit: int = 200
    fire_limit: int = 200

    # TTL кэша (минут)
    crime_cache_ttl: int = 10
    service_requests_cache_ttl: int = 15
    fire_cache_ttl: int = 12

    upstream_timeout_seconds: float = 30
    # DataSF отдает время без зоны, по местному времени Сан-Франциско
    data_timezone: str = "America/Los_Angeles"
    user_agent: str = "CivicLens/1.0"

    # Mapbox geocoding
    mapbox_geocoding_url: str = "https://api.mapbox.com/geocoding/v5/mapbox.places"
    search_proximity: str = "-122.4194,37.7749"  # центр Сан-Франциско
    search_bbox: str = "-122.6,37.7,-122.3,37.8"
    search_limit: int = 8
    search_types: str = "address,poi,neighborhood,locality,place"
    search_country: str = "us"

    # Границы для транспорта (Сан-Франциско)
    transit_min_lat: float = 37.7
    transit_max_lat: float = 37.8
    transit_min_lng: float = -122.6
    transit_max_lng: float = -122.3

    # API
    api_host: str = "0.0.0.0"
    api_port: int = 8000
    log_level: str = "INFO"
    cors_origins: List[str] = ["*"]

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"
        case_sensitive = False
        extra = "ignore"


settings = Settings()

logger = logging.getLogger(__name__)
if not settings.cache_admin_secret:
    logger.info("CACHE_ADMIN_SECRET не задан: /api/admin/clear-cache будет отвечать 500")
if not settings.mapbox_access_token:
    logger.info("MAPBOX_ACCESS_TOKEN не задан: /api/search будет отвечать 500")
