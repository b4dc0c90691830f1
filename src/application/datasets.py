"""
Описание датасетов: откуда брать, как кэшировать и как нормализовать
"""
from dataclasses import dataclass, field
from typing import Any, Dict, Optional, Type

from pydantic import BaseModel

from src.application.dto.record_dto import (
    CrimeRecordDTO, ServiceRequestDTO, FireIncidentDTO, TransitVehicleDTO
)
from src.config import Settings, settings as app_settings
from src.services.coordinate_validator import Bounds
from src.services.record_normalizer import FieldMap


@dataclass(frozen=True)
class DatasetSource:
    """Источник данных для одного слоя карты"""
    name: str
    label: str  # Для сообщений об ошибках: "Failed to fetch <label> data"
    cache_key: str
    url: str
    record_model: Type[BaseModel]
    field_map: FieldMap
    id_prefix: str
    params: Dict[str, Any] = field(default_factory=dict)
    defaults: Dict[str, Any] = field(default_factory=dict)
    cache_ttl_minutes: Optional[int] = None  # None - не кэшируется
    items_path: Optional[str] = None  # Ключ массива в ответе; None - ответ сам массив
    bounds: Optional[Bounds] = None

    @property
    def cached(self) -> bool:
        return bool(self.cache_ttl_minutes)


CRIME_FIELDS: FieldMap = {
    "id": ("incident_id", "row_id"),
    "category": ("incident_category",),
    "description": ("incident_description", "incident_subcategory"),
    "timestamp": ("incident_datetime",),
    "address": ("incident_address", "address", "intersection"),
    "police_district": ("police_district", "district"),
    "resolution": ("resolution",),
    "day_of_week": ("incident_day_of_week", "day_of_week"),
}

SERVICE_REQUEST_FIELDS: FieldMap = {
    "id": ("service_request_id",),
    "category": ("request_type", "service_name"),
    "description": ("service_details", "service_subtype", "description"),
    "timestamp": ("requested_datetime", "opened"),
    "address": ("address", "incident_address"),
    "status": ("status_description", "status", "status_notes"),
    "neighborhood": ("neighborhoods_sffind_boundaries", "neighborhood", "analysis_neighborhood", "supervisor_district"),
    "agency": ("agency_responsible",),
}

FIRE_FIELDS: FieldMap = {
    "id": ("incident_number", "id"),
    "category": ("primary_situation", "call_type"),
    "description": ("primary_situation", "incident_type", "call_type"),
    "timestamp": ("alarm_dttm", "arrival_dttm", "close_dttm"),
    "address": ("address", "location_address"),
    "neighborhood": ("neighborhood_district", "neighborhood"),
    "incident_number": ("incident_number",),
    "primary_situation": ("primary_situation",),
    "alarm_time": ("alarm_dttm",),
    "arrival_time": ("arrival_dttm",),
    "close_time": ("close_dttm",),
    "battalion": ("battalion",),
    "station_area": ("station_area", "station"),
}

TRANSIT_FIELDS: FieldMap = {
    "id": ("id", "vehicleId"),
    "route": ("routeTag", "route"),
    "direction": ("dirTag", "direction"),
    "heading": ("heading",),
    "speed": ("speedKmHr",),
}


def build_datasets(config: Settings) -> Dict[str, DatasetSource]:
    """Собрать описания датасетов из настроек"""
    return {
        "crime": DatasetSource(
            name="crime",
            label="crime",
            cache_key="crime_data",
            url=config.crime_api_url,
            params={"$limit": config.crime_limit},
            record_model=CrimeRecordDTO,
            field_map=CRIME_FIELDS,
            defaults={"category": "Unknown"},
            id_prefix="crime",
            cache_ttl_minutes=config.crime_cache_ttl,
        ),
        "311": DatasetSource(
            name="311",
            label="311",
            cache_key="311_data",
            url=config.service_requests_api_url,
            params={"$limit": config.service_requests_limit},
            record_model=ServiceRequestDTO,
            field_map=SERVICE_REQUEST_FIELDS,
            defaults={"category": "Unknown"},
            id_prefix="311",
            cache_ttl_minutes=config.service_requests_cache_ttl,
        ),
        "fire": DatasetSource(
            name="fire",
            label="fire",
            cache_key="fire_data",
            url=config.fire_api_url,
            params={"$limit": config.fire_limit},
            record_model=FireIncidentDTO,
            field_map=FIRE_FIELDS,
            defaults={"category": "Emergency Response"},
            id_prefix="fire",
            cache_ttl_minutes=config.fire_cache_ttl,
        ),
        "transit": DatasetSource(
            name="transit",
            label="transit",
            cache_key="transit_data",
            url=config.transit_api_url,
            params={"command": "vehicleLocations", "a": config.transit_agency, "t": 0},
            record_model=TransitVehicleDTO,
            field_map=TRANSIT_FIELDS,
            defaults={"route": "Unknown"},
            id_prefix="vehicle",
            items_path="vehicle",
            bounds=Bounds(
                config.transit_min_lat, config.transit_max_lat,
                config.transit_min_lng, config.transit_max_lng,
            ),
        ),
    }


DATASETS: Dict[str, DatasetSource] = build_datasets(app_settings)
