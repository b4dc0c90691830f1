"""
Data Transfer Objects для нормализованных записей датасетов

В JSON поля отдаются в camelCase (policeDistrict, incidentNumber, ...),
как их ждет фронтенд карты.
"""
from typing import Optional
from pydantic import BaseModel
from pydantic.alias_generators import to_camel


class GeoRecordDTO(BaseModel):
    """Общая часть всех записей на карте"""
    id: str
    timestamp: str  # ISO-8601
    latitude: float
    longitude: float

    class Config:
        alias_generator = to_camel
        populate_by_name = True


class IncidentDTO(GeoRecordDTO):
    """Происшествие/обращение с категорией и адресом"""
    category: str
    description: Optional[str] = None
    address: Optional[str] = None


class CrimeRecordDTO(IncidentDTO):
    """Инцидент полиции SFPD"""
    police_district: Optional[str] = None
    resolution: Optional[str] = None
    day_of_week: Optional[str] = None


class ServiceRequestDTO(IncidentDTO):
    """Обращение 311"""
    status: Optional[str] = None
    neighborhood: Optional[str] = None
    agency: Optional[str] = None


class FireIncidentDTO(IncidentDTO):
    """Вызов пожарной/экстренной службы"""
    neighborhood: Optional[str] = None
    incident_number: Optional[str] = None
    primary_situation: Optional[str] = None
    alarm_time: Optional[str] = None
    arrival_time: Optional[str] = None
    close_time: Optional[str] = None
    battalion: Optional[str] = None
    station_area: Optional[str] = None


class TransitVehicleDTO(GeoRecordDTO):
    """Позиция транспортного средства Muni"""
    route: str
    direction: Optional[str] = None
    heading: Optional[str] = None
    speed: Optional[str] = None
