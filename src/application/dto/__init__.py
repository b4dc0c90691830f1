"""
DTO модуль
"""
from .record_dto import (
    GeoRecordDTO,
    IncidentDTO,
    CrimeRecordDTO,
    ServiceRequestDTO,
    FireIncidentDTO,
    TransitVehicleDTO,
)

__all__ = [
    'GeoRecordDTO',
    'IncidentDTO',
    'CrimeRecordDTO',
    'ServiceRequestDTO',
    'FireIncidentDTO',
    'TransitVehicleDTO',
]
