"""
Проверка координат записей

Точка (0, 0) и вообще нулевая широта или долгота считаются отсутствующими:
так внешние API обозначают незаполненную геопозицию.
"""
import math
from typing import Any, Dict, List, NamedTuple, Optional


class Bounds(NamedTuple):
    """Прямоугольная область (широта/долгота)"""
    min_lat: float
    max_lat: float
    min_lng: float
    max_lng: float


def parse_coordinate(value: Any) -> Optional[float]:
    """Число или числовая строка -> float, иначе None"""
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, str):
        value = value.strip()
        if not value:
            return None
    try:
        number = float(value)
    except (TypeError, ValueError):
        return None
    if not math.isfinite(number):
        return None
    return number


def is_valid_coordinate_pair(lat: Optional[float], lng: Optional[float]) -> bool:
    """Координаты есть, ненулевые и в пределах [-90,90] x [-180,180]"""
    if lat is None or lng is None:
        return False
    if lat == 0 or lng == 0:
        return False
    return -90 <= lat <= 90 and -180 <= lng <= 180


def within_bounds(lat: float, lng: float, bounds: Bounds) -> bool:
    return bounds.min_lat <= lat <= bounds.max_lat and bounds.min_lng <= lng <= bounds.max_lng


def filter_valid_records(records: List[Dict[str, Any]], bounds: Optional[Bounds] = None) -> List[Dict[str, Any]]:
    """Оставить записи с корректными координатами (и внутри bounds, если задано)"""
    valid = []
    for record in records:
        lat = parse_coordinate(record.get("latitude"))
        lng = parse_coordinate(record.get("longitude"))
        if not is_valid_coordinate_pair(lat, lng):
            continue
        if bounds is not None and not within_bounds(lat, lng, bounds):
            continue
        valid.append(record)
    return valid
