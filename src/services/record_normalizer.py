"""
Нормализация записей внешних API к единому формату

Для каждого атрибута задается упорядоченный список имен полей-кандидатов:
берется первое непустое значение, иначе значение по умолчанию.
Пустыми считаются только None и "": 0 и False остаются значениями
(например, heading=0 у стоящего транспорта).
"""
import logging
import uuid
from datetime import datetime, timezone
from typing import Any, Dict, Iterable, List, Optional, Tuple, TYPE_CHECKING

from src.services.coordinate_validator import parse_coordinate

if TYPE_CHECKING:
    from src.application.datasets import DatasetSource

logger = logging.getLogger(__name__)

FieldMap = Dict[str, Tuple[str, ...]]

_EMPTY = (None, "")

# GeoJSON-точка: {"type": "Point", "coordinates": [lng, lat]}
POINT_FIELDS = ("point", "location")

# Имена полей широты и долготы в порядке приоритета
LATITUDE_FIELDS = ("latitude", "lat")
LONGITUDE_FIELDS = ("longitude", "lon", "long", "lng")


def first_present(item: Dict[str, Any], candidates: Iterable[str], default: Any = None) -> Any:
    """Значение первого непустого поля из candidates"""
    for name in candidates:
        value = item.get(name)
        if value not in _EMPTY:
            return value
    return default


def first_coordinate(item: Dict[str, Any], candidates: Iterable[str]) -> Optional[float]:
    """Первое поле из candidates, которое разбирается как число"""
    for name in candidates:
        value = parse_coordinate(item.get(name))
        if value is not None:
            return value
    return None


def extract_coordinates(item: Dict[str, Any]) -> Tuple[Optional[float], Optional[float]]:
    """
    Достать координаты из записи

    Порядок: вложенная точка с парой [lng, lat], затем отдельные поля.
    Широта и долгота ищутся независимо, так что {"lat": .., "longitude": ..}
    тоже разбирается.

    Returns:
        (lat, lng); None для того, что не удалось разобрать
    """
    for name in POINT_FIELDS:
        point = item.get(name)
        if isinstance(point, dict):
            coordinates = point.get("coordinates")
            if isinstance(coordinates, (list, tuple)) and len(coordinates) >= 2:
                return parse_coordinate(coordinates[1]), parse_coordinate(coordinates[0])

    return first_coordinate(item, LATITUDE_FIELDS), first_coordinate(item, LONGITUDE_FIELDS)


def generate_id(prefix: str) -> str:
    return f"{prefix}-{uuid.uuid4().hex[:9]}"


def _text(value: Any) -> Optional[str]:
    if value in _EMPTY:
        return None
    return value if isinstance(value, str) else str(value)


def normalize_record(item: Any, source: "DatasetSource") -> Optional[Dict[str, Any]]:
    """
    Привести одну запись к формату датасета

    Returns:
        dict для JSON-ответа или None, если у записи нет координат
    """
    if not isinstance(item, dict):
        return None

    lat, lng = extract_coordinates(item)
    if lat is None or lng is None:
        return None

    values: Dict[str, Any] = {
        field: _text(first_present(item, candidates, source.defaults.get(field)))
        for field, candidates in source.field_map.items()
    }
    if not values.get("id"):
        values["id"] = generate_id(source.id_prefix)
    if not values.get("timestamp"):
        values["timestamp"] = datetime.now(timezone.utc).isoformat()
    values["latitude"] = lat
    values["longitude"] = lng

    record = source.record_model(**values)
    return record.model_dump(by_alias=True)


def normalize_records(items: List[Any], source: "DatasetSource") -> List[Dict[str, Any]]:
    """Нормализовать массив записей, отбросив записи без координат"""
    records = []
    for item in items:
        record = normalize_record(item, source)
        if record is not None:
            records.append(record)
    skipped = len(items) - len(records)
    if skipped:
        logger.debug(f"[{source.name}] пропущено {skipped} записей без координат")
    return records
