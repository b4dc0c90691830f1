"""
Фильтрация записей по временному окну
"""
from datetime import datetime, timedelta, timezone
from typing import Any, Dict, List, Optional
from zoneinfo import ZoneInfo

from src.config import settings
from src.models.settings import ALL_TIME_WINDOW


def parse_timestamp(value: Any, data_timezone: Optional[str] = None) -> Optional[datetime]:
    """
    ISO-8601 -> aware datetime

    Время без зоны считается местным временем источника (settings.data_timezone)
    """
    if not isinstance(value, str) or not value:
        return None
    text = value.strip()
    if text.endswith("Z"):
        text = text[:-1] + "+00:00"
    try:
        parsed = datetime.fromisoformat(text)
    except ValueError:
        return None
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=ZoneInfo(data_timezone or settings.data_timezone))
    return parsed


def is_all_time(hours: Optional[int]) -> bool:
    return hours is None or hours >= ALL_TIME_WINDOW


def filter_by_time_window(
    records: List[Dict[str, Any]],
    hours: Optional[int],
    now: Optional[datetime] = None
) -> List[Dict[str, Any]]:
    """
    Оставить записи не старше hours часов

    Args:
        records: Нормализованные записи (поле timestamp)
        hours: Размер окна; None или 999999 - без фильтра
        now: Текущее время (для тестов)
    """
    if is_all_time(hours):
        return list(records)

    now = now or datetime.now(timezone.utc)
    if now.tzinfo is None:
        now = now.replace(tzinfo=timezone.utc)
    cutoff = now - timedelta(hours=hours)

    result = []
    for record in records:
        timestamp = parse_timestamp(record.get("timestamp"))
        if timestamp is not None and timestamp >= cutoff:
            result.append(record)
    return result
