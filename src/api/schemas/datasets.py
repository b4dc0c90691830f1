"""
Pydantic схемы для сводки по датасетам
"""
from typing import Dict, Optional
from pydantic import BaseModel, Field


class SummaryResponse(BaseModel):
    """Количество записей по слоям за временное окно"""
    hours: int = Field(..., description="Временное окно (часы), 999999 - всё время")
    counts: Dict[str, Optional[int]] = Field(..., description="null - датасет недоступен")
