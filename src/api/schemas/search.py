"""
Pydantic схемы для API поиска
"""
from typing import Any, List
from pydantic import BaseModel, Field


class SearchFeature(BaseModel):
    """Найденное место"""
    id: str
    place_name: str = ""
    center: List[float] = Field(..., min_length=2, max_length=2, description="[lng, lat]")
    text: str = ""
    context: List[Any] = []


class SearchResponse(BaseModel):
    """Результаты поиска"""
    features: List[SearchFeature]
    query: List[Any] = []
