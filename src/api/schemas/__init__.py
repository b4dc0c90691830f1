"""
Pydantic схемы для API
"""
from .settings import UserSettingsResponse
from .search import SearchFeature, SearchResponse
from .admin import ClearCacheResponse, CacheAdminInfoResponse
from .datasets import SummaryResponse

__all__ = [
    # Settings
    'UserSettingsResponse',
    # Search
    'SearchFeature',
    'SearchResponse',
    # Admin
    'ClearCacheResponse',
    'CacheAdminInfoResponse',
    # Datasets
    'SummaryResponse',
]
