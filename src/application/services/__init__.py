"""
Application Services модуль
"""
from .dataset_service import DatasetService

__all__ = [
    'DatasetService',
]
