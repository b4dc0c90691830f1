"""
Dependency Injection Container для Application Services
"""
from dependency_injector import containers, providers

from src.repositories.cache_repository import CacheRepository
from src.application.services.dataset_service import DatasetService
from src.services.geocoding_service import GeocodingService
from src.services.open_data_client import OpenDataClient
from src.services.user_settings_service import UserSettingsService


class ApplicationContainer(containers.DeclarativeContainer):
    """DI контейнер для Application Services и Repositories"""

    # Repositories (Singleton - один экземпляр на все приложение)
    cache_repository = providers.Singleton(CacheRepository)

    # Singleton services
    open_data_client = providers.Singleton(OpenDataClient)
    dataset_service = providers.Singleton(
        DatasetService,
        cache_repository=cache_repository,
        open_data_client=open_data_client
    )

    # Factory services
    geocoding_service = providers.Factory(
        GeocodingService,
        client=open_data_client
    )
    user_settings_service = providers.Factory(UserSettingsService)


# Глобальный контейнер
container: ApplicationContainer = None


def init_container() -> ApplicationContainer:
    """Инициализация контейнера"""
    global container
    container = ApplicationContainer()
    return container


def get_container() -> ApplicationContainer:
    """Получить глобальный контейнер"""
    global container
    if container is None:
        container = init_container()
    return container
