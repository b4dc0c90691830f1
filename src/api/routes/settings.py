"""
REST API endpoints для настроек пользователя
"""
import asyncio
import logging
from fastapi import APIRouter, Depends, Request

from src.api.auth import get_current_user, User
from src.api.schemas.settings import UserSettingsResponse
from src.application.container import get_container
from src.services.user_settings_service import UserSettingsService
from src.utils.error_handler import ValidationError

logger = logging.getLogger(__name__)

router = APIRouter()


def get_settings_service() -> UserSettingsService:
    """Получить UserSettingsService из DI контейнера"""
    container = get_container()
    return container.user_settings_service()


@router.get("", response_model=UserSettingsResponse)
def get_settings(
    current_user: User = Depends(get_current_user),
    settings_service: UserSettingsService = Depends(get_settings_service)
):
    """
    Получить настройки пользователя (при первом запросе создаются по умолчанию)
    """
    settings = settings_service.get_settings(current_user.user_id)
    return UserSettingsResponse.model_validate(settings.model_dump())


@router.post("", response_model=UserSettingsResponse)
async def update_settings(
    request: Request,
    current_user: User = Depends(get_current_user),
    settings_service: UserSettingsService = Depends(get_settings_service)
):
    """
    Сохранить настройки пользователя

    Неверные или отсутствующие поля заменяются значениями по умолчанию.
    Тело читается после проверки токена: без сессии всегда 401.
    """
    try:
        body = await request.json()
    except ValueError:
        logger.warning(f"Невалидный JSON в настройках user_id={current_user.user_id}")
        raise ValidationError()

    if not isinstance(body, dict):
        raise ValidationError("Request body must be a JSON object")

    settings = await asyncio.to_thread(settings_service.save_settings, current_user.user_id, body)
    return UserSettingsResponse.model_validate(settings.model_dump())
