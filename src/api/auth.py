"""
Аутентификация для REST API
Токен сессии передается как Bearer и служит идентификатором пользователя
"""
import hmac
import logging
import re
from typing import Optional
from fastapi import Security
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from pydantic import BaseModel

from src.config import settings
from src.utils.error_handler import AuthError, ConfigError

logger = logging.getLogger(__name__)

# Схема безопасности; 401 выбрасываем сами, чтобы ответ был единым
security = HTTPBearer(auto_error=False)

TOKEN_PATTERN = re.compile(r"^[A-Za-z0-9_-]{1,128}$")


class User(BaseModel):
    """Модель пользователя"""
    user_id: str


def get_current_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Security(security)
) -> User:
    """
    Получить текущего пользователя из токена

    Raises:
        AuthError: Если токена нет или он невалиден
    """
    if credentials is None:
        raise AuthError()

    token = credentials.credentials
    if not TOKEN_PATTERN.match(token or ""):
        logger.warning("Invalid token format")
        raise AuthError()

    return User(user_id=token)


def require_admin(
    credentials: Optional[HTTPAuthorizationCredentials] = Security(security)
) -> None:
    """
    Проверить секрет администратора кэша

    Raises:
        ConfigError: CACHE_ADMIN_SECRET не задан на сервере
        AuthError: секрет не передан или не совпадает
    """
    admin_secret = settings.cache_admin_secret
    if not admin_secret:
        logger.error("CACHE_ADMIN_SECRET not configured")
        raise ConfigError("Admin route not configured")

    provided = credentials.credentials if credentials else ""
    if not hmac.compare_digest(provided.encode(), admin_secret.encode()):
        logger.warning("Неверный секрет администратора кэша")
        raise AuthError()
