"""
Централизованная обработка ошибок
"""
import logging
from typing import Optional
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

logger = logging.getLogger(__name__)


class AppError(Exception):
    """Базовая ошибка приложения с безопасным для клиента сообщением"""
    status_code = 500
    message = "Internal server error"

    def __init__(self, message: Optional[str] = None, status_code: Optional[int] = None):
        if message is not None:
            self.message = message
        if status_code is not None:
            self.status_code = status_code
        super().__init__(self.message)


class ValidationError(AppError):
    """Неверные входные данные запроса"""
    status_code = 400
    message = "Invalid request"


class AuthError(AppError):
    """Нет сессии или неверный секрет"""
    status_code = 401
    message = "Unauthorized"


class ConfigError(AppError):
    """Не задан обязательный секрет/токен (ошибка деплоя)"""
    status_code = 500
    message = "Service not configured"


class UpstreamError(AppError):
    """Ошибка внешнего API"""
    status_code = 502
    message = "Upstream service error"


class UpstreamUnavailableError(UpstreamError):
    """Внешний API недоступен или ответил не-2xx"""

    def __init__(self, message: Optional[str] = None, upstream_status: Optional[int] = None):
        super().__init__(message)
        self.upstream_status = upstream_status


class MalformedUpstreamResponseError(UpstreamError):
    """Ответ внешнего API не того формата (не массив, битый JSON)"""


class ServiceError(AppError):
    """Неожиданное исключение при обработке данных"""


class DatasetUnavailableError(AppError):
    """Свежих данных нет и устаревшего кэша тоже"""

    def __init__(self, label: str):
        super().__init__(f"Failed to fetch {label} data")


class SearchProviderError(AppError):
    """Геокодер вернул ошибку - статус пробрасываем клиенту"""
    message = "Search service unavailable"


def register_error_handlers(app: FastAPI) -> None:
    """Подключить обработчики ошибок: все ответы в виде {"error": ...}"""

    @app.exception_handler(AppError)
    async def app_error_handler(request: Request, exc: AppError):
        if isinstance(exc, ConfigError):
            logger.error(f"❌ Ошибка конфигурации на {request.url.path}: {exc.message}")
        elif exc.status_code >= 500:
            logger.error(f"Ошибка {exc.status_code} на {request.url.path}: {exc!r}")
        else:
            logger.warning(f"{type(exc).__name__} на {request.url.path}: {exc.message}")
        return JSONResponse(status_code=exc.status_code, content={"error": exc.message})

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(request: Request, exc: RequestValidationError):
        logger.warning(f"Validation error на {request.url.path}: {exc.errors()}")
        return JSONResponse(status_code=400, content={"error": "Invalid request"})

    @app.exception_handler(Exception)
    async def global_exception_handler(request: Request, exc: Exception):
        """Глобальный обработчик исключений"""
        logger.error(f"Unhandled exception на {request.url.path}: {exc}", exc_info=True)
        return JSONResponse(status_code=500, content={"error": "Internal server error"})
