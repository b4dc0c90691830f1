"""
FastAPI приложение для REST API
"""
import logging
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from contextlib import asynccontextmanager

from src.application.container import init_container, get_container
from src.config import settings
from src.utils.error_handler import register_error_handlers

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Управление жизненным циклом приложения"""
    # Startup
    logger.info("🚀 Запуск FastAPI приложения")
    init_container()
    logger.info("✅ DI контейнер инициализирован")

    yield

    # Shutdown: дожидаемся фоновых записей в кэш
    await get_container().dataset_service().wait_for_background_tasks()
    logger.info("🛑 Остановка FastAPI приложения")


app = FastAPI(
    title="CivicLens API",
    description=(
        "Прокси и кэш для открытых данных Сан-Франциско.\n\n"
        "## Endpoints\n\n"
        "- `/api/crime`, `/api/311`, `/api/fire`, `/api/transit` - слои карты\n"
        "- `/api/summary` - количество записей по слоям\n"
        "- `/api/search` - поиск адресов\n"
        "- `/api/settings` - настройки пользователя (Bearer токен сессии)\n"
        "- `/api/admin/clear-cache` - очистка кэша (Bearer CACHE_ADMIN_SECRET)"
    ),
    version="1.0.0",
    lifespan=lifespan,
    docs_url="/docs",
    redoc_url="/redoc",
    openapi_tags=[
        {"name": "Datasets", "description": "Преступления, 311, пожары, транспорт"},
        {"name": "Search", "description": "Геокодирование через Mapbox"},
        {"name": "Settings", "description": "Слои, временное окно, стиль карты, домашняя точка"},
        {"name": "Admin", "description": "Инвалидация кэша"},
    ]
)

# Настройка CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

register_error_handlers(app)


@app.get("/")
async def root():
    """Корневой endpoint"""
    return {
        "message": "CivicLens API",
        "status": "ok",
        "version": "1.0.0",
        "docs": "/docs"
    }


@app.get("/health")
async def health():
    """Health check endpoint"""
    return {"status": "healthy"}


# Подключаем роуты
from src.api.routes import datasets as datasets_module  # noqa: E402
from src.api.routes import search as search_module  # noqa: E402
from src.api.routes import settings as settings_module  # noqa: E402
from src.api.routes import admin as admin_module  # noqa: E402

app.include_router(datasets_module.router, prefix="/api", tags=["Datasets"])
app.include_router(search_module.router, prefix="/api/search", tags=["Search"])
app.include_router(settings_module.router, prefix="/api/settings", tags=["Settings"])
app.include_router(admin_module.router, prefix="/api/admin", tags=["Admin"])
