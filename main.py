#!/usr/bin/env python3
"""
CivicLens API
Прокси и кэш для открытых данных Сан-Франциско (преступления, 311, пожары, транспорт)
"""
import logging
import sys

import uvicorn

from src.config import settings
from src.database.connection import init_db, is_sqlite


def setup_logging() -> None:
    """Логи в stdout (для Docker)"""
    logging.basicConfig(
        level=settings.log_level.upper(),
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        handlers=[logging.StreamHandler(sys.stdout)],
        force=True
    )


def main():
    setup_logging()
    logger = logging.getLogger(__name__)

    if is_sqlite(settings.database_url):
        # Локальный запуск без миграций
        init_db()

    logger.info(f"🚀 CivicLens API на {settings.api_host}:{settings.api_port}")
    uvicorn.run("src.api.main:app", host=settings.api_host, port=settings.api_port, log_config=None)


if __name__ == "__main__":
    main()
