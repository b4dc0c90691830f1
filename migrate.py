#!/usr/bin/env python3
"""
Automatically apply database migrations using Alembic
This script should be run before starting the application
"""
import os
import sys
import logging
from alembic.config import Config
from alembic import command
from alembic.script import ScriptDirectory
from dotenv import load_dotenv
from src.database.connection import create_db_engine
from sqlalchemy import inspect, text

# Setup logging
logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)


def _alembic_config(db_url: str) -> Config:
    alembic_cfg = Config("alembic.ini")
    alembic_cfg.set_main_option("sqlalchemy.url", db_url)
    return alembic_cfg


def _current_revision(db_url: str):
    """Версия миграций в БД (None, если миграции не применялись)"""
    engine = create_db_engine(db_url)
    try:
        if not inspect(engine).has_table("alembic_version"):
            return None
        with engine.connect() as conn:
            return conn.execute(text("SELECT version_num FROM alembic_version LIMIT 1")).scalar()
    finally:
        engine.dispose()


def run_migrations():
    """Run all pending migrations"""
    try:
        # Load environment variables
        load_dotenv()

        db_url = os.getenv("DATABASE_URL")
        if not db_url:
            logger.error("DATABASE_URL environment variable is not set")
            return False

        logger.info("🔄 Starting database migrations...")
        logger.info(f"📊 Database: {db_url.split('@')[1] if '@' in db_url else 'local'}")

        alembic_cfg = _alembic_config(db_url)
        head_rev = ScriptDirectory.from_config(alembic_cfg).get_current_head()
        current_rev = _current_revision(db_url)

        logger.info(f"📌 Текущая версия в БД: {current_rev}")
        logger.info(f"📌 Head версия: {head_rev}")

        if current_rev == head_rev:
            logger.info("✅ База данных уже на актуальной версии, миграции не требуются")
        else:
            logger.info(f"🔄 Применение миграций от {current_rev} до {head_rev}...")
            command.upgrade(alembic_cfg, "head")
            logger.info("✅ Миграции применены успешно")

        return True

    except Exception as e:
        logger.error(f"❌ Migration failed: {e}", exc_info=True)
        return False


def check_migrations_status():
    """Check current migration status"""
    try:
        load_dotenv()
        db_url = os.getenv("DATABASE_URL")

        if not db_url:
            logger.error("DATABASE_URL environment variable is not set")
            return

        logger.info("📋 Current migration status:")
        command.current(_alembic_config(db_url))

    except Exception as e:
        logger.error(f"❌ Failed to check migration status: {e}", exc_info=True)


if __name__ == "__main__":
    if len(sys.argv) > 1 and sys.argv[1] == "status":
        check_migrations_status()
    else:
        success = run_migrations()
        sys.exit(0 if success else 1)
