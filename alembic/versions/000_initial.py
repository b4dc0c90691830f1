"""Initial database schema

Revision ID: 000
Revises: 
Create Date: 2026-10-19 08:00:00.000000

"""
from alembic import op
import sqlalchemy as sa
import logging

logger = logging.getLogger(__name__)


# revision identifiers, used by Alembic.
revision = '000'
down_revision = None
branch_labels = None
depends_on = None


def upgrade():
    logger.info("🔄 Начало миграции 000_initial...")
    bind = op.get_bind()
    inspector = sa.inspect(bind)

    # Create api_cache table
    logger.info("📋 Проверка таблицы 'api_cache'...")
    if not inspector.has_table('api_cache'):
        logger.info("📝 Создание таблицы 'api_cache'...")
        op.create_table(
        'api_cache',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('cache_key', sa.String(), nullable=False),
        sa.Column('cache_data', sa.JSON(), nullable=False),
        sa.Column('fetched_at', sa.DateTime(), nullable=False),
        sa.PrimaryKeyConstraint('id')
    )
        op.create_index(op.f('ix_api_cache_id'), 'api_cache', ['id'], unique=False)
        op.create_index(op.f('ix_api_cache_cache_key'), 'api_cache', ['cache_key'], unique=True)
        logger.info("✅ Таблица 'api_cache' создана")
    else:
        logger.info("⏭️ Таблица 'api_cache' уже существует, пропускаем создание")

    # Create user_settings table
    logger.info("📋 Проверка таблицы 'user_settings'...")
    if not inspector.has_table('user_settings'):
        logger.info("📝 Создание таблицы 'user_settings'...")
        op.create_table(
        'user_settings',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('user_id', sa.String(), nullable=False),
        sa.Column('preferred_datasets', sa.JSON(), nullable=False),
        sa.Column('preferred_time_window', sa.Integer(), nullable=False, server_default='999999'),
        sa.Column('map_style', sa.String(), nullable=False, server_default='light'),
        sa.Column('home_location', sa.JSON(), nullable=True),
        sa.Column('created_at', sa.DateTime(), nullable=True),
        sa.Column('updated_at', sa.DateTime(), nullable=True),
        sa.PrimaryKeyConstraint('id')
    )
        op.create_index(op.f('ix_user_settings_id'), 'user_settings', ['id'], unique=False)
        op.create_index(op.f('ix_user_settings_user_id'), 'user_settings', ['user_id'], unique=True)
        logger.info("✅ Таблица 'user_settings' создана")
    else:
        logger.info("⏭️ Таблица 'user_settings' уже существует, пропускаем создание")

    logger.info("✅ Миграция 000_initial завершена успешно!")


def downgrade():
    op.drop_table('user_settings')
    op.drop_table('api_cache')
