import logging
from datetime import datetime
from typing import Any, Dict, Optional
from src.database.connection import get_db_session
from src.models.settings import (
    ALL_TIME_WINDOW, DEFAULT_MAP_STYLE, MAP_STYLES,
    UserSettings, UserSettingsDB, default_datasets,
)
from src.utils.error_handler import AppError

logger = logging.getLogger(__name__)


def _is_number(value: Any) -> bool:
    # bool - подкласс int, но числом не считается
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def coerce_settings_payload(body: Dict[str, Any]) -> Dict[str, Any]:
    """
    Привести тело запроса к полному документу настроек.

    Каждое поле проверяется отдельно: неверный тип заменяется значением
    по умолчанию, отсутствующее поле тоже.
    """
    datasets = body.get("preferred_datasets")
    if not isinstance(datasets, dict):
        datasets = {}
    preferred_datasets = {
        name: value if isinstance(value, bool) else True
        for name, value in ((key, datasets.get(key)) for key in default_datasets())
    }

    time_window = body.get("preferred_time_window")
    if _is_number(time_window) and time_window > 0:
        preferred_time_window = min(int(time_window), ALL_TIME_WINDOW)
    else:
        preferred_time_window = ALL_TIME_WINDOW

    map_style = body.get("map_style")
    if map_style not in MAP_STYLES:
        map_style = DEFAULT_MAP_STYLE

    home = body.get("home_location")
    home_location: Optional[Dict[str, float]] = None
    if isinstance(home, dict) and all(_is_number(home.get(key)) for key in ("lat", "lng", "zoom")):
        home_location = {"lat": home["lat"], "lng": home["lng"], "zoom": home["zoom"]}

    return {
        "preferred_datasets": preferred_datasets,
        "preferred_time_window": preferred_time_window,
        "map_style": map_style,
        "home_location": home_location,
    }


class UserSettingsService:
    """Сервис для управления настройками пользователей"""

    def get_settings(self, user_id: str) -> UserSettings:
        """
        Получить настройки пользователя.
        Если настроек нет - создать с дефолтными значениями.
        """
        try:
            with get_db_session() as session:
                settings_db = session.query(UserSettingsDB).filter(
                    UserSettingsDB.user_id == user_id
                ).first()

                if not settings_db:
                    # Создаем настройки по умолчанию
                    settings_db = UserSettingsDB(user_id=user_id)
                    session.add(settings_db)
                    session.commit()
                    session.refresh(settings_db)
                    logger.info(f"✨ Созданы настройки по умолчанию для user_id={user_id}")

                return UserSettings.model_validate(settings_db)
        except Exception as e:
            logger.error(f"Ошибка чтения настроек user_id={user_id}: {e}", exc_info=True)
            raise AppError("Failed to fetch settings")

    def save_settings(self, user_id: str, body: Dict[str, Any]) -> UserSettings:
        """
        Сохранить настройки целиком (upsert по user_id).

        Args:
            user_id: ID пользователя
            body: Тело запроса, поля приводятся через coerce_settings_payload

        Returns:
            Сохраненные настройки
        """
        values = coerce_settings_payload(body)
        try:
            with get_db_session() as session:
                settings_db = session.query(UserSettingsDB).filter(
                    UserSettingsDB.user_id == user_id
                ).first()

                if not settings_db:
                    settings_db = UserSettingsDB(user_id=user_id)
                    session.add(settings_db)

                for key, value in values.items():
                    setattr(settings_db, key, value)
                settings_db.updated_at = datetime.utcnow()

                session.commit()
                session.refresh(settings_db)
                logger.info(f"✅ Обновлены настройки для user_id={user_id}")
                return UserSettings.model_validate(settings_db)
        except Exception as e:
            logger.error(f"Ошибка обновления настроек user_id={user_id}: {e}", exc_info=True)
            raise AppError("Failed to update settings")
