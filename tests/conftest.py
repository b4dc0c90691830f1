"""
Общие фикстуры для всех тестов
"""
import pytest
from contextlib import contextmanager
from datetime import datetime
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool
# Импортируем все модели для создания таблиц в тестовой БД
from src.database.connection import Base
from src.models.cache import ApiCacheDB  # noqa: F401
from src.models.settings import UserSettingsDB  # noqa: F401
from src.repositories.cache_repository import CacheRepository
from tests.fakes import FakeOpenDataClient


@pytest.fixture(scope="function")
def test_db_engine():
    """
    Создает тестовую БД в памяти для каждого теста

    StaticPool - одно соединение на все потоки (кэш пишется через asyncio.to_thread)
    """
    engine = create_engine(
        "sqlite:///:memory:",
        echo=False,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(engine)
    yield engine
    Base.metadata.drop_all(engine)
    engine.dispose()


@pytest.fixture(scope="function")
def test_db_session(test_db_engine):
    """
    Создает новую сессию БД для каждого теста
    После теста делает rollback
    """
    SessionLocal = sessionmaker(bind=test_db_engine)
    session = SessionLocal()

    try:
        yield session
    finally:
        session.rollback()
        session.close()


@pytest.fixture
def session_factory(test_db_engine):
    """
    Аналог get_db_session поверх тестовой БД
    """
    SessionLocal = sessionmaker(bind=test_db_engine)

    @contextmanager
    def _factory():
        session = SessionLocal()
        try:
            yield session
            session.commit()
        except Exception:
            session.rollback()
            raise
        finally:
            session.close()

    return _factory


@pytest.fixture
def cache_repository(session_factory):
    """Репозиторий кэша на тестовой БД"""
    return CacheRepository(session_factory=session_factory)


@pytest.fixture
def freeze_time():
    """
    Фиксирует текущее время для тестов: 09:00 по Сан-Франциско (17:00 UTC)
    """
    from freezegun import freeze_time as _freeze_time
    frozen_time = datetime(2025, 12, 15, 17, 0, 0)
    with _freeze_time(frozen_time):
        yield frozen_time


@pytest.fixture
def fake_client():
    """Клиент внешних API без сети"""
    return FakeOpenDataClient()


@pytest.fixture
def crime_payload():
    """
    Ответ DataSF по преступлениям: две корректные записи,
    одна без координат и одна с координатами (0, 0)
    """
    return [
        {
            "incident_id": "1001",
            "incident_category": "Larceny Theft",
            "incident_description": "Theft, From Locked Vehicle",
            "incident_datetime": "2025-12-15T08:30:00.000",
            "latitude": "37.7793",
            "longitude": "-122.4193",
            "intersection": "MARKET ST \\ 8TH ST",
            "police_district": "Southern",
            "resolution": "Open or Active",
            "incident_day_of_week": "Monday",
        },
        {
            "incident_id": "1002",
            "incident_subcategory": "Vandalism",
            "incident_datetime": "2025-12-10T22:15:00.000",
            "point": {"type": "Point", "coordinates": [-122.4089, 37.7835]},
            "district": "Central",
        },
        {
            "incident_id": "1003",
            "incident_category": "Assault",
            "incident_datetime": "2025-12-14T10:00:00.000",
        },
        {
            "incident_id": "1004",
            "incident_category": "Fraud",
            "incident_datetime": "2025-12-14T11:00:00.000",
            "latitude": "0",
            "longitude": "0",
        },
    ]


@pytest.fixture
def service_requests_payload():
    """
    Ответ DataSF по обращениям 311 (lat/long как строки)
    """
    return [
        {
            "service_request_id": "SR-1",
            "service_name": "Street and Sidewalk Cleaning",
            "service_details": "Bulky Items",
            "requested_datetime": "2025-12-15T07:00:00.000",
            "lat": "37.7599",
            "long": "-122.4148",
            "address": "2000 MISSION ST",
            "status_description": "Open",
            "neighborhoods_sffind_boundaries": "Mission",
            "agency_responsible": "DPW",
        },
        {
            "service_request_id": "SR-2",
            "request_type": "Graffiti",
            "requested_datetime": "2025-12-01T07:00:00.000",
            "latitude": "37.8021",
            "longitude": "-122.4187",
            "status": "Closed",
        },
    ]


@pytest.fixture
def fire_payload():
    """
    Ответ DataSF по пожарным вызовам (GeoJSON-точка)
    """
    return [
        {
            "incident_number": "F-500",
            "primary_situation": "Alarm system activation",
            "alarm_dttm": "2025-12-15T06:00:00.000",
            "arrival_dttm": "2025-12-15T06:05:00.000",
            "close_dttm": "2025-12-15T06:30:00.000",
            "address": "100 VAN NESS AVE",
            "neighborhood_district": "Civic Center",
            "battalion": "B02",
            "station_area": "36",
            "point": {"type": "Point", "coordinates": [-122.4195, 37.7768]},
        },
        {
            "incident_number": "F-501",
            "point": {"type": "Point", "coordinates": [200.0, 95.0]},
        },
    ]


@pytest.fixture
def transit_payload():
    """
    Ответ NextBus vehicleLocations
    """
    return {
        "vehicle": [
            {"id": "1401", "routeTag": "N", "dirTag": "N____O_F00", "heading": "270",
             "speedKmHr": "12", "lat": "37.7650", "lon": "-122.4440"},
            # За пределами Сан-Франциско
            {"id": "1402", "routeTag": "38", "lat": "37.9000", "lon": "-122.5000"},
            {"id": "1403", "routeTag": "F", "lat": "0", "lon": "0"},
        ],
        "lastTime": {"time": "1734250000000"},
    }
