"""
Unit-тесты для DatasetService (кэш замокан, внешний API подменен)
"""
import asyncio
import pytest
from datetime import datetime
from unittest.mock import Mock
from src.application.datasets import DATASETS
from src.application.services.dataset_service import DatasetService
from src.models.cache import CacheEntry
from src.repositories.cache_repository import CacheRepository
from src.utils.error_handler import (
    DatasetUnavailableError, MalformedUpstreamResponseError, UpstreamUnavailableError
)
from tests.fakes import FakeOpenDataClient


CACHED = [{"id": "cached-1", "latitude": 37.7, "longitude": -122.4}]


class RoutingClient:
    """Ответ зависит от URL: значение или исключение"""

    def __init__(self, responses):
        self.responses = responses

    async def fetch_json(self, url, params=None):
        response = self.responses[url]
        if isinstance(response, Exception):
            raise response
        return response


@pytest.fixture
def cache_mock():
    repo = Mock(spec=CacheRepository)
    repo.get_fresh.return_value = None
    repo.get.return_value = None
    repo.put.return_value = True
    return repo


def run_and_drain(service, coro):
    """Выполнить корутину и дождаться фоновой записи кэша"""
    async def _run():
        try:
            return await coro
        finally:
            await service.wait_for_background_tasks()
    return asyncio.run(_run())


@pytest.mark.unit
class TestGetRecordsCache:
    """Поведение кэша"""

    def test_fresh_cache_skips_upstream(self, cache_mock, fake_client):
        cache_mock.get_fresh.return_value = CACHED
        service = DatasetService(cache_mock, fake_client)

        records = run_and_drain(service, service.get_records(DATASETS["crime"]))

        assert records == CACHED
        assert fake_client.calls == []
        cache_mock.get_fresh.assert_called_once_with("crime_data", 10)
        cache_mock.put.assert_not_called()

    def test_cache_miss_fetches_and_stores(self, cache_mock, crime_payload):
        client = FakeOpenDataClient(payload=crime_payload)
        service = DatasetService(cache_mock, client)

        records = run_and_drain(service, service.get_records(DATASETS["crime"]))

        assert [r["id"] for r in records] == ["1001", "1002"]
        assert client.calls == [{"url": DATASETS["crime"].url, "params": {"$limit": 100}}]
        cache_mock.put.assert_called_once_with("crime_data", records)

    @pytest.mark.parametrize("name, ttl", [("crime", 10), ("311", 15), ("fire", 12)])
    def test_ttl_per_dataset(self, cache_mock, name, ttl):
        cache_mock.get_fresh.return_value = CACHED
        service = DatasetService(cache_mock, FakeOpenDataClient())

        run_and_drain(service, service.get_records(DATASETS[name]))

        cache_mock.get_fresh.assert_called_once_with(DATASETS[name].cache_key, ttl)

    def test_empty_result_is_not_cached(self, cache_mock):
        client = FakeOpenDataClient(payload=[{"incident_id": "x"}])
        service = DatasetService(cache_mock, client)

        records = run_and_drain(service, service.get_records(DATASETS["crime"]))

        assert records == []
        cache_mock.put.assert_not_called()

    def test_cache_write_failure_does_not_affect_response(self, cache_mock, fire_payload):
        cache_mock.put.return_value = False
        service = DatasetService(cache_mock, FakeOpenDataClient(payload=fire_payload))

        records = run_and_drain(service, service.get_records(DATASETS["fire"]))

        assert [r["id"] for r in records] == ["F-500"]

    def test_cache_write_exception_does_not_affect_response(self, cache_mock, fire_payload):
        cache_mock.put.side_effect = RuntimeError("disk full")
        service = DatasetService(cache_mock, FakeOpenDataClient(payload=fire_payload))

        records = run_and_drain(service, service.get_records(DATASETS["fire"]))

        assert len(records) == 1
        assert service._background_tasks == set()


@pytest.mark.unit
class TestGetRecordsFallback:
    """Ошибки внешнего API"""

    def test_upstream_error_serves_stale_cache(self, cache_mock):
        cache_mock.get.return_value = CacheEntry(
            key="crime_data", data=CACHED, updated_at=datetime(2025, 1, 1)
        )
        client = FakeOpenDataClient(error=UpstreamUnavailableError("boom", upstream_status=503))
        service = DatasetService(cache_mock, client)

        records = run_and_drain(service, service.get_records(DATASETS["crime"]))

        assert records == CACHED
        cache_mock.get.assert_called_once_with("crime_data")
        cache_mock.put.assert_not_called()

    def test_upstream_error_without_cache(self, cache_mock):
        client = FakeOpenDataClient(error=UpstreamUnavailableError("boom"))
        service = DatasetService(cache_mock, client)

        with pytest.raises(DatasetUnavailableError) as exc_info:
            run_and_drain(service, service.get_records(DATASETS["311"]))

        assert exc_info.value.message == "Failed to fetch 311 data"
        assert exc_info.value.status_code == 500

    def test_non_array_response(self, cache_mock):
        service = DatasetService(cache_mock, FakeOpenDataClient(payload={"error": "quota"}))

        with pytest.raises(DatasetUnavailableError):
            run_and_drain(service, service.get_records(DATASETS["crime"]))

    def test_malformed_json_serves_stale_cache(self, cache_mock):
        cache_mock.get.return_value = CacheEntry(
            key="fire_data", data=CACHED, updated_at=datetime(2025, 1, 1)
        )
        client = FakeOpenDataClient(error=MalformedUpstreamResponseError("bad json"))
        service = DatasetService(cache_mock, client)

        assert run_and_drain(service, service.get_records(DATASETS["fire"])) == CACHED

    def test_unexpected_error_serves_stale_cache(self, cache_mock):
        cache_mock.get.return_value = CacheEntry(
            key="crime_data", data=CACHED, updated_at=datetime(2025, 1, 1)
        )
        service = DatasetService(cache_mock, FakeOpenDataClient(error=KeyError("oops")))

        assert run_and_drain(service, service.get_records(DATASETS["crime"])) == CACHED


@pytest.mark.unit
class TestTransit:
    """Транспорт: без кэша, только машины в пределах Сан-Франциско"""

    def test_bounds_filter(self, cache_mock, transit_payload):
        client = FakeOpenDataClient(payload=transit_payload)
        service = DatasetService(cache_mock, client)

        records = run_and_drain(service, service.get_records(DATASETS["transit"]))

        assert [r["id"] for r in records] == ["1401"]
        assert client.calls[0]["params"] == {"command": "vehicleLocations", "a": "sf-muni", "t": 0}
        cache_mock.get_fresh.assert_not_called()
        cache_mock.put.assert_not_called()

    def test_single_vehicle_object(self, cache_mock, transit_payload):
        payload = {"vehicle": transit_payload["vehicle"][0]}
        service = DatasetService(cache_mock, FakeOpenDataClient(payload=payload))

        records = run_and_drain(service, service.get_records(DATASETS["transit"]))

        assert len(records) == 1

    def test_no_vehicles(self, cache_mock):
        service = DatasetService(cache_mock, FakeOpenDataClient(payload={"lastTime": {"time": "0"}}))

        assert run_and_drain(service, service.get_records(DATASETS["transit"])) == []

    def test_failure_raises_without_cache_lookup(self, cache_mock):
        service = DatasetService(cache_mock, FakeOpenDataClient(error=UpstreamUnavailableError("down")))

        with pytest.raises(DatasetUnavailableError):
            run_and_drain(service, service.get_records(DATASETS["transit"]))

        cache_mock.get.assert_not_called()


@pytest.mark.unit
class TestTimeWindowAndSummary:
    """Фильтр по времени и сводка"""

    def test_filtered_records(self, cache_mock, crime_payload, freeze_time):
        service = DatasetService(cache_mock, FakeOpenDataClient(payload=crime_payload))

        records = run_and_drain(service, service.get_filtered_records(DATASETS["crime"], 24))

        assert [r["id"] for r in records] == ["1001"]

    def test_all_time(self, cache_mock, crime_payload, freeze_time):
        service = DatasetService(cache_mock, FakeOpenDataClient(payload=crime_payload))

        records = run_and_drain(service, service.get_filtered_records(DATASETS["crime"], 999999))

        assert len(records) == 2

    def test_summary_with_failed_dataset(self, cache_mock, crime_payload, service_requests_payload, freeze_time):
        client = RoutingClient({
            DATASETS["crime"].url: crime_payload,
            DATASETS["311"].url: service_requests_payload,
            DATASETS["fire"].url: UpstreamUnavailableError("down"),
        })
        service = DatasetService(cache_mock, client)
        sources = [DATASETS["crime"], DATASETS["311"], DATASETS["fire"]]

        counts = run_and_drain(service, service.get_summary(sources, 168))

        assert counts == {"crime": 2, "311": 1, "fire": None}
