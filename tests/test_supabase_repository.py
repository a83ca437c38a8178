import httpx
import pytest
from fastapi.testclient import TestClient

from delivery_fees.data.supabase_repository import SupabaseDeliveryRepository
from delivery_fees.main import create_app
from delivery_fees.services.delivery import DeliveryService, LeadTimePolicy


class FakeResponse:
    def __init__(self, data):
        self.data = data


class FakeQuery:
    """Applies the subset of PostgREST filters the repository uses to in-memory rows."""

    def __init__(self, rows, error=None):
        self.rows = list(rows)
        self.error = error

    def select(self, *_columns):
        return self

    def eq(self, column, value):
        self.rows = [row for row in self.rows if str(row.get(column)) == str(value)]
        return self

    def is_(self, column, value):
        assert value == "null"
        self.rows = [row for row in self.rows if row.get(column) is None]
        return self

    def order(self, column, desc=False):
        self.rows.sort(key=lambda row: row.get(column), reverse=desc)
        return self

    def limit(self, size):
        self.rows = self.rows[:size]
        return self

    def execute(self):
        if self.error is not None:
            raise self.error
        return FakeResponse(self.rows)


class FakeSupabase:
    def __init__(self, tables, error=None):
        self.tables = tables
        self.error = error
        self.queried: list[str] = []

    def table(self, name):
        self.queried.append(name)
        return FakeQuery(self.tables.get(name, []), error=self.error)


def _zone_row(zone_id, region_id, region, city_id, city, commune_id=None, commune=None, active=True):
    return {
        "id": zone_id,
        "is_active": active,
        "region_id": region_id,
        "city_id": city_id,
        "commune_id": commune_id,
        "regions": {"name": region},
        "cities": {"name": city},
        "communes": {"name": commune} if commune else None,
    }


TABLES = {
    "regions": [{"id": 1, "name": "Centre"}, {"id": 2, "name": "Extrême-Nord"}, {"id": 3, "name": "Est"}],
    "cities": [
        {"id": 10, "name": "Yaoundé", "region_id": 1},
        {"id": 11, "name": "Mbalmayo", "region_id": 1},
        {"id": 20, "name": "Maroua", "region_id": 2},
    ],
    "communes": [
        {"id": 100, "name": "Mfoundi", "city_id": 10},
        {"id": 101, "name": "Biyem-Assi", "city_id": 10},
    ],
    "delivery_zones": [
        _zone_row(1000, 1, "Centre", 10, "Yaoundé"),
        _zone_row(1001, 1, "Centre", 10, "Yaoundé", 100, "Mfoundi"),
        _zone_row(1002, 2, "Extrême-Nord", 20, "Maroua", active=False),
        _zone_row(1003, 1, "Centre", 11, "Mbalmayo"),
        {"id": 1004, "is_active": True, "region_id": 9, "city_id": 90, "commune_id": None, "regions": None},
    ],
    "delivery_costs": [
        {
            "id": 5,
            "zone_id": "1000",
            "base_fee": "1000",
            "weight_multiplier": 250,
            "distance_multiplier": 50,
            "min_fee": 500,
            "max_fee": 5000,
            "is_active": True,
        },
        {
            "id": 6,
            "zone_id": "1001",
            "base_fee": 800,
            "weight_multiplier": 200,
            "distance_multiplier": 40,
            "min_fee": 500,
            "max_fee": 4000,
            "is_active": False,
        },
    ],
}


@pytest.fixture
def repository() -> SupabaseDeliveryRepository:
    return SupabaseDeliveryRepository(FakeSupabase(TABLES))


def test_city_wide_zone(repository):
    zone = repository.find_zone_by_location("Centre", "Yaoundé")

    assert zone.id == "1000"
    assert zone.commune is None
    assert zone.is_active is True


def test_commune_zone(repository):
    zone = repository.find_zone_by_location("Centre", "Yaoundé", "Mfoundi")

    assert zone.id == "1001"
    assert zone.commune == "Mfoundi"


def test_commune_without_zone_does_not_fall_back(repository):
    assert repository.find_zone_by_location("Centre", "Yaoundé", "Biyem-Assi") is None
    assert repository.find_zone_by_location("Centre", "Yaoundé", "Unknown") is None


def test_unknown_region_stops_the_walk():
    client = FakeSupabase(TABLES)
    repository = SupabaseDeliveryRepository(client)

    assert repository.find_zone_by_location("InvalidRegion", "InvalidCity") is None
    assert client.queried == ["regions"]


def test_city_scoped_to_region(repository):
    assert repository.find_zone_by_location("Extrême-Nord", "Yaoundé") is None


def test_inactive_zone_is_returned(repository):
    zone = repository.find_zone_by_location("Extrême-Nord", "Maroua")

    assert zone.id == "1002"
    assert zone.is_active is False


def test_cost_rows_are_mapped(repository):
    cost = repository.get_cost_by_zone_id("1000")

    assert cost.base_fee == 1000.0
    assert cost.weight_multiplier == 250.0
    assert cost.max_fee == 5000.0
    assert cost.is_active is True
    assert repository.get_cost_by_zone_id("1001").is_active is False
    assert repository.get_cost_by_zone_id("1003") is None


def test_active_zones_skip_invalid_rows(repository, caplog):
    with caplog.at_level("WARNING"):
        zones = repository.find_active_zones()

    assert [zone.id for zone in zones] == ["1003", "1000", "1001"]
    assert "Skipping invalid delivery zone row" in caplog.text


def test_listings(repository):
    assert repository.find_available_regions() == ["Centre", "Extrême-Nord"]
    assert repository.find_cities_by_region("Centre") == ["Mbalmayo", "Yaoundé"]
    assert repository.find_cities_by_region("Est") == []
    assert repository.find_cities_by_region("Nowhere") == []
    assert repository.find_communes_by_city("Centre", "Yaoundé") == ["Mfoundi"]
    assert repository.find_communes_by_city("Centre", "Nowhere") == []


def test_network_failure_raises_connection_error():
    repository = SupabaseDeliveryRepository(FakeSupabase(TABLES, error=httpx.ConnectError("boom")))

    with pytest.raises(ConnectionError):
        repository.find_zone_by_location("Centre", "Yaoundé")


def test_query_failure_raises_connection_error(caplog):
    repository = SupabaseDeliveryRepository(
        FakeSupabase(TABLES, error=RuntimeError("permission denied for table regions"))
    )

    with caplog.at_level("ERROR"):
        with pytest.raises(ConnectionError, match="permission denied"):
            repository.find_zone_by_location("Centre", "Yaoundé")
        with pytest.raises(ConnectionError):
            repository.find_available_regions()

    assert "permission denied for table regions" in caplog.text


def test_query_failure_is_reported_as_unavailable_not_missing(monkeypatch):
    from delivery_fees.api.routes import delivery as delivery_routes

    repository = SupabaseDeliveryRepository(
        FakeSupabase(TABLES, error=RuntimeError("permission denied for table regions"))
    )
    service = DeliveryService(repository, lead_time_policy=LeadTimePolicy())
    monkeypatch.setattr(delivery_routes, "get_delivery_service", lambda: service)
    client = TestClient(create_app())

    fee = client.post("/api/delivery/calculate-fee", json={"region": "Centre", "city": "Yaoundé"})
    availability = client.post("/api/delivery/check-availability", json={"region": "Centre", "city": "Yaoundé"})
    regions = client.get("/api/delivery/regions")

    assert fee.status_code == 503
    assert availability.status_code == 503
    assert regions.status_code == 503
