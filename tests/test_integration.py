import pytest
from fastapi.testclient import TestClient

from delivery_fees.data.memory import InMemoryDeliveryRepository
from delivery_fees.main import create_app
from delivery_fees.models.domain import DeliveryCost, DeliveryZone
from delivery_fees.services.delivery import DeliveryService, LeadTimePolicy


def _zone(zone_id, region, city, commune=None, active=True):
    return DeliveryZone(id=zone_id, region=region, city=city, commune=commune, is_active=active)


def _cost(zone_id, base_fee=1000.0):
    return DeliveryCost(
        id=f"cost-{zone_id}",
        zone_id=zone_id,
        base_fee=base_fee,
        weight_multiplier=250,
        distance_multiplier=50,
        min_fee=500,
        max_fee=5000,
    )


@pytest.fixture
def service() -> DeliveryService:
    repository = InMemoryDeliveryRepository(
        zones=[
            _zone("yaounde", "Centre", "Yaoundé"),
            _zone("mfoundi", "Centre", "Yaoundé", "Mfoundi"),
            _zone("maroua", "Extrême-Nord", "Maroua"),
            _zone("edea", "Littoral", "Edéa", active=False),
            _zone("dschang", "Ouest", "Dschang"),
        ],
        costs=[_cost("yaounde"), _cost("mfoundi"), _cost("maroua"), _cost("edea")],
    )
    return DeliveryService(repository, lead_time_policy=LeadTimePolicy())


@pytest.fixture
def api_client(service: DeliveryService, monkeypatch: pytest.MonkeyPatch) -> TestClient:
    from delivery_fees.api.routes import delivery as delivery_routes

    monkeypatch.setattr(delivery_routes, "get_delivery_service", lambda: service)
    return TestClient(create_app())


def test_calculate_fee_endpoint(api_client: TestClient):
    response = api_client.post(
        "/api/delivery/calculate-fee",
        json={"region": "Centre", "city": "Yaoundé", "commune": "Mfoundi", "weight": 2, "distance": 10},
    )

    assert response.status_code == 200
    assert response.json() == {
        "zoneId": "mfoundi",
        "region": "Centre",
        "city": "Yaoundé",
        "commune": "Mfoundi",
        "baseFee": 1000.0,
        "weightFee": 250.0,
        "distanceFee": 250.0,
        "totalFee": 1500,
        "estimatedDays": 1,
    }


def test_calculate_fee_remote_region(api_client: TestClient):
    response = api_client.post("/api/delivery/calculate-fee", json={"region": "Extrême-Nord", "city": "Maroua"})

    assert response.status_code == 200
    assert response.json()["estimatedDays"] == 5


@pytest.mark.parametrize(
    "payload,status_code",
    [
        ({"region": "", "city": "Yaoundé"}, 400),
        ({"region": "Centre", "city": "Yaoundé", "weight": -1}, 400),
        ({"region": "InvalidRegion", "city": "InvalidCity"}, 404),
        ({"region": "Centre", "city": "Yaoundé", "commune": "Nowhere"}, 404),
        ({"region": "Littoral", "city": "Edéa"}, 409),
        ({"region": "Ouest", "city": "Dschang"}, 409),
    ],
)
def test_calculate_fee_errors(api_client: TestClient, payload, status_code):
    response = api_client.post("/api/delivery/calculate-fee", json=payload)

    assert response.status_code == status_code
    assert response.json()["detail"]


def test_zone_not_found_detail_names_location(api_client: TestClient):
    response = api_client.post(
        "/api/delivery/calculate-fee", json={"region": "InvalidRegion", "city": "InvalidCity"}
    )

    assert "InvalidRegion" in response.json()["detail"]
    assert "InvalidCity" in response.json()["detail"]


def test_store_outage_maps_to_503(api_client: TestClient, service: DeliveryService, monkeypatch):
    def unreachable(*args, **kwargs):
        raise ConnectionError("store unreachable")

    monkeypatch.setattr(service.repository, "find_zone_by_location", unreachable)

    response = api_client.post("/api/delivery/calculate-fee", json={"region": "Centre", "city": "Yaoundé"})

    assert response.status_code == 503


@pytest.mark.parametrize("field", ["weight", "distance"])
@pytest.mark.parametrize("value", ["NaN", "Infinity", "-Infinity"])
def test_non_finite_numbers_are_rejected(api_client: TestClient, field, value):
    body = f'{{"region": "Centre", "city": "Yaoundé", "{field}": {value}}}'

    response = api_client.post(
        "/api/delivery/calculate-fee",
        content=body.encode("utf-8"),
        headers={"Content-Type": "application/json"},
    )

    assert response.status_code == 422


def test_weight_too_large_to_price_is_a_bad_request(api_client: TestClient):
    response = api_client.post(
        "/api/delivery/calculate-fee", json={"region": "Centre", "city": "Yaoundé", "weight": 1e308}
    )

    assert response.status_code == 400
    assert response.json()["detail"] == "Weight is too large to price"


def test_check_availability_endpoint(api_client: TestClient):
    available = api_client.post("/api/delivery/check-availability", json={"region": "Centre", "city": "Yaoundé"})
    inactive = api_client.post("/api/delivery/check-availability", json={"region": "Littoral", "city": "Edéa"})

    assert available.json() == {"available": True}
    assert inactive.json() == {"available": False}


def test_listing_endpoints(api_client: TestClient):
    zones = api_client.get("/api/delivery/zones").json()
    assert [zone["id"] for zone in zones] == ["yaounde", "mfoundi", "maroua", "dschang"]
    assert zones[1] == {
        "id": "mfoundi",
        "region": "Centre",
        "city": "Yaoundé",
        "commune": "Mfoundi",
        "isActive": True,
    }

    assert api_client.get("/api/delivery/regions").json() == ["Centre", "Extrême-Nord", "Littoral", "Ouest"]
    assert api_client.get("/api/delivery/cities", params={"region": "Centre"}).json() == ["Yaoundé"]
    assert api_client.get(
        "/api/delivery/communes", params={"region": "Centre", "city": "Yaoundé"}
    ).json() == ["Mfoundi"]


def test_listing_endpoints_require_parameters(api_client: TestClient):
    assert api_client.get("/api/delivery/cities").status_code == 400
    assert api_client.get("/api/delivery/communes", params={"region": "Centre"}).status_code == 400


def test_health_endpoints(api_client: TestClient, monkeypatch):
    from delivery_fees.db import supabase as supabase_module

    monkeypatch.setattr(supabase_module, "get_supabase_client", lambda: None)

    assert api_client.get("/api/health").json() == {"status": "ok"}
    database = api_client.get("/api/health/database").json()
    assert database["configured"] is False
    assert api_client.get("/").json()["status"] == "running"
