"""
brikvest/test_properties_api.py

API tests for the property catalogue: public reads, admin writes, wire format
and error responses.

Run:
    pytest brikvest/test_properties_api.py -v
"""

import pytest

from brikvest import ledger
from brikvest.conftest import property_payload
from brikvest.seed import SAMPLE_PROPERTIES, seed_properties


class TestPublicReads:
    def test_health(self, client):
        assert client.get("/health").json() == {"status": "ok"}

    def test_empty_catalogue(self, client):
        response = client.get("/api/properties")
        assert response.status_code == 200
        assert response.json() == []

    def test_camel_case_wire_format(self, client, make_property):
        prop_id = make_property()

        data = client.get(f"/api/properties/{prop_id}").json()

        for key in ("totalValue", "minInvestment", "projectedReturn", "totalSlots", "availableSlots", "fundingProgress", "imageUrl", "createdAt"):
            assert key in data, f"Missing {key} in {sorted(data)}"
        assert "total_slots" not in data

    def test_unknown_property(self, client):
        response = client.get("/api/properties/31337")
        assert response.status_code == 404
        assert response.json() == {"detail": "Property not found"}

    def test_non_integer_id(self, client):
        assert client.get("/api/properties/abc").status_code == 400


class TestAdminWrites:
    def test_create_requires_admin(self, client):
        response = client.post("/api/properties", json=property_payload())
        assert response.status_code == 401

    def test_create(self, client, admin_headers):
        response = client.post("/api/properties", json=property_payload(badge="partnered"), headers=admin_headers)

        assert response.status_code == 201, response.json()
        data = response.json()
        assert data["id"] > 0
        assert data["badge"] == "partnered"
        assert data["status"] == "active"
        assert client.get("/api/properties").json()[0]["id"] == data["id"]

    def test_badge_none_is_cleared(self, client, admin_headers):
        response = client.post("/api/properties", json=property_payload(badge="none"), headers=admin_headers)
        assert response.json()["badge"] is None

    @pytest.mark.parametrize(
        "overrides",
        [
            {"availableSlots": 11, "totalSlots": 10},
            {"totalSlots": 0},
            {"availableSlots": -1},
            {"fundingProgress": 101},
            {"status": "archived"},
            {"name": ""},
            {"projectedReturn": "1234.5"},
        ],
    )
    def test_create_validation(self, client, admin_headers, overrides):
        response = client.post("/api/properties", json=property_payload(**overrides), headers=admin_headers)

        assert response.status_code == 400
        body = response.json()
        assert body["detail"] == "Invalid data provided"
        assert isinstance(body["details"], list) and body["details"]
        assert client.get("/api/properties").json() == []

    def test_update_overwrites(self, client, admin_headers, make_property):
        prop_id = make_property()

        response = client.put(
            f"/api/properties/{prop_id}",
            json=property_payload(name="Lekki Gardens Phase 2", availableSlots=4, fundingProgress=60, status="coming_soon"),
            headers=admin_headers,
        )

        assert response.status_code == 200, response.json()
        data = response.json()
        assert data["name"] == "Lekki Gardens Phase 2"
        assert data["availableSlots"] == 4
        assert data["fundingProgress"] == 60
        assert data["status"] == "coming_soon"

    def test_update_unknown(self, client, admin_headers):
        response = client.put("/api/properties/999", json=property_payload(), headers=admin_headers)
        assert response.status_code == 404

    def test_delete(self, client, admin_headers, make_property):
        prop_id = make_property()
        client.post(
            "/api/reservations",
            json={"propertyId": prop_id, "fullName": "A", "email": "a@example.com", "phone": "1", "units": 1},
        )

        response = client.delete(f"/api/properties/{prop_id}", headers=admin_headers)

        assert response.status_code == 200
        assert client.get(f"/api/properties/{prop_id}").status_code == 404
        assert client.get("/api/reservations", params={"email": "a@example.com"}).json() == []

    def test_delete_unknown(self, client, admin_headers):
        assert client.delete("/api/properties/999", headers=admin_headers).status_code == 404


class TestSeed:
    def test_seed_is_idempotent(self, client, admin_headers):
        first = client.post("/api/seed-properties", headers=admin_headers)
        assert first.json()["message"] == "Sample properties created successfully"
        assert len(client.get("/api/properties").json()) == 6

        second = client.post("/api/seed-properties", headers=admin_headers)
        assert second.json()["message"] == "Properties already exist"
        assert len(client.get("/api/properties").json()) == 6

    def test_seed_skips_non_empty_catalogue(self, client, admin_headers, make_property):
        make_property()
        response = client.post("/api/seed-properties", headers=admin_headers)
        assert response.json()["message"] == "Properties already exist"
        assert len(client.get("/api/properties").json()) == 1

    def test_seeded_values(self, db):
        assert seed_properties(db) is True
        for data in SAMPLE_PROPERTIES:
            assert 0 <= data["available_slots"] <= data["total_slots"]

        for prop in ledger.list_properties(db):
            expected = ledger.compute_funding_progress(prop.total_slots, prop.available_slots)
            assert prop.funding_progress == expected, prop.name

    def test_seeded_progress_rises_on_reservation(self, client, db):
        seed_properties(db)
        prop = next(p for p in ledger.list_properties(db) if p.name == "Victoria Island Office Complex")
        assert prop.funding_progress == 47

        response = client.post(
            "/api/reservations",
            json={"propertyId": prop.id, "fullName": "A", "email": "a@example.com", "phone": "1", "units": 1},
        )

        assert response.status_code == 201, response.json()
        after = client.get(f"/api/properties/{prop.id}").json()
        assert after["availableSlots"] == 126
        assert after["fundingProgress"] == 48
