from datetime import date, timedelta

import pytest


def _vehicle_payload(**overrides):
    payload = {
        "vehicleName": "Daily Driver",
        "vehicleModel": "Corolla",
        "vehicleType": "Car",
        "fuelType": "Hybrid",
        "vehicleManufactureDate": "2021-06-15",
        "vehicleEmissionRating": 95.5,
        "vehicleEngineSize": "Medium",
    }
    payload.update(overrides)
    return payload


@pytest.fixture
def created_vehicle(client, auth_headers):
    response = client.post("/vehicle/create", json=_vehicle_payload(), headers=auth_headers)
    assert response.status_code == 201
    return response.json()


class TestCreateVehicle:

    def test_create_stores_display_values(self, created_vehicle):
        assert created_vehicle["userId"] == "user-1"
        assert created_vehicle["fuelType"] == "Hybrid"
        assert created_vehicle["vehicleEngineSize"] == "Medium"
        assert created_vehicle["vehicleManufactureDate"] == "2021-06-15"

    @pytest.mark.parametrize("overrides", [
        {"vehicleType": "Truck"},
        {"fuelType": "Coal"},
        {"vehicleEngineSize": "Huge"},
        {"vehicleName": "X"},
        {"vehicleEmissionRating": -3},
        {"vehicleManufactureDate": (date.today() + timedelta(days=30)).isoformat()},
    ])
    def test_invalid_vehicle_is_rejected(self, client, auth_headers, overrides):
        response = client.post("/vehicle/create", json=_vehicle_payload(**overrides), headers=auth_headers)
        assert response.status_code == 422


class TestReadVehicles:

    def test_list_own_vehicles(self, client, auth_headers, other_auth_headers, created_vehicle):
        client.post("/vehicle/create", json=_vehicle_payload(vehicleName="Weekend"), headers=other_auth_headers)

        vehicles = client.get("/vehicle/get/all", headers=auth_headers).json()
        assert [v["vehicleName"] for v in vehicles] == ["Daily Driver"]

    def test_list_without_vehicles_returns_404(self, client, auth_headers):
        response = client.get("/vehicle/get/all", headers=auth_headers)
        assert response.status_code == 404
        assert response.json() == {"message": "No vehicles found for this user"}

    def test_get_by_id_and_by_name(self, client, auth_headers, created_vehicle):
        by_id = client.get(f"/vehicle/get/{created_vehicle['id']}", headers=auth_headers).json()
        by_name = client.get("/vehicle/get/Daily Driver", headers=auth_headers).json()
        assert by_id == by_name == [created_vehicle]

    def test_other_users_vehicle_is_not_found(self, client, other_auth_headers, created_vehicle):
        response = client.get(f"/vehicle/get/{created_vehicle['id']}", headers=other_auth_headers)
        assert response.status_code == 404


class TestModifyVehicle:

    def test_partial_update(self, client, auth_headers, created_vehicle):
        response = client.put(
            f"/vehicle/update/{created_vehicle['id']}",
            json={"vehicleEngineSize": "Large"},
            headers=auth_headers,
        )
        assert response.status_code == 200
        assert response.json()["vehicleEngineSize"] == "Large"
        assert response.json()["vehicleModel"] == "Corolla"

    def test_updated_engine_size_is_used_for_calculation(self, client, auth_headers, created_vehicle, make_factor):
        """Fixing a legacy engine size makes the vehicle usable again."""
        make_factor("car", "hybrid", "small", 100.0)
        vehicle_id = created_vehicle["id"]
        client.put(f"/vehicle/update/{vehicle_id}", json={"vehicleEngineSize": "N/A"}, headers=auth_headers)

        payload = {"mode": "car", "distance": 10, "vehicleDetails": vehicle_id}
        response = client.post("/api/emissions/calculate", json=payload, headers=auth_headers)
        assert response.status_code == 400
        assert "engine size is missing" in response.json()["message"]

        client.put(f"/vehicle/update/{vehicle_id}", json={"vehicleEngineSize": "Small"}, headers=auth_headers)
        response = client.post("/api/emissions/calculate", json=payload, headers=auth_headers)
        assert response.status_code == 200
        assert response.json()["totalEmissionKg"] == 1.0

    @pytest.mark.parametrize("field", ["vehicleName", "vehicleModel", "vehicleType", "fuelType", "vehicleEngineSize"])
    def test_null_required_field_is_rejected(self, client, auth_headers, created_vehicle, field):
        vehicle_id = created_vehicle["id"]
        response = client.put(f"/vehicle/update/{vehicle_id}", json={field: None}, headers=auth_headers)
        assert response.status_code == 422

        stored = client.get(f"/vehicle/get/{vehicle_id}", headers=auth_headers).json()
        assert stored == [created_vehicle]

    def test_future_manufacture_date_is_rejected_on_update(self, client, auth_headers, created_vehicle):
        future = (date.today() + timedelta(days=30)).isoformat()
        response = client.put(
            f"/vehicle/update/{created_vehicle['id']}",
            json={"vehicleManufactureDate": future},
            headers=auth_headers,
        )
        assert response.status_code == 422

    def test_other_user_cannot_update(self, client, other_auth_headers, created_vehicle):
        response = client.put(
            f"/vehicle/update/{created_vehicle['id']}",
            json={"vehicleName": "Stolen"},
            headers=other_auth_headers,
        )
        assert response.status_code == 404

    def test_delete(self, client, auth_headers, created_vehicle):
        vehicle_id = created_vehicle["id"]
        response = client.delete(f"/vehicle/delete/{vehicle_id}", headers=auth_headers)

        assert response.status_code == 200
        assert response.json() == {"message": "Vehicle deleted successfully", "vehicleId": vehicle_id}
        assert client.get(f"/vehicle/get/{vehicle_id}", headers=auth_headers).status_code == 404
