def test_calculate_bus(client, monkeypatch):
    monkeypatch.setattr("config.MODE_LABEL_LOCALE", "en")
    response = client.post('/co2/calculate', json={
        "mode": "bus",
        "distance_km": 10,
        "trips_per_day": 2,
        "days_per_month": 20,
    })

    assert response.status_code == 200
    data = response.get_json()
    assert data["per_trip_g"] == 800
    assert data["saved_vs_car_per_trip_kg"] == 0.7
    assert data["saved_vs_car_monthly_kg"] == 28
    assert data["assumptions"]["mode"] == "bus"
    assert data["assumptions"]["emission_factor"] == 80
    assert data["formatted"] == {
        "per_trip": "800 g",
        "per_day": "1.6 kg",
        "monthly": "32.0 kg",
        "mode_label": "Bus",
        "mode_icon": "🚌",
    }


def test_calculate_car_has_no_savings(client):
    response = client.post('/co2/calculate', json={"mode": "car", "distance_km": 10, "passengers": 4})

    assert response.status_code == 200
    data = response.get_json()
    assert data["per_trip_g"] == 375
    assert data["saved_vs_car_per_trip_kg"] is None
    assert data["saved_vs_car_monthly_kg"] is None


def test_calculate_validation_error(client):
    response = client.post('/co2/calculate', json={"mode": "car", "distance_km": -5})

    assert response.status_code == 400
    assert response.get_json() == {"error": "Distance must be non-negative", "field": "distance_km"}


def test_calculate_missing_distance(client):
    response = client.post('/co2/calculate', json={"mode": "walk"})

    assert response.status_code == 400
    assert response.get_json()["field"] == "distance_km"


def test_calculate_requires_json_object(client):
    response = client.post('/co2/calculate', data="mode=car", content_type="text/plain")
    assert response.status_code == 400

    response = client.post('/co2/calculate', json=[1, 2])
    assert response.status_code == 400
    assert response.get_json() == {"error": "Request body must be JSON"}


def test_list_factors(client, monkeypatch):
    monkeypatch.setattr("config.MODE_LABEL_LOCALE", "sk")
    response = client.get('/co2/factors')

    assert response.status_code == 200
    factors = {f["mode"]: f for f in response.get_json()}
    assert set(factors) == {"car", "bus", "bike", "walk"}
    assert factors["car"]["emission_factor"] == 150
    assert factors["bus"]["label"] == "Autobus"
    assert factors["bike"]["icon"] == "🚴"


def test_saved_per_trip_carpool(client):
    response = client.get('/co2/saved_per_trip?distance_km=10&mode=car&passengers=3')

    assert response.status_code == 200
    data = response.get_json()
    assert data["co2_saved_g"] == 1000
    assert data["formatted"] == "1.0 kg"


def test_saved_per_trip_unknown_mode(client):
    response = client.get('/co2/saved_per_trip?distance_km=10&mode=plane')

    assert response.status_code == 400
    assert response.get_json()["field"] == "mode"


def test_saved_per_trip_bad_distance(client):
    response = client.get('/co2/saved_per_trip?distance_km=far&mode=bike')

    assert response.status_code == 400
    assert response.get_json()["field"] == "distance_km"


def test_health(client):
    assert client.get('/health').get_json() == {"status": "ok"}


def test_calculate_huge_distance(client):
    response = client.post('/co2/calculate', json={"mode": "car", "distance_km": 10 ** 400})

    assert response.status_code == 400
    assert response.get_json() == {"error": "Distance is too large (max 999 km)", "field": "distance_km"}
