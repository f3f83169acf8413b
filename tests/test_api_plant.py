async def test_plant_status_follows_latest_measurement(client, api):
    sensor = await api.sensor("moist-1")
    plant = await api.plant(sensor["id"], watering_threshold=30)
    assert plant["status"] == "offline"

    await api.measurement(sensor["id"], 55, timestamp="2026-01-01T10:00:00")
    response = await client.get(f"/api/plants/{plant['id']}")
    assert response.json()["status"] == "healthy"

    await api.measurement(sensor["id"], 12, timestamp="2026-01-01T11:00:00")
    response = await client.get(f"/api/plants/{plant['id']}")
    assert response.json()["status"] == "needs_water"


async def test_one_plant_per_sensor(client, api):
    sensor = await api.sensor("moist-1")
    await api.plant(sensor["id"])
    response = await client.post("/api/plants", json={"species": "Cactus", "sensor_id": sensor["id"]})
    assert response.status_code == 400
    assert "already exists" in response.json()["error"]


async def test_plant_requires_existing_sensor(client):
    response = await client.post("/api/plants", json={"species": "Cactus", "sensor_id": 5})
    assert response.status_code == 400


async def test_update_plant_threshold(client, api):
    sensor = await api.sensor("moist-1")
    plant = await api.plant(sensor["id"])
    await api.measurement(sensor["id"], 25)

    response = await client.put(f"/api/plants/{plant['id']}", json={"watering_threshold": 20})
    assert response.status_code == 200
    assert response.json()["status"] == "healthy"


async def test_measurement_sorting(client, api):
    sensor = await api.sensor("moist-1")
    await api.measurement(sensor["id"], 30, timestamp="2026-01-01T10:00:00")
    await api.measurement(sensor["id"], 10, timestamp="2026-01-01T12:00:00")
    await api.measurement(sensor["id"], 20, timestamp="2026-01-01T11:00:00")

    response = await client.get("/api/measurements")
    assert [m["value"] for m in response.json()] == [10, 20, 30]

    response = await client.get("/api/measurements", params={"sort": "value", "limit": 2})
    assert [m["value"] for m in response.json()] == [10, 20]


async def test_measurement_unknown_sort_rejected(client):
    response = await client.get("/api/measurements", params={"sort": "-password"})
    assert response.status_code == 400


async def test_measurement_requires_existing_sensor(client):
    response = await client.post("/api/measurements", json={"sensor_id": 1, "value": 10})
    assert response.status_code == 400


async def test_delete_measurement_idempotent(client, api):
    sensor = await api.sensor("moist-1")
    measurement = await api.measurement(sensor["id"], 30)

    response = await client.delete(f"/api/measurements/{measurement['id']}")
    assert response.json()["measurements"] == 1

    response = await client.delete(f"/api/measurements/{measurement['id']}")
    assert response.status_code == 200
    assert response.json()["measurements"] == 0


async def test_watering_updates_last_watered(client, api):
    sensor = await api.sensor("moist-1")
    plant = await api.plant(sensor["id"])
    assert plant["last_watered"] is None

    schedule = await api.watering(plant["id"], trigger_type="automatic", triggered_by="system", duration_minutes=3)
    assert schedule["trigger_type"] == "automatic"

    response = await client.get(f"/api/plants/{plant['id']}")
    assert response.json()["last_watered"] is not None

    response = await client.get("/api/watering-schedules", params={"plant_id": plant["id"]})
    assert [s["id"] for s in response.json()] == [schedule["id"]]


async def test_watering_requires_existing_plant(client):
    response = await client.post("/api/watering-schedules", json={"plant_id": 3})
    assert response.status_code == 400
