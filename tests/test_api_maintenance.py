from conftest import PNG_BASE64


async def test_delete_lab_a_scenario(client, api):
    building = await api.building("Lab A")
    floor = await api.floor(building["id"], level=1, name="Ground")
    floor_map = await api._post("/maps", {"name": "plan.png", "image": PNG_BASE64, "floor_id": floor["id"]})
    sensor = await api.sensor("S1", map_id=floor_map["id"], x_percent=42.5, y_percent=17.0)
    assert (sensor["x_percent"], sensor["y_percent"]) == (42.5, 17.0)

    response = await client.delete(f"/api/buildings/{building['id']}")
    summary = response.json()
    assert (summary["floors"], summary["maps"], summary["sensors"]) == (1, 1, 1)

    sensors = (await client.get("/api/sensors")).json()
    assert "S1" not in [s["name"] for s in sensors]
    buildings = (await client.get("/api/buildings")).json()
    assert "Lab A" not in [b["name"] for b in buildings]


async def test_duplicate_building_writes_nothing(client, api):
    await api.building(" Lab A ")
    response = await client.post("/api/buildings", json={"name": "LAB A"})
    assert response.status_code == 400
    assert len((await client.get("/api/buildings")).json()) == 1


async def test_cleanup_on_consistent_data_deletes_nothing(client, campus):
    first = await client.post("/api/cleanup-orphaned-data")
    assert first.status_code == 200
    assert all(count == 0 for count in first.json().values())

    second = await client.post("/api/cleanup-orphaned-data")
    assert second.json() == first.json()
    assert len((await client.get("/api/sensors")).json()) == 1
