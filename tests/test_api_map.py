from conftest import PNG_BASE64


async def test_map_bad_id_returns_422(client):
    response = await client.get("/api/maps/not-an-int")
    assert response.status_code == 422


async def test_missing_map_returns_404(client):
    response = await client.get("/api/maps/999")
    assert response.status_code == 404
    assert response.json() == {"error": "Map not found"}


async def test_floor_only_map_takes_building_from_floor(api):
    building = await api.building("Lab A")
    floor = await api.floor(building["id"])
    floor_map = await api.map(floor["id"])
    assert floor_map["building_id"] == building["id"]
    assert floor_map["floor_id"] == floor["id"]
    assert floor_map["image_url"] == f"data:image/png;base64,{PNG_BASE64}"


async def test_image_base64_alias_accepted(client, api):
    building = await api.building("Lab A")
    response = await client.post(
        "/api/maps",
        json={"name": "Photo", "image_base64": "/9j/4AAQSkZJRg", "building_id": building["id"]},
    )
    assert response.status_code == 201
    assert response.json()["image_url"].startswith("data:image/jpeg;base64,")


async def test_map_floor_from_other_building_rejected(client, api):
    a = await api.building("A")
    b = await api.building("B")
    floor = await api.floor(a["id"])
    response = await client.post(
        "/api/maps", json={"name": "Plan", "floor_id": floor["id"], "building_id": b["id"]}
    )
    assert response.status_code == 400


async def test_map_missing_floor_rejected(client):
    response = await client.post("/api/maps", json={"name": "Plan", "floor_id": 7})
    assert response.status_code == 400


async def test_list_maps_by_floor(client, api):
    building = await api.building("Lab A")
    f1 = await api.floor(building["id"], level=1)
    f2 = await api.floor(building["id"], level=2, name="First")
    await api.map(f1["id"], name="Ground plan")
    await api.map(f2["id"], name="First plan")

    response = await client.get("/api/maps", params={"floor_id": f2["id"]})
    assert [m["name"] for m in response.json()] == ["First plan"]
