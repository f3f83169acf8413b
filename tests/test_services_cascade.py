import pytest
from sqlalchemy import func, select

from campus_monitor.db.models import Building, Floor, Map, Measurement, Plant, Sensor, WateringSchedule
from campus_monitor.services import cascade


async def _add(session, obj):
    session.add(obj)
    await session.flush()
    return obj


async def _seed_building(session, name, suffix):
    """Здание с этажом, картой, датчиком на карте (растение, измерение, полив)."""
    building = await _add(session, Building(name=name, slug=name.lower().replace(" ", "-")))
    floor = await _add(session, Floor(name="Ground", building_id=building.id, level=0))
    floor_map = await _add(session, Map(name="Plan", floor_id=floor.id, building_id=building.id))
    sensor = await _add(session, Sensor(name=f"moist-{suffix}", type="moisture", map_id=floor_map.id,
                                        building_id=building.id, floor_id=floor.id,
                                        x_percent=50, y_percent=50))
    plant = await _add(session, Plant(species="Ficus", sensor_id=sensor.id))
    await _add(session, Measurement(sensor_id=sensor.id, value=40))
    await _add(session, WateringSchedule(plant_id=plant.id))
    return {"building": building, "floor": floor, "map": floor_map, "sensor": sensor, "plant": plant}


async def _count(session, model):
    return (await session.execute(select(func.count()).select_from(model))).scalar_one()


async def _exists(session, model, entity_id):
    # Запрос в БД, а не identity map: массовое удаление не синхронизирует сессию
    return (await session.execute(select(model.id).where(model.id == entity_id))).first() is not None


@pytest.fixture
async def seeded(session):
    lab = await _seed_building(session, "Lab A", "a")
    other = await _seed_building(session, "Library", "b")
    # Датчик, размещённый в здании напрямую, без карты
    lab["direct"] = await _add(session, Sensor(name="temp-a", type="temperature",
                                               building_id=lab["building"].id, room_id="101"))
    await session.commit()
    return {"lab": lab, "other": other}


async def test_delete_building_removes_exact_closure(session, seeded):
    summary = await cascade.delete_building(session, seeded["lab"]["building"].id)

    assert summary.model_dump() == {
        "buildings": 1,
        "floors": 1,
        "maps": 1,
        "sensors": 2,
        "plants": 1,
        "measurements": 1,
        "watering_schedules": 1,
    }
    assert summary.total == 8

    other = seeded["other"]
    for model, obj in (
        (Building, other["building"]),
        (Floor, other["floor"]),
        (Map, other["map"]),
        (Sensor, other["sensor"]),
        (Plant, other["plant"]),
    ):
        assert await _exists(session, model, obj.id)
    assert await _count(session, Measurement) == 1
    assert await _count(session, WateringSchedule) == 1


async def test_delete_floor_takes_direct_and_map_sensors(session, seeded):
    lab = seeded["lab"]
    on_floor = await _add(session, Sensor(name="hum-a", type="humidity",
                                          building_id=lab["building"].id, floor_id=lab["floor"].id))
    await session.commit()

    summary = await cascade.delete_floor(session, lab["floor"].id)
    assert summary.floors == 1
    assert summary.maps == 1
    assert summary.sensors == 2
    assert summary.buildings == 0
    # Датчик, привязанный только к зданию, остаётся
    assert await _exists(session, Sensor, lab["direct"].id)
    assert not await _exists(session, Sensor, on_floor.id)


async def test_delete_map_keeps_floor(session, seeded):
    lab = seeded["lab"]
    summary = await cascade.delete_map(session, lab["map"].id)
    assert (summary.maps, summary.sensors, summary.plants) == (1, 1, 1)
    assert await _exists(session, Floor, lab["floor"].id)


async def test_delete_missing_id_is_noop(session, seeded):
    summary = await cascade.delete_building(session, 12345)
    assert summary.total == 0
    assert await _count(session, Building) == 2


async def test_failed_cascade_rolls_back(session, seeded, monkeypatch):
    original = cascade._delete_rows

    async def failing(db, kind, ids):
        if kind == "maps":
            raise RuntimeError("disk full")
        return await original(db, kind, ids)

    monkeypatch.setattr(cascade, "_delete_rows", failing)

    with pytest.raises(RuntimeError):
        await cascade.delete_building(session, seeded["lab"]["building"].id)

    assert await _count(session, Building) == 2
    assert await _count(session, Sensor) == 3
    assert await _count(session, Measurement) == 2
    assert await _count(session, WateringSchedule) == 2


async def test_orphan_cleanup_is_idempotent(session, seeded):
    stray_map = await _add(session, Map(name="Old plan", floor_id=999))
    stray_sensor = await _add(session, Sensor(name="stray", type="moisture", map_id=stray_map.id,
                                              x_percent=10, y_percent=10))
    await _add(session, Plant(species="Fern", sensor_id=stray_sensor.id))
    await _add(session, Measurement(sensor_id=stray_sensor.id, value=5))
    await _add(session, Measurement(sensor_id=777, value=5))
    await _add(session, WateringSchedule(plant_id=888))
    await _add(session, Sensor(name="lost", type="moisture", map_id=555))
    await session.commit()

    summary = await cascade.cleanup_orphaned_data(session)
    assert summary.model_dump() == {
        "buildings": 0,
        "floors": 0,
        "maps": 1,
        "sensors": 2,
        "plants": 1,
        "measurements": 2,
        "watering_schedules": 1,
    }

    again = await cascade.cleanup_orphaned_data(session)
    assert again.total == 0
    assert await _count(session, Building) == 2
    assert await _count(session, Sensor) == 3


async def test_lab_scenario_over_http(client, api, campus):
    response = await client.delete(f"/api/buildings/{campus['building']['id']}")
    assert response.status_code == 200
    assert response.json() == {
        "buildings": 1,
        "floors": 1,
        "maps": 1,
        "sensors": 1,
        "plants": 1,
        "measurements": 2,
        "watering_schedules": 1,
    }

    for path in ("/api/floors", "/api/maps", "/api/sensors", "/api/plants", "/api/measurements",
                 "/api/watering-schedules"):
        assert (await client.get(path)).json() == []

    response = await client.post("/api/cleanup-orphaned-data")
    assert response.json()["sensors"] == 0

    # Имя освободилось
    building = await api.building(" lab a ")
    assert building["slug"] == "lab-a"
