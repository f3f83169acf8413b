import pytest
from sqlalchemy import select, text

from campus_monitor.db.models import Building, Floor, Map, Sensor
from campus_monitor.services import merge


async def _add(session, obj):
    session.add(obj)
    await session.flush()
    return obj


async def _fresh(session, model, entity_id):
    # populate_existing: массовые UPDATE не синхронизируют объекты в сессии
    result = await session.execute(
        select(model).where(model.id == entity_id).execution_options(populate_existing=True)
    )
    return result.scalar_one_or_none()


async def _ids(session, model):
    return set((await session.execute(select(model.id))).scalars().all())


@pytest.fixture
async def duplicated_buildings(session):
    lab = await _add(session, Building(name="Lab A", slug="lab-a"))
    lab_copy = await _add(session, Building(name=" LAB  a", slug="lab-a-2"))
    library = await _add(session, Building(name="Library", slug="library-old"))
    ground = await _add(session, Floor(name="Ground", building_id=lab.id, level=0))
    ground_copy = await _add(session, Floor(name="Ground", building_id=lab_copy.id, level=0))
    first = await _add(session, Floor(name="First", building_id=lab_copy.id, level=1))
    plan = await _add(session, Map(name="Plan", floor_id=ground_copy.id, building_id=lab_copy.id))
    on_map = await _add(session, Sensor(name="moist-1", type="moisture", map_id=plan.id,
                                        building_id=lab_copy.id, floor_id=ground_copy.id,
                                        x_percent=20, y_percent=20))
    direct = await _add(session, Sensor(name="temp-1", type="temperature",
                                        building_id=lab_copy.id, floor_id=first.id))
    await session.commit()
    return {
        "lab": lab, "lab_copy": lab_copy, "library": library,
        "ground": ground, "ground_copy": ground_copy, "first": first,
        "plan": plan, "on_map": on_map, "direct": direct,
    }


async def test_merge_buildings_into_lowest_id(session, duplicated_buildings):
    d = duplicated_buildings
    summary = await merge.merge_duplicates(session)
    assert summary.model_dump() == {"buildings_merged": 1, "floors_merged": 1, "slugs_updated": 1}

    assert await _ids(session, Building) == {d["lab"].id, d["library"].id}
    assert (await _fresh(session, Building, d["library"].id)).slug == "library"
    assert (await _fresh(session, Building, d["lab"].id)).slug == "lab-a"

    # Этаж того же уровня слит, этаж нового уровня перенесён
    assert await _ids(session, Floor) == {d["ground"].id, d["first"].id}
    assert (await _fresh(session, Floor, d["first"].id)).building_id == d["lab"].id

    plan = await _fresh(session, Map, d["plan"].id)
    assert (plan.building_id, plan.floor_id) == (d["lab"].id, d["ground"].id)
    on_map = await _fresh(session, Sensor, d["on_map"].id)
    assert (on_map.building_id, on_map.floor_id) == (d["lab"].id, d["ground"].id)
    direct = await _fresh(session, Sensor, d["direct"].id)
    assert (direct.building_id, direct.floor_id) == (d["lab"].id, d["first"].id)


async def test_merge_is_idempotent(session, duplicated_buildings):
    await merge.merge_duplicates(session)
    again = await merge.merge_duplicates(session)
    assert again.total == 0


async def test_failed_merge_rolls_back(session, duplicated_buildings, monkeypatch):
    async def failing(db):
        raise RuntimeError("disk full")

    monkeypatch.setattr(merge, "_backfill_slugs", failing)
    with pytest.raises(RuntimeError):
        await merge.merge_duplicates(session)

    assert len(await _ids(session, Building)) == 3
    assert len(await _ids(session, Floor)) == 3
    assert (await _fresh(session, Sensor, duplicated_buildings["on_map"].id)).floor_id == \
        duplicated_buildings["ground_copy"].id


@pytest.fixture
async def legacy_floors(session):
    # Таблица этажей из времён до уникального (building_id, level)
    await session.execute(text("DROP TABLE floors"))
    await session.execute(text(
        "CREATE TABLE floors ("
        "id INTEGER PRIMARY KEY, name VARCHAR(255) NOT NULL, building_id INTEGER NOT NULL, "
        "level INTEGER NOT NULL, description TEXT, "
        "created_at DATETIME DEFAULT CURRENT_TIMESTAMP NOT NULL)"
    ))
    await session.commit()
    building = await _add(session, Building(name="Lab A", slug="lab-a"))
    kept = await _add(session, Floor(name="Second", building_id=building.id, level=2))
    duplicate = await _add(session, Floor(name="Second (copy)", building_id=building.id, level=2))
    other = await _add(session, Floor(name="Third", building_id=building.id, level=3))
    plan = await _add(session, Map(name="Plan", floor_id=duplicate.id, building_id=building.id))
    sensor = await _add(session, Sensor(name="hum-1", type="humidity",
                                        building_id=building.id, floor_id=duplicate.id))
    await session.commit()
    return {"kept": kept, "duplicate": duplicate, "other": other, "plan": plan, "sensor": sensor}


async def test_merge_floors_with_same_level(session, legacy_floors):
    d = legacy_floors
    summary = await merge.merge_duplicates(session)
    assert summary.floors_merged == 1
    assert summary.buildings_merged == 0

    assert await _ids(session, Floor) == {d["kept"].id, d["other"].id}
    assert (await _fresh(session, Map, d["plan"].id)).floor_id == d["kept"].id
    assert (await _fresh(session, Sensor, d["sensor"].id)).floor_id == d["kept"].id

    assert (await merge.merge_duplicates(session)).total == 0


async def test_merge_endpoint_on_clean_data(client, campus):
    response = await client.post("/api/merge-duplicates")
    assert response.status_code == 200
    assert response.json() == {"buildings_merged": 0, "floors_merged": 0, "slugs_updated": 0}
