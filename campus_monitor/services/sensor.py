import logging
from typing import Any

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from campus_monitor.db.models.sensor import Sensor
from campus_monitor.exceptions import NotFoundError, ValidationError
from campus_monitor.schemas.cascade import DeletionSummary
from campus_monitor.schemas.sensor import SensorCreate, SensorOut, SensorUpdate
from campus_monitor.services import cascade
from campus_monitor.services.building import get_building
from campus_monitor.services.floor import get_floor
from campus_monitor.services.location import LocationIndex, resolve_location
from campus_monitor.services.map import get_map
from campus_monitor.services.uniqueness import commit_unique, ensure_sensor_name_free
from campus_monitor.utils.math_utils import MAP_CENTER_PERCENT

logger = logging.getLogger(__name__)

SENSOR_UNITS = {
    "moisture": "%",
    "temperature": "°C",
    "humidity": "%",
    "light": "lux",
}

# Эти колонки NOT NULL: явный null в PUT означает «не менять»
_REQUIRED_FIELDS = ("name", "type", "status")
_LOCATION_FIELDS = ("building_id", "floor_id", "map_id", "x_percent", "y_percent")


def default_unit(sensor_type: str) -> str:
    return SENSOR_UNITS.get(sensor_type, "")


def to_sensor_out(sensor: Sensor, index: LocationIndex) -> SensorOut:
    location = resolve_location(sensor, index)
    return SensorOut.model_validate(
        {
            **{c.name: getattr(sensor, c.name) for c in Sensor.__table__.columns},
            "location_x": sensor.x_percent if sensor.x_percent is not None else sensor.x_coord,
            "location_y": sensor.y_percent if sensor.y_percent is not None else sensor.y_coord,
            "location": location.breadcrumb,
            "resolved_building_id": location.building_id,
            "resolved_floor_id": location.floor_id,
        }
    )


async def _location_from_map(db: AsyncSession, map_id: int) -> tuple[int | None, int | None]:
    """
    Размещение на карте: building_id/floor_id копируются с карты в момент записи.
    Здание берётся у этажа карты, а если этажа нет, то у самой карты.
    """
    floor_map = await get_map(db, map_id)
    if not floor_map:
        raise ValidationError(f"Map id={map_id} does not exist")
    floor = await get_floor(db, floor_map.floor_id) if floor_map.floor_id is not None else None
    building_id = floor.building_id if floor is not None else floor_map.building_id
    return building_id, floor_map.floor_id


async def _direct_location(
    db: AsyncSession,
    building_id: int | None,
    floor_id: int | None,
) -> tuple[int | None, int | None]:
    if floor_id is not None:
        floor = await get_floor(db, floor_id)
        if not floor:
            raise ValidationError(f"Floor id={floor_id} does not exist")
        if building_id is None:
            building_id = floor.building_id
        elif building_id != floor.building_id:
            raise ValidationError(f"Floor id={floor_id} does not belong to building id={building_id}")
    if building_id is not None and not await get_building(db, building_id):
        raise ValidationError(f"Building id={building_id} does not exist")
    return building_id, floor_id


def _placement(x: float | None, y: float | None) -> dict[str, float]:
    return {
        "x_percent": MAP_CENTER_PERCENT if x is None else x,
        "y_percent": MAP_CENTER_PERCENT if y is None else y,
    }


async def get_sensor(db: AsyncSession, sensor_id: int) -> Sensor | None:
    result = await db.execute(select(Sensor).where(Sensor.id == sensor_id))
    return result.scalars().first()


async def get_sensor_out(db: AsyncSession, sensor_id: int) -> SensorOut:
    sensor = await get_sensor(db, sensor_id)
    if not sensor:
        raise NotFoundError(f"Sensor id={sensor_id} not found")
    return to_sensor_out(sensor, await LocationIndex.load(db))


async def list_sensors(
    db: AsyncSession,
    map_id: int | None = None,
    building_id: int | None = None,
    floor_id: int | None = None,
) -> list[SensorOut]:
    """
    Фильтр по map_id — по колонке; по зданию/этажу — по вычисленному
    местоположению, чтобы датчики, размещённые только через карту, тоже попадали.
    """
    stmt = select(Sensor)
    if map_id is not None:
        stmt = stmt.where(Sensor.map_id == map_id)
    sensors = (await db.execute(stmt.order_by(Sensor.id))).scalars().all()
    index = await LocationIndex.load(db)
    items = [to_sensor_out(s, index) for s in sensors]
    if building_id is not None:
        items = [s for s in items if s.resolved_building_id == building_id]
    if floor_id is not None:
        items = [s for s in items if s.resolved_floor_id == floor_id]
    return items


async def create_sensor(db: AsyncSession, data: SensorCreate) -> Sensor:
    await ensure_sensor_name_free(db, data.name)
    fields: dict[str, Any] = data.model_dump()

    if data.map_id is not None:
        fields["building_id"], fields["floor_id"] = await _location_from_map(db, data.map_id)
        fields.update(_placement(data.x_percent, data.y_percent))
    else:
        fields["building_id"], fields["floor_id"] = await _direct_location(db, data.building_id, data.floor_id)
        fields["x_percent"] = fields["y_percent"] = None

    if not fields.get("unit"):
        fields["unit"] = default_unit(data.type)

    sensor = Sensor(**fields)
    db.add(sensor)
    await commit_unique(db, f'Sensor with name "{data.name}" already exists')
    await db.refresh(sensor)
    logger.info("Created sensor id=%s name=%s map_id=%s", sensor.id, sensor.name, sensor.map_id)
    return sensor


def _check_map_intent(changes: dict[str, Any], building_id: int | None, floor_id: int | None) -> None:
    """Здание/этаж в одном запросе с map_id допустимы, только если совпадают с картой."""
    for key, expected in (("building_id", building_id), ("floor_id", floor_id)):
        value = changes.get(key)
        if value is not None and value != expected:
            raise ValidationError(
                f"{key}={value} conflicts with map placement ({key}={expected}); "
                "send map_id=null to assign the sensor directly"
            )


async def _location_changes(db: AsyncSession, sensor: Sensor, changes: dict[str, Any]) -> dict[str, Any]:
    """
    Разбирает намерение обновления:
    - map_id в запросе: размещение на карте (смена карты пересчитывает здание/этаж
      и без новых координат ставит датчик в центр); map_id=null снимает с карты;
    - building_id/floor_id без map_id: прямое размещение, датчик снимается с карты;
    - только x/y: перемещение по текущей карте.
    """
    if "map_id" in changes:
        new_map_id = changes["map_id"]
        if new_map_id is None:
            building_id, floor_id = await _direct_location(
                db,
                changes.get("building_id", sensor.building_id),
                changes.get("floor_id", sensor.floor_id),
            )
            return {"map_id": None, "x_percent": None, "y_percent": None,
                    "building_id": building_id, "floor_id": floor_id}
        if new_map_id != sensor.map_id:
            building_id, floor_id = await _location_from_map(db, new_map_id)
            _check_map_intent(changes, building_id, floor_id)
            return {"map_id": new_map_id, "building_id": building_id, "floor_id": floor_id,
                    **_placement(changes.get("x_percent"), changes.get("y_percent"))}
        _check_map_intent(changes, sensor.building_id, sensor.floor_id)
        return {k: changes[k] for k in ("x_percent", "y_percent") if changes.get(k) is not None}

    if "building_id" in changes or "floor_id" in changes:
        building_id = changes.get("building_id")
        if "floor_id" in changes:
            floor_id = changes["floor_id"]
        else:
            floor_id = sensor.floor_id if building_id == sensor.building_id else None
        building_id, floor_id = await _direct_location(db, building_id, floor_id)
        return {"building_id": building_id, "floor_id": floor_id,
                "map_id": None, "x_percent": None, "y_percent": None}

    coords = {k: changes[k] for k in ("x_percent", "y_percent") if changes.get(k) is not None}
    if coords and sensor.map_id is None:
        raise ValidationError(f"Sensor id={sensor.id} is not placed on a map")
    return coords


async def update_sensor(db: AsyncSession, sensor_id: int, data: SensorUpdate) -> Sensor:
    sensor = await get_sensor(db, sensor_id)
    if not sensor:
        raise NotFoundError(f"Sensor id={sensor_id} not found")
    changes = data.model_dump(exclude_unset=True)
    for k in _REQUIRED_FIELDS:
        if k in changes and changes[k] is None:
            del changes[k]

    if "name" in changes and changes["name"] != sensor.name:
        await ensure_sensor_name_free(db, changes["name"], exclude_id=sensor_id)
    if "type" in changes and "unit" not in changes:
        changes["unit"] = default_unit(changes["type"])

    location = await _location_changes(db, sensor, changes)
    for k in _LOCATION_FIELDS:
        changes.pop(k, None)
    changes.update(location)

    for k, v in changes.items():
        setattr(sensor, k, v)
    await commit_unique(db, f'Sensor with name "{sensor.name}" already exists')
    await db.refresh(sensor)
    return sensor


async def delete_sensor(db: AsyncSession, sensor_id: int) -> DeletionSummary:
    return await cascade.delete_sensor(db, sensor_id)
