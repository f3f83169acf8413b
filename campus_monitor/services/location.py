"""
Определение местоположения датчика.

У датчика два взаимоисключающих способа размещения:
- прямое: building_id / floor_id / room_id;
- через карту: map_id -> floor_id -> building_id.
Оба сводятся к одной функции resolve_location. Все идентификаторы
приводятся к int при построении индекса и при поиске, поэтому
"3" и 3 указывают на одну и ту же запись.
"""
from dataclasses import dataclass
from typing import Any, Iterable, Optional, Union

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from campus_monitor.db.models.building import Building
from campus_monitor.db.models.floor import Floor
from campus_monitor.db.models.map import Map

BREADCRUMB_SEPARATOR = " › "
UNASSIGNED = "Unassigned"


@dataclass(frozen=True)
class DirectLocation:
    building_id: int
    floor_id: Optional[int] = None
    room_id: Optional[str] = None


@dataclass(frozen=True)
class MapLocation:
    map_id: int


LocationSource = Union[DirectLocation, MapLocation]


@dataclass(frozen=True)
class ResolvedLocation:
    building_id: Optional[int]
    floor_id: Optional[int]
    breadcrumb: str
    source: Optional[LocationSource]

    @property
    def assigned(self) -> bool:
        return self.source is not None


def to_id(value: Any) -> Optional[int]:
    """Единый тип идентификатора: int или None ("" и None -> None)."""
    if value is None or value == "":
        return None
    return int(value)


class LocationIndex:
    """
    Здания, этажи и карты в памяти, ключ: int id.
    Строится один раз на запрос списка, дальше поиск O(1).
    """

    def __init__(
        self,
        buildings: Iterable[Any] = (),
        floors: Iterable[Any] = (),
        maps: Iterable[Any] = (),
    ):
        self.buildings = {to_id(b.id): b for b in buildings}
        self.floors = {to_id(f.id): f for f in floors}
        self.maps = {to_id(m.id): m for m in maps}

    @classmethod
    async def load(cls, db: AsyncSession) -> "LocationIndex":
        buildings = (await db.execute(select(Building))).scalars().all()
        floors = (await db.execute(select(Floor))).scalars().all()
        maps = (await db.execute(select(Map))).scalars().all()
        return cls(buildings, floors, maps)

    def building(self, building_id: Any):
        key = to_id(building_id)
        return self.buildings.get(key) if key is not None else None

    def floor(self, floor_id: Any):
        key = to_id(floor_id)
        return self.floors.get(key) if key is not None else None

    def map(self, map_id: Any):
        key = to_id(map_id)
        return self.maps.get(key) if key is not None else None


def floor_label(floor) -> str:
    if floor is None:
        return ""
    if floor.name:
        return floor.name
    return f"Floor {floor.level}" if floor.level is not None else ""


def location_source(sensor) -> Optional[LocationSource]:
    building_id = to_id(sensor.building_id)
    if building_id is not None:
        return DirectLocation(building_id, to_id(sensor.floor_id), sensor.room_id or None)
    map_id = to_id(sensor.map_id)
    if map_id is not None:
        return MapLocation(map_id)
    return None


def _breadcrumb(*parts: Optional[str]) -> str:
    return BREADCRUMB_SEPARATOR.join(p for p in parts if p)


def resolve_location(sensor, index: LocationIndex) -> ResolvedLocation:
    """
    Порядок (первое совпадение выигрывает):
    1. building_id задан — здание, этаж, комната напрямую;
    2. иначе map_id задан — карта -> этаж -> здание;
    3. иначе UNASSIGNED.
    """
    source = location_source(sensor)

    if isinstance(source, DirectLocation):
        building = index.building(source.building_id)
        floor = index.floor(source.floor_id)
        crumb = _breadcrumb(
            building.name if building is not None else "",
            floor_label(floor),
            source.room_id,
        )
        return ResolvedLocation(source.building_id, source.floor_id, crumb or UNASSIGNED, source)

    if isinstance(source, MapLocation):
        sensor_map = index.map(source.map_id)
        floor = index.floor(sensor_map.floor_id) if sensor_map is not None else None
        if floor is None:
            return ResolvedLocation(None, None, UNASSIGNED, source)
        building_id = to_id(floor.building_id)
        building = index.building(building_id)
        crumb = _breadcrumb(
            building.name if building is not None else "",
            floor_label(floor),
            sensor.room_id,
        )
        return ResolvedLocation(building_id, to_id(floor.id), crumb or UNASSIGNED, source)

    return ResolvedLocation(None, None, UNASSIGNED, None)
