import logging
from dataclasses import dataclass

from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession

from campus_monitor.db.models.building import Building
from campus_monitor.db.models.floor import Floor
from campus_monitor.db.models.map import Map
from campus_monitor.db.models.measurement import Measurement
from campus_monitor.db.models.plant import Plant
from campus_monitor.db.models.sensor import Sensor
from campus_monitor.db.models.watering_schedule import WateringSchedule
from campus_monitor.schemas.cascade import DeletionSummary

logger = logging.getLogger(__name__)

__all__ = [
    "OWNERSHIP_GRAPH",
    "collect_closure",
    "delete_cascade",
    "delete_building",
    "delete_floor",
    "delete_map",
    "delete_sensor",
    "delete_measurement",
    "cleanup_orphaned_data",
]

# Категории совпадают с полями DeletionSummary, порядок от родителей к потомкам
MODELS = {
    "buildings": Building,
    "floors": Floor,
    "maps": Map,
    "sensors": Sensor,
    "plants": Plant,
    "measurements": Measurement,
    "watering_schedules": WateringSchedule,
}
KINDS = tuple(MODELS)

# Порядок удаления: факты (измерения, полив) раньше владельцев, потомки раньше родителей
DELETE_ORDER = (
    "measurements",
    "watering_schedules",
    "plants",
    "sensors",
    "maps",
    "floors",
    "buildings",
)


@dataclass(frozen=True)
class Edge:
    """
    Ребро графа владения: строки child, у которых child.column ∈ id родителей.
    root_only: ссылка «прямого размещения» датчика: учитывается только
    от удаляемого корня, а не транзитивно.
    """
    parent: str
    child: str
    column: str
    root_only: bool = False


OWNERSHIP_GRAPH = (
    Edge("buildings", "floors", "building_id"),
    Edge("buildings", "sensors", "building_id", root_only=True),
    Edge("floors", "maps", "floor_id"),
    Edge("floors", "sensors", "floor_id", root_only=True),
    Edge("maps", "sensors", "map_id"),
    Edge("sensors", "plants", "sensor_id"),
    Edge("sensors", "measurements", "sensor_id"),
    Edge("plants", "watering_schedules", "plant_id"),
)


async def collect_closure(db: AsyncSession, roots: dict[str, set[int]]) -> dict[str, set[int]]:
    """
    Транзитивное замыкание зависимых строк для набора корней.
    KINDS упорядочен топологически, поэтому достаточно одного прохода.
    """
    closure: dict[str, set[int]] = {kind: set() for kind in KINDS}
    for kind, ids in roots.items():
        closure[kind].update(ids)

    for kind in KINDS:
        if not closure[kind]:
            continue
        for edge in OWNERSHIP_GRAPH:
            if edge.parent != kind:
                continue
            parent_ids = roots.get(kind, set()) if edge.root_only else closure[kind]
            if not parent_ids:
                continue
            child = MODELS[edge.child]
            result = await db.execute(
                select(child.id).where(getattr(child, edge.column).in_(parent_ids))
            )
            closure[edge.child].update(result.scalars().all())
    return closure


async def _delete_rows(db: AsyncSession, kind: str, ids: set[int]) -> int:
    if not ids:
        return 0
    model = MODELS[kind]
    await db.execute(
        delete(model).where(model.id.in_(ids)).execution_options(synchronize_session=False)
    )
    return len(ids)


async def _purge(db: AsyncSession, closure: dict[str, set[int]]) -> DeletionSummary:
    counts = {}
    for kind in DELETE_ORDER:
        counts[kind] = await _delete_rows(db, kind, closure[kind])
    return DeletionSummary(**counts)


async def delete_cascade(db: AsyncSession, kind: str, entity_id: int) -> DeletionSummary:
    """
    Удаляет корень и всё, что без него осиротеет, одной транзакцией.

    Несуществующий id не ошибка: возвращается сводка с нулями,
    а висящие на нём строки остаются для cleanup_orphaned_data.
    При любой ошибке транзакция откатывается и исключение пробрасывается как есть.
    """
    model = MODELS[kind]
    try:
        found = (await db.execute(select(model.id).where(model.id == entity_id))).first()
        if found is None:
            logger.info("Delete %s id=%s: already absent", kind, entity_id)
            return DeletionSummary()
        closure = await collect_closure(db, {kind: {entity_id}})
        summary = await _purge(db, closure)
        await db.commit()
    except Exception:
        await db.rollback()
        logger.error("Cascade delete of %s id=%s failed, rolled back", kind, entity_id)
        raise
    logger.info("Deleted %s id=%s with cascade: %s", kind, entity_id, summary.model_dump())
    return summary


async def delete_building(db: AsyncSession, building_id: int) -> DeletionSummary:
    return await delete_cascade(db, "buildings", building_id)


async def delete_floor(db: AsyncSession, floor_id: int) -> DeletionSummary:
    return await delete_cascade(db, "floors", floor_id)


async def delete_map(db: AsyncSession, map_id: int) -> DeletionSummary:
    return await delete_cascade(db, "maps", map_id)


async def delete_sensor(db: AsyncSession, sensor_id: int) -> DeletionSummary:
    return await delete_cascade(db, "sensors", sensor_id)


async def delete_measurement(db: AsyncSession, measurement_id: int) -> DeletionSummary:
    return await delete_cascade(db, "measurements", measurement_id)


async def cleanup_orphaned_data(db: AsyncSession) -> DeletionSummary:
    """
    Ремонт целостности, накопившейся до нас (например, после старого неполного каскада):
    - карты, чей floor_id указывает на несуществующий этаж;
    - датчики, чей map_id указывает на несуществующую карту;
    - измерения без датчика и записи полива без растения.
    Карты и датчики удаляются через то же замыкание, что и при каскаде,
    поэтому повторный запуск ничего не находит.
    """
    try:
        orphan_maps = await db.execute(
            select(Map.id).where(Map.floor_id.is_not(None), Map.floor_id.not_in(select(Floor.id)))
        )
        orphan_sensors = await db.execute(
            select(Sensor.id).where(Sensor.map_id.is_not(None), Sensor.map_id.not_in(select(Map.id)))
        )
        orphan_measurements = await db.execute(
            select(Measurement.id).where(Measurement.sensor_id.not_in(select(Sensor.id)))
        )
        orphan_schedules = await db.execute(
            select(WateringSchedule.id).where(WateringSchedule.plant_id.not_in(select(Plant.id)))
        )
        roots = {
            "maps": set(orphan_maps.scalars().all()),
            "sensors": set(orphan_sensors.scalars().all()),
            "measurements": set(orphan_measurements.scalars().all()),
            "watering_schedules": set(orphan_schedules.scalars().all()),
        }
        closure = await collect_closure(db, roots)
        summary = await _purge(db, closure)
        await db.commit()
    except Exception:
        await db.rollback()
        logger.error("Orphan cleanup failed, rolled back")
        raise
    logger.info("Orphan cleanup finished: %s", summary.model_dump())
    return summary
