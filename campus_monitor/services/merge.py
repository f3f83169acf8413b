"""
Слияние дубликатов из старых данных.

До появления slug и уникального (building_id, level) в базе могли оказаться
здания с одинаковым по смыслу именем ("Lab A" и " lab a") и несколько этажей
одного уровня в одном здании. Дубликаты сливаются в запись с меньшим id:
карты и датчики перевешиваются на неё, лишние строки удаляются.
"""
import logging
from collections import defaultdict

from sqlalchemy import delete, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from campus_monitor.db.models.building import Building
from campus_monitor.db.models.floor import Floor
from campus_monitor.db.models.map import Map
from campus_monitor.db.models.sensor import Sensor
from campus_monitor.schemas.cascade import MergeSummary
from campus_monitor.services.uniqueness import slugify

logger = logging.getLogger(__name__)

# Временный slug, чтобы пересчёт не упёрся в уникальный индекс посередине
_TEMP_SLUG = "__merge__{}"


async def _repoint(db: AsyncSession, model, column: str, old_id: int, new_id: int) -> None:
    await db.execute(
        update(model)
        .where(getattr(model, column) == old_id)
        .values({column: new_id})
        .execution_options(synchronize_session=False)
    )


async def _merge_floor_into(db: AsyncSession, target_id: int, duplicate_id: int) -> None:
    await _repoint(db, Map, "floor_id", duplicate_id, target_id)
    await _repoint(db, Sensor, "floor_id", duplicate_id, target_id)
    await db.execute(delete(Floor).where(Floor.id == duplicate_id))
    logger.info("Merged floor id=%s into id=%s", duplicate_id, target_id)


async def _merge_duplicate_floors(db: AsyncSession) -> int:
    rows = await db.execute(select(Floor.id, Floor.building_id, Floor.level).order_by(Floor.id))
    kept: dict[tuple[int, int], int] = {}
    merged = 0
    for floor_id, building_id, level in rows.all():
        target_id = kept.setdefault((building_id, level), floor_id)
        if target_id != floor_id:
            await _merge_floor_into(db, target_id, floor_id)
            merged += 1
    return merged


async def _merge_building_into(db: AsyncSession, target_id: int, duplicate_id: int) -> int:
    """Переносит этажи, карты и датчики; этаж уже занятого уровня сливается. Возвращает число слитых этажей."""
    target_levels = dict(
        (await db.execute(select(Floor.level, Floor.id).where(Floor.building_id == target_id))).all()
    )
    floors = await db.execute(
        select(Floor.id, Floor.level).where(Floor.building_id == duplicate_id).order_by(Floor.id)
    )
    merged = 0
    for floor_id, level in floors.all():
        if level in target_levels:
            await _merge_floor_into(db, target_levels[level], floor_id)
            merged += 1
        else:
            await db.execute(update(Floor).where(Floor.id == floor_id).values(building_id=target_id))
            target_levels[level] = floor_id

    await _repoint(db, Map, "building_id", duplicate_id, target_id)
    await _repoint(db, Sensor, "building_id", duplicate_id, target_id)
    await db.execute(delete(Building).where(Building.id == duplicate_id))
    logger.info("Merged building id=%s into id=%s", duplicate_id, target_id)
    return merged


async def _merge_duplicate_buildings(db: AsyncSession) -> tuple[int, int]:
    rows = await db.execute(select(Building.id, Building.name).order_by(Building.id))
    groups: dict[str, list[int]] = defaultdict(list)
    for building_id, name in rows.all():
        groups[slugify(name)].append(building_id)

    buildings_merged = floors_merged = 0
    for ids in groups.values():
        target_id, *duplicates = ids
        for duplicate_id in duplicates:
            floors_merged += await _merge_building_into(db, target_id, duplicate_id)
            buildings_merged += 1
    return buildings_merged, floors_merged


async def _backfill_slugs(db: AsyncSession) -> int:
    rows = await db.execute(select(Building.id, Building.name, Building.slug))
    stale = [(building_id, slugify(name)) for building_id, name, slug in rows.all() if slug != slugify(name)]
    for building_id, _ in stale:
        await db.execute(
            update(Building).where(Building.id == building_id).values(slug=_TEMP_SLUG.format(building_id))
        )
    for building_id, slug in stale:
        await db.execute(update(Building).where(Building.id == building_id).values(slug=slug))
    return len(stale)


async def merge_duplicates(db: AsyncSession) -> MergeSummary:
    """
    Одна транзакция:
    1. этажи одного здания с одинаковым уровнем;
    2. здания с одинаковым slug(name), вместе с их этажами;
    3. slug каждого оставшегося здания приводится к slugify(name).
    Повторный запуск ничего не меняет.
    """
    try:
        floors_merged = await _merge_duplicate_floors(db)
        buildings_merged, building_floors_merged = await _merge_duplicate_buildings(db)
        slugs_updated = await _backfill_slugs(db)
        await db.commit()
    except Exception:
        await db.rollback()
        logger.error("Duplicate merge failed, rolled back")
        raise
    summary = MergeSummary(
        buildings_merged=buildings_merged,
        floors_merged=floors_merged + building_floors_merged,
        slugs_updated=slugs_updated,
    )
    logger.info("Duplicate merge finished: %s", summary.model_dump())
    return summary
