from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from campus_monitor.db.models.floor import Floor
from campus_monitor.exceptions import NotFoundError, ValidationError
from campus_monitor.schemas.cascade import DeletionSummary
from campus_monitor.schemas.location import FloorCreate, FloorUpdate
from campus_monitor.services import cascade
from campus_monitor.services.building import get_building
from campus_monitor.services.uniqueness import commit_unique, ensure_floor_level_free


async def get_floor(db: AsyncSession, floor_id: int) -> Floor | None:
    result = await db.execute(select(Floor).where(Floor.id == floor_id))
    return result.scalars().first()


async def list_floors(db: AsyncSession, building_id: int | None = None) -> list[Floor]:
    stmt = select(Floor)
    if building_id is not None:
        stmt = stmt.where(Floor.building_id == building_id)
    result = await db.execute(stmt.order_by(Floor.building_id, Floor.level))
    return result.scalars().all()


async def _require_building(db: AsyncSession, building_id: int) -> None:
    if not await get_building(db, building_id):
        raise ValidationError(f"Building id={building_id} does not exist")


async def create_floor(db: AsyncSession, data: FloorCreate) -> Floor:
    await _require_building(db, data.building_id)
    await ensure_floor_level_free(db, data.building_id, data.level)
    floor = Floor(**data.model_dump())
    db.add(floor)
    await commit_unique(db, f"Floor with level {data.level} already exists in this building")
    await db.refresh(floor)
    return floor


async def update_floor(db: AsyncSession, floor_id: int, data: FloorUpdate) -> Floor:
    floor = await get_floor(db, floor_id)
    if not floor:
        raise NotFoundError(f"Floor id={floor_id} not found")
    changes = {k: v for k, v in data.model_dump(exclude_unset=True).items() if v is not None or k == "description"}
    building_id = changes.get("building_id", floor.building_id)
    level = changes.get("level", floor.level)
    if "building_id" in changes:
        await _require_building(db, building_id)
    if building_id != floor.building_id or level != floor.level:
        await ensure_floor_level_free(db, building_id, level, exclude_id=floor_id)
    for k, v in changes.items():
        setattr(floor, k, v)
    await commit_unique(db, f"Floor with level {level} already exists in this building")
    await db.refresh(floor)
    return floor


async def delete_floor(db: AsyncSession, floor_id: int) -> DeletionSummary:
    return await cascade.delete_floor(db, floor_id)
