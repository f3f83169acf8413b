import logging

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from campus_monitor.db.models.building import Building
from campus_monitor.exceptions import NotFoundError
from campus_monitor.schemas.cascade import DeletionSummary
from campus_monitor.schemas.location import BuildingCreate, BuildingUpdate
from campus_monitor.services import cascade
from campus_monitor.services.uniqueness import commit_unique, ensure_building_slug_free

logger = logging.getLogger(__name__)


async def get_building(db: AsyncSession, building_id: int) -> Building | None:
    result = await db.execute(select(Building).where(Building.id == building_id))
    return result.scalars().first()


async def list_buildings(db: AsyncSession) -> list[Building]:
    result = await db.execute(select(Building).order_by(Building.id))
    return result.scalars().all()


async def create_building(db: AsyncSession, data: BuildingCreate) -> Building:
    slug = await ensure_building_slug_free(db, data.name)
    building = Building(
        name=data.name.strip(),
        slug=slug,
        address=data.address,
        description=data.description,
    )
    db.add(building)
    await commit_unique(db, f'Building with name "{data.name.strip()}" already exists')
    await db.refresh(building)
    logger.info("Created building id=%s slug=%s", building.id, building.slug)
    return building


async def update_building(db: AsyncSession, building_id: int, data: BuildingUpdate) -> Building:
    building = await get_building(db, building_id)
    if not building:
        raise NotFoundError(f"Building id={building_id} not found")
    changes = data.model_dump(exclude_unset=True)
    if changes.get("name") is not None:
        changes["slug"] = await ensure_building_slug_free(db, changes["name"], exclude_id=building_id)
        changes["name"] = changes["name"].strip()
    else:
        changes.pop("name", None)
    for k, v in changes.items():
        setattr(building, k, v)
    await commit_unique(db, f'Building with name "{building.name}" already exists')
    await db.refresh(building)
    return building


async def delete_building(db: AsyncSession, building_id: int) -> DeletionSummary:
    return await cascade.delete_building(db, building_id)
