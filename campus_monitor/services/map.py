from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from campus_monitor.db.models.map import Map
from campus_monitor.exceptions import ValidationError
from campus_monitor.schemas.cascade import DeletionSummary
from campus_monitor.schemas.location import MapCreate, MapOut
from campus_monitor.services import cascade
from campus_monitor.services.building import get_building
from campus_monitor.services.floor import get_floor

# Сигнатуры начала base64-строки для популярных форматов
_IMAGE_SIGNATURES = (
    ("iVBORw0KGgo", "image/png"),
    ("/9j/", "image/jpeg"),
    ("R0lGOD", "image/gif"),
    ("UklGR", "image/webp"),
    ("PHN2Zy", "image/svg+xml"),
    ("PD94bWw", "image/svg+xml"),
)
DEFAULT_IMAGE_MIME = "image/png"


def image_mime_type(image: str) -> str:
    for prefix, mime in _IMAGE_SIGNATURES:
        if image.startswith(prefix):
            return mime
    return DEFAULT_IMAGE_MIME


def image_url(image: str | None) -> str | None:
    """
    data:-URL для отображения плана. Уже готовый data:-URL возвращается как есть.
    """
    if not image:
        return None
    if image.startswith("data:"):
        return image
    return f"data:{image_mime_type(image)};base64,{image}"


def to_map_out(floor_map: Map) -> MapOut:
    return MapOut(
        id=floor_map.id,
        name=floor_map.name,
        building_id=floor_map.building_id,
        floor_id=floor_map.floor_id,
        image_url=image_url(floor_map.image),
    )


async def get_map(db: AsyncSession, map_id: int) -> Map | None:
    result = await db.execute(select(Map).where(Map.id == map_id))
    return result.scalars().first()


async def list_maps(
    db: AsyncSession,
    building_id: int | None = None,
    floor_id: int | None = None,
) -> list[Map]:
    stmt = select(Map)
    if building_id is not None:
        stmt = stmt.where(Map.building_id == building_id)
    if floor_id is not None:
        stmt = stmt.where(Map.floor_id == floor_id)
    result = await db.execute(stmt.order_by(Map.id))
    return result.scalars().all()


async def create_map(db: AsyncSession, data: MapCreate) -> Map:
    building_id = data.building_id
    if data.floor_id is not None:
        floor = await get_floor(db, data.floor_id)
        if not floor:
            raise ValidationError(f"Floor id={data.floor_id} does not exist")
        if building_id is None:
            building_id = floor.building_id
        elif building_id != floor.building_id:
            raise ValidationError(
                f"Floor id={data.floor_id} does not belong to building id={building_id}"
            )
    if building_id is not None and not await get_building(db, building_id):
        raise ValidationError(f"Building id={building_id} does not exist")

    floor_map = Map(
        name=data.name,
        image=data.image,
        building_id=building_id,
        floor_id=data.floor_id,
    )
    db.add(floor_map)
    await db.commit()
    await db.refresh(floor_map)
    return floor_map


async def delete_map(db: AsyncSession, map_id: int) -> DeletionSummary:
    return await cascade.delete_map(db, map_id)
