import logging
import re

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from campus_monitor.db.models.building import Building
from campus_monitor.db.models.floor import Floor
from campus_monitor.db.models.sensor import Sensor
from campus_monitor.exceptions import ConflictError

logger = logging.getLogger(__name__)

_WHITESPACE = re.compile(r"\s+")


def slugify(name: str) -> str:
    """
    Slug здания: обрезка пробелов по краям, нижний регистр,
    каждая серия пробельных символов заменяется на '-'.
    " Lab  A " -> "lab-a"
    """
    return _WHITESPACE.sub("-", name.strip().lower())


async def ensure_building_slug_free(db: AsyncSession, name: str, exclude_id: int | None = None) -> str:
    slug = slugify(name)
    stmt = select(Building.id).where(Building.slug == slug)
    if exclude_id is not None:
        stmt = stmt.where(Building.id != exclude_id)
    if (await db.execute(stmt)).first() is not None:
        logger.warning("Building slug '%s' is taken", slug)
        raise ConflictError(f'Building with name "{name.strip()}" already exists')
    return slug


async def ensure_floor_level_free(
    db: AsyncSession,
    building_id: int,
    level: int,
    exclude_id: int | None = None,
) -> None:
    stmt = select(Floor.id).where(Floor.building_id == building_id, Floor.level == level)
    if exclude_id is not None:
        stmt = stmt.where(Floor.id != exclude_id)
    if (await db.execute(stmt)).first() is not None:
        logger.warning("Floor level %s in building %s is taken", level, building_id)
        raise ConflictError(f"Floor with level {level} already exists in this building")


async def ensure_sensor_name_free(db: AsyncSession, name: str, exclude_id: int | None = None) -> None:
    stmt = select(Sensor.id).where(Sensor.name == name)
    if exclude_id is not None:
        stmt = stmt.where(Sensor.id != exclude_id)
    if (await db.execute(stmt)).first() is not None:
        logger.warning("Sensor name '%s' is taken", name)
        raise ConflictError(f'Sensor with name "{name}" already exists')


async def commit_unique(db: AsyncSession, conflict_message: str) -> None:
    """
    Коммит с переводом нарушения уникального индекса в ConflictError.
    Проверки выше отсекают почти всё; сюда попадают только гонки параллельных запросов.
    """
    try:
        await db.commit()
    except IntegrityError as e:
        await db.rollback()
        if "unique" in str(e).lower():
            raise ConflictError(conflict_message) from e
        raise
