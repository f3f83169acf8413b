import logging

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from campus_monitor.db.models.watering_schedule import WateringSchedule
from campus_monitor.exceptions import ValidationError
from campus_monitor.schemas.plant import WateringScheduleCreate
from campus_monitor.services.measurement import order_clause
from campus_monitor.services.plant import get_plant

logger = logging.getLogger(__name__)

ORDER_FIELDS = {
    "id": WateringSchedule.id,
    "created_date": WateringSchedule.created_date,
    "plant_id": WateringSchedule.plant_id,
    "duration_minutes": WateringSchedule.duration_minutes,
}


async def list_watering_schedules(
    db: AsyncSession,
    sort: str = "-created_date",
    limit: int = 100,
    plant_id: int | None = None,
) -> list[WateringSchedule]:
    order_col = order_clause(sort, ORDER_FIELDS, "-created_date")
    stmt = select(WateringSchedule)
    if plant_id is not None:
        stmt = stmt.where(WateringSchedule.plant_id == plant_id)
    tiebreak = WateringSchedule.id.desc() if (sort or "-created_date").startswith("-") else WateringSchedule.id.asc()
    result = await db.execute(stmt.order_by(order_col, tiebreak).limit(limit))
    return result.scalars().all()


async def create_watering_schedule(db: AsyncSession, data: WateringScheduleCreate) -> WateringSchedule:
    """
    Запись в журнал полива (только добавление). Дата последнего полива
    растения обновляется в той же транзакции.
    """
    plant = await get_plant(db, data.plant_id)
    if not plant:
        raise ValidationError(f"Plant id={data.plant_id} does not exist")
    schedule = WateringSchedule(**data.model_dump())
    db.add(schedule)
    await db.flush()
    await db.refresh(schedule)
    plant.last_watered = schedule.created_date
    await db.commit()
    await db.refresh(schedule)
    logger.info("Plant id=%s watered (%s, %s min)", plant.id, schedule.trigger_type, schedule.duration_minutes)
    return schedule
