from typing import List

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from campus_monitor.api.deps import get_db_session
from campus_monitor.schemas.plant import WateringScheduleCreate, WateringScheduleOut
from campus_monitor.services import watering_schedule as watering_service

router = APIRouter(prefix="/watering-schedules", tags=["WateringSchedule"])


@router.get(
    "",
    response_model=List[WateringScheduleOut],
    summary="Журнал полива",
)
async def list_watering_schedules(
    sort: str = Query("-created_date", description="Поле сортировки: id, created_date, plant_id, duration_minutes"),
    limit: int = Query(100, ge=1, le=10000),
    plant_id: int | None = Query(None, description="Фильтр по растению"),
    db: AsyncSession = Depends(get_db_session),
):
    return await watering_service.list_watering_schedules(db, sort, limit, plant_id)


@router.post(
    "",
    response_model=WateringScheduleOut,
    status_code=201,
    summary="Записать полив",
    description="Добавляет запись в журнал и обновляет last_watered растения.",
)
async def create_watering_schedule(
    data: WateringScheduleCreate,
    db: AsyncSession = Depends(get_db_session),
):
    return await watering_service.create_watering_schedule(db, data)
