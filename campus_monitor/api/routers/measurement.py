from typing import List

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from campus_monitor.api.deps import get_db_session
from campus_monitor.schemas.cascade import DeletionSummary
from campus_monitor.schemas.plant import MeasurementCreate, MeasurementOut
from campus_monitor.services import measurement as measurement_service

router = APIRouter(prefix="/measurements", tags=["Measurement"])


@router.get(
    "",
    response_model=List[MeasurementOut],
    summary="Получить измерения",
)
async def list_measurements(
    sort: str = Query("-timestamp", description="Поле сортировки с префиксом '-' для убывания: id, timestamp, value, sensor_id"),
    limit: int = Query(100, ge=1, le=10000, description="Максимум записей"),
    sensor_id: int | None = Query(None, description="Фильтр по датчику"),
    db: AsyncSession = Depends(get_db_session),
):
    return await measurement_service.list_measurements(db, sort, limit, sensor_id)


@router.post("", response_model=MeasurementOut, status_code=201, summary="Добавить измерение")
async def create_measurement(data: MeasurementCreate, db: AsyncSession = Depends(get_db_session)):
    return await measurement_service.create_measurement(db, data)


@router.delete(
    "/{measurement_id}",
    response_model=DeletionSummary,
    summary="Удалить измерение",
    description="Несуществующее измерение — не ошибка, возвращается нулевая сводка.",
)
async def delete_measurement(measurement_id: int, db: AsyncSession = Depends(get_db_session)):
    return await measurement_service.delete_measurement(db, measurement_id)
