from typing import List

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from campus_monitor.api.deps import get_db_session
from campus_monitor.schemas.cascade import DeletionSummary
from campus_monitor.schemas.sensor import SensorCreate, SensorOut, SensorUpdate
from campus_monitor.services import sensor as sensor_service

router = APIRouter(prefix="/sensors", tags=["Sensor"])


@router.get(
    "",
    response_model=List[SensorOut],
    summary="Получить список датчиков",
    description="Фильтры: map_id (по карте), building_id и floor_id (по вычисленному местоположению, "
                "включая датчики, размещённые только через карту).",
)
async def list_sensors(
    map_id: int | None = None,
    building_id: int | None = None,
    floor_id: int | None = None,
    db: AsyncSession = Depends(get_db_session),
):
    return await sensor_service.list_sensors(db, map_id, building_id, floor_id)


@router.get("/{sensor_id}", response_model=SensorOut, summary="Получить датчик по ID")
async def get_sensor(sensor_id: int, db: AsyncSession = Depends(get_db_session)):
    return await sensor_service.get_sensor_out(db, sensor_id)


@router.post(
    "",
    response_model=SensorOut,
    status_code=201,
    summary="Создать датчик",
    description="Либо прямое размещение (building_id/floor_id/room_id), либо на карте (map_id + x_percent/y_percent). "
                "При размещении на карте здание и этаж копируются с карты; без координат датчик ставится в центр.",
    responses={400: {"description": "Sensor with this name already exists"}},
)
async def create_sensor(data: SensorCreate, db: AsyncSession = Depends(get_db_session)):
    sensor = await sensor_service.create_sensor(db, data)
    return await sensor_service.get_sensor_out(db, sensor.id)


@router.put(
    "/{sensor_id}",
    response_model=SensorOut,
    summary="Обновить датчик",
    description="Смена map_id пересчитывает здание/этаж по новой карте; без новых координат датчик ставится в центр (50/50). "
                "building_id/floor_id вместе с map_id должны совпадать с картой, иначе 400; "
                "для прямого размещения передайте map_id=null.",
)
async def update_sensor(
    sensor_id: int,
    data: SensorUpdate,
    db: AsyncSession = Depends(get_db_session),
):
    sensor = await sensor_service.update_sensor(db, sensor_id, data)
    return await sensor_service.get_sensor_out(db, sensor.id)


@router.delete(
    "/{sensor_id}",
    response_model=DeletionSummary,
    summary="Удалить датчик каскадно",
)
async def delete_sensor(sensor_id: int, db: AsyncSession = Depends(get_db_session)):
    return await sensor_service.delete_sensor(db, sensor_id)
