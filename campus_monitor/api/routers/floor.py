from typing import List

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.ext.asyncio import AsyncSession

from campus_monitor.api.deps import get_db_session
from campus_monitor.schemas.cascade import DeletionSummary
from campus_monitor.schemas.location import FloorCreate, FloorOut, FloorUpdate
from campus_monitor.services import floor as floor_service

router = APIRouter(prefix="/floors", tags=["Floor"])


@router.get(
    "",
    response_model=List[FloorOut],
    summary="Получить список этажей",
    description="Можно фильтровать по building_id.",
)
async def list_floors(
    building_id: int | None = None,
    db: AsyncSession = Depends(get_db_session),
):
    return await floor_service.list_floors(db, building_id)


@router.get("/{floor_id}", response_model=FloorOut, summary="Получить этаж по ID")
async def get_floor(floor_id: int, db: AsyncSession = Depends(get_db_session)):
    floor = await floor_service.get_floor(db, floor_id)
    if not floor:
        raise HTTPException(status_code=404, detail="Floor not found")
    return floor


@router.post(
    "",
    response_model=FloorOut,
    status_code=201,
    summary="Создать этаж",
    responses={400: {"description": "Floor with this level already exists in this building"}},
)
async def create_floor(data: FloorCreate, db: AsyncSession = Depends(get_db_session)):
    return await floor_service.create_floor(db, data)


@router.put("/{floor_id}", response_model=FloorOut, summary="Обновить этаж")
async def update_floor(
    floor_id: int,
    data: FloorUpdate,
    db: AsyncSession = Depends(get_db_session),
):
    return await floor_service.update_floor(db, floor_id, data)


@router.delete(
    "/{floor_id}",
    response_model=DeletionSummary,
    summary="Удалить этаж каскадно",
)
async def delete_floor(floor_id: int, db: AsyncSession = Depends(get_db_session)):
    return await floor_service.delete_floor(db, floor_id)
