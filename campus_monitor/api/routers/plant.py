from typing import List

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.ext.asyncio import AsyncSession

from campus_monitor.api.deps import get_db_session
from campus_monitor.schemas.plant import PlantCreate, PlantOut, PlantUpdate
from campus_monitor.services import plant as plant_service

router = APIRouter(prefix="/plants", tags=["Plant"])


@router.get(
    "",
    response_model=List[PlantOut],
    summary="Получить список растений",
    description="status: needs_water / healthy / offline по последнему измерению датчика.",
)
async def list_plants(db: AsyncSession = Depends(get_db_session)):
    return await plant_service.list_plants(db)


@router.get("/{plant_id}", response_model=PlantOut, summary="Получить растение по ID")
async def get_plant(plant_id: int, db: AsyncSession = Depends(get_db_session)):
    plant = await plant_service.get_plant(db, plant_id)
    if not plant:
        raise HTTPException(status_code=404, detail="Plant not found")
    return await plant_service.to_plant_out(db, plant)


@router.post("", response_model=PlantOut, status_code=201, summary="Создать растение")
async def create_plant(data: PlantCreate, db: AsyncSession = Depends(get_db_session)):
    plant = await plant_service.create_plant(db, data)
    return await plant_service.to_plant_out(db, plant)


@router.put("/{plant_id}", response_model=PlantOut, summary="Обновить растение")
async def update_plant(
    plant_id: int,
    data: PlantUpdate,
    db: AsyncSession = Depends(get_db_session),
):
    plant = await plant_service.update_plant(db, plant_id, data)
    return await plant_service.to_plant_out(db, plant)
