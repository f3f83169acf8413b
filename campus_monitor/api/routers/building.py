from typing import List

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.ext.asyncio import AsyncSession

from campus_monitor.api.deps import get_db_session
from campus_monitor.schemas.cascade import DeletionSummary
from campus_monitor.schemas.location import BuildingCreate, BuildingOut, BuildingUpdate
from campus_monitor.services import building as building_service

router = APIRouter(prefix="/buildings", tags=["Building"])


@router.get(
    "",
    response_model=List[BuildingOut],
    summary="Получить список зданий",
)
async def list_buildings(db: AsyncSession = Depends(get_db_session)):
    return await building_service.list_buildings(db)


@router.get(
    "/{building_id}",
    response_model=BuildingOut,
    summary="Получить здание по ID",
)
async def get_building(building_id: int, db: AsyncSession = Depends(get_db_session)):
    building = await building_service.get_building(db, building_id)
    if not building:
        raise HTTPException(status_code=404, detail="Building not found")
    return building


@router.post(
    "",
    response_model=BuildingOut,
    status_code=201,
    summary="Создать здание",
    description="Создаёт здание. Имя должно быть уникальным с точностью до регистра и пробелов (slug).",
    responses={400: {"description": "Building with this name already exists"}},
)
async def create_building(data: BuildingCreate, db: AsyncSession = Depends(get_db_session)):
    return await building_service.create_building(db, data)


@router.put(
    "/{building_id}",
    response_model=BuildingOut,
    summary="Обновить здание",
    responses={400: {"description": "Building with this name already exists"}},
)
async def update_building(
    building_id: int,
    data: BuildingUpdate,
    db: AsyncSession = Depends(get_db_session),
):
    return await building_service.update_building(db, building_id, data)


@router.delete(
    "/{building_id}",
    response_model=DeletionSummary,
    summary="Удалить здание каскадно",
    description="Удаляет здание вместе с этажами, картами, датчиками, растениями, измерениями и журналом полива. "
                "Удаление несуществующего здания возвращает нулевую сводку.",
)
async def delete_building(building_id: int, db: AsyncSession = Depends(get_db_session)):
    return await building_service.delete_building(db, building_id)
