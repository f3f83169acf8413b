from typing import List

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.ext.asyncio import AsyncSession

from campus_monitor.api.deps import get_db_session
from campus_monitor.schemas.cascade import DeletionSummary
from campus_monitor.schemas.location import MapCreate, MapOut
from campus_monitor.services import map as map_service

router = APIRouter(prefix="/maps", tags=["Map"])


@router.get(
    "",
    response_model=List[MapOut],
    summary="Получить список карт этажей",
    description="Изображение возвращается как data:-URL в поле image_url.",
)
async def list_maps(
    building_id: int | None = None,
    floor_id: int | None = None,
    db: AsyncSession = Depends(get_db_session),
):
    maps = await map_service.list_maps(db, building_id, floor_id)
    return [map_service.to_map_out(m) for m in maps]


@router.get("/{map_id}", response_model=MapOut, summary="Получить карту по ID")
async def get_map(map_id: int, db: AsyncSession = Depends(get_db_session)):
    floor_map = await map_service.get_map(db, map_id)
    if not floor_map:
        raise HTTPException(status_code=404, detail="Map not found")
    return map_service.to_map_out(floor_map)


@router.post(
    "",
    response_model=MapOut,
    status_code=201,
    summary="Загрузить карту этажа",
    description="Тело: name, image (base64, принимается и image_base64), building_id, floor_id. "
                "Если указан только этаж, здание берётся у этажа.",
)
async def create_map(data: MapCreate, db: AsyncSession = Depends(get_db_session)):
    floor_map = await map_service.create_map(db, data)
    return map_service.to_map_out(floor_map)


@router.delete(
    "/{map_id}",
    response_model=DeletionSummary,
    summary="Удалить карту каскадно",
    description="Удаляет карту и все размещённые на ней датчики с их растениями и измерениями.",
)
async def delete_map(map_id: int, db: AsyncSession = Depends(get_db_session)):
    return await map_service.delete_map(db, map_id)
