from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from campus_monitor.api.deps import get_db_session
from campus_monitor.schemas.cascade import DeletionSummary, MergeSummary
from campus_monitor.services.cascade import cleanup_orphaned_data
from campus_monitor.services.merge import merge_duplicates

router = APIRouter(tags=["maintenance"])


@router.post(
    "/cleanup-orphaned-data",
    response_model=DeletionSummary,
    summary="Очистить «осиротевшие» записи",
    description="Удаляет карты без этажа, датчики без карты, измерения без датчика и записи полива без растения. "
                "Идемпотентно: повторный вызов ничего не удаляет.",
)
async def cleanup_orphans(db: AsyncSession = Depends(get_db_session)):
    return await cleanup_orphaned_data(db)


@router.post(
    "/merge-duplicates",
    response_model=MergeSummary,
    summary="Слить дубликаты зданий и этажей",
    description="Здания с одинаковым slug(name) и этажи одного уровня в одном здании сливаются в запись "
                "с меньшим id; карты и датчики перевешиваются. Заодно пересчитываются slug. Идемпотентно.",
)
async def merge_duplicate_rows(db: AsyncSession = Depends(get_db_session)):
    return await merge_duplicates(db)
