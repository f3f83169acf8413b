import logging

from fastapi import APIRouter, Depends
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from campus_monitor.api.deps import get_db_session
from campus_monitor.core.config import settings

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get(
    "/",
    summary="Проверка состояния",
    description="db_ok=false, если база недоступна; сам эндпоинт при этом отвечает 200.",
)
async def health_check(db: AsyncSession = Depends(get_db_session)):
    try:
        db_ok = bool((await db.execute(text("SELECT 1"))).scalar())
    except SQLAlchemyError:
        logger.exception("Health check: database is unreachable")
        db_ok = False
    return {"app": settings.APP_NAME, "env": settings.ENV, "db_ok": db_ok}
