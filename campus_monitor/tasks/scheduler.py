import logging
from apscheduler.schedulers.asyncio import AsyncIOScheduler
from apscheduler.triggers.cron import CronTrigger

from campus_monitor.core.config import settings
from campus_monitor.db.session import AsyncSessionLocal
from campus_monitor.services.cascade import cleanup_orphaned_data

logger = logging.getLogger(__name__)

ORPHAN_SWEEP_JOB_ID = "cleanup_orphaned_data"

scheduler = AsyncIOScheduler()


async def _run_orphan_sweep_job() -> None:
    """
    Обёртка для плановой очистки «осиротевших» записей.
    """
    logger.info("Job '%s' started", ORPHAN_SWEEP_JOB_ID)
    async with AsyncSessionLocal() as session:
        summary = await cleanup_orphaned_data(session)
    logger.info("Job '%s' finished: %s", ORPHAN_SWEEP_JOB_ID, summary.model_dump())


def start_scheduler() -> bool:
    """
    Запускает APScheduler с ежедневной очисткой в ORPHAN_SWEEP_HOUR:00,
    если она включена (ORPHAN_SWEEP_ENABLED). Возвращает True, если планировщик запущен.
    """
    if not settings.ORPHAN_SWEEP_ENABLED:
        logger.info("Orphan sweep job disabled")
        return False

    scheduler.add_job(
        _run_orphan_sweep_job,
        trigger=CronTrigger(hour=settings.ORPHAN_SWEEP_HOUR, minute=0),
        id=ORPHAN_SWEEP_JOB_ID,
        replace_existing=True,
        coalesce=True,
        max_instances=1
    )
    if not scheduler.running:
        scheduler.start()
    logger.info("Scheduler started: job '%s' scheduled at %02d:00 daily", ORPHAN_SWEEP_JOB_ID, settings.ORPHAN_SWEEP_HOUR)
    return True


def stop_scheduler() -> None:
    if scheduler.running:
        scheduler.shutdown(wait=False)
