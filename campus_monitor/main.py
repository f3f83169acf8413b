from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from campus_monitor.api.errors import register_exception_handlers
from campus_monitor.core.config import settings
from campus_monitor.core.logging_config import setup_logging
from campus_monitor.db.base import Base
from campus_monitor.db.session import async_engine
from campus_monitor.tasks.scheduler import start_scheduler, stop_scheduler

from campus_monitor.api.routers.health import router as health_router
from campus_monitor.api.routers.building import router as building_router
from campus_monitor.api.routers.floor import router as floor_router
from campus_monitor.api.routers.map import router as map_router
from campus_monitor.api.routers.sensor import router as sensor_router
from campus_monitor.api.routers.plant import router as plant_router
from campus_monitor.api.routers.measurement import router as measurement_router
from campus_monitor.api.routers.watering_schedule import router as watering_schedule_router
from campus_monitor.api.routers.maintenance import router as maintenance_router


@asynccontextmanager
async def lifespan(app: FastAPI):
    setup_logging()
    async with async_engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    start_scheduler()
    yield
    stop_scheduler()
    await async_engine.dispose()


app = FastAPI(
    title=settings.APP_NAME,
    version="1.0.0",
    debug=settings.DEBUG,
    lifespan=lifespan,
)

# CORS для фронтенда дашборда
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

register_exception_handlers(app)

# Подключаем роутеры
app.include_router(health_router, tags=["health"])
app.include_router(building_router, prefix=settings.API_PREFIX)
app.include_router(floor_router, prefix=settings.API_PREFIX)
app.include_router(map_router, prefix=settings.API_PREFIX)
app.include_router(sensor_router, prefix=settings.API_PREFIX)
app.include_router(plant_router, prefix=settings.API_PREFIX)
app.include_router(measurement_router, prefix=settings.API_PREFIX)
app.include_router(watering_schedule_router, prefix=settings.API_PREFIX)
app.include_router(maintenance_router, prefix=settings.API_PREFIX)
