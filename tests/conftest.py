import os
import tempfile

# Настройки читаются при импорте приложения, поэтому окружение задаётся до него
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite://")
os.environ.setdefault("LOG_DIR", tempfile.mkdtemp(prefix="campus-logs-"))
os.environ["ORPHAN_SWEEP_ENABLED"] = "false"

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import NullPool

from campus_monitor.api.deps import get_db_session
from campus_monitor.db.base import Base
from campus_monitor.main import app

# Маленькая PNG-картинка (1x1) в base64
PNG_BASE64 = (
    "iVBORw0KGgoAAAANSUhEUgAAAAEAAAABCAYAAAAfFcSJAAAADUlEQVR42mNkYPhfDwAChwGA60e6kgAAAABJRU5ErkJggg=="
)


@pytest.fixture
async def engine(tmp_path):
    """Отдельная файловая SQLite-база на каждый тест."""
    engine = create_async_engine(f"sqlite+aiosqlite:///{tmp_path / 'campus.db'}", poolclass=NullPool)
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest.fixture
def session_factory(engine):
    return async_sessionmaker(bind=engine, class_=AsyncSession, expire_on_commit=False)


@pytest.fixture
async def session(session_factory):
    async with session_factory() as s:
        yield s


@pytest.fixture
async def client(session_factory):
    async def _get_test_session():
        async with session_factory() as s:
            yield s

    app.dependency_overrides[get_db_session] = _get_test_session
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as c:
        yield c
    app.dependency_overrides.clear()


class CampusApi:
    """Короткие обёртки над POST-запросами для подготовки данных в тестах."""

    def __init__(self, client: AsyncClient):
        self.client = client

    async def _post(self, path: str, payload: dict) -> dict:
        response = await self.client.post(f"/api{path}", json=payload)
        assert response.status_code == 201, response.text
        return response.json()

    async def building(self, name: str = "Lab A", **extra) -> dict:
        return await self._post("/buildings", {"name": name, **extra})

    async def floor(self, building_id: int, level: int = 1, name: str = "Ground", **extra) -> dict:
        return await self._post("/floors", {"name": name, "building_id": building_id, "level": level, **extra})

    async def map(self, floor_id: int | None = None, name: str = "Plan", **extra) -> dict:
        payload = {"name": name, "image": PNG_BASE64, **extra}
        if floor_id is not None:
            payload["floor_id"] = floor_id
        return await self._post("/maps", payload)

    async def sensor(self, name: str, type: str = "moisture", **extra) -> dict:
        return await self._post("/sensors", {"name": name, "type": type, **extra})

    async def plant(self, sensor_id: int | None, species: str = "Ficus", **extra) -> dict:
        return await self._post("/plants", {"species": species, "sensor_id": sensor_id, **extra})

    async def measurement(self, sensor_id: int, value: float, **extra) -> dict:
        return await self._post("/measurements", {"sensor_id": sensor_id, "value": value, **extra})

    async def watering(self, plant_id: int, **extra) -> dict:
        return await self._post("/watering-schedules", {"plant_id": plant_id, **extra})


@pytest.fixture
def api(client):
    return CampusApi(client)


@pytest.fixture
async def campus(api):
    """
    Здание «Lab A» с этажом, картой, датчиком на карте, растением,
    двумя измерениями и одной записью полива.
    """
    building = await api.building("Lab A")
    floor = await api.floor(building["id"], level=1, name="Ground")
    floor_map = await api.map(floor["id"])
    sensor = await api.sensor("moist-1", map_id=floor_map["id"], x_percent=25, y_percent=75)
    plant = await api.plant(sensor["id"])
    await api.measurement(sensor["id"], 40)
    await api.measurement(sensor["id"], 20)
    await api.watering(plant["id"])
    return {
        "building": building,
        "floor": floor,
        "map": floor_map,
        "sensor": sensor,
        "plant": plant,
    }
