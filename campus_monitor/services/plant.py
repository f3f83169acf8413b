from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from campus_monitor.db.models.plant import Plant
from campus_monitor.exceptions import ConflictError, NotFoundError, ValidationError
from campus_monitor.schemas.plant import PlantCreate, PlantOut, PlantUpdate
from campus_monitor.services.measurement import latest_measurement
from campus_monitor.services.sensor import get_sensor


async def get_plant(db: AsyncSession, plant_id: int) -> Plant | None:
    result = await db.execute(select(Plant).where(Plant.id == plant_id))
    return result.scalars().first()


async def plant_status(db: AsyncSession, plant: Plant) -> str:
    """
    needs_water — последнее измерение датчика ниже порога,
    healthy — не ниже, offline — измерений нет (или нет датчика).
    """
    if plant.sensor_id is None:
        return "offline"
    measurement = await latest_measurement(db, plant.sensor_id)
    if measurement is None:
        return "offline"
    return "needs_water" if measurement.value < plant.watering_threshold else "healthy"


async def to_plant_out(db: AsyncSession, plant: Plant) -> PlantOut:
    out = PlantOut.model_validate(plant)
    out.status = await plant_status(db, plant)
    return out


async def list_plants(db: AsyncSession) -> list[PlantOut]:
    result = await db.execute(select(Plant).order_by(Plant.id))
    return [await to_plant_out(db, p) for p in result.scalars().all()]


async def _check_sensor(db: AsyncSession, sensor_id: int, exclude_plant_id: int | None = None) -> None:
    if not await get_sensor(db, sensor_id):
        raise ValidationError(f"Sensor id={sensor_id} does not exist")
    # У датчика не больше одного растения
    stmt = select(Plant.id).where(Plant.sensor_id == sensor_id)
    if exclude_plant_id is not None:
        stmt = stmt.where(Plant.id != exclude_plant_id)
    if (await db.execute(stmt)).first() is not None:
        raise ConflictError(f"Plant for sensor id={sensor_id} already exists")


async def create_plant(db: AsyncSession, data: PlantCreate) -> Plant:
    if data.sensor_id is not None:
        await _check_sensor(db, data.sensor_id)
    plant = Plant(**data.model_dump())
    db.add(plant)
    await db.commit()
    await db.refresh(plant)
    return plant


async def update_plant(db: AsyncSession, plant_id: int, data: PlantUpdate) -> Plant:
    plant = await get_plant(db, plant_id)
    if not plant:
        raise NotFoundError(f"Plant id={plant_id} not found")
    changes = data.model_dump(exclude_unset=True)
    for k in ("species", "watering_threshold"):
        if k in changes and changes[k] is None:
            del changes[k]
    if changes.get("sensor_id") is not None and changes["sensor_id"] != plant.sensor_id:
        await _check_sensor(db, changes["sensor_id"], exclude_plant_id=plant_id)
    for k, v in changes.items():
        setattr(plant, k, v)
    await db.commit()
    await db.refresh(plant)
    return plant
