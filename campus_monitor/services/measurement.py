from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from campus_monitor.db.models.measurement import Measurement
from campus_monitor.exceptions import ValidationError
from campus_monitor.schemas.cascade import DeletionSummary
from campus_monitor.schemas.plant import MeasurementCreate
from campus_monitor.services import cascade
from campus_monitor.services.sensor import get_sensor


def order_clause(sort: str, order_fields: dict, default: str):
    """
    "-timestamp" -> timestamp DESC, "value" / "+value" -> ASC.
    Колонка берётся только из белого списка order_fields.
    """
    sort = sort or default
    descending = sort.startswith("-")
    name = sort.lstrip("+-") or default.lstrip("+-")
    column = order_fields.get(name)
    if column is None:
        raise ValidationError(
            f"Cannot sort by '{name}', allowed: {', '.join(sorted(order_fields))}"
        )
    return column.desc() if descending else column.asc()


ORDER_FIELDS = {
    "id": Measurement.id,
    "timestamp": Measurement.timestamp,
    "value": Measurement.value,
    "sensor_id": Measurement.sensor_id,
}


async def list_measurements(
    db: AsyncSession,
    sort: str = "-timestamp",
    limit: int = 100,
    sensor_id: int | None = None,
) -> list[Measurement]:
    order_col = order_clause(sort, ORDER_FIELDS, "-timestamp")
    stmt = select(Measurement)
    if sensor_id is not None:
        stmt = stmt.where(Measurement.sensor_id == sensor_id)
    # id: вторичный ключ сортировки для измерений с одинаковым временем
    tiebreak = Measurement.id.desc() if (sort or "-timestamp").startswith("-") else Measurement.id.asc()
    result = await db.execute(stmt.order_by(order_col, tiebreak).limit(limit))
    return result.scalars().all()


async def latest_measurement(db: AsyncSession, sensor_id: int) -> Measurement | None:
    result = await db.execute(
        select(Measurement)
        .where(Measurement.sensor_id == sensor_id)
        .order_by(Measurement.timestamp.desc(), Measurement.id.desc())
        .limit(1)
    )
    return result.scalars().first()


async def create_measurement(db: AsyncSession, data: MeasurementCreate) -> Measurement:
    # Измерение без живого датчика сразу стало бы «сиротой»
    if not await get_sensor(db, data.sensor_id):
        raise ValidationError(f"Sensor id={data.sensor_id} does not exist")
    fields = data.model_dump()
    if fields["timestamp"] is None:
        del fields["timestamp"]
    measurement = Measurement(**fields)
    db.add(measurement)
    await db.commit()
    await db.refresh(measurement)
    return measurement


async def delete_measurement(db: AsyncSession, measurement_id: int) -> DeletionSummary:
    return await cascade.delete_measurement(db, measurement_id)
