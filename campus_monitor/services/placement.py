"""
Протокол «создать, затем разместить» для датчиков на плане этажа.

idle --begin(draft)--> awaiting_placement --click(...)--> placed --commit(db)--> idle
                         |                                   |
                         +------------cancel()---------------+--> idle

Черновик живёт только в памяти: строка в БД появляется лишь в commit.
"""
import enum
import logging
from typing import Optional

from sqlalchemy.ext.asyncio import AsyncSession

from campus_monitor.db.models.sensor import Sensor
from campus_monitor.exceptions import ValidationError
from campus_monitor.schemas.sensor import SensorCreate
from campus_monitor.services import sensor as sensor_service
from campus_monitor.utils.math_utils import point_to_percent

logger = logging.getLogger(__name__)


class PlacementState(str, enum.Enum):
    IDLE = "idle"
    AWAITING_PLACEMENT = "awaiting_placement"
    PLACED = "placed"


class PlacementSession:
    def __init__(self):
        self.state = PlacementState.IDLE
        self.draft: Optional[SensorCreate] = None

    def begin(self, draft: SensorCreate) -> None:
        """Сохраняет черновик датчика (всё, кроме координат) и ждёт клика по карте."""
        if self.state is not PlacementState.IDLE:
            raise ValidationError(f"Cannot start placement in state '{self.state.value}'")
        if draft.map_id is None:
            raise ValidationError("Placement draft must reference a map")
        self.draft = draft.model_copy(update={"x_percent": None, "y_percent": None})
        self.state = PlacementState.AWAITING_PLACEMENT

    def click(
        self,
        click_x: float,
        click_y: float,
        container_left: float,
        container_top: float,
        container_width: float,
        container_height: float,
    ) -> SensorCreate:
        """Переводит клик в проценты от контейнера и фиксирует координаты черновика."""
        if self.state is not PlacementState.AWAITING_PLACEMENT:
            raise ValidationError(f"No sensor is awaiting placement (state '{self.state.value}')")
        try:
            x, y = point_to_percent(
                (click_x, click_y),
                (container_left, container_top),
                (container_width, container_height),
            )
        except ValueError as e:
            raise ValidationError(str(e)) from e
        self.draft = self.draft.model_copy(update={"x_percent": x, "y_percent": y})
        self.state = PlacementState.PLACED
        return self.draft

    async def commit(self, db: AsyncSession) -> Sensor:
        if self.state is not PlacementState.PLACED:
            raise ValidationError(f"Sensor is not placed yet (state '{self.state.value}')")
        sensor = await sensor_service.create_sensor(db, self.draft)
        logger.info("Placed sensor id=%s at (%.2f, %.2f) on map %s",
                    sensor.id, sensor.x_percent, sensor.y_percent, sensor.map_id)
        self.cancel()
        return sensor

    def cancel(self) -> None:
        self.draft = None
        self.state = PlacementState.IDLE
