from datetime import datetime
from typing import Literal, Optional
from pydantic import BaseModel, Field

PlantStatus = Literal["needs_water", "healthy", "offline"]


class PlantBase(BaseModel):
    species: str = Field(..., min_length=1, description="Вид растения")
    sensor_id: Optional[int] = Field(None, description="Датчик влажности растения")
    watering_threshold: int = Field(30, ge=0, le=100, description="Порог влажности для полива, %")
    last_watered: Optional[datetime] = None
    location_description: Optional[str] = None
    notes: Optional[str] = None


class PlantCreate(PlantBase):
    pass


class PlantUpdate(BaseModel):
    species: Optional[str] = Field(None, min_length=1)
    sensor_id: Optional[int] = None
    watering_threshold: Optional[int] = Field(None, ge=0, le=100)
    last_watered: Optional[datetime] = None
    location_description: Optional[str] = None
    notes: Optional[str] = None


class PlantOut(PlantBase):
    id: int
    status: PlantStatus = Field("offline", description="Вычисляется по последнему измерению датчика")

    model_config = {"from_attributes": True}


class MeasurementCreate(BaseModel):
    sensor_id: int = Field(..., description="ID датчика")
    value: float = Field(..., description="Значение измерения")
    unit: str = Field("%", description="Единица измерения")
    timestamp: Optional[datetime] = Field(None, description="Время измерения; по умолчанию — сейчас")


class MeasurementOut(MeasurementCreate):
    id: int
    timestamp: datetime

    model_config = {"from_attributes": True}


class WateringScheduleCreate(BaseModel):
    plant_id: int = Field(..., description="ID растения")
    trigger_type: Literal["automatic", "manual"] = Field("manual", description="automatic | manual")
    triggered_by: Optional[str] = Field("user", description="Кто или что инициировал полив")
    duration_minutes: int = Field(5, ge=0, description="Длительность полива, мин")
    notes: Optional[str] = None


class WateringScheduleOut(WateringScheduleCreate):
    id: int
    created_date: datetime

    model_config = {"from_attributes": True}
