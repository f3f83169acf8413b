from datetime import datetime
from typing import Literal, Optional
from pydantic import BaseModel, Field, field_validator

from campus_monitor.schemas.location import not_blank

SensorStatus = Literal["active", "inactive", "maintenance"]

class SensorBase(BaseModel):
    name: str = Field(..., min_length=1, description="Имя датчика (глобально уникально)")
    type: str = Field(..., min_length=1, description="Тип: moisture, temperature, humidity, light …")
    unit: Optional[str] = Field(None, description="Единица измерения; по умолчанию выводится из типа")
    status: SensorStatus = Field("active", description="active | inactive | maintenance")
    serial_number: Optional[str] = None
    model: Optional[str] = None
    manufacturer: Optional[str] = None
    installed_at: Optional[datetime] = None
    last_maintenance: Optional[datetime] = None

    @field_validator("name")
    @classmethod
    def name_not_blank(cls, v):
        return not_blank(v)

class SensorCreate(SensorBase):
    building_id: Optional[int] = Field(None, description="ID здания (прямое размещение)")
    floor_id: Optional[int] = Field(None, description="ID этажа (прямое размещение)")
    room_id: Optional[str] = Field(None, description="Комната, свободный текст")
    map_id: Optional[int] = Field(None, description="ID карты (размещение на плане)")
    x_percent: Optional[float] = Field(None, ge=0, le=100, description="Координата в % от размера карты")
    y_percent: Optional[float] = Field(None, ge=0, le=100, description="Координата в % от размера карты")

class SensorUpdate(BaseModel):
    name: Optional[str] = Field(None, min_length=1)
    type: Optional[str] = Field(None, min_length=1)
    unit: Optional[str] = None
    status: Optional[SensorStatus] = None
    serial_number: Optional[str] = None
    model: Optional[str] = None
    manufacturer: Optional[str] = None
    installed_at: Optional[datetime] = None
    last_maintenance: Optional[datetime] = None
    building_id: Optional[int] = None
    floor_id: Optional[int] = None
    room_id: Optional[str] = None
    map_id: Optional[int] = None
    x_percent: Optional[float] = Field(None, ge=0, le=100, description="Координата в % от размера карты")
    y_percent: Optional[float] = Field(None, ge=0, le=100, description="Координата в % от размера карты")

    @field_validator("name")
    @classmethod
    def name_not_blank(cls, v):
        return not_blank(v)

class SensorOut(SensorBase):
    id: int
    building_id: Optional[int] = None
    floor_id: Optional[int] = None
    room_id: Optional[str] = None
    map_id: Optional[int] = None
    x_percent: Optional[float] = None
    y_percent: Optional[float] = None
    x_coord: Optional[float] = Field(None, description="Устаревшая пиксельная координата (только чтение)")
    y_coord: Optional[float] = Field(None, description="Устаревшая пиксельная координата (только чтение)")
    location_x: Optional[float] = Field(None, description="x_percent, либо x_coord для старых записей")
    location_y: Optional[float] = Field(None, description="y_percent, либо y_coord для старых записей")
    location: str = Field(..., description="Здание › Этаж › Комната")
    resolved_building_id: Optional[int] = None
    resolved_floor_id: Optional[int] = None

    model_config = {"from_attributes": True}
