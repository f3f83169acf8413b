from datetime import datetime
from typing import Optional
from pydantic import AliasChoices, BaseModel, Field, field_validator


def not_blank(v: Optional[str]) -> Optional[str]:
    """Обрезает пробелы по краям; пустое после обрезки имя недопустимо."""
    if v is None:
        return v
    if not v.strip():
        raise ValueError("Name cannot be empty or whitespace")
    return v.strip()


class BuildingBase(BaseModel):
    name: str = Field(..., min_length=1, description="Название здания (уникально по slug)")
    address: Optional[str] = Field(None, description="Адрес здания")
    description: Optional[str] = Field(None, description="Описание здания")

    @field_validator("name")
    @classmethod
    def name_not_blank(cls, v):
        return not_blank(v)


class BuildingCreate(BuildingBase):
    pass


class BuildingUpdate(BaseModel):
    name: Optional[str] = Field(None, min_length=1)
    address: Optional[str] = None
    description: Optional[str] = None

    @field_validator("name")
    @classmethod
    def name_not_blank(cls, v):
        return not_blank(v)


class BuildingOut(BuildingBase):
    id: int
    slug: str
    created_at: Optional[datetime] = None

    model_config = {"from_attributes": True}


class FloorBase(BaseModel):
    name: str = Field(..., min_length=1, description="Название этажа")
    building_id: int = Field(..., description="ID здания")
    level: int = Field(..., description="Номер этажа (уникален в пределах здания)")
    description: Optional[str] = Field(None, description="Описание этажа")

    @field_validator("name")
    @classmethod
    def name_not_blank(cls, v):
        return not_blank(v)


class FloorCreate(FloorBase):
    pass


class FloorUpdate(BaseModel):
    name: Optional[str] = Field(None, min_length=1)
    building_id: Optional[int] = None
    level: Optional[int] = None
    description: Optional[str] = None

    @field_validator("name")
    @classmethod
    def name_not_blank(cls, v):
        return not_blank(v)


class FloorOut(FloorBase):
    id: int
    created_at: Optional[datetime] = None

    model_config = {"from_attributes": True}


class MapCreate(BaseModel):
    name: str = Field(..., min_length=1, description="Название карты")
    image: Optional[str] = Field(
        None,
        validation_alias=AliasChoices("image", "image_base64"),
        description="Изображение плана в base64 (без префикса data:)",
    )
    building_id: Optional[int] = Field(None, description="ID здания")
    floor_id: Optional[int] = Field(None, description="ID этажа")

    @field_validator("name")
    @classmethod
    def name_not_blank(cls, v):
        return not_blank(v)


class MapOut(BaseModel):
    id: int
    name: str
    building_id: Optional[int] = None
    floor_id: Optional[int] = None
    image_url: Optional[str] = Field(None, description="data:-URL изображения для отображения")
