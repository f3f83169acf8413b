from pydantic import BaseModel, Field


class DeletionSummary(BaseModel):
    """Сколько строк каждой категории удалено одной операцией."""
    buildings: int = Field(0, description="Удалено зданий")
    floors: int = Field(0, description="Удалено этажей")
    maps: int = Field(0, description="Удалено карт")
    sensors: int = Field(0, description="Удалено датчиков")
    plants: int = Field(0, description="Удалено растений")
    measurements: int = Field(0, description="Удалено измерений")
    watering_schedules: int = Field(0, description="Удалено записей о поливе")

    @property
    def total(self) -> int:
        return sum(self.model_dump().values())


class MergeSummary(BaseModel):
    """Итог слияния дубликатов, накопившихся в старых данных."""
    buildings_merged: int = Field(0, description="Зданий-дубликатов слито в здание с меньшим id")
    floors_merged: int = Field(0, description="Этажей-дубликатов (одно здание, один уровень) слито")
    slugs_updated: int = Field(0, description="Зданий с пересчитанным slug")

    @property
    def total(self) -> int:
        return sum(self.model_dump().values())
