from sqlalchemy.orm import declarative_base

Base = declarative_base()

# Импорт моделей — чтобы таблицы создавались автоматически
from campus_monitor.db.models import (  # noqa: E402,F401
    building,
    floor,
    map,
    sensor,
    plant,
    measurement,
    watering_schedule,
)
