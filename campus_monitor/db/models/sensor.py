from sqlalchemy import Column, Integer, String, Float, DateTime
from campus_monitor.db.base import Base


class Sensor(Base):
    __tablename__ = "sensors"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(255), unique=True, nullable=False)
    type = Column(String(64), nullable=False, comment="moisture, temperature, humidity, light …")
    unit = Column(String(32), nullable=True)
    status = Column(String(32), nullable=False, default="active")
    serial_number = Column(String(255), nullable=True)
    model = Column(String(255), nullable=True)
    manufacturer = Column(String(255), nullable=True)
    installed_at = Column(DateTime(timezone=True), nullable=True)
    last_maintenance = Column(DateTime(timezone=True), nullable=True)

    # Прямое размещение; при размещении на карте копируется с карты
    building_id = Column(Integer, nullable=True, index=True)
    floor_id = Column(Integer, nullable=True, index=True)
    room_id = Column(String(255), nullable=True)

    # Размещение на карте: проценты от ширины/высоты изображения
    map_id = Column(Integer, nullable=True, index=True)
    x_percent = Column(Float, nullable=True)
    y_percent = Column(Float, nullable=True)

    # Устаревшие пиксельные координаты, только чтение
    x_coord = Column(Float, nullable=True)
    y_coord = Column(Float, nullable=True)
