from sqlalchemy import Column, Integer, String, Text, DateTime
from campus_monitor.db.base import Base


class Plant(Base):
    __tablename__ = "plants"

    id = Column(Integer, primary_key=True, index=True)
    species = Column(String(255), nullable=False)
    sensor_id = Column(Integer, nullable=True, index=True, comment="Датчик влажности, к которому привязано растение")
    watering_threshold = Column(Integer, nullable=False, default=30, comment="Порог влажности, %")
    last_watered = Column(DateTime(timezone=True), nullable=True)
    location_description = Column(String(255), nullable=True)
    notes = Column(Text, nullable=True)
