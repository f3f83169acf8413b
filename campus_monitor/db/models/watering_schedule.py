from sqlalchemy import Column, Integer, String, Text, DateTime, func
from campus_monitor.db.base import Base


class WateringSchedule(Base):
    __tablename__ = "watering_schedules"

    id = Column(Integer, primary_key=True, index=True)
    plant_id = Column(Integer, nullable=False, index=True)
    trigger_type = Column(String(32), nullable=False, default="manual", comment="automatic | manual")
    triggered_by = Column(String(64), nullable=True)
    duration_minutes = Column(Integer, nullable=False, default=5)
    notes = Column(Text, nullable=True)
    created_date = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
