from sqlalchemy import Column, Integer, String, Float, DateTime, func
from campus_monitor.db.base import Base


class Measurement(Base):
    __tablename__ = "measurements"

    id = Column(Integer, primary_key=True, index=True)
    sensor_id = Column(Integer, nullable=False, index=True)
    value = Column(Float, nullable=False)
    unit = Column(String(16), nullable=False, default="%")
    timestamp = Column(DateTime(timezone=True), server_default=func.now(), nullable=False, index=True)
