from sqlalchemy import Column, Integer, String, Text, DateTime, UniqueConstraint, func
from campus_monitor.db.base import Base


class Floor(Base):
    __tablename__ = "floors"
    __table_args__ = (
        UniqueConstraint("building_id", "level", name="uq_floors_building_level"),
    )

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(255), nullable=False)
    building_id = Column(Integer, nullable=False, index=True)
    level = Column(Integer, nullable=False, comment="Номер этажа, уникален в пределах здания")
    description = Column(Text, nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
