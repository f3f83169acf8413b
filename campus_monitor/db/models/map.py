from sqlalchemy import Column, Integer, String, Text
from campus_monitor.db.base import Base


class Map(Base):
    __tablename__ = "maps"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(255), nullable=False)
    image = Column(Text, nullable=True, comment="Изображение плана этажа в base64")
    # building_id и floor_id независимо nullable (денормализация)
    building_id = Column(Integer, nullable=True, index=True)
    floor_id = Column(Integer, nullable=True, index=True)
