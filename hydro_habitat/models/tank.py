# hydro_habitat/models/tank.py
import datetime
import enum
import uuid

from sqlalchemy import Column, DateTime, Integer, String, Text, Enum as SAEnum

from hydro_habitat.db.database import Base

class WaterType(str, enum.Enum):
    tap = "tap"
    ro = "ro"
    rodi = "rodi"

def _utcnow() -> datetime.datetime:
    return datetime.datetime.now(datetime.timezone.utc)

def _new_id() -> str:
    return str(uuid.uuid4())

class Tank(Base):
    __tablename__ = "tanks"

    id = Column(String(36), primary_key=True, index=True, default=_new_id)
    name = Column(String, nullable=False)
    room = Column(String, nullable=True)
    rack_location = Column(String, nullable=True)
    volume_liters = Column(Integer, nullable=False)
    inventory_number = Column(String, nullable=True)
    water = Column(SAEnum(WaterType), nullable=False, default=WaterType.tap)
    notes = Column(Text, nullable=True)

    created_at = Column(DateTime(timezone=True), nullable=False, default=_utcnow)
    updated_at = Column(DateTime(timezone=True), nullable=False, default=_utcnow, onupdate=_utcnow)
