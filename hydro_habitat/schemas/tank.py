from pydantic import BaseModel, Field, field_validator
from typing import Optional
import datetime
import enum

from hydro_habitat.models.tank import WaterType

# --- Transport schemas (API bodies) ---

class TankBase(BaseModel):
    name: str = Field(..., min_length=1)
    room: Optional[str] = None
    rack_location: Optional[str] = None
    volume_liters: int = Field(..., gt=0)
    inventory_number: Optional[str] = None
    water: WaterType = WaterType.tap
    notes: Optional[str] = None

class TankCreate(TankBase):
    pass

class TankUpdate(TankBase):
    """PUT replaces every editable field, so nothing here is optional beyond TankBase."""
    pass

class Tank(TankBase):
    id: str
    created_at: Optional[datetime.datetime] = None
    updated_at: Optional[datetime.datetime] = None

    class Config:
        from_attributes = True

# --- Form schema (what the add/edit form holds before submit) ---

class TankFormValues(BaseModel):
    """
    Raw add/edit form contents. Every field is text, exactly as typed;
    hydro_habitat.catalog.validation turns it into a TankCreate/TankUpdate.
    """
    name: str = ""
    volume_liters: str = ""
    water: str = WaterType.tap.value
    room: str = ""
    rack_location: str = ""
    inventory_number: str = ""
    notes: str = ""

    class Config:
        extra = 'ignore'

    @field_validator("*", mode="before")
    @classmethod
    def as_text(cls, v):
        # raw forms may carry None for an untouched field or a number for volume
        if v is None:
            return ""
        if isinstance(v, enum.Enum):
            return str(v.value)
        return v if isinstance(v, str) else str(v)

    @classmethod
    def from_tank(cls, tank: Tank) -> "TankFormValues":
        """Pre-fill the form from a stored tank (missing optionals become empty text)."""
        return cls(
            name=tank.name,
            volume_liters=str(tank.volume_liters),
            water=WaterType(tank.water).value,
            room=tank.room or "",
            rack_location=tank.rack_location or "",
            inventory_number=tank.inventory_number or "",
            notes=tank.notes or "",
        )
