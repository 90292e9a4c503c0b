from sqlalchemy.orm import Session
from hydro_habitat.models import tank
from hydro_habitat.schemas import tank as tank_schema
from typing import List
import datetime

def get_tanks(db: Session) -> List[tank.Tank]:
    """
    Returns every tank, newest first.
    """
    return db.query(tank.Tank).order_by(tank.Tank.created_at.desc()).all()

def get_tank(db: Session, tank_id: str) -> tank.Tank | None:
    return db.query(tank.Tank).filter(tank.Tank.id == tank_id).first()

def create_tank(db: Session, tank_data: tank_schema.TankCreate) -> tank.Tank:
    db_tank = tank.Tank(**tank_data.model_dump())
    db.add(db_tank)
    db.commit()
    db.refresh(db_tank)
    return db_tank

def update_tank(
    db: Session,
    db_tank: tank.Tank,
    tank_in: tank_schema.TankUpdate
) -> tank.Tank:
    """Replaces every editable field of a tank; id and created_at are kept."""
    # onupdate only fires when a column actually changed
    db_tank.updated_at = datetime.datetime.now(datetime.timezone.utc)
    for field, value in tank_in.model_dump().items():
        setattr(db_tank, field, value)

    db.add(db_tank)
    db.commit()
    db.refresh(db_tank)
    return db_tank

def delete_tank(db: Session, tank_id: str) -> tank.Tank | None:
    """Deletes a tank by its ID; returns None if it did not exist."""
    db_tank = db.query(tank.Tank).filter(tank.Tank.id == tank_id).first()
    if db_tank:
        db.delete(db_tank)
        db.commit()
    return db_tank
