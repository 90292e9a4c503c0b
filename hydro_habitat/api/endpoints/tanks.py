from fastapi import APIRouter, Depends, HTTPException, Response, status
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session
from typing import List
import logging
import uuid

from hydro_habitat.db.database import get_db
from hydro_habitat.crud import crud_tank
from hydro_habitat.schemas import tank as tank_schema

logger = logging.getLogger(__name__)

router = APIRouter()

def _parse_tank_id(tank_id: str) -> str:
    """Tank ids are UUIDs; anything else is a client error, not a miss."""
    try:
        return str(uuid.UUID(tank_id))
    except ValueError:
        raise HTTPException(status_code=400, detail="Invalid UUID format")

def _database_failure(db: Session, exc: SQLAlchemyError, detail: str) -> HTTPException:
    db.rollback()
    logger.error(f"{detail}: {exc}")
    return HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=detail)


@router.post("/tanks", response_model=tank_schema.Tank, status_code=status.HTTP_201_CREATED)
def create_tank(
    tank: tank_schema.TankCreate,
    db: Session = Depends(get_db),
):
    """
    Adds a new tank to the inventory.
    """
    try:
        db_tank = crud_tank.create_tank(db=db, tank_data=tank)
    except SQLAlchemyError as e:
        raise _database_failure(db, e, "Failed to create tank")
    logger.info(f"Tank created: {db_tank.id} ({db_tank.name})")
    return db_tank

@router.get("/tanks", response_model=List[tank_schema.Tank])
def read_tanks(db: Session = Depends(get_db)):
    """
    Lists every tank, newest first.
    """
    try:
        return crud_tank.get_tanks(db)
    except SQLAlchemyError as e:
        raise _database_failure(db, e, "Failed to retrieve tanks")

@router.get("/tanks/{tank_id}", response_model=tank_schema.Tank)
def read_tank(
    tank_id: str,
    db: Session = Depends(get_db),
):
    tank_id = _parse_tank_id(tank_id)
    db_tank = crud_tank.get_tank(db, tank_id=tank_id)
    if db_tank is None:
        raise HTTPException(status_code=404, detail="Tank not found")
    return db_tank

@router.put("/tanks/{tank_id}", response_model=tank_schema.Tank)
def update_tank(
    tank_id: str,
    tank_in: tank_schema.TankUpdate,
    db: Session = Depends(get_db),
):
    """
    Replaces the editable fields of an existing tank.
    """
    tank_id = _parse_tank_id(tank_id)
    db_tank = crud_tank.get_tank(db, tank_id=tank_id)
    if db_tank is None:
        raise HTTPException(status_code=404, detail="Tank not found")

    try:
        tank = crud_tank.update_tank(db=db, db_tank=db_tank, tank_in=tank_in)
    except SQLAlchemyError as e:
        raise _database_failure(db, e, "Failed to update tank")
    logger.info(f"Tank updated: {tank.id}")
    return tank

@router.delete("/tanks/{tank_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_tank(
    tank_id: str,
    db: Session = Depends(get_db),
):
    """
    Deletes a tank by its ID.
    """
    tank_id = _parse_tank_id(tank_id)
    try:
        db_tank = crud_tank.delete_tank(db, tank_id=tank_id)
    except SQLAlchemyError as e:
        raise _database_failure(db, e, "Failed to delete tank")
    if db_tank is None:
        raise HTTPException(status_code=404, detail="Tank not found")
    logger.info(f"Tank deleted: {tank_id}")
    return Response(status_code=status.HTTP_204_NO_CONTENT)
