from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from ..database import get_db
from ..logging_config import get_logger
from .. import models, schemas

router = APIRouter(prefix="/animal-types", tags=["animal-types"])

logger = get_logger(__name__)


@router.post("/", response_model=schemas.AnimalTypeOut)
def create_animal_type(payload: schemas.AnimalTypeCreate, db: Session = Depends(get_db)):
    existing = db.query(models.AnimalType).filter(models.AnimalType.title == payload.title).first()
    if existing:
        raise HTTPException(409, f"Animal type '{payload.title}' already exists")

    animal_type = models.AnimalType(
        title=payload.title,
        icon=payload.icon,
        lifecycle=payload.lifecycle.model_dump(),
    )
    db.add(animal_type)
    db.commit()
    db.refresh(animal_type)
    logger.info("Created animal type %s (%s)", animal_type.type_id, animal_type.title)
    return animal_type


@router.get("/", response_model=list[schemas.AnimalTypeOut])
def list_animal_types(db: Session = Depends(get_db)):
    return db.query(models.AnimalType).order_by(models.AnimalType.title.asc()).all()


@router.get("/{type_id}", response_model=schemas.AnimalTypeOut)
def get_animal_type(type_id: int, db: Session = Depends(get_db)):
    animal_type = db.get(models.AnimalType, type_id)
    if not animal_type:
        raise HTTPException(404, "Animal type not found")
    return animal_type
