from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.orm import Session

from ..database import get_db
from ..lifecycle import coerce_lifecycle, resolve_lifecycle
from ..logging_config import get_logger
from .. import models, schemas

router = APIRouter(prefix="/breeds", tags=["breeds"])

logger = get_logger(__name__)


def _breed_out(breed: models.Breed, animal_type: models.AnimalType | None) -> schemas.BreedOut:
    type_lifecycle = animal_type.lifecycle if animal_type else None
    return schemas.BreedOut(
        breed_id=breed.breed_id,
        type_id=breed.type_id,
        title=breed.title,
        lifecycle=coerce_lifecycle(breed.lifecycle),
        effective_lifecycle=resolve_lifecycle(type_lifecycle, breed.lifecycle),
    )


@router.post("/", response_model=schemas.BreedOut)
def create_breed(payload: schemas.BreedCreate, db: Session = Depends(get_db)):
    animal_type = db.get(models.AnimalType, payload.type_id)
    if not animal_type:
        raise HTTPException(404, "Animal type not found")

    lifecycle = None
    if payload.lifecycle is not None:
        # A breed can tune ages but never switches birth <-> hatching
        lifecycle = resolve_lifecycle(animal_type.lifecycle, payload.lifecycle).model_dump()

    breed = models.Breed(type_id=payload.type_id, title=payload.title, lifecycle=lifecycle)
    db.add(breed)
    db.commit()
    db.refresh(breed)
    logger.info("Created breed %s (%s) for type %s", breed.breed_id, breed.title, breed.type_id)
    return _breed_out(breed, animal_type)


@router.get("/", response_model=list[schemas.BreedOut])
def list_breeds(
    type_id: int | None = Query(default=None),
    db: Session = Depends(get_db),
):
    q = db.query(models.Breed)
    if type_id is not None:
        q = q.filter(models.Breed.type_id == type_id)
    breeds = q.order_by(models.Breed.title.asc()).all()

    types = {t.type_id: t for t in db.query(models.AnimalType).all()}
    return [_breed_out(b, types.get(b.type_id)) for b in breeds]


@router.get("/{breed_id}", response_model=schemas.BreedOut)
def get_breed(breed_id: int, db: Session = Depends(get_db)):
    breed = db.get(models.Breed, breed_id)
    if not breed:
        raise HTTPException(404, "Breed not found")
    return _breed_out(breed, db.get(models.AnimalType, breed.type_id))
