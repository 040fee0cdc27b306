from __future__ import annotations

from datetime import date

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy import or_
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from ..database import get_db
from ..lifecycle import (
    conception_target_date,
    latest_eligible_birth_date,
    resolve_lifecycle,
)
from ..logging_config import get_logger
from ..relationship import annotate_candidates
from .. import models, schemas

router = APIRouter(prefix="/animals", tags=["animals"])

logger = get_logger(__name__)

PARENT_ROLES = (("sire_id", "male", "Sire"), ("dam_id", "female", "Dam"))


def lifecycle_for(db: Session, type_id: int, breed_id: int | None = None) -> schemas.LifecycleConfig:
    """Effective lifecycle of an animal type, tuned by the breed when it has its own."""
    animal_type = db.get(models.AnimalType, type_id)
    breed = db.get(models.Breed, breed_id) if breed_id is not None else None
    return resolve_lifecycle(
        animal_type.lifecycle if animal_type else None,
        breed.lifecycle if breed else None,
    )


def _check_parent(
    db: Session,
    parent_id: int,
    gender: str,
    role: str,
    type_id: int,
    child_dob: date | None,
    config: schemas.LifecycleConfig,
) -> models.Animal:
    parent = db.get(models.Animal, parent_id)
    if not parent:
        raise HTTPException(404, f"{role} not found")
    if parent.type_id != type_id:
        raise HTTPException(400, f"{role} must be of the same animal type")
    if parent.gender != gender:
        raise HTTPException(400, f"{role} must be {gender}")

    max_dob = latest_eligible_birth_date(child_dob, gender, config)
    if max_dob is not None and parent.dob is not None and parent.dob > max_dob:
        logger.warning("Rejected %s %s: born %s, must be on or before %s", role, parent_id, parent.dob, max_dob)
        raise HTTPException(400, f"{role} must be born on or before {max_dob}")
    return parent


def _label(animal: models.Animal, breed_titles: dict[int, str]) -> str:
    breed = breed_titles.get(animal.breed_id, "Unknown Breed")
    return f"{animal.tag} ({breed})"


@router.post("/", response_model=schemas.AnimalOut)
def create_animal(payload: schemas.AnimalCreate, db: Session = Depends(get_db)):
    if not db.get(models.AnimalType, payload.type_id):
        raise HTTPException(404, "Animal type not found")

    if payload.breed_id is not None:
        breed = db.get(models.Breed, payload.breed_id)
        if not breed or breed.type_id != payload.type_id:
            raise HTTPException(400, "Breed does not belong to this animal type")

    if payload.status not in schemas.ANIMAL_STATUSES or payload.status == "deceased":
        raise HTTPException(400, f"Cannot create an animal with status '{payload.status}'")

    duplicate = (
        db.query(models.Animal)
        .filter(models.Animal.type_id == payload.type_id)
        .filter(models.Animal.tag == payload.tag)
        .first()
    )
    if duplicate:
        raise HTTPException(409, f"Tag '{payload.tag}' is already used for this animal type")

    config = lifecycle_for(db, payload.type_id, payload.breed_id)
    for field, gender, role in PARENT_ROLES:
        parent_id = getattr(payload, field)
        if parent_id is not None:
            _check_parent(db, parent_id, gender, role, payload.type_id, payload.dob, config)

    animal = models.Animal(**payload.model_dump())
    try:
        db.add(animal)
        db.commit()
        db.refresh(animal)
    except IntegrityError:
        # Lost a race with a concurrent create of the same tag
        db.rollback()
        raise HTTPException(409, f"Tag '{payload.tag}' is already used for this animal type")
    except Exception:
        db.rollback()
        raise
    logger.info("Created animal %s (%s)", animal.animal_id, animal.tag)
    return animal


@router.get("/", response_model=list[schemas.AnimalOut])
def list_animals(
    skip: int = Query(default=0, ge=0),
    limit: int = Query(default=200, ge=1, le=1000),
    type_id: int | None = Query(default=None),
    gender: str | None = Query(default=None),
    status: str | None = Query(default=None),
    search: str | None = Query(default=None),
    max_dob: date | None = Query(default=None),
    db: Session = Depends(get_db),
):
    q = db.query(models.Animal)
    if type_id is not None:
        q = q.filter(models.Animal.type_id == type_id)
    if gender:
        q = q.filter(models.Animal.gender == gender)
    if status:
        q = q.filter(models.Animal.status == status)
    if search:
        q = q.filter(models.Animal.tag.ilike(f"%{search}%"))
    if max_dob is not None:
        # Unknown dob cannot be ruled out by date
        q = q.filter(or_(models.Animal.dob.is_(None), models.Animal.dob <= max_dob))
    return q.order_by(models.Animal.animal_id.asc()).offset(skip).limit(limit).all()


@router.get("/parent-candidates", response_model=schemas.ParentCandidates)
def parent_candidates(
    type_id: int,
    gender: str = Query(pattern=r"^(male|female)$"),
    child_dob: date | None = Query(default=None),
    breed_id: int | None = Query(default=None),
    search: str | None = Query(default=None),
    exclude_id: int | None = Query(default=None),
    limit: int = Query(default=50, ge=1, le=500),
    db: Session = Depends(get_db),
):
    """
    Active animals that could be the sire or dam of an offspring born on
    ``child_dob``. Without a child dob no date window is applied.
    """
    if not db.get(models.AnimalType, type_id):
        raise HTTPException(404, "Animal type not found")

    config = lifecycle_for(db, type_id, breed_id)
    max_dob = latest_eligible_birth_date(child_dob, gender, config)

    q = (
        db.query(models.Animal)
        .filter(models.Animal.type_id == type_id)
        .filter(models.Animal.gender == gender)
        .filter(models.Animal.status == "active")
    )
    if search:
        q = q.filter(models.Animal.tag.ilike(f"%{search}%"))
    if max_dob is not None:
        q = q.filter(or_(models.Animal.dob.is_(None), models.Animal.dob <= max_dob))
    animals = q.order_by(models.Animal.tag.asc()).limit(limit).all()

    breed_titles = {b.breed_id: b.title for b in db.query(models.Breed).filter(models.Breed.type_id == type_id)}
    options = [
        schemas.OptionItem(
            id=a.animal_id,
            label=_label(a, breed_titles),
            disabled=exclude_id is not None and a.animal_id == exclude_id,
        )
        for a in animals
    ]
    return schemas.ParentCandidates(gender=gender, max_dob=max_dob, options=options)


@router.get("/{animal_id}", response_model=schemas.AnimalOut)
def get_animal(animal_id: int, db: Session = Depends(get_db)):
    animal = db.get(models.Animal, animal_id)
    if not animal:
        raise HTTPException(404, "Animal not found")
    return animal


@router.get("/{animal_id}/mate-candidates", response_model=list[schemas.MateCandidate])
def mate_candidates(
    animal_id: int,
    service_date: date | None = Query(default=None),
    search: str | None = Query(default=None),
    limit: int = Query(default=50, ge=1, le=500),
    db: Session = Depends(get_db),
):
    """Breeding-age active animals of the opposite gender, each with a relationship badge."""
    animal = db.get(models.Animal, animal_id)
    if not animal:
        raise HTTPException(404, "Animal not found")
    if animal.gender not in ("male", "female"):
        raise HTTPException(400, "Animal gender must be known to find mates")

    service_date = service_date or date.today()
    mate_gender = "male" if animal.gender == "female" else "female"
    config = lifecycle_for(db, animal.type_id, animal.breed_id)
    target = service_date if mate_gender == "male" else conception_target_date(service_date, config)
    max_dob = latest_eligible_birth_date(target, mate_gender, config)

    q = (
        db.query(models.Animal)
        .filter(models.Animal.type_id == animal.type_id)
        .filter(models.Animal.gender == mate_gender)
        .filter(models.Animal.status == "active")
    )
    if search:
        q = q.filter(models.Animal.tag.ilike(f"%{search}%"))
    if max_dob is not None:
        q = q.filter(or_(models.Animal.dob.is_(None), models.Animal.dob <= max_dob))
    candidates = q.order_by(models.Animal.tag.asc()).limit(limit).all()

    return [
        schemas.MateCandidate(animal_id=c.animal_id, tag=c.tag, dob=c.dob, relationship=verdict)
        for c, verdict in annotate_candidates(animal, candidates)
    ]


@router.patch("/{animal_id}", response_model=schemas.AnimalOut)
def update_animal_status(
    animal_id: int,
    payload: schemas.AnimalStatusUpdate,
    db: Session = Depends(get_db),
):
    animal = db.get(models.Animal, animal_id)
    if not animal:
        raise HTTPException(404, "Animal not found")

    if payload.status not in schemas.ANIMAL_STATUSES:
        allowed = ", ".join(sorted(schemas.ANIMAL_STATUSES))
        raise HTTPException(400, f"status must be one of: {allowed}")

    animal.status = payload.status

    if payload.status == "deceased":
        animal.death_date = payload.death_date or date.today()
    else:
        animal.death_date = None

    db.commit()
    db.refresh(animal)
    logger.info("Animal %s status -> %s", animal_id, animal.status)
    return animal


@router.delete("/{animal_id}", status_code=204)
def delete_animal(animal_id: int, db: Session = Depends(get_db)):
    """
    Hard-delete an animal record.

    Guards:
    - Cannot delete an animal recorded as the sire or dam of another animal.
    - Cannot delete an animal that is the dam or sire on any mating.
    """
    animal = db.get(models.Animal, animal_id)
    if not animal:
        raise HTTPException(404, "Animal not found")

    offspring = (
        db.query(models.Animal)
        .filter((models.Animal.sire_id == animal_id) | (models.Animal.dam_id == animal_id))
        .first()
    )
    if offspring:
        raise HTTPException(
            409,
            f"Animal {animal_id} is a parent of animal {offspring.animal_id}. "
            "Remove the parent link first.",
        )

    mating_ref = (
        db.query(models.Mating)
        .filter((models.Mating.dam_id == animal_id) | (models.Mating.sire_id == animal_id))
        .first()
    )
    if mating_ref:
        raise HTTPException(
            409,
            f"Animal {animal_id} is referenced by mating {mating_ref.mating_id}. "
            "Remove the mating first.",
        )

    db.delete(animal)
    db.commit()
