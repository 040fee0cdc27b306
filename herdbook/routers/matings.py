from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from ..database import get_db
from ..lifecycle import is_mature, projected_due_date
from ..logging_config import get_logger
from ..relationship import verdict_for
from .animals import lifecycle_for
from .. import models, schemas

router = APIRouter(prefix="/matings", tags=["matings"])

logger = get_logger(__name__)


@router.post("/", response_model=schemas.MatingOut)
def create_mating(payload: schemas.MatingCreate, db: Session = Depends(get_db)):
    dam = db.get(models.Animal, payload.dam_id)
    if not dam:
        raise HTTPException(404, "Dam not found")
    if dam.gender != "female":
        raise HTTPException(400, "Dam must be female")

    config = lifecycle_for(db, dam.type_id, dam.breed_id)

    sire = None
    if not payload.external_sire:
        sire = db.get(models.Animal, payload.sire_id)
        if not sire:
            raise HTTPException(404, "Sire not found")
        if sire.gender != "male":
            raise HTTPException(400, "Sire must be male")
        if sire.type_id != dam.type_id:
            raise HTTPException(400, "Sire and dam must be of the same animal type")
        if is_mature(sire.dob, payload.service_date, "male", config) is False:
            raise HTTPException(400, f"Sire {sire.tag} is not of breeding age on {payload.service_date}")

    if is_mature(dam.dob, payload.service_date, "female", config) is False:
        raise HTTPException(400, f"Dam {dam.tag} is not of breeding age on {payload.service_date}")

    verdict = verdict_for(dam, sire, external=payload.external_sire)
    if verdict.blocks_submission:
        raise HTTPException(409, f"Unsafe mating: {verdict.label}. {verdict.message}")

    if payload.external_sire:
        note = "Service by External Sire / AI."
    else:
        note = f"Served by Sire #{sire.tag}."
    if payload.notes:
        note = f"{note} {payload.notes}"

    mating = models.Mating(
        dam_id=payload.dam_id,
        sire_id=None if payload.external_sire else payload.sire_id,
        external_sire=payload.external_sire,
        service_date=payload.service_date,
        expected_due=projected_due_date(payload.service_date, config),
        relationship=verdict.category.value,
        result="pending",
        notes=note,
    )

    try:
        db.add(mating)
        db.commit()
        db.refresh(mating)
    except Exception:
        db.rollback()
        raise
    logger.info(
        "Recorded mating %s: dam %s, sire %s, due %s",
        mating.mating_id,
        mating.dam_id,
        mating.sire_id if not mating.external_sire else "external",
        mating.expected_due,
    )
    return mating


@router.get("/", response_model=list[schemas.MatingOut])
def list_matings(db: Session = Depends(get_db)):
    return db.query(models.Mating).order_by(models.Mating.service_date.desc()).all()


@router.patch("/{mating_id}", response_model=schemas.MatingOut)
def update_mating(mating_id: int, payload: schemas.MatingUpdate, db: Session = Depends(get_db)):
    mating = db.get(models.Mating, mating_id)
    if not mating:
        raise HTTPException(404, "Mating not found")

    # Only update fields that were actually provided
    if payload.result is not None:
        if payload.result not in schemas.MATING_RESULTS:
            raise HTTPException(400, f"result must be one of: {', '.join(sorted(schemas.MATING_RESULTS))}")
        mating.result = payload.result

    if payload.notes is not None:
        mating.notes = payload.notes

    db.commit()
    db.refresh(mating)
    return mating
