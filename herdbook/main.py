from __future__ import annotations

# Run with:
#   python -m uvicorn herdbook.main:app --reload

from datetime import date, timedelta

from fastapi import FastAPI, Depends, Query
from sqlalchemy.orm import Session

from .database import Base, engine, get_db
from .lifecycle import resolve_lifecycle
from .logging_config import get_logger, setup_logging
from .routers import animals, animal_types, breeds, matings, relationships
from . import models, schemas

setup_logging()
logger = get_logger(__name__)

Base.metadata.create_all(bind=engine)
logger.info("Database ready at %s", engine.url.render_as_string(hide_password=True))

app = FastAPI(title="Herdbook")


# -----------------------------
# API ROUTERS
# -----------------------------
app.include_router(animal_types.router)
app.include_router(breeds.router)
app.include_router(animals.router)
app.include_router(matings.router)
app.include_router(relationships.router)


# -----------------------------
# OPTION ENDPOINTS (for dropdowns)
# -----------------------------
@app.get("/options/animals", response_model=list[schemas.OptionItem])
def options_animals(
    type_id: int | None = Query(default=None),
    status: str | None = Query(default=None),
    db: Session = Depends(get_db),
):
    q = db.query(models.Animal)
    if type_id is not None:
        q = q.filter(models.Animal.type_id == type_id)
    if status:
        q = q.filter(models.Animal.status == status)

    animals = q.order_by(models.Animal.tag.asc()).all()

    out: list[schemas.OptionItem] = []
    for a in animals:
        label = f"{a.tag} (ID {a.animal_id}, {a.gender}, {a.status})"
        out.append(schemas.OptionItem(id=a.animal_id, label=label))
    return out


@app.get("/options/matings", response_model=list[schemas.OptionItem])
def options_matings(
    include_successful: bool = True,
    db: Session = Depends(get_db),
):
    tag_by_id = {a.animal_id: a.tag for a in db.query(models.Animal).all()}

    q = db.query(models.Mating)
    if not include_successful:
        q = q.filter(models.Mating.result != "successful")

    out: list[schemas.OptionItem] = []
    for m in q.order_by(models.Mating.service_date.desc()).all():
        dam = tag_by_id.get(m.dam_id, f"ID {m.dam_id}")
        sire = "External/AI" if m.external_sire else tag_by_id.get(m.sire_id, f"ID {m.sire_id}")
        label = f"#{m.mating_id} {dam} x {sire} (served {m.service_date})"
        out.append(schemas.OptionItem(id=m.mating_id, label=label))
    return out


# -----------------------------
# DASHBOARD TODO
# -----------------------------
@app.get("/dashboard/todo", response_model=dict)
def dashboard_todo(
    window_days: int = Query(default=7, ge=1, le=60),
    limit: int = Query(default=25, ge=1, le=200),
    db: Session = Depends(get_db),
):
    today = date.today()
    end = today + timedelta(days=window_days)

    tag_by_id = {a.animal_id: a.tag for a in db.query(models.Animal).all()}

    # 1) Births due soon
    due_matings = (
        db.query(models.Mating)
        .filter(models.Mating.result == "pending")
        .filter(models.Mating.expected_due.isnot(None))
        .filter(models.Mating.expected_due >= today)
        .filter(models.Mating.expected_due <= end)
        .order_by(models.Mating.expected_due.asc())
        .limit(limit)
        .all()
    )

    births_due = []
    for m in due_matings:
        dam = tag_by_id.get(m.dam_id, f"ID {m.dam_id}")
        births_due.append({
            "mating_id": m.mating_id,
            "dam_tag": dam,
            "service_date": m.service_date,
            "expected_due": m.expected_due,
            "label": f"{dam} expected {m.expected_due}",
        })

    # 2) Animals reaching breeding age within the window
    types = {t.type_id: t for t in db.query(models.AnimalType).all()}
    breeds = {b.breed_id: b for b in db.query(models.Breed).all()}
    young = (
        db.query(models.Animal)
        .filter(models.Animal.status == "active")
        .filter(models.Animal.dob.isnot(None))
        .filter(models.Animal.gender.in_(("male", "female")))
        .order_by(models.Animal.dob.desc())
        .all()
    )

    coming_of_age = []
    for a in young:
        animal_type = types.get(a.type_id)
        breed = breeds.get(a.breed_id)
        config = resolve_lifecycle(
            animal_type.lifecycle if animal_type else None,
            breed.lifecycle if breed else None,
        )
        days = config.maturity.female if a.gender == "female" else config.maturity.male
        mature_on = a.dob + timedelta(days=days)
        if today <= mature_on <= end:
            coming_of_age.append({
                "animal_id": a.animal_id,
                "tag": a.tag,
                "gender": a.gender,
                "mature_on": mature_on,
                "label": f"{a.tag} breeding age on {mature_on}",
            })
        if len(coming_of_age) >= limit:
            break

    return {
        "as_of": today,
        "params": {"window_days": window_days, "limit": limit},
        "births_due": births_due,
        "coming_of_age": coming_of_age,
    }


@app.get("/")
def root():
    return {"status": "ok", "docs": "/docs"}
