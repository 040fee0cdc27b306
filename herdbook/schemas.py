from __future__ import annotations

from datetime import date
from enum import Enum
from typing import Optional, List, Literal

from pydantic import BaseModel, Field, computed_field, model_validator


# -----------------------------
# Lifecycle
# -----------------------------

class Maturity(BaseModel):
    male: int = Field(default=0, ge=0)
    female: int = Field(default=0, ge=0)


class LifecycleConfig(BaseModel):
    """Per animal-type (or breed) lifecycle settings, all ages in days."""

    reproduction_type: Literal["birth", "hatching"] = "birth"
    maturity: Maturity = Field(default_factory=Maturity)
    gestation_days: int = Field(default=0, ge=0)
    incubation_days: int = Field(default=0, ge=0)
    weaning_days: int = Field(default=0, ge=0)
    meat_age_days: int = Field(default=0, ge=0)

    class Config:
        frozen = True


# -----------------------------
# Pedigree
# -----------------------------

class ParentLinks(BaseModel):
    sire_id: Optional[str] = None
    dam_id: Optional[str] = None

    class Config:
        frozen = True

    @property
    def is_empty(self) -> bool:
        return self.sire_id is None and self.dam_id is None


class RelationshipCategory(str, Enum):
    UNRELATED = "unrelated"
    SIBLING = "sibling"
    PARENT_OF_SUBJECT = "parent_of_subject"
    CHILD_OF_SUBJECT = "child_of_subject"
    UNKNOWN = "unknown"


class RelationshipVerdict(BaseModel):
    category: RelationshipCategory
    risk_level: int = Field(ge=0, le=3)
    label: str
    message: str

    class Config:
        frozen = True

    @computed_field
    @property
    def blocks_submission(self) -> bool:
        return self.risk_level >= 3


class RelationshipCheckRequest(BaseModel):
    # Records are accepted in any shape a data source produces
    # (flat sire_id/dam_id, camelCase, nested sire/dam objects, parents{}).
    subject: dict
    candidate: Optional[dict] = None
    external: bool = False


# -----------------------------
# Animal types & breeds
# -----------------------------

class AnimalTypeCreate(BaseModel):
    title: str = Field(min_length=1)
    icon: str = "paw"
    lifecycle: LifecycleConfig = Field(default_factory=LifecycleConfig)


class AnimalTypeOut(AnimalTypeCreate):
    type_id: int

    class Config:
        from_attributes = True


class BreedCreate(BaseModel):
    type_id: int
    title: str = Field(min_length=1)
    # None = inherit the animal type's lifecycle as the starting point
    lifecycle: Optional[LifecycleConfig] = None


class BreedOut(BaseModel):
    breed_id: int
    type_id: int
    title: str
    lifecycle: Optional[LifecycleConfig] = None
    effective_lifecycle: Optional[LifecycleConfig] = None

    class Config:
        from_attributes = True


# -----------------------------
# Animals
# -----------------------------

ANIMAL_STATUSES = {"active", "sold", "deceased", "culled"}


class OptionItem(BaseModel):
    id: int
    label: str
    disabled: bool = False


class AnimalCreate(BaseModel):
    type_id: int
    tag: str = Field(min_length=1)
    gender: str = Field(pattern=r"^(male|female|unknown)$")
    status: str = "active"
    breed_id: Optional[int] = None
    color: Optional[str] = None
    dob: Optional[date] = None
    sire_id: Optional[int] = None
    dam_id: Optional[int] = None
    notes: Optional[str] = None

    @model_validator(mode="after")
    def validate_parents(self):
        if self.sire_id is not None and self.sire_id == self.dam_id:
            raise ValueError("sire_id and dam_id cannot be the same animal")
        return self


class AnimalOut(AnimalCreate):
    animal_id: int
    death_date: Optional[date] = None

    class Config:
        from_attributes = True


class AnimalStatusUpdate(BaseModel):
    status: str
    death_date: Optional[date] = None


class ParentCandidates(BaseModel):
    gender: str
    max_dob: Optional[date] = None
    options: List[OptionItem]


class MateCandidate(BaseModel):
    animal_id: int
    tag: str
    dob: Optional[date] = None
    relationship: RelationshipVerdict


# -----------------------------
# Matings
# -----------------------------

MATING_RESULTS = {"pending", "successful", "missed"}


class MatingCreate(BaseModel):
    dam_id: int
    service_date: date
    sire_id: Optional[int] = None
    external_sire: bool = False
    notes: Optional[str] = None

    @model_validator(mode="after")
    def validate_sire(self):
        if self.external_sire and self.sire_id is not None:
            raise ValueError("Provide sire_id or external_sire, not both")
        if not self.external_sire and self.sire_id is None:
            raise ValueError("sire_id is required unless external_sire is set")
        return self


class MatingUpdate(BaseModel):
    result: Optional[str] = None   # pending / successful / missed
    notes: Optional[str] = None


class MatingOut(BaseModel):
    mating_id: int
    dam_id: int
    sire_id: Optional[int] = None
    external_sire: bool
    service_date: date
    expected_due: Optional[date] = None
    relationship: str
    result: str
    notes: Optional[str] = None

    class Config:
        from_attributes = True
