from __future__ import annotations

from sqlalchemy import (
    JSON,
    Boolean,
    Column,
    Date,
    ForeignKey,
    Integer,
    String,
    Text,
    UniqueConstraint,
)
from .database import Base


class AnimalType(Base):
    __tablename__ = "animal_types"

    type_id = Column(Integer, primary_key=True, index=True)
    title = Column(String, unique=True, nullable=False)
    icon = Column(String, default="paw")
    lifecycle = Column(JSON, nullable=False)


class Breed(Base):
    __tablename__ = "breeds"

    breed_id = Column(Integer, primary_key=True, index=True)
    type_id = Column(Integer, ForeignKey("animal_types.type_id"), nullable=False)
    title = Column(String, nullable=False)
    # NULL = inherits the animal type's lifecycle
    lifecycle = Column(JSON, nullable=True)


class Animal(Base):
    __tablename__ = "animals"
    # Tags are only unique within an animal type
    __table_args__ = (UniqueConstraint("type_id", "tag", name="uq_animal_type_tag"),)

    animal_id = Column(Integer, primary_key=True, index=True)
    type_id = Column(Integer, ForeignKey("animal_types.type_id"), nullable=False)
    breed_id = Column(Integer, ForeignKey("breeds.breed_id"), nullable=True)
    tag = Column(String, nullable=False)
    gender = Column(String, nullable=False)  # male/female/unknown
    color = Column(String)
    dob = Column(Date)
    status = Column(String, nullable=False, default="active")
    sire_id = Column(Integer, ForeignKey("animals.animal_id"), nullable=True)
    dam_id = Column(Integer, ForeignKey("animals.animal_id"), nullable=True)
    death_date = Column(Date)
    notes = Column(Text)


class Mating(Base):
    __tablename__ = "matings"

    mating_id = Column(Integer, primary_key=True, index=True)
    dam_id = Column(Integer, ForeignKey("animals.animal_id"), nullable=False)
    # NULL together with external_sire = out-of-system sire / AI
    sire_id = Column(Integer, ForeignKey("animals.animal_id"), nullable=True)
    external_sire = Column(Boolean, nullable=False, default=False)
    service_date = Column(Date, nullable=False)
    expected_due = Column(Date)
    relationship = Column(String, nullable=False, default="unknown")
    result = Column(String, default="pending")  # pending/successful/missed
    notes = Column(Text)
