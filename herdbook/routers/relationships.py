from __future__ import annotations

from fastapi import APIRouter

from ..relationship import verdict_for
from .. import schemas

router = APIRouter(prefix="/relationships", tags=["relationships"])


@router.post("/check", response_model=schemas.RelationshipVerdict)
def check_relationship(payload: schemas.RelationshipCheckRequest):
    """
    Classify ``candidate`` relative to ``subject`` for records supplied by
    the caller, in any of the supported record shapes.
    """
    return verdict_for(payload.subject, payload.candidate, external=payload.external)
