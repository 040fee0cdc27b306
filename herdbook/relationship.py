"""
Pedigree relationship evaluator.

Classifies a candidate mate or parent relative to a subject animal from
whatever parent links are known for both. Missing data degrades the
result to UNKNOWN; it never raises.
"""
from __future__ import annotations

from typing import Any, Iterable, Optional

from .lineage import extract_id, extract_parent_links, ids_match
from .logging_config import get_logger
from .schemas import RelationshipCategory, RelationshipVerdict

logger = get_logger(__name__)

EXTERNAL = RelationshipVerdict(
    category=RelationshipCategory.UNRELATED,
    risk_level=0,
    label="External / AI",
    message="Out-of-system sire, genetic diversity assumed.",
)

UNKNOWN = RelationshipVerdict(
    category=RelationshipCategory.UNKNOWN,
    risk_level=1,
    label="Unknown Relationship",
    message="Parentage data missing.",
)

UNRELATED = RelationshipVerdict(
    category=RelationshipCategory.UNRELATED,
    risk_level=0,
    label="No Immediate Relation",
    message="No shared parents found.",
)


def _sibling(shared: str) -> RelationshipVerdict:
    return RelationshipVerdict(
        category=RelationshipCategory.SIBLING,
        risk_level=3,
        label="Inbreeding Risk: Sibling",
        message=f"These animals share a parent ({shared}).",
    )


def _parent_of_subject(role: str) -> RelationshipVerdict:
    return RelationshipVerdict(
        category=RelationshipCategory.PARENT_OF_SUBJECT,
        risk_level=3,
        label="Inbreeding Risk: Parent",
        message=f"Candidate is the subject's {role}.",
    )


def _child_of_subject() -> RelationshipVerdict:
    return RelationshipVerdict(
        category=RelationshipCategory.CHILD_OF_SUBJECT,
        risk_level=3,
        label="Inbreeding Risk: Offspring",
        message="Candidate is an offspring of the subject.",
    )


def evaluate(subject: Any, candidate: Any, external: bool = False) -> RelationshipVerdict:
    """
    Relationship of ``candidate`` to ``subject``.

    Both arguments may be any record shape understood by
    :func:`herdbook.lineage.extract_parent_links`. ``external`` marks an
    out-of-system or AI sire, which is never compared.

    Precedence: sibling, then parent of subject, then child of subject.
    Direct links are checked before falling back to UNKNOWN so that a
    founder with no recorded parents is still caught as the subject's sire
    or dam.
    """
    if external:
        return EXTERNAL
    if candidate is None:
        return UNKNOWN

    subject_links = extract_parent_links(subject)
    candidate_links = extract_parent_links(candidate)

    if subject_links is not None and candidate_links is not None:
        if ids_match(subject_links.sire_id, candidate_links.sire_id):
            return _sibling("Father")
        if ids_match(subject_links.dam_id, candidate_links.dam_id):
            return _sibling("Mother")

    candidate_id = extract_id(candidate)
    if subject_links is not None:
        if ids_match(candidate_id, subject_links.sire_id):
            return _parent_of_subject("sire")
        if ids_match(candidate_id, subject_links.dam_id):
            return _parent_of_subject("dam")

    subject_id = extract_id(subject)
    if candidate_links is not None:
        if ids_match(subject_id, candidate_links.sire_id) or ids_match(subject_id, candidate_links.dam_id):
            return _child_of_subject()

    if subject_links is None or candidate_links is None:
        logger.debug("Lineage unavailable for %s vs %s", subject_id, candidate_id)
        return UNKNOWN

    return UNRELATED


def annotate_candidates(
    subject: Any,
    candidates: Iterable[Any],
) -> list[tuple[Any, RelationshipVerdict]]:
    return [(c, evaluate(subject, c)) for c in candidates]


def verdict_for(subject: Any, candidate: Optional[Any], external: bool = False) -> RelationshipVerdict:
    """Like :func:`evaluate`, logging verdicts that block submission."""
    verdict = evaluate(subject, candidate, external=external)
    if verdict.blocks_submission:
        logger.warning(
            "Inbreeding risk (%s) between %s and %s",
            verdict.category.value,
            extract_id(subject),
            extract_id(candidate),
        )
    return verdict
