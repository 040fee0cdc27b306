from types import SimpleNamespace

import pytest

from herdbook.relationship import annotate_candidates, evaluate
from herdbook.schemas import RelationshipCategory as Cat


def test_no_parent_data_on_either_side_is_unknown():
    verdict = evaluate({"id": 1}, {"id": 2})
    assert verdict.category == Cat.UNKNOWN
    assert not verdict.blocks_submission


def test_null_parents_are_not_siblings():
    subject = {"id": 1, "sire_id": None, "dam_id": 7}
    candidate = {"id": 2, "sire_id": None, "dam_id": 8}
    assert evaluate(subject, candidate).category == Cat.UNRELATED


@pytest.mark.parametrize("candidate_dam", [None, 8, 7])
def test_shared_sire_is_sibling_regardless_of_dam(candidate_dam):
    subject = {"id": 1, "sire_id": 5, "dam_id": 7}
    candidate = {"id": 2, "sire_id": 5, "dam_id": candidate_dam}
    verdict = evaluate(subject, candidate)
    assert verdict.category == Cat.SIBLING
    assert verdict.risk_level == 3
    assert verdict.blocks_submission


def test_shared_dam_is_sibling():
    verdict = evaluate({"id": 1, "dam_id": 7}, {"id": 2, "dam_id": 7, "sire_id": 3})
    assert verdict.category == Cat.SIBLING
    assert "Mother" in verdict.message


def test_cross_type_identifiers_match():
    verdict = evaluate({"id": 1, "sireId": "5"}, {"id": 2, "sireId": 5})
    assert verdict.category == Cat.SIBLING


def test_candidate_is_dam_of_subject():
    subject = {"id": 1, "sire_id": 5, "dam_id": 7}
    candidate = {"id": 7, "sire_id": 20, "dam_id": 21}
    verdict = evaluate(subject, candidate)
    assert verdict.category == Cat.PARENT_OF_SUBJECT
    assert verdict.risk_level == 3


def test_founder_parent_is_still_detected():
    # The sire has no recorded lineage of its own
    verdict = evaluate({"id": 1, "sire_id": 5}, {"id": "5"})
    assert verdict.category == Cat.PARENT_OF_SUBJECT


def test_candidate_is_child_of_subject():
    verdict = evaluate({"id": 5}, {"id": 1, "sire_id": 5, "dam_id": 7})
    assert verdict.category == Cat.CHILD_OF_SUBJECT
    assert verdict.risk_level == 3


@pytest.mark.parametrize(
    "a, b",
    [
        ({"id": 1, "sire_id": 5, "dam_id": 7}, {"id": 5, "sire_id": 30}),
        ({"id": 1, "dam_id": 7}, {"id": 7}),
        ({"ID": "1", "parents": {"dam": {"id": 7}}}, {"id": 7.0, "dam_id": 9}),
    ],
)
def test_parent_child_symmetry(a, b):
    assert evaluate(a, b).category == Cat.PARENT_OF_SUBJECT
    assert evaluate(b, a).category == Cat.CHILD_OF_SUBJECT


def test_unknown_when_candidate_lineage_missing():
    verdict = evaluate({"id": 1, "sire_id": 5, "dam_id": 7}, {"id": 2})
    assert verdict.category == Cat.UNKNOWN
    assert verdict.risk_level == 1


def test_unrelated_with_full_lineage():
    verdict = evaluate({"id": 1, "sire_id": 5, "dam_id": 7}, {"id": 2, "sire_id": 6, "dam_id": 8})
    assert verdict.category == Cat.UNRELATED
    assert verdict.risk_level == 0


def test_external_sire_is_never_compared():
    subject = {"id": 1, "sire_id": 5, "dam_id": 7}
    verdict = evaluate(subject, None, external=True)
    assert verdict.category == Cat.UNRELATED
    assert verdict.label == "External / AI"
    # Even a record that would match is ignored
    assert evaluate(subject, {"id": 5}, external=True).category == Cat.UNRELATED


def test_missing_candidate_is_unknown():
    assert evaluate({"id": 1, "sire_id": 5}, None).category == Cat.UNKNOWN


def test_garbage_input_does_not_raise():
    assert evaluate(None, {"id": None, "sire": "not-a-dict"}).category == Cat.UNKNOWN
    assert evaluate(42, object()).category == Cat.UNKNOWN
    # Unicode digits and over-long digit strings stay plain ids
    assert evaluate({"id": 1, "sire_id": "\u00b2"}, {"id": 2, "sire_id": 5}).category == Cat.UNRELATED
    long_id = "9" * 5000
    assert evaluate({"id": 1, "sire_id": long_id}, {"id": 2, "sire_id": long_id}).category == Cat.SIBLING


def test_evaluate_is_idempotent():
    subject = {"id": 1, "sire_id": 5}
    candidate = {"id": 2, "sire_id": "5"}
    assert evaluate(subject, candidate) == evaluate(subject, candidate)


def test_orm_like_rows():
    doe = SimpleNamespace(animal_id=10, sire_id=1, dam_id=2)
    buck = SimpleNamespace(animal_id=11, sire_id=1, dam_id=3)
    assert evaluate(doe, buck).category == Cat.SIBLING


def test_annotate_candidates():
    subject = {"id": 1, "sire_id": 5, "dam_id": 7}
    candidates = [{"id": 5}, {"id": 2, "dam_id": 7}, {"id": 3, "sire_id": 40, "dam_id": 41}]
    categories = [v.category for _, v in annotate_candidates(subject, candidates)]
    assert categories == [Cat.PARENT_OF_SUBJECT, Cat.SIBLING, Cat.UNRELATED]
