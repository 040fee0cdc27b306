from types import SimpleNamespace

import pytest

from herdbook.lineage import extract_id, extract_parent_links, ids_match, normalize_id


@pytest.mark.parametrize(
    "value, expected",
    [
        (5, "5"),
        ("5", "5"),
        (" 05 ", "5"),
        (5.0, "5"),
        ("abc-12", "abc-12"),
        (None, None),
        ("", None),
        ("   ", None),
        (0, None),
        ("0", None),
        (True, None),
        ("000", None),
        ("\u00b2", "\u00b2"),
        ("9" * 5000, "9" * 5000),
        ("0" + "9" * 5000, "9" * 5000),
    ],
)
def test_normalize_id(value, expected):
    assert normalize_id(value) == expected


def test_absent_ids_never_match():
    assert not ids_match(None, None)
    assert not ids_match("", None)
    assert not ids_match(0, "0")


def test_cross_type_ids_match():
    assert ids_match(5, "5")
    assert ids_match("007", 7)
    assert not ids_match(5, 6)


def test_extract_id_accepts_wordpress_and_orm_shapes():
    assert extract_id({"id": 3}) == "3"
    assert extract_id({"ID": "3"}) == "3"
    assert extract_id(SimpleNamespace(animal_id=3)) == "3"
    assert extract_id({"tag": "no id"}) is None


def test_parent_links_from_flat_fields():
    links = extract_parent_links({"id": 1, "sire_id": 5, "dam_id": "6"})
    assert links.sire_id == "5"
    assert links.dam_id == "6"


def test_parent_links_from_camel_case():
    links = extract_parent_links({"id": 1, "sireId": "5"})
    assert links.sire_id == "5"
    assert links.dam_id is None


def test_parent_links_from_nested_objects_under_parents():
    record = {"ID": 1, "parents": {"sire": {"id": 5}, "dam": {"id": None}, "dam_id": 9}}
    links = extract_parent_links(record)
    assert links.sire_id == "5"
    assert links.dam_id == "9"


def test_parent_links_from_attribute_object():
    row = SimpleNamespace(animal_id=1, sire_id=None, dam_id=4)
    links = extract_parent_links(row)
    assert links.sire_id is None
    assert links.dam_id == "4"


@pytest.mark.parametrize(
    "record",
    [
        {"id": 1},
        {"id": 1, "sire_id": None, "dam_id": None},
        {"id": 1, "parents": None},
        {"id": 1, "parents": {"sire": {}, "dam": {"id": ""}}},
        None,
    ],
)
def test_parent_links_unavailable(record):
    assert extract_parent_links(record) is None
