from datetime import date, datetime

from herdbook.lifecycle import (
    is_mature,
    latest_eligible_birth_date,
    projected_due_date,
    projected_hatch_date,
    resolve_lifecycle,
)
from herdbook.schemas import LifecycleConfig

GOAT = LifecycleConfig(
    reproduction_type="birth",
    maturity={"male": 200, "female": 120},
    gestation_days=30,
)
HEN = LifecycleConfig(
    reproduction_type="hatching",
    maturity={"male": 150, "female": 140},
    gestation_days=30,
    incubation_days=21,
)


def test_female_window_includes_gestation():
    # 120 + 30 days before 2024-06-01
    assert latest_eligible_birth_date(date(2024, 6, 1), "female", GOAT) == date(2024, 1, 3)


def test_male_window_is_maturity_only():
    assert latest_eligible_birth_date(date(2024, 6, 1), "male", GOAT) == date(2023, 11, 14)


def test_time_of_day_is_discarded():
    assert latest_eligible_birth_date(datetime(2024, 6, 1, 23, 59), "female", GOAT) == date(2024, 1, 3)


def test_missing_target_date_means_no_constraint():
    assert latest_eligible_birth_date(None, "female", GOAT) is None


def test_unrecognized_gender_means_no_constraint():
    assert latest_eligible_birth_date(date(2024, 6, 1), "unknown", GOAT) is None
    assert latest_eligible_birth_date(date(2024, 6, 1), "", GOAT) is None


def test_zero_offsets_return_the_target_date():
    config = LifecycleConfig()
    assert latest_eligible_birth_date(date(2024, 6, 1), "female", config) == date(2024, 6, 1)
    assert latest_eligible_birth_date(date(2024, 6, 1), "male", config) == date(2024, 6, 1)


def test_projected_due_date_for_birth_type():
    assert projected_due_date(date(2024, 1, 31), GOAT) == date(2024, 3, 1)


def test_projected_due_date_not_applicable():
    assert projected_due_date(date(2024, 1, 1), HEN) is None
    assert projected_due_date(date(2024, 1, 1), LifecycleConfig(gestation_days=0)) is None
    assert projected_due_date(None, GOAT) is None


def test_projected_hatch_date():
    assert projected_hatch_date(date(2024, 3, 1), HEN) == date(2024, 3, 22)
    assert projected_hatch_date(date(2024, 3, 1), GOAT) is None


def test_is_mature():
    assert is_mature(date(2024, 1, 1), date(2024, 4, 30), "female", GOAT) is True
    assert is_mature(date(2024, 1, 1), date(2024, 4, 29), "female", GOAT) is False
    assert is_mature(None, date(2024, 4, 30), "female", GOAT) is None
    assert is_mature(date(2024, 1, 1), date(2024, 4, 30), "unknown", GOAT) is None


def test_breed_lifecycle_overrides_type_but_keeps_reproduction_type():
    breed = {"reproduction_type": "birth", "gestation_days": 45, "maturity": {"male": 90, "female": 90}}
    resolved = resolve_lifecycle(HEN.model_dump(), breed)
    assert resolved.reproduction_type == "hatching"
    assert resolved.gestation_days == 45
    assert resolved.maturity.female == 90


def test_missing_breed_lifecycle_inherits_type():
    assert resolve_lifecycle(GOAT, None) == GOAT
    assert resolve_lifecycle(None, None) == LifecycleConfig()
