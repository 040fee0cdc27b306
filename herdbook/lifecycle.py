"""
Maturity and gestation date arithmetic.

All functions are pure. "No constraint" / "not applicable" is always
signalled with None, never with a zero offset or a sentinel date.
"""
from __future__ import annotations

from datetime import date, datetime, timedelta
from typing import Any, Optional, Union

from .logging_config import get_logger
from .schemas import LifecycleConfig

logger = get_logger(__name__)

DateLike = Union[date, datetime]


def _as_date(value: Optional[DateLike]) -> Optional[date]:
    if value is None:
        return None
    if isinstance(value, datetime):
        return value.date()
    return value


def coerce_lifecycle(value: Any) -> Optional[LifecycleConfig]:
    """Accept a LifecycleConfig, a stored JSON dict, or None."""
    if value is None or isinstance(value, LifecycleConfig):
        return value
    return LifecycleConfig.model_validate(value)


def latest_eligible_birth_date(
    target_date: Optional[DateLike],
    gender: str,
    config: Optional[LifecycleConfig],
) -> Optional[date]:
    """
    Latest birth date a candidate parent may have for an offspring
    conceived/born relative to ``target_date``.

    A dam must have been mature at conception, gestation_days before the
    target date, so her offset is maturity + gestation. A sire only needs to
    be mature at conception.

    Returns None ("no constraint") when the target date or config is missing
    or the gender is not male/female.
    """
    target = _as_date(target_date)
    if target is None or config is None:
        return None
    if gender == "female":
        days = config.maturity.female + config.gestation_days
    elif gender == "male":
        days = config.maturity.male
    else:
        logger.debug("No eligibility window for gender %r", gender)
        return None
    return target - timedelta(days=days)


def projected_due_date(
    service_date: Optional[DateLike],
    config: Optional[LifecycleConfig],
) -> Optional[date]:
    """Expected birth date for a service, or None when not applicable."""
    service = _as_date(service_date)
    if service is None or config is None:
        return None
    if config.reproduction_type != "birth" or config.gestation_days <= 0:
        return None
    return service + timedelta(days=config.gestation_days)


def projected_hatch_date(
    set_date: Optional[DateLike],
    config: Optional[LifecycleConfig],
) -> Optional[date]:
    """Expected hatch date for eggs set on ``set_date``."""
    start = _as_date(set_date)
    if start is None or config is None:
        return None
    if config.reproduction_type != "hatching" or config.incubation_days <= 0:
        return None
    return start + timedelta(days=config.incubation_days)


def conception_target_date(
    service_date: DateLike,
    config: LifecycleConfig,
) -> date:
    # The date a dam's eligibility is measured against when she is served
    # on service_date: eligibility subtracts gestation again.
    return _as_date(service_date) + timedelta(days=config.gestation_days)


def is_mature(
    dob: Optional[DateLike],
    on_date: Optional[DateLike],
    gender: str,
    config: Optional[LifecycleConfig],
) -> Optional[bool]:
    """Whether an animal born on ``dob`` is breeding-age on ``on_date``.

    None when it cannot be decided (unknown dob, date, gender or config).
    """
    born = _as_date(dob)
    when = _as_date(on_date)
    if born is None or when is None or config is None:
        return None
    if gender == "female":
        days = config.maturity.female
    elif gender == "male":
        days = config.maturity.male
    else:
        return None
    return born + timedelta(days=days) <= when


def resolve_lifecycle(
    type_config: Any,
    breed_config: Any = None,
) -> LifecycleConfig:
    """
    Effective lifecycle for an animal: the breed's own config when it has
    one, otherwise the animal type's. The reproduction type always comes
    from the animal type.
    """
    base = coerce_lifecycle(type_config) or LifecycleConfig()
    override = coerce_lifecycle(breed_config)
    if override is None:
        return base
    return override.model_copy(update={"reproduction_type": base.reproduction_type})
