# gentrify/district_utils.py
from __future__ import annotations

import logging
from numbers import Real
from typing import Any, Dict, Mapping

from gentrify.config import (
    DEFAULT_GENTRIFICATION_LEVEL,
    DEFAULT_POLICE_PRESENCE,
    DEFAULT_RENT_MULTIPLIER,
    DEFAULT_SCENE_STRENGTH,
    PERCENT_MAX,
    PERCENT_MIN,
    RENT_MULTIPLIER_MAX,
    RENT_MULTIPLIER_MIN,
)
from gentrify.models import Bounds, District, DistrictType

log = logging.getLogger("gentrify.district_utils")

# Names the map and older saves use for district archetypes
DISTRICT_TYPE_MAP: Dict[str, DistrictType] = {
    "underground": DistrictType.WAREHOUSE,
    "industrial": DistrictType.WAREHOUSE,
    "warehouse district": DistrictType.WAREHOUSE,
    "city center": DistrictType.DOWNTOWN,
    "downtown": DistrictType.DOWNTOWN,
    "university": DistrictType.COLLEGE,
    "college town": DistrictType.COLLEGE,
    "suburbs": DistrictType.RESIDENTIAL,
    "residential": DistrictType.RESIDENTIAL,
    "gallery": DistrictType.ARTS,
    "arts district": DistrictType.ARTS,
}


def clamp(x: float, lo: float, hi: float) -> float:
    return lo if x < lo else hi if x > hi else x


def is_district_type(value: Any) -> bool:
    if isinstance(value, DistrictType):
        return True
    return isinstance(value, str) and value in {t.value for t in DistrictType}


def get_district_type(name: str) -> DistrictType:
    """Resolve a free-form district name to an archetype, defaulting to DOWNTOWN."""
    normalized = name.lower().strip()
    mapped = DISTRICT_TYPE_MAP.get(normalized)
    if mapped is not None:
        return mapped

    for t in DistrictType:
        if normalized in (t.value, t.name.lower()):
            return t

    log.warning(f"Unknown district type: {name}, defaulting to DOWNTOWN")
    return DistrictType.DOWNTOWN


def _is_number(x: Any) -> bool:
    return isinstance(x, Real) and not isinstance(x, bool)


def is_valid_district(district: Any) -> bool:
    """Structural check: the ids are strings and the four state fields are numbers."""
    if district is None:
        return False
    try:
        return (
            isinstance(district.id, str)
            and isinstance(district.name, str)
            and _is_number(district.scene_strength)
            and _is_number(district.gentrification_level)
            and _is_number(district.police_presence)
            and _is_number(district.rent_multiplier)
        )
    except AttributeError:
        return False


def _field(raw: Any, name: str) -> Any:
    if isinstance(raw, Mapping):
        return raw.get(name)
    return getattr(raw, name, None)


def _number_or(x: Any, default: float) -> float:
    return float(x) if _is_number(x) else default


def normalize_district(raw: Any) -> District:
    """
    Build a valid District from partial data (a dict or a District-like object).
    Missing ids/names get placeholders; numbers get defaults and are clamped.
    """
    raw_type = _field(raw, "type")
    if isinstance(raw_type, DistrictType):
        dtype = raw_type
    elif isinstance(raw_type, str) and raw_type:
        dtype = get_district_type(raw_type)
    else:
        dtype = None

    bounds = _field(raw, "bounds")
    if isinstance(bounds, Mapping):
        bounds = Bounds(**bounds)
    elif not isinstance(bounds, Bounds):
        bounds = Bounds()

    return District(
        id=_field(raw, "id") or "unknown",
        name=_field(raw, "name") or "Unknown District",
        type=dtype,
        scene_strength=clamp(
            _number_or(_field(raw, "scene_strength"), DEFAULT_SCENE_STRENGTH),
            PERCENT_MIN, PERCENT_MAX),
        gentrification_level=clamp(
            _number_or(_field(raw, "gentrification_level"),
                       DEFAULT_GENTRIFICATION_LEVEL),
            PERCENT_MIN, PERCENT_MAX),
        police_presence=clamp(
            _number_or(_field(raw, "police_presence"), DEFAULT_POLICE_PRESENCE),
            PERCENT_MIN, PERCENT_MAX),
        rent_multiplier=clamp(
            _number_or(_field(raw, "rent_multiplier"), DEFAULT_RENT_MULTIPLIER),
            RENT_MULTIPLIER_MIN, RENT_MULTIPLIER_MAX),
        bounds=bounds,
        color=_field(raw, "color") or "#666666",
    )
