# gentrify/mechanics.py
from __future__ import annotations

import logging
import math
from dataclasses import replace
from typing import Any, Optional

from gentrify.config import (
    GENRE_MATCH_BONUS,
    GENRE_MISMATCH_PENALTY,
    GENRE_NEUTRAL,
    GENTRIFICATION_RATE_MULTIPLIER,
    GENTRIFICATION_THRESHOLD,
    MAX_RENT_MULTIPLIER,
    PERCENT_MAX,
    PERCENT_MIN,
    POLICE_PRESENCE_INCREASE,
    RENT_INCREASE_RATE,
    RENT_MULTIPLIER_MAX,
    RENT_MULTIPLIER_MIN,
    SCENE_STRENGTH_DECREASE,
)
from gentrify.district_utils import clamp, is_valid_district, normalize_district
from gentrify.errors import ValidationError
from gentrify.modifiers import DEFAULT_TABLE, ModifierTable
from gentrify.models import (
    District,
    DistrictBonus,
    DistrictEvent,
    DistrictModifiers,
    DistrictType,
    Show,
    ShowResult,
    Venue,
)

log = logging.getLogger("gentrify.mechanics")


_BONUS_DESCRIPTIONS = {
    DistrictType.WAREHOUSE: "Warehouse District: Authentic underground vibes",
    DistrictType.DOWNTOWN: "Downtown: High visibility, high costs",
    DistrictType.COLLEGE: "College Town: Young, energetic crowd",
    DistrictType.RESIDENTIAL: "Residential: Intimate but risky",
    DistrictType.ARTS: "Arts District: Creative and connected",
}


def genre_modifier(genre: Optional[str], mods: DistrictModifiers) -> float:
    """
    Exactly one of bonus / penalty / neutral. Preferred is checked first, so a
    genre listed in both sets counts as preferred.
    """
    if genre:
        if genre in mods.preferred_genres:
            return GENRE_MATCH_BONUS
        if genre in mods.discouraged_genres:
            return GENRE_MISMATCH_PENALTY
    return GENRE_NEUTRAL


def _as_type(district_type: Any) -> Optional[DistrictType]:
    try:
        return DistrictType(district_type)
    except (ValueError, TypeError):
        return None


def district_bonus_description(district_type: Any, genre_mod: float) -> str:
    base = _BONUS_DESCRIPTIONS.get(_as_type(district_type), "Unknown District")
    if genre_mod > 1:
        return base + " (Genre match!)"
    if genre_mod < 1:
        return base + " (Genre mismatch)"
    return base


def apply_district_modifiers(
    show: Show,
    venue: Optional[Venue],
    base_result: ShowResult,
    district_type: Any,
    *,
    table: ModifierTable = DEFAULT_TABLE,
) -> ShowResult:
    """
    Reshape a show's baseline result for the district it was played in.

    Attendance, revenue and reputation get the genre factor on top of the
    district multipliers; stress and connections do not.
    """
    if base_result is None:
        log.error("Base result is required for district modifiers")
        raise ValidationError("base_result is required for district modifiers")

    mods = table.lookup(district_type)

    attendance = math.floor(base_result.attendance * mods.audience_multiplier)
    revenue = math.floor(base_result.revenue * mods.revenue_multiplier)
    reputation_gain = (base_result.reputation_gain or 0) + mods.authenticity_bonus
    stress_gain = max(0, (base_result.stress_gain or 0) + mods.stress_modifier)
    connections_gain = math.floor(
        (base_result.connections_gain or 0) * mods.networking_bonus)

    genre_mod = genre_modifier(show.genre if show is not None else None, mods)

    return replace(
        base_result,
        attendance=math.floor(attendance * genre_mod),
        revenue=math.floor(revenue * genre_mod),
        reputation_gain=math.floor(reputation_gain * genre_mod),
        stress_gain=stress_gain,
        connections_gain=connections_gain,
        district_bonus=DistrictBonus(
            type=_as_type(district_type),
            description=district_bonus_description(district_type, genre_mod),
        ),
    )


def calculate_police_risk(
    venue: Optional[Venue],
    district_type: Any,
    base_risk: float,
    *,
    table: ModifierTable = DEFAULT_TABLE,
) -> float:
    mods = table.get(district_type)
    if mods is None:
        log.warning(
            f"UnknownDistrictType: {district_type!r}, police risk left at {base_risk}")
        return base_risk

    return clamp(base_risk * mods.police_risk_multiplier, PERCENT_MIN, PERCENT_MAX)


def calculate_venue_rent(
    base_rent: float,
    district_type: Any,
    *,
    table: ModifierTable = DEFAULT_TABLE,
) -> int:
    if base_rent < 0:
        log.warning(f"DefensiveClamp: negative base rent {base_rent}, using 0")
        return 0

    mods = table.get(district_type)
    if mods is None:
        log.warning(
            f"UnknownDistrictType: {district_type!r}, rent left at {base_rent}")
        return base_rent

    return max(0, math.floor(base_rent * mods.rent_multiplier))


def apply_gentrification(
    district: District,
    district_type: Any = None,
    *,
    table: ModifierTable = DEFAULT_TABLE,
) -> District:
    """
    Baseline drift for one turn. The level always rises by the district's rate;
    past GENTRIFICATION_THRESHOLD rent compounds, police creep in and the scene
    thins out.
    """
    if not is_valid_district(district):
        log.warning("Invalid district passed to apply_gentrification, normalizing")
        return normalize_district(district)

    if district_type is None:
        district_type = district.type
    mods = table.lookup(district_type)

    level = min(
        PERCENT_MAX,
        district.gentrification_level
        + mods.gentrification_rate * GENTRIFICATION_RATE_MULTIPLIER,
    )
    if level <= GENTRIFICATION_THRESHOLD:
        return replace(district, gentrification_level=level)

    return replace(
        district,
        gentrification_level=level,
        rent_multiplier=min(
            MAX_RENT_MULTIPLIER, district.rent_multiplier * RENT_INCREASE_RATE),
        police_presence=min(
            PERCENT_MAX, district.police_presence + POLICE_PRESENCE_INCREASE),
        scene_strength=max(
            PERCENT_MIN, district.scene_strength - SCENE_STRENGTH_DECREASE),
    )


def apply_district_event(district: District, event: DistrictEvent) -> District:
    """Apply a district event's deltas. rent_change is in percentage points (20 -> +0.20)."""
    if district is None and event is None:
        log.error("District and event are required for apply_district_event")
        raise ValidationError("district and event are required")
    if not is_valid_district(district) or event is None or event.effects is None:
        log.warning("Invalid district or event passed to apply_district_event")
        return district

    fx = event.effects
    return replace(
        district,
        gentrification_level=clamp(
            district.gentrification_level + fx.gentrification_change,
            PERCENT_MIN, PERCENT_MAX),
        scene_strength=clamp(
            district.scene_strength + fx.scene_strength_change,
            PERCENT_MIN, PERCENT_MAX),
        rent_multiplier=clamp(
            district.rent_multiplier + fx.rent_change / 100.0,
            RENT_MULTIPLIER_MIN, RENT_MULTIPLIER_MAX),
        police_presence=clamp(
            district.police_presence + fx.police_presence_change,
            PERCENT_MIN, PERCENT_MAX),
    )
