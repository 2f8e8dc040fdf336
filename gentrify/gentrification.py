# gentrify/gentrification.py
from __future__ import annotations

import logging
import random
from dataclasses import replace
from typing import Any, Iterable, List, Optional, Sequence

from gentrify.catalog import GENTRIFICATION_EVENTS
from gentrify.config import (
    CRITICAL_GENTRIFICATION,
    EVENT_TRIGGER_CHANCE,
    FORECAST_TURNS,
    GENTRIFICATION_MULTIPLIER,
    HEAVY_POLICE_PRESENCE,
    HIGH_ATTENDANCE_IMPACT,
    HIGH_ATTENDANCE_THRESHOLD,
    HIGH_RENT_MULTIPLIER,
    HIGH_REVENUE_IMPACT,
    HIGH_REVENUE_THRESHOLD,
    LOW_SCENE_STRENGTH,
    NEUTRAL_STABILITY,
    PERCENT_MAX,
    PERCENT_MIN,
    RENT_MULTIPLIER_MAX,
    RENT_MULTIPLIER_MIN,
    RISING_GENTRIFICATION,
    SUCCESS_SHOW_IMPACT,
)
from gentrify.district_utils import clamp, is_valid_district
from gentrify.errors import ValidationError
from gentrify.mechanics import apply_gentrification
from gentrify.modifiers import DEFAULT_TABLE, ModifierTable
from gentrify.models import (
    District,
    Forecast,
    GentrificationEvent,
    Show,
    ShowResult,
    TriggerConditions,
    TurnReport,
)

log = logging.getLogger("gentrify.gentrification")


def calculate_show_gentrification_impact(
    show: Show,
    result: ShowResult,
    district_type: Any,
    *,
    table: ModifierTable = DEFAULT_TABLE,
) -> float:
    """
    Pressure a single show puts on its district.

    Success, big crowds and big takings each add their own bump (they stack).
    The sum is scaled by the district's gentrification rate; for a district
    type with no modifiers the unscaled sum is returned.
    """
    if show is None or result is None:
        log.error("Show and result are required for gentrification calculation")
        raise ValidationError("show and result are required")

    impact = 0.0

    if result.success:
        impact += SUCCESS_SHOW_IMPACT
    if result.attendance > HIGH_ATTENDANCE_THRESHOLD:
        impact += HIGH_ATTENDANCE_IMPACT
    if result.revenue > HIGH_REVENUE_THRESHOLD:
        impact += HIGH_REVENUE_IMPACT

    mods = table.get(district_type)
    if mods is None:
        log.warning(
            f"UnknownDistrictType: {district_type!r}, show impact left unscaled")
        return impact

    return impact * mods.gentrification_rate * GENTRIFICATION_MULTIPLIER


def accumulate_show_impact(district: District, impact: float) -> District:
    return replace(
        district,
        gentrification_level=clamp(
            district.gentrification_level + impact, PERCENT_MIN, PERCENT_MAX),
    )


def meets_trigger_conditions(
    district: District,
    shows_in_district: int,
    conditions: TriggerConditions,
) -> bool:
    """Every specified condition must hold; unspecified ones are ignored. Bounds are inclusive."""
    c = conditions
    level = district.gentrification_level

    if c.min_gentrification_level is not None and level < c.min_gentrification_level:
        return False
    if c.max_gentrification_level is not None and level > c.max_gentrification_level:
        return False
    if c.min_scene_strength is not None and district.scene_strength < c.min_scene_strength:
        return False
    if c.min_shows_in_district is not None and shows_in_district < c.min_shows_in_district:
        return False
    # a district without a type is not filtered by type
    if (c.district_types is not None and district.type is not None
            and district.type not in c.district_types):
        return False
    return True


def check_gentrification_events(
    district: District,
    shows_in_district: int,
    *,
    rng: random.Random,
    catalog: Sequence[GentrificationEvent] = GENTRIFICATION_EVENTS,
    trigger_chance: float = EVENT_TRIGGER_CHANCE,
) -> Optional[GentrificationEvent]:
    """
    Find the first eligible catalog event and roll for it once.

    A failed roll ends the check for this call: later eligible events are not
    tried, so the first eligible event holds the turn's event slot.
    """
    for event in catalog:
        if not meets_trigger_conditions(district, shows_in_district, event.trigger_conditions):
            continue
        # TODO: decide whether a failed roll should fall through to the next eligible event
        if rng.random() < trigger_chance:
            return event
        return None
    return None


def apply_gentrification_event(
    district: District,
    event: GentrificationEvent,
) -> District:
    if district is None and event is None:
        log.error("District and event are required for apply_gentrification_event")
        raise ValidationError("district and event are required")

    if not is_valid_district(district):
        log.warning("Invalid district passed to apply_gentrification_event")
        return district
    if event is None or event.effects is None:
        log.warning("Invalid event passed to apply_gentrification_event")
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
            district.rent_multiplier + fx.rent_multiplier_change,
            RENT_MULTIPLIER_MIN, RENT_MULTIPLIER_MAX),
        police_presence=clamp(
            district.police_presence + fx.police_presence_change,
            PERCENT_MIN, PERCENT_MAX),
    )


def calculate_district_stability(district: District) -> float:
    """
    0..100. A strong scene and a police presence steady a district; the
    gentrification term is worst at level 50, the middle of the transition.
    """
    if not is_valid_district(district):
        log.warning("Invalid district passed to calculate_district_stability")
        return NEUTRAL_STABILITY

    scene_stability = district.scene_strength * 0.5
    instability = 50 - abs(district.gentrification_level - 50)
    police_stability = district.police_presence * 0.2

    return clamp(scene_stability - instability + police_stability,
                 PERCENT_MIN, PERCENT_MAX)


def get_district_warnings(district: District) -> List[str]:
    warnings: List[str] = []

    if district.gentrification_level > CRITICAL_GENTRIFICATION:
        warnings.append("⚠️ Critical gentrification levels - venues at risk!")
    elif district.gentrification_level > RISING_GENTRIFICATION:
        warnings.append("⚠️ Rising rents threatening the scene")

    if district.scene_strength < LOW_SCENE_STRENGTH:
        warnings.append("⚠️ Scene strength critically low")

    if district.police_presence > HEAVY_POLICE_PRESENCE:
        warnings.append("⚠️ Heavy police presence affecting shows")

    if district.rent_multiplier > HIGH_RENT_MULTIPLIER:
        warnings.append("⚠️ Venue costs doubled due to gentrification")

    return warnings


def predict_district_future(district: District, turns_ahead: int = FORECAST_TURNS) -> Forecast:
    """Straight-line projection from today's trends. Not a simulation."""
    gentrification_trend = 2 if district.gentrification_level > 50 else -1
    scene_trend = 1 if district.scene_strength > 50 else -2
    rent_trend = 0.05 if district.gentrification_level > 60 else 0

    return Forecast(
        gentrification_level=clamp(
            district.gentrification_level + gentrification_trend * turns_ahead,
            PERCENT_MIN, PERCENT_MAX),
        scene_strength=clamp(
            district.scene_strength + scene_trend * turns_ahead,
            PERCENT_MIN, PERCENT_MAX),
        rent_multiplier=clamp(
            district.rent_multiplier + rent_trend * turns_ahead,
            RENT_MULTIPLIER_MIN, RENT_MULTIPLIER_MAX),
    )


def evolve_district(
    district: District,
    show_impacts: Iterable[float],
    shows_in_district: int,
    *,
    rng: random.Random,
    table: ModifierTable = DEFAULT_TABLE,
    catalog: Sequence[GentrificationEvent] = GENTRIFICATION_EVENTS,
) -> TurnReport:
    """
    One turn for one district, in the required order:
      1) baseline drift
      2) this turn's show pressure
      3) one event roll against the post-drift state, applied if it hits
    """
    drifted = apply_gentrification(district, table=table)

    impact = float(sum(show_impacts))
    pressured = accumulate_show_impact(drifted, impact)

    event = check_gentrification_events(
        pressured, shows_in_district, rng=rng, catalog=catalog)
    if event is not None:
        log.info(f"District {pressured.id}: {event.name}")
        pressured = apply_gentrification_event(pressured, event)

    return TurnReport(
        district=pressured,
        impact=impact,
        event=event,
        warnings=tuple(get_district_warnings(pressured)),
        stability=calculate_district_stability(pressured),
    )
