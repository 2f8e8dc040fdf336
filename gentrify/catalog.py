# gentrify/catalog.py
from __future__ import annotations

import json
import logging
from typing import Any, Dict, Optional, Tuple

from gentrify.errors import ValidationError
from gentrify.models import (
    Bounds,
    District,
    DistrictEvent,
    DistrictEventEffects,
    DistrictType,
    GentrificationEffects,
    GentrificationEvent,
    TriggerConditions,
)

log = logging.getLogger("gentrify.catalog")

# Declaration order is the tie-break: earlier rows win.
DISTRICT_EVENTS: Tuple[DistrictEvent, ...] = (
    DistrictEvent(
        id="police_crackdown",
        name="Police Crackdown",
        description="Increased police presence after noise complaints",
        district_type=DistrictType.WAREHOUSE,
        probability=0.2,
        effects=DistrictEventEffects(
            police_presence_change=30, scene_strength_change=-10),
        duration=3,
    ),
    DistrictEvent(
        id="art_walk",
        name="Monthly Art Walk",
        description="The arts district hosts its monthly event",
        district_type=DistrictType.ARTS,
        probability=0.3,
        effects=DistrictEventEffects(
            scene_strength_change=10, gentrification_change=5),
        duration=1,
    ),
    DistrictEvent(
        id="student_break",
        name="Student Break",
        description="College students are on break",
        district_type=DistrictType.COLLEGE,
        probability=0.25,
        effects=DistrictEventEffects(scene_strength_change=-20),
        duration=2,
    ),
    DistrictEvent(
        id="developer_interest",
        name="Developer Interest",
        description="Real estate developers eye the neighborhood",
        district_type=DistrictType.WAREHOUSE,
        probability=0.15,
        effects=DistrictEventEffects(rent_change=20, gentrification_change=15),
        duration=4,
    ),
    DistrictEvent(
        id="neighborhood_meeting",
        name="Neighborhood Meeting",
        description="Residents organize against noise",
        district_type=DistrictType.RESIDENTIAL,
        probability=0.3,
        effects=DistrictEventEffects(
            police_presence_change=20, scene_strength_change=-5),
        duration=2,
    ),
)


GENTRIFICATION_EVENTS: Tuple[GentrificationEvent, ...] = (
    GentrificationEvent(
        id="coffee_shop_invasion",
        name="Coffee Shop Invasion",
        description="Artisanal coffee shops start opening in the neighborhood",
        trigger_conditions=TriggerConditions(
            min_gentrification_level=30,
            max_gentrification_level=60,
            district_types=frozenset({DistrictType.WAREHOUSE, DistrictType.ARTS}),
        ),
        effects=GentrificationEffects(
            gentrification_change=10,
            scene_strength_change=-5,
            rent_multiplier_change=0.1,
            police_presence_change=-5,
        ),
        duration=3,
        is_positive=False,
    ),
    GentrificationEvent(
        id="developer_buyout",
        name="Developer Buyout",
        description="Real estate developers buy up multiple buildings",
        trigger_conditions=TriggerConditions(
            min_gentrification_level=60,
            district_types=frozenset({DistrictType.WAREHOUSE}),
        ),
        effects=GentrificationEffects(
            gentrification_change=20,
            scene_strength_change=-15,
            rent_multiplier_change=0.3,
            police_presence_change=0,
        ),
        duration=5,
        is_positive=False,
    ),
    GentrificationEvent(
        id="underground_resistance",
        name="Underground Resistance",
        description="The scene fights back against gentrification",
        trigger_conditions=TriggerConditions(
            min_scene_strength=70,
            min_shows_in_district=20,
            max_gentrification_level=50,
        ),
        effects=GentrificationEffects(
            gentrification_change=-15,
            scene_strength_change=10,
            rent_multiplier_change=-0.1,
            police_presence_change=10,
        ),
        duration=4,
        is_positive=True,
    ),
    GentrificationEvent(
        id="noise_complaints",
        name="Noise Complaints",
        description="New residents complain about venue noise",
        trigger_conditions=TriggerConditions(
            min_gentrification_level=50,
            district_types=frozenset({DistrictType.RESIDENTIAL, DistrictType.DOWNTOWN}),
        ),
        effects=GentrificationEffects(
            gentrification_change=5,
            scene_strength_change=-10,
            rent_multiplier_change=0,
            police_presence_change=20,
        ),
        duration=2,
        is_positive=False,
    ),
    GentrificationEvent(
        id="arts_grant",
        name="Arts Grant",
        description="City provides arts funding to the district",
        trigger_conditions=TriggerConditions(
            min_scene_strength=60,
            district_types=frozenset({DistrictType.ARTS}),
        ),
        effects=GentrificationEffects(
            gentrification_change=-5,
            scene_strength_change=15,
            rent_multiplier_change=-0.2,
            police_presence_change=-10,
        ),
        duration=6,
        is_positive=True,
    ),
    GentrificationEvent(
        id="venue_closure_wave",
        name="Venue Closure Wave",
        description="Rising rents force multiple venues to close",
        trigger_conditions=TriggerConditions(min_gentrification_level=80),
        effects=GentrificationEffects(
            gentrification_change=10,
            scene_strength_change=-25,
            rent_multiplier_change=0.2,
            police_presence_change=-10,
        ),
        duration=3,
        is_positive=False,
    ),
    GentrificationEvent(
        id="squatter_movement",
        name="Squatter Movement",
        description="Activists occupy abandoned buildings",
        trigger_conditions=TriggerConditions(
            min_scene_strength=50,
            max_gentrification_level=40,
            district_types=frozenset({DistrictType.WAREHOUSE, DistrictType.RESIDENTIAL}),
        ),
        effects=GentrificationEffects(
            gentrification_change=-20,
            scene_strength_change=20,
            rent_multiplier_change=-0.3,
            police_presence_change=30,
        ),
        duration=5,
        is_positive=True,
    ),
)


# --- JSON packs ---
# A pack is a list of rows shaped like the built-ins, with camelCase or
# snake_case keys, e.g.
#   [{"id": "block_party", "districtType": "residential", "probability": 0.1,
#     "effects": {"sceneStrengthChange": 5}, "duration": 1}]

def _get(raw: Dict[str, Any], snake: str, camel: str, default: Any = None) -> Any:
    if snake in raw:
        return raw[snake]
    return raw.get(camel, default)


def _optional_float(x: Any) -> Optional[float]:
    return float(x) if x is not None else None


def _row_id(raw: Dict[str, Any]) -> str:
    row_id = raw.get("id")
    if not row_id:
        log.error(f"Catalog row without an id: {raw!r}")
        raise ValidationError("catalog row is missing its id")
    return row_id


def _district_type(value: Any, row_id: str) -> DistrictType:
    try:
        return DistrictType(value)
    except (ValueError, TypeError):
        log.error(f"Catalog row {row_id}: unknown district type {value!r}")
        raise ValidationError(f"unknown district type {value!r} in {row_id}") from None


def _probability(value: Any, row_id: str) -> float:
    p = float(value)
    if not 0.0 <= p <= 1.0:
        log.error(f"Catalog row {row_id}: probability {p} outside 0..1")
        raise ValidationError(f"probability {p} outside 0..1 in {row_id}")
    return p


def district_event_from_dict(raw: Dict[str, Any]) -> DistrictEvent:
    row_id = _row_id(raw)
    fx = raw.get("effects", {})
    return DistrictEvent(
        id=row_id,
        name=raw.get("name", row_id),
        description=raw.get("description", ""),
        district_type=_district_type(
            _get(raw, "district_type", "districtType"), row_id),
        probability=_probability(raw.get("probability", 0.0), row_id),
        effects=DistrictEventEffects(
            rent_change=float(_get(fx, "rent_change", "rentChange", 0)),
            police_presence_change=float(
                _get(fx, "police_presence_change", "policePresenceChange", 0)),
            scene_strength_change=float(
                _get(fx, "scene_strength_change", "sceneStrengthChange", 0)),
            gentrification_change=float(
                _get(fx, "gentrification_change", "gentrificationChange", 0)),
        ),
        duration=int(raw.get("duration", 1)),
    )


def gentrification_event_from_dict(raw: Dict[str, Any]) -> GentrificationEvent:
    row_id = _row_id(raw)
    tc = _get(raw, "trigger_conditions", "triggerConditions", {})
    fx = raw.get("effects", {})

    types = _get(tc, "district_types", "districtTypes")
    min_shows = _get(tc, "min_shows_in_district", "minShowsInDistrict")

    return GentrificationEvent(
        id=row_id,
        name=raw.get("name", row_id),
        description=raw.get("description", ""),
        trigger_conditions=TriggerConditions(
            min_gentrification_level=_optional_float(
                _get(tc, "min_gentrification_level", "minGentrificationLevel")),
            max_gentrification_level=_optional_float(
                _get(tc, "max_gentrification_level", "maxGentrificationLevel")),
            min_scene_strength=_optional_float(
                _get(tc, "min_scene_strength", "minSceneStrength")),
            min_shows_in_district=int(min_shows) if min_shows is not None else None,
            district_types=(
                frozenset(_district_type(t, row_id) for t in types)
                if types is not None else None
            ),
        ),
        effects=GentrificationEffects(
            gentrification_change=float(
                _get(fx, "gentrification_change", "gentrificationChange", 0)),
            scene_strength_change=float(
                _get(fx, "scene_strength_change", "sceneStrengthChange", 0)),
            rent_multiplier_change=float(
                _get(fx, "rent_multiplier_change", "rentMultiplierChange", 0)),
            police_presence_change=float(
                _get(fx, "police_presence_change", "policePresenceChange", 0)),
        ),
        duration=int(raw.get("duration", 1)),
        is_positive=bool(_get(raw, "is_positive", "isPositive", False)),
    )


def load_district_events(path: str) -> Tuple[DistrictEvent, ...]:
    with open(path, "r", encoding="utf-8") as f:
        raw = json.load(f)
    return tuple(district_event_from_dict(row) for row in raw)


def load_gentrification_events(path: str) -> Tuple[GentrificationEvent, ...]:
    with open(path, "r", encoding="utf-8") as f:
        raw = json.load(f)
    return tuple(gentrification_event_from_dict(row) for row in raw)


# Districts a fresh city starts with.
STARTING_DISTRICTS: Tuple[District, ...] = (
    District(
        id="underground",
        name="Underground",
        type=DistrictType.WAREHOUSE,
        scene_strength=80,
        gentrification_level=20,
        police_presence=30,
        rent_multiplier=1.0,
        bounds=Bounds(x=0, y=0, width=10, height=10),
        color="#FF0000",
    ),
    District(
        id="industrial",
        name="Industrial",
        type=DistrictType.WAREHOUSE,
        scene_strength=70,
        gentrification_level=30,
        police_presence=40,
        rent_multiplier=1.2,
        bounds=Bounds(x=10, y=0, width=10, height=10),
        color="#FFA500",
    ),
    District(
        id="downtown",
        name="Downtown",
        type=DistrictType.DOWNTOWN,
        scene_strength=60,
        gentrification_level=60,
        police_presence=60,
        rent_multiplier=2.0,
        bounds=Bounds(x=5, y=5, width=10, height=10),
        color="#0000FF",
    ),
    District(
        id="suburbs",
        name="Suburbs",
        type=DistrictType.RESIDENTIAL,
        scene_strength=40,
        gentrification_level=80,
        police_presence=80,
        rent_multiplier=1.5,
        bounds=Bounds(x=0, y=10, width=10, height=10),
        color="#00FF00",
    ),
    District(
        id="gallery_row",
        name="Gallery Row",
        type=DistrictType.ARTS,
        scene_strength=65,
        gentrification_level=40,
        police_presence=25,
        rent_multiplier=1.1,
        bounds=Bounds(x=10, y=10, width=10, height=10),
        color="#AA00FF",
    ),
)
