# gentrify/models.py
from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, FrozenSet, List, Optional, Tuple


class DistrictType(str, Enum):
    """The closed set of district archetypes."""
    WAREHOUSE = "warehouse"
    DOWNTOWN = "downtown"
    COLLEGE = "college"
    RESIDENTIAL = "residential"
    ARTS = "arts"


@dataclass(frozen=True)
class DistrictModifiers:
    """How a district archetype bends the shows played in it."""
    # Show performance
    audience_multiplier: float
    revenue_multiplier: float
    authenticity_bonus: float
    stress_modifier: float

    # Venue operation
    rent_multiplier: float
    police_risk_multiplier: float

    # Band compatibility (disjoint sets)
    preferred_genres: FrozenSet[str]
    discouraged_genres: FrozenSet[str]

    networking_bonus: float
    gentrification_rate: float


@dataclass(frozen=True)
class Bounds:
    """Grid bounds. Owned by the map; passed through untouched."""
    x: int = 0
    y: int = 0
    width: int = 100
    height: int = 100


@dataclass(frozen=True)
class District:
    """
    Per-run district state. Values are replaced, never mutated:
      scene_strength, gentrification_level, police_presence are 0..100
      rent_multiplier is 0.5..3.0
    """
    id: str
    name: str
    scene_strength: float
    gentrification_level: float
    police_presence: float
    rent_multiplier: float
    type: Optional[DistrictType] = None
    bounds: Bounds = field(default_factory=Bounds)
    color: str = "#666666"


@dataclass(frozen=True)
class Show:
    id: str = ""
    genre: Optional[str] = None


@dataclass(frozen=True)
class Venue:
    id: str = ""
    name: str = ""
    rent: int = 0


@dataclass(frozen=True)
class DistrictBonus:
    """Display-only description of the district's effect on a show."""
    type: Optional[DistrictType]
    description: str


@dataclass(frozen=True)
class ShowResult:
    attendance: int
    revenue: int
    success: bool = False
    show_id: str = ""
    reputation_gain: Optional[float] = None
    stress_gain: Optional[float] = None
    connections_gain: Optional[float] = None
    district_bonus: Optional[DistrictBonus] = None


@dataclass(frozen=True)
class DistrictEventEffects:
    rent_change: float = 0.0            # percentage points of the rent multiplier
    police_presence_change: float = 0.0
    scene_strength_change: float = 0.0
    gentrification_change: float = 0.0


@dataclass(frozen=True)
class DistrictEvent:
    """Short-lived district occurrence. `duration` is advisory for the caller."""
    id: str
    name: str
    description: str
    district_type: DistrictType
    probability: float
    effects: DistrictEventEffects
    duration: int


@dataclass(frozen=True)
class TriggerConditions:
    """All fields optional; None means unconstrained. Specified fields are ANDed."""
    min_gentrification_level: Optional[float] = None
    max_gentrification_level: Optional[float] = None
    min_scene_strength: Optional[float] = None
    min_shows_in_district: Optional[int] = None
    district_types: Optional[FrozenSet[DistrictType]] = None


@dataclass(frozen=True)
class GentrificationEffects:
    gentrification_change: float = 0.0
    scene_strength_change: float = 0.0
    rent_multiplier_change: float = 0.0
    police_presence_change: float = 0.0


@dataclass(frozen=True)
class GentrificationEvent:
    id: str
    name: str
    description: str
    trigger_conditions: TriggerConditions
    effects: Optional[GentrificationEffects]
    duration: int
    is_positive: bool  # for the player


@dataclass(frozen=True)
class Forecast:
    gentrification_level: float
    scene_strength: float
    rent_multiplier: float


@dataclass(frozen=True)
class TurnReport:
    """What one evolve_district() call produced."""
    district: District
    impact: float
    event: Optional[GentrificationEvent]
    warnings: Tuple[str, ...]
    stability: float


@dataclass
class ActiveDistrictEvent:
    event: DistrictEvent
    district_id: str
    turns_left: int


@dataclass
class CityState:
    """
    Sandbox city. A data bag like the game store: the engine never sees it,
    only the District values inside.
    """
    rng_seed: Optional[int]
    turn: int
    districts: Dict[str, District]

    # Pressure recorded by shows since the last turn advance
    pending_impacts: Dict[str, List[float]] = field(default_factory=dict)
    shows_in_district: Dict[str, int] = field(default_factory=dict)

    # District events still running; the sandbox does the expiry
    active_events: List[ActiveDistrictEvent] = field(default_factory=list)
    last_reports: Dict[str, TurnReport] = field(default_factory=dict)
