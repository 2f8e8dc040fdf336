# gentrify/modifiers.py
from __future__ import annotations

import logging
from types import MappingProxyType
from typing import Any, List, Mapping, Optional

from gentrify.models import DistrictModifiers, DistrictType

log = logging.getLogger("gentrify.modifiers")


# Identity bundle used when a district type has no entry.
NEUTRAL_MODIFIERS = DistrictModifiers(
    audience_multiplier=1.0,
    revenue_multiplier=1.0,
    authenticity_bonus=0,
    stress_modifier=0,
    rent_multiplier=1.0,
    police_risk_multiplier=1.0,
    preferred_genres=frozenset(),
    discouraged_genres=frozenset(),
    networking_bonus=1.0,
    gentrification_rate=0.0,
)


DISTRICT_MODIFIERS: Mapping[DistrictType, DistrictModifiers] = MappingProxyType({
    DistrictType.WAREHOUSE: DistrictModifiers(
        audience_multiplier=1.2,
        revenue_multiplier=0.9,
        authenticity_bonus=15,
        stress_modifier=-5,
        rent_multiplier=0.7,
        police_risk_multiplier=1.5,
        preferred_genres=frozenset({"PUNK", "HARDCORE", "NOISE", "EXPERIMENTAL"}),
        discouraged_genres=frozenset({"INDIE"}),
        networking_bonus=1.3,
        gentrification_rate=0.02,
    ),
    DistrictType.DOWNTOWN: DistrictModifiers(
        audience_multiplier=1.5,
        revenue_multiplier=1.3,
        authenticity_bonus=-10,
        stress_modifier=10,
        rent_multiplier=1.5,
        police_risk_multiplier=0.5,
        preferred_genres=frozenset({"INDIE", "GRUNGE"}),
        discouraged_genres=frozenset({"PUNK", "HARDCORE"}),
        networking_bonus=1.5,
        gentrification_rate=0.05,
    ),
    DistrictType.COLLEGE: DistrictModifiers(
        audience_multiplier=1.3,
        revenue_multiplier=0.8,
        authenticity_bonus=5,
        stress_modifier=-10,
        rent_multiplier=0.9,
        police_risk_multiplier=0.7,
        preferred_genres=frozenset({"INDIE", "EXPERIMENTAL", "PUNK"}),
        discouraged_genres=frozenset({"METAL"}),
        networking_bonus=1.2,
        gentrification_rate=0.01,
    ),
    DistrictType.RESIDENTIAL: DistrictModifiers(
        audience_multiplier=0.8,
        revenue_multiplier=0.7,
        authenticity_bonus=20,
        stress_modifier=-15,
        rent_multiplier=0.5,
        police_risk_multiplier=2.0,
        preferred_genres=frozenset({"PUNK", "HARDCORE", "GRUNGE"}),
        discouraged_genres=frozenset({"METAL", "NOISE"}),
        networking_bonus=0.8,
        gentrification_rate=0.03,
    ),
    DistrictType.ARTS: DistrictModifiers(
        audience_multiplier=1.1,
        revenue_multiplier=1.0,
        authenticity_bonus=10,
        stress_modifier=0,
        rent_multiplier=1.1,
        police_risk_multiplier=0.8,
        preferred_genres=frozenset({"EXPERIMENTAL", "NOISE", "INDIE"}),
        discouraged_genres=frozenset({"HARDCORE"}),
        networking_bonus=1.4,
        gentrification_rate=0.04,
    ),
})


class ModifierTable:
    """Read-only lookup of modifier bundles by district type."""

    def __init__(self, entries: Mapping[Any, DistrictModifiers]):
        self._entries = MappingProxyType(dict(entries))

    def get(self, district_type: Any) -> Optional[DistrictModifiers]:
        """Entry for `district_type`, or None. Does not log."""
        try:
            return self._entries.get(district_type)
        except TypeError:
            # unhashable garbage from a caller
            return None

    def lookup(self, district_type: Any) -> DistrictModifiers:
        """Entry for `district_type`; the neutral bundle (with a warning) if missing."""
        mods = self.get(district_type)
        if mods is None:
            log.warning(
                f"UnknownDistrictType: no modifiers for {district_type!r}, using neutral bundle")
            return NEUTRAL_MODIFIERS
        return mods

    def missing_types(self) -> List[DistrictType]:
        return [t for t in DistrictType if t not in self._entries]

    def items(self):
        return self._entries.items()

    def __len__(self) -> int:
        return len(self._entries)


DEFAULT_TABLE = ModifierTable(DISTRICT_MODIFIERS)
