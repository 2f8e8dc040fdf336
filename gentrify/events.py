# gentrify/events.py
from __future__ import annotations

import random
from typing import Any, List, Optional, Sequence

from gentrify.catalog import DISTRICT_EVENTS
from gentrify.models import DistrictEvent


def events_for_district(
    district_type: Any,
    catalog: Sequence[DistrictEvent] = DISTRICT_EVENTS,
) -> List[DistrictEvent]:
    """Catalog rows scoped to `district_type`, in declaration order."""
    return [e for e in catalog if e.district_type == district_type]


def check_district_events(
    district_type: Any,
    current_turn: int,
    *,
    rng: random.Random,
    catalog: Sequence[DistrictEvent] = DISTRICT_EVENTS,
) -> Optional[DistrictEvent]:
    """
    Roll each candidate once at its own probability and return the first hit.

    `current_turn` is not used for the decision. Nothing here tracks active
    events: callers that don't want the same event every turn must remember
    what is running and for how long (see DistrictEvent.duration).
    """
    for event in events_for_district(district_type, catalog):
        if rng.random() < event.probability:
            return event
    return None
