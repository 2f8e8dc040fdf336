# gentrify/webapp.py
from __future__ import annotations

import logging
import random
import threading
import uuid
from dataclasses import asdict
from typing import Any, Dict, Optional

from fastapi import FastAPI, HTTPException
from pydantic import BaseModel

from gentrify.catalog import STARTING_DISTRICTS
from gentrify.errors import ValidationError
from gentrify.events import check_district_events
from gentrify.gentrification import (
    calculate_district_stability,
    calculate_show_gentrification_impact,
    evolve_district,
    get_district_warnings,
    predict_district_future,
)
from gentrify.mechanics import (
    apply_district_event,
    apply_district_modifiers,
    calculate_police_risk,
    calculate_venue_rent,
)
from gentrify.modifiers import DEFAULT_TABLE
from gentrify.models import (
    ActiveDistrictEvent,
    CityState,
    District,
    Show,
    ShowResult,
    Venue,
)

log = logging.getLogger("gentrify.webapp")

app = FastAPI(title="gentrify sandbox")

# In-memory sessions (sandbox only, nothing is persisted).
SESSIONS: Dict[str, CityState] = {}

# Held while a city is updated; sync endpoints run on threadpool workers.
_CITY_LOCK = threading.Lock()


class ShowIn(BaseModel):
    district_id: str
    genre: Optional[str] = None
    attendance: int
    revenue: int
    success: bool = False
    reputation_gain: Optional[float] = None
    stress_gain: Optional[float] = None
    connections_gain: Optional[float] = None
    base_risk: float = 0.0
    base_rent: int = 0


def new_city(seed: Optional[int] = None) -> CityState:
    return CityState(
        rng_seed=seed,
        turn=0,
        districts={d.id: d for d in STARTING_DISTRICTS},
    )


def get_rng(state: CityState) -> random.Random:
    # Stable per (seed, turn) when seeded so a replayed city replays the same rolls.
    seed = state.rng_seed if state.rng_seed is not None else random.randrange(
        1_000_000_000)
    return random.Random(seed + state.turn * 10007)


def _get_state(sid: str) -> CityState:
    state = SESSIONS.get(sid)
    if state is None:
        raise HTTPException(status_code=404, detail=f"Unknown city: {sid}")
    return state


def _get_district(state: CityState, district_id: str) -> District:
    district = state.districts.get(district_id)
    if district is None:
        raise HTTPException(status_code=404, detail=f"Unknown district: {district_id}")
    return district


def district_view(district: District) -> Dict[str, Any]:
    return {
        **asdict(district),
        "stability": calculate_district_stability(district),
        "warnings": get_district_warnings(district),
        "forecast": asdict(predict_district_future(district)),
    }


def city_view(sid: str, state: CityState) -> Dict[str, Any]:
    return {
        "id": sid,
        "turn": state.turn,
        "districts": [district_view(d) for d in state.districts.values()],
        "shows_in_district": state.shows_in_district,
        "active_events": [
            {"district_id": a.district_id, "event": a.event.id, "turns_left": a.turns_left}
            for a in state.active_events
        ],
    }


@app.get("/modifiers")
def modifiers():
    return {t.value: asdict(m) for t, m in DEFAULT_TABLE.items()}


@app.post("/city")
def create_city(seed: Optional[int] = None):
    sid = str(uuid.uuid4())
    SESSIONS[sid] = new_city(seed=seed)
    log.info(f"Created city {sid} (seed={seed})")
    return city_view(sid, SESSIONS[sid])


@app.get("/city/{sid}")
def get_city(sid: str):
    return city_view(sid, _get_state(sid))


@app.post("/city/{sid}/show")
def play_show(sid: str, body: ShowIn):
    state = _get_state(sid)
    district = _get_district(state, body.district_id)

    show = Show(id=str(uuid.uuid4()), genre=body.genre)
    venue = Venue(rent=body.base_rent)
    base = ShowResult(
        show_id=show.id,
        attendance=body.attendance,
        revenue=body.revenue,
        success=body.success,
        reputation_gain=body.reputation_gain,
        stress_gain=body.stress_gain,
        connections_gain=body.connections_gain,
    )

    try:
        result = apply_district_modifiers(show, venue, base, district.type)
        impact = calculate_show_gentrification_impact(show, result, district.type)
    except ValidationError as e:
        raise HTTPException(status_code=422, detail=str(e)) from e

    with _CITY_LOCK:
        state.pending_impacts.setdefault(district.id, []).append(impact)
        state.shows_in_district[district.id] = state.shows_in_district.get(district.id, 0) + 1

    return {
        "result": asdict(result),
        "police_risk": calculate_police_risk(venue, district.type, body.base_risk),
        "rent": calculate_venue_rent(body.base_rent, district.type),
        "impact": impact,
    }


@app.post("/city/{sid}/advance")
def advance_turn(sid: str):
    state = _get_state(sid)
    with _CITY_LOCK:
        return _advance(sid, state)


def _advance(sid: str, state: CityState) -> Dict[str, Any]:
    rng = get_rng(state)

    # Expire district events that have run their course
    still_active = []
    for active in state.active_events:
        active.turns_left -= 1
        if active.turns_left > 0:
            still_active.append(active)
    state.active_events = still_active
    busy = {a.district_id for a in state.active_events}

    triggered = []
    for district_id, district in list(state.districts.items()):
        report = evolve_district(
            district,
            state.pending_impacts.get(district_id, []),
            state.shows_in_district.get(district_id, 0),
            rng=rng,
        )
        district = report.district

        if district_id not in busy and district.type is not None:
            event = check_district_events(district.type, state.turn, rng=rng)
            if event is not None:
                district = apply_district_event(district, event)
                state.active_events.append(
                    ActiveDistrictEvent(event=event, district_id=district_id,
                                        turns_left=event.duration))
                triggered.append({"district_id": district_id, "event": event.id})

        if report.event is not None:
            triggered.append({"district_id": district_id, "event": report.event.id})

        state.districts[district_id] = district
        state.last_reports[district_id] = report

    state.pending_impacts = {}
    state.turn += 1

    return {**city_view(sid, state), "triggered": triggered}
