import math
from dataclasses import replace

import pytest

from gentrify.config import GENRE_MATCH_BONUS, GENRE_MISMATCH_PENALTY, GENRE_NEUTRAL
from gentrify.errors import ValidationError
from gentrify.mechanics import (
    apply_district_modifiers,
    calculate_police_risk,
    calculate_venue_rent,
    genre_modifier,
)
from gentrify.modifiers import (
    DEFAULT_TABLE,
    DISTRICT_MODIFIERS,
    NEUTRAL_MODIFIERS,
    ModifierTable,
)
from gentrify.models import DistrictType, Show, ShowResult, Venue


GENRES = ["PUNK", "HARDCORE", "NOISE", "EXPERIMENTAL", "INDIE", "GRUNGE", "METAL", "POLKA"]


def base(**kw):
    values = dict(attendance=100, revenue=200, success=True,
                  reputation_gain=5, stress_gain=10, connections_gain=10)
    values.update(kw)
    return ShowResult(**values)


@pytest.mark.parametrize("district_type", list(DistrictType))
def test_every_type_has_a_sane_bundle(district_type):
    mods = DEFAULT_TABLE.lookup(district_type)
    assert mods.audience_multiplier > 0
    assert not (mods.preferred_genres & mods.discouraged_genres)


def test_table_is_exhaustive():
    assert DEFAULT_TABLE.missing_types() == []
    assert len(DEFAULT_TABLE) == len(DistrictType)


def test_lookup_accepts_enum_values():
    assert DEFAULT_TABLE.lookup("warehouse") is DISTRICT_MODIFIERS[DistrictType.WAREHOUSE]


def test_missing_entry_falls_back_to_neutral(caplog):
    table = ModifierTable({DistrictType.ARTS: DISTRICT_MODIFIERS[DistrictType.ARTS]})
    assert table.lookup(DistrictType.WAREHOUSE) is NEUTRAL_MODIFIERS
    assert "UnknownDistrictType" in caplog.text
    assert table.missing_types() == [
        DistrictType.WAREHOUSE, DistrictType.DOWNTOWN,
        DistrictType.COLLEGE, DistrictType.RESIDENTIAL,
    ]


def test_neutral_genre_downtown():
    result = apply_district_modifiers(Show(genre="METAL"), Venue(), base(), DistrictType.DOWNTOWN)
    assert result.attendance == 150
    assert result.revenue == 260
    assert result.reputation_gain == -5
    assert result.stress_gain == 20
    assert result.connections_gain == 15
    assert result.district_bonus.type == DistrictType.DOWNTOWN
    assert result.district_bonus.description == "Downtown: High visibility, high costs"


def test_genre_bonus_skips_stress_and_connections():
    mods = DISTRICT_MODIFIERS[DistrictType.WAREHOUSE]
    result = apply_district_modifiers(Show(genre="PUNK"), Venue(), base(), DistrictType.WAREHOUSE)

    assert result.attendance == math.floor(math.floor(100 * mods.audience_multiplier) * GENRE_MATCH_BONUS)
    assert result.revenue == math.floor(math.floor(200 * mods.revenue_multiplier) * GENRE_MATCH_BONUS)
    assert result.reputation_gain == math.floor((5 + mods.authenticity_bonus) * GENRE_MATCH_BONUS)
    # untouched by genre
    assert result.stress_gain == 5
    assert result.connections_gain == 13
    assert result.district_bonus.description.endswith("(Genre match!)")


def test_genre_penalty_and_stress_floor():
    result = apply_district_modifiers(
        Show(genre="INDIE"), Venue(), base(stress_gain=2), DistrictType.WAREHOUSE)
    assert result.stress_gain == 0
    assert result.district_bonus.description.endswith("(Genre mismatch)")


def test_optional_gains_default_to_zero():
    result = apply_district_modifiers(
        Show(genre=None), Venue(),
        ShowResult(attendance=10, revenue=10), DistrictType.ARTS)
    assert result.reputation_gain == 10
    assert result.stress_gain == 0
    assert result.connections_gain == 0


def test_inputs_are_not_mutated():
    original = base()
    apply_district_modifiers(Show(genre="PUNK"), Venue(), original, DistrictType.WAREHOUSE)
    assert original == base()


def test_missing_base_result_raises():
    with pytest.raises(ValidationError):
        apply_district_modifiers(Show(genre="PUNK"), Venue(), None, DistrictType.WAREHOUSE)


def test_unknown_type_degrades_to_neutral(caplog):
    result = apply_district_modifiers(Show(genre="PUNK"), Venue(), base(), "suburbia")
    assert (result.attendance, result.revenue) == (100, 200)
    assert (result.reputation_gain, result.stress_gain, result.connections_gain) == (5, 10, 10)
    assert result.district_bonus.type is None
    assert "UnknownDistrictType" in caplog.text


@pytest.mark.parametrize("district_type", list(DistrictType))
def test_adjusted_counts_stay_non_negative(district_type):
    for attendance in (0, 1, 7, 99, 1000):
        for genre in GENRES:
            r = apply_district_modifiers(
                Show(genre=genre), Venue(),
                ShowResult(attendance=attendance, revenue=attendance * 3), district_type)
            assert r.attendance >= 0
            assert r.revenue >= 0


@pytest.mark.parametrize("district_type", list(DistrictType))
def test_genre_modifier_is_never_blended(district_type):
    mods = DEFAULT_TABLE.lookup(district_type)
    for genre in GENRES:
        assert genre_modifier(genre, mods) in (GENRE_MATCH_BONUS, GENRE_MISMATCH_PENALTY, GENRE_NEUTRAL)


def test_preferred_wins_when_sets_overlap():
    mods = replace(
        NEUTRAL_MODIFIERS,
        preferred_genres=frozenset({"PUNK"}),
        discouraged_genres=frozenset({"PUNK"}),
    )
    assert genre_modifier("PUNK", mods) == GENRE_MATCH_BONUS


def test_police_risk_is_clamped():
    assert calculate_police_risk(Venue(), DistrictType.WAREHOUSE, 1000) == 100
    assert calculate_police_risk(Venue(), DistrictType.WAREHOUSE, 20) == pytest.approx(30)
    assert calculate_police_risk(Venue(), DistrictType.DOWNTOWN, -10) == 0


def test_police_risk_unknown_type_is_unchanged(caplog):
    assert calculate_police_risk(Venue(), "moon", 250) == 250
    assert "UnknownDistrictType" in caplog.text


def test_venue_rent():
    assert calculate_venue_rent(100, DistrictType.DOWNTOWN) == 150
    assert calculate_venue_rent(100, DistrictType.RESIDENTIAL) == 50


@pytest.mark.parametrize("district_type", list(DistrictType) + ["moon"])
def test_negative_rent_is_zeroed(district_type, caplog):
    assert calculate_venue_rent(-5, district_type) == 0
    assert "DefensiveClamp" in caplog.text


def test_rent_unknown_type_is_unchanged():
    assert calculate_venue_rent(123, "moon") == 123
