from gentrify.district_utils import (
    get_district_type,
    is_district_type,
    is_valid_district,
    normalize_district,
)
from gentrify.models import Bounds, DistrictType


def test_get_district_type_aliases():
    assert get_district_type("Underground") == DistrictType.WAREHOUSE
    assert get_district_type("  suburbs ") == DistrictType.RESIDENTIAL
    assert get_district_type("ARTS") == DistrictType.ARTS
    assert get_district_type("college") == DistrictType.COLLEGE


def test_get_district_type_defaults_to_downtown(caplog):
    assert get_district_type("atlantis") == DistrictType.DOWNTOWN
    assert "Unknown district type" in caplog.text


def test_is_district_type():
    assert is_district_type(DistrictType.ARTS)
    assert is_district_type("warehouse")
    assert not is_district_type("WAREHOUSE")
    assert not is_district_type({"type": "arts"})


def test_is_valid_district(make_district):
    assert is_valid_district(make_district())
    assert not is_valid_district(None)
    assert not is_valid_district(make_district(scene_strength="lots"))
    assert not is_valid_district(make_district(rent_multiplier=True))
    assert not is_valid_district({"id": "x"})


def test_normalize_fills_defaults():
    d = normalize_district({})
    assert d.id == "unknown"
    assert d.name == "Unknown District"
    assert (d.scene_strength, d.gentrification_level, d.police_presence, d.rent_multiplier) == (50, 0, 20, 1)
    assert d.bounds == Bounds()
    assert d.type is None


def test_normalize_clamps():
    d = normalize_district({
        "id": "x", "name": "X", "type": "industrial",
        "scene_strength": 400, "gentrification_level": -3,
        "police_presence": 101, "rent_multiplier": 9,
        "bounds": {"x": 1, "y": 2, "width": 3, "height": 4},
    })
    assert d.type == DistrictType.WAREHOUSE
    assert d.scene_strength == 100
    assert d.gentrification_level == 0
    assert d.police_presence == 100
    assert d.rent_multiplier == 3.0
    assert d.bounds == Bounds(1, 2, 3, 4)


def test_normalize_keeps_zero_values():
    d = normalize_district({
        "id": "x", "name": "X",
        "scene_strength": 0, "police_presence": 0, "gentrification_level": 0,
    })
    assert d.scene_strength == 0
    assert d.police_presence == 0
    assert d.gentrification_level == 0


def test_normalize_zero_rent_is_clamped_not_defaulted():
    assert normalize_district({"rent_multiplier": 0}).rent_multiplier == 0.5
