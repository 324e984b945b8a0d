import pytest

from geoenrich.common.errors import ConfigError
from geoenrich.common.keys import policy_for, resolve_display_name, resolve_feature_id, resolve_join_key


def test_district_key_prefers_composite_code():
    props = {"code_state_district": "1_1", "code": "1"}
    assert resolve_join_key("district", props) == "1_1"
    assert resolve_join_key("district", {"code": "7"}) == "7"


def test_parliament_key_candidates():
    assert resolve_join_key("parliament", {"code_parlimen": "P.001", "code": "1"}) == "P.001"
    assert resolve_join_key("parliament", {"code_parlimen": "", "code": "1"}) == "1"


def test_dun_key_candidates_in_order():
    assert resolve_join_key("dun", {"code_state_dun": "9_N.01", "code_dun": "N.01"}) == "9_N.01"
    assert resolve_join_key("dun", {"code_dun": "N.01", "code": "1"}) == "N.01"
    assert resolve_join_key("dun", {"code": 12}) == "12"


def test_missing_key_resolves_empty():
    assert resolve_join_key("dun", {"name": "x"}) == ""


def test_display_name_and_id_chains():
    assert resolve_display_name("parliament", {"parlimen": "Kangar", "name": "other"}) == "Kangar"
    assert resolve_display_name("dun", {"name": "Titi Tinggi"}) == "Titi Tinggi"
    assert resolve_display_name("district", {}) == "Unknown"
    assert resolve_feature_id("district", {"code_district": "3", "id": "x"}) == "3"
    assert resolve_feature_id("dun", {}) == ""


def test_unknown_boundary_type_rejected():
    with pytest.raises(ConfigError):
        policy_for("county")
