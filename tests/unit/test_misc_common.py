import json
import logging

from geoenrich.common.ids import generate_run_id
from geoenrich.common.logging import JsonLineFormatter
from geoenrich.common.numbers import clamp, parse_float, parse_int, round_half_up


def test_parse_int_handles_separators_and_leading_digits():
    assert parse_int("1,234") == 1234
    assert parse_int("2020-01-01") == 2020
    assert parse_int(" 17.9 ") == 17
    assert parse_int("abc") == 0
    assert parse_int(None, default=-1) == -1
    assert parse_int(12.7) == 12


def test_parse_float_handles_separators_and_garbage():
    assert parse_float("9,062") == 9062.0
    assert parse_float("3.5km") == 3.5
    assert parse_float("") is None
    assert parse_float("nan") is None
    assert parse_float(True) is None


def test_round_half_up_differs_from_bankers_rounding():
    assert round_half_up(0.5) == 1
    assert round_half_up(2.5) == 3
    assert round_half_up(1.49) == 1


def test_clamp_within_bounds():
    assert clamp(-5, minimum=0, maximum=100) == 0
    assert clamp(50, minimum=0, maximum=100) == 50
    assert clamp(150, minimum=0, maximum=100) == 100


def test_generate_run_id_prefix():
    assert generate_run_id().startswith("run-")


def test_json_line_formatter_emits_stable_fields():
    record = logging.LogRecord("geoenrich.test", logging.INFO, __file__, 1, "hello", None, None)
    record.boundary_type = "dun"
    record.event = "BOUNDARY_START"

    payload = json.loads(JsonLineFormatter().format(record))

    assert payload["message"] == "hello"
    assert payload["boundary_type"] == "dun"
    assert payload["event"] == "BOUNDARY_START"
    assert payload["error_code"] is None
    assert "sample" not in payload
