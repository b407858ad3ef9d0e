import logging

from vimcanvas.values import (
    parse_bool,
    parse_float,
    parse_i32,
    parse_str,
    parse_u32,
    parse_u64,
)

U64_MAX = 18446744073709551615
I64_MAX = 9223372036854775807


def test_parse_from_value_f32():
    v0 = 0.0
    v0 = parse_float(1.0, v0)
    assert v0 == 1.0
    v0 = parse_float(-1, v0)
    assert v0 == -1.0
    v0 = parse_float(U64_MAX, v0)
    assert v0 == 18446744073709551616.0
    v0 = parse_float("asd", v0)
    assert v0 == 18446744073709551616.0


def test_parse_from_value_u64():
    v0 = 0
    v0 = parse_u64(U64_MAX, v0)
    assert v0 == U64_MAX
    v0 = parse_u64(-1, v0)
    assert v0 == U64_MAX


def test_parse_from_value_u32():
    v0 = 0
    v0 = parse_u32(U64_MAX, v0)
    assert v0 == 4294967295
    v0 = parse_u32(-1, v0)
    assert v0 == 4294967295


def test_parse_from_value_i32():
    v0 = 0
    v0 = parse_i32(I64_MAX, v0)
    assert v0 == -1
    v0 = parse_i32(-1, v0)
    assert v0 == -1


def test_parse_from_value_string():
    v0 = "foo"
    v0 = parse_str("bar", v0)
    assert v0 == "bar"
    v0 = parse_str(-1, v0)
    assert v0 == "bar"


def test_parse_from_value_bool():
    v0 = False
    v0 = parse_bool(True, v0)
    assert v0 is True
    v0 = parse_bool(0, v0)
    assert v0 is False
    v0 = parse_bool(1, v0)
    assert v0 is True
    v0 = parse_bool(-1, v0)
    assert v0 is True


def test_booleans_are_not_numbers():
    assert parse_u64(True, 5) == 5
    assert parse_float(True, 2.5) == 2.5
    assert parse_i32(False, 9) == 9


def test_rejected_value_logs_error(caplog):
    with caplog.at_level(logging.ERROR, logger="vimcanvas.values"):
        result = parse_str(3, "keep")
    assert result == "keep"
    assert "expected a string" in caplog.text