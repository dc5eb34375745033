import pytest

from eulamadness.common import (
    Vec2,
    left_trim,
    next_token,
    rect_contains,
    rect_overlaps,
    right_trim,
    to_lower,
    to_upper,
    trim,
)


def test_single_value_fills_both_components():
    assert Vec2(7) == Vec2(7, 7)


def test_default_is_origin():
    assert tuple(Vec2()) == (0, 0)


def test_add_then_subtract_round_trips():
    a = Vec2(5, -3)
    b = Vec2(11, 4)
    assert (a + b) - b == a


def test_integer_division_truncates_toward_zero():
    assert Vec2(-7, 7) / 2 == Vec2(-3, 3)


def test_integral_vector_scaled_by_float_stays_integral():
    result = Vec2(3, 4) * 0.5
    assert result == Vec2(1, 2)
    assert result.is_integral


def test_float_vector_division_round_trips():
    v = Vec2(1.0, 2.0)
    assert (v / 4) * 4 == v


def test_componentwise_multiply_and_rmul():
    v = Vec2(2, 3)
    assert v * Vec2(1, 1) == v
    assert 1 * v == v


def test_length():
    assert Vec2(3, 4).length() == 5.0


def test_normalized_has_unit_length():
    assert Vec2(6.0, -2.5).normalized().length() == pytest.approx(1.0)


def test_normalized_zero_raises():
    with pytest.raises(ValueError):
        Vec2(0.0, 0.0).normalized()


def test_hashable_and_equal():
    table = {Vec2(1, 2): "a"}
    assert table[Vec2(1, 2)] == "a"


def test_immutable():
    v = Vec2(1, 2)
    with pytest.raises(AttributeError):
        v.x = 5
    assert v == Vec2(1, 2)
    assert v.x == 1


def test_case_conversion_is_ascii_only():
    assert to_upper("é") == "é"
    assert to_lower("É") == "É"
    assert to_lower(to_upper("MiXeD")) == to_lower("MiXeD")
    assert to_upper("MiXeD").isupper()


def test_trims():
    assert trim(" \t a b \n") == "a b"
    assert left_trim("  x ") == "x "
    assert right_trim("  x ") == "  x"
    assert trim(" \t\n") == ""


def test_next_token_splits_on_first_occurrence():
    assert next_token("Frame 1 2", " ") == ("Frame", "1 2")


def test_next_token_missing_token_consumes_everything():
    assert next_token("abc", " ") == ("abc", "")


def test_next_token_trailing_token_leaves_empty_rest():
    assert next_token("abc ", " ") == ("abc", "")


def test_rect_contains_includes_edges():
    position, size = Vec2(10, 10), Vec2(5, 5)
    assert rect_contains(position, size, Vec2(10, 10))
    assert rect_contains(position, size, Vec2(15, 15))
    assert not rect_contains(position, size, Vec2(16, 15))
    assert not rect_contains(position, size, Vec2(9, 12))


def test_rect_overlaps_touching_edges_do_not_overlap():
    assert not rect_overlaps(Vec2(0, 0), Vec2(16, 16), Vec2(16, 0), Vec2(16, 16))
    assert rect_overlaps(Vec2(0, 0), Vec2(16, 16), Vec2(15, 15), Vec2(16, 16))


def test_rect_overlaps_is_symmetric():
    a, sa = Vec2(3, 4), Vec2(10, 2)
    b, sb = Vec2(8, 5), Vec2(1, 1)
    assert rect_overlaps(a, sa, b, sb) == rect_overlaps(b, sb, a, sa)