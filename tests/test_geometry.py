import math

import pytest

from pdfextract.geometry import (
    Matrix,
    Matrix4,
    Point,
    Rect,
    font_size_from_ctm,
    matrices_are_compatible,
    matrix4_cmp,
)


def test_union_with_empty_is_identity():
    r = Rect(Point(1, 2), Point(3, 4))
    assert Rect.empty().union(r) == r
    assert r.union(Rect.empty()) == r


def test_union_with_infinite_is_infinite():
    r = Rect(Point(1, 2), Point(3, 4))
    assert r.union(Rect.infinite()) == Rect.infinite()


def test_union_point_on_empty_gives_degenerate_rect():
    p = Point(5, -7)
    r = Rect.empty().union_point(p)
    assert r.min == p
    assert r.max == p


def test_union_point_expands_bounds():
    r = Rect(Point(0, 0), Point(1, 1)).union_point(Point(2, -1))
    assert r.min == Point(0, -1)
    assert r.max == Point(2, 1)


def test_union_covers_both():
    a = Rect(Point(0, 0), Point(2, 2))
    b = Rect(Point(1, -3), Point(5, 1))
    u = a.union(b)
    for r in (a, b):
        assert u.min.x <= r.min.x and u.min.y <= r.min.y
        assert u.max.x >= r.max.x and u.max.y >= r.max.y


def test_rect_describe_format():
    r = Rect(Point(1, 2), Point(3, 4))
    assert r.describe() == "((1.000000 2.000000) (3.000000 4.000000))"


def test_matrix4_describe_format():
    assert Matrix4(1, 0, 0, 1).describe() == "{1.000000 0.000000 0.000000 1.000000}"


def test_matrix_describe_round_trips_through_parse():
    m = Matrix(1.5, -2, 3.25, 4, 5, 6.5)
    assert Matrix.parse(m.describe().strip("{}")) == m


def test_matrix_parse():
    assert Matrix.parse("1 2 3 4 5 6") == Matrix(1, 2, 3, 4, 5, 6)


@pytest.mark.parametrize("text", [None, "", "1 2 3 4 5", "1 2 x 4 5 6"])
def test_matrix_parse_errors(text):
    with pytest.raises(ValueError):
        Matrix.parse(text)


def test_invert_multiplies_to_identity():
    m = Matrix4(2, 1, -3, 4)
    product = m.multiply(m.invert())
    assert product.a == pytest.approx(1)
    assert product.b == pytest.approx(0)
    assert product.c == pytest.approx(0)
    assert product.d == pytest.approx(1)


def test_invert_singular_returns_identity():
    assert Matrix4(1, 2, 2, 4).invert() == Matrix4()


def test_transform_round_trip():
    m = Matrix4(0.5, 0.25, -1, 3)
    p = Point(7, -2)
    back = m.invert().transform_point(m.transform_point(p))
    assert back.x == pytest.approx(p.x)
    assert back.y == pytest.approx(p.y)


def test_transform_xy_matches_transform_point():
    m = Matrix4(2, 3, 5, 7)
    assert m.transform_xy(1, 1) == m.transform_point(Point(1, 1))


def test_identity_multiply():
    m = Matrix4(2, 3, 5, 7)
    assert m.multiply(Matrix4()) == m
    assert Matrix4().multiply(m) == m


def test_matrix_multiply_identity_and_translation():
    m = Matrix(2, 3, 5, 7, 11, 13)
    assert m.multiply(Matrix()) == m
    shifted = Matrix().multiply(Matrix(1, 0, 0, 1, 4, 9))
    assert (shifted.e, shifted.f) == (4, 9)


def test_expansion_of_scale():
    assert Matrix4(12, 0, 0, 12).expansion() == pytest.approx(12)


def test_font_size_rounding_invariant():
    m = Matrix4(1.23456, 0, 0, 1.23456)
    fs = m.font_size()
    assert abs(fs - m.expansion()) <= 0.005 + 1e-12
    assert fs * 100 == pytest.approx(round(fs * 100))


def test_baseline_angle():
    assert Matrix4(0, 1, -1, 0).baseline_angle() == pytest.approx(math.pi / 2)
    assert Matrix4().baseline_angle() == 0


def test_matrix4_cmp():
    a = Matrix4(1, 2, 3, 4)
    b = Matrix4(1, 2, 3, 5)
    assert matrix4_cmp(a, a) == 0
    assert matrix4_cmp(a, b) == -1
    assert matrix4_cmp(b, a) == 1
    assert matrix4_cmp(Matrix4(2, 0, 0, 0), Matrix4(1, 9, 9, 9)) == 1


def test_matrices_compatible():
    m = Matrix4(10, 0, 0, 10)
    assert matrices_are_compatible(m, Matrix4(12, 0.1, 0, 12), 0)
    assert not matrices_are_compatible(m, Matrix4(-10, 0, 0, -10), 0)
    assert not matrices_are_compatible(m, Matrix4(0, 10, -10, 0), 0)


def test_matrices_compatible_vertical_uses_c_d():
    a = Matrix4(1, 0, 0, 10)
    b = Matrix4(-5, 3, 0, 10)
    assert matrices_are_compatible(a, b, 1)
    assert not matrices_are_compatible(a, b, 0)


def test_font_size_from_ctm():
    assert font_size_from_ctm(Matrix4(-5, 0, 0, 1)) == 5
    assert font_size_from_ctm(Matrix4(0, -6, 1, 0)) == 6
    assert font_size_from_ctm(Matrix4(3, 4, 0, 1)) == pytest.approx(5)