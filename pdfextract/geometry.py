"""Points, rectangles and the matrices used to place glyphs on a page."""

from __future__ import annotations

import math
import sys
from dataclasses import dataclass

_BIG = sys.float_info.max


@dataclass(frozen=True)
class Point:
    """A point (or vector) in page space."""

    x: float = 0.0
    y: float = 0.0


@dataclass(frozen=True)
class Rect:
    """An axis-aligned rectangle given by its minimum and maximum corners."""

    min: Point
    max: Point

    @staticmethod
    def empty() -> Rect:
        """Rectangle that contains nothing; any union replaces it."""
        return Rect(Point(_BIG, _BIG), Point(-_BIG, -_BIG))

    @staticmethod
    def infinite() -> Rect:
        """Rectangle that contains everything."""
        return Rect(Point(-_BIG, -_BIG), Point(_BIG, _BIG))

    def union(self, other: Rect) -> Rect:
        """Smallest rectangle covering both rectangles."""
        return Rect(
            Point(min(self.min.x, other.min.x), min(self.min.y, other.min.y)),
            Point(max(self.max.x, other.max.x), max(self.max.y, other.max.y)),
        )

    def union_point(self, point: Point) -> Rect:
        """Smallest rectangle covering this rectangle and the point."""
        return Rect(
            Point(min(self.min.x, point.x), min(self.min.y, point.y)),
            Point(max(self.max.x, point.x), max(self.max.y, point.y)),
        )

    def describe(self) -> str:
        """Text form used in diagnostics."""
        return (
            f"(({self.min.x:f} {self.min.y:f}) "
            f"({self.max.x:f} {self.max.y:f}))"
        )


@dataclass(frozen=True)
class Matrix4:
    """The linear part (a b c d) of a transformation matrix."""

    a: float = 1.0
    b: float = 0.0
    c: float = 0.0
    d: float = 1.0

    def expansion(self) -> float:
        """Square root of the absolute determinant."""
        return math.sqrt(abs(self.a * self.d - self.b * self.c))

    def invert(self) -> Matrix4:
        """Inverse matrix; the identity when the matrix is singular."""
        det = self.a * self.d - self.b * self.c
        if det == 0:
            return Matrix4()
        return Matrix4(self.d / det, -self.b / det, -self.c / det, self.a / det)

    def transform_point(self, point: Point) -> Point:
        """Apply the matrix to a point."""
        return self.transform_xy(point.x, point.y)

    def transform_xy(self, x: float, y: float) -> Point:
        """Apply the matrix to the coordinates (x, y)."""
        return Point(self.a * x + self.c * y, self.b * x + self.d * y)

    def multiply(self, other: Matrix4) -> Matrix4:
        """Product self * other."""
        return Matrix4(
            self.a * other.a + self.b * other.c,
            self.a * other.b + self.b * other.d,
            self.c * other.a + self.d * other.c,
            self.c * other.b + self.d * other.d,
        )

    def baseline_angle(self) -> float:
        """Angle of the transformed x axis, in radians."""
        return math.atan2(self.b, self.a)

    def font_size(self) -> float:
        """Expansion rounded to the nearest 0.01."""
        return int(self.expansion() * 100.0 + 0.5) / 100.0

    def describe(self) -> str:
        """Text form used in diagnostics."""
        return f"{{{self.a:f} {self.b:f} {self.c:f} {self.d:f}}}"


@dataclass(frozen=True)
class Matrix:
    """A full affine transformation matrix (a b c d e f)."""

    a: float = 1.0
    b: float = 0.0
    c: float = 0.0
    d: float = 1.0
    e: float = 0.0
    f: float = 0.0

    @staticmethod
    def parse(text: str | None) -> Matrix:
        """Read six whitespace-separated numbers; raise ValueError otherwise."""
        if text is None:
            raise ValueError("no matrix text")
        parts = text.split()
        if len(parts) < 6:
            raise ValueError(f"expected six numbers in matrix: {text!r}")
        try:
            values = [float(part) for part in parts[:6]]
        except ValueError as exc:
            raise ValueError(f"bad number in matrix: {text!r}") from exc
        return Matrix(*values)

    def multiply(self, other: Matrix) -> Matrix:
        """Product self * other, including translation."""
        return Matrix(
            self.a * other.a + self.b * other.c,
            self.a * other.b + self.b * other.d,
            self.c * other.a + self.d * other.c,
            self.c * other.b + self.d * other.d,
            self.e * other.a + self.f * other.c + other.e,
            self.e * other.b + self.f * other.d + other.f,
        )

    def describe(self) -> str:
        """Text form used in diagnostics."""
        return (
            f"{{{self.a:f} {self.b:f} {self.c:f} "
            f"{self.d:f} {self.e:f} {self.f:f}}}"
        )


def _sign(value: float) -> int:
    if value < 0:
        return -1
    if value > 0:
        return 1
    return 0


def matrix4_cmp(lhs: Matrix4, rhs: Matrix4) -> int:
    """Compare two matrices element by element; returns -1, 0 or +1."""
    for left, right in (
        (lhs.a, rhs.a),
        (lhs.b, rhs.b),
        (lhs.c, rhs.c),
        (lhs.d, rhs.d),
    ):
        result = _sign(left - right)
        if result:
            return result
    return 0


def matrices_are_compatible(ctm_a: Matrix4, ctm_b: Matrix4, wmode: int) -> bool:
    """True if both matrices map the writing direction to parallel, same-sense vectors."""
    if wmode:
        dot = ctm_a.c * ctm_b.c + ctm_a.d * ctm_b.d
        pdot = ctm_a.c * ctm_b.d - ctm_a.d * ctm_b.c
    else:
        dot = ctm_a.a * ctm_b.a + ctm_a.b * ctm_b.b
        pdot = ctm_a.a * ctm_b.b - ctm_a.b * ctm_b.a
    if dot <= 0:
        return False
    return abs(pdot / dot) < 0.1


def font_size_from_ctm(ctm: Matrix4) -> float:
    """Length of the transformed x axis."""
    if ctm.b == 0:
        return abs(ctm.a)
    if ctm.a == 0:
        return abs(ctm.b)
    return math.sqrt(ctm.a * ctm.a + ctm.b * ctm.b)