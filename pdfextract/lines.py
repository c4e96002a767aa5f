"""Joining spans into lines, and lines into paragraphs."""

from __future__ import annotations

import functools
import math
from typing import Optional

from pdfextract.document import Line, Paragraph, Span
from pdfextract.geometry import (
    Point,
    font_size_from_ctm,
    matrices_are_compatible,
    matrix4_cmp,
)

_SPACE = 32
_UNICODE_MINUS = 0x2212


def _wmode(span: Span) -> int:
    return 1 if span.wmode else 0


def _div(numerator: float, denominator: float) -> float:
    """Floating-point division that yields inf or nan instead of raising."""
    if denominator:
        return numerator / denominator
    if numerator == 0 or math.isnan(numerator):
        return math.nan
    return math.copysign(math.inf, numerator) * math.copysign(1.0, denominator)


def _index_of(items: list, target: object) -> int:
    return next(k for k, item in enumerate(items) if item is target)


def _scale_squared(span: Span) -> float:
    ctm = span.ctm
    if _wmode(span):
        return ctm.c * ctm.c + ctm.d * ctm.d
    return ctm.a * ctm.a + ctm.b * ctm.b


def lines_are_compatible(a: Line, b: Line) -> bool:
    """True if the lines differ, share a writing mode and have parallel baselines."""
    if a is b:
        return False
    if not a.content or not b.content:
        return False
    first_a = a.first_span()
    first_b = b.first_span()
    if _wmode(first_a) != _wmode(first_b):
        return False
    return matrices_are_compatible(first_a.ctm, first_b.ctm, _wmode(first_a))


def _nearest_line(
    content: list, line_a: Line, master_space_guess: float
) -> Optional[tuple[Line, float, float]]:
    """Best line to append to line_a, with its colinear distance and space guess."""
    span_a = line_a.last_span()
    wmode = _wmode(span_a)
    best: Optional[tuple[Line, float, float]] = None
    best_score = 0.0
    for line_b in content:
        if not isinstance(line_b, Line) or line_b is line_a:
            continue
        if not lines_are_compatible(line_a, line_b):
            continue
        span_b = line_b.first_span()
        last_a = span_a.last_char()
        tdir = span_a.ctm.transform_xy(last_a.adv * (1 - wmode), last_a.adv * wmode)
        span_a_end = Point(last_a.x + tdir.x, last_a.y + tdir.y)
        first_b = span_b.first_char()
        diff = Point(first_b.x - span_a_end.x, first_b.y - span_a_end.y)
        scale_squared = _scale_squared(span_a)
        colinear = _div(_div(diff.x * tdir.x + diff.y * tdir.y, last_a.adv), scale_squared)
        perp = _div(_div(diff.x * tdir.y - diff.y * tdir.x, last_a.adv), scale_squared)
        space_guess = (last_a.adv + first_b.adv) / 2 * master_space_guess

        if abs(perp) > 3 * space_guess / 2 or abs(colinear) > space_guess * 8:
            continue

        score = abs(colinear)
        if score < abs(perp) * 10:
            score = abs(perp) * 10

        if best is None or score < best_score:
            best = (line_b, colinear, space_guess)
            best_score = score
    return best


def make_lines(content: list, master_space_guess: float) -> None:
    """Replace the spans in content, in place, by lines of aligned spans."""
    content[:] = [
        Line(content=[item]) if isinstance(item, Span) else item for item in content
    ]

    i = 0
    while i < len(content):
        line_a = content[i]
        if not isinstance(line_a, Line):
            i += 1
            continue
        nearest = _nearest_line(content, line_a, master_space_guess)
        if nearest is None:
            i += 1
            continue

        line_b, colinear, space_guess = nearest
        span_a = line_a.last_span()
        span_b = line_b.first_span()
        if (
            span_a.last_char().ucs != _SPACE
            and span_b.first_char().ucs != _SPACE
            and colinear > 2 * space_guess / 3
        ):
            previous = span_a.last_char()
            space = span_a.append_char(_SPACE)
            space.adv = 0.0
            space.x = previous.x
            space.y = previous.y

        line_a.content.extend(line_b.content)
        line_b.content = []
        del content[_index_of(content, line_b)]
        # Whether line_b came before or after line_a, position i now holds
        # either the extended line_a (to be checked again) or the item after it.
        if _index_of(content, line_a) == i - 1:
            continue


def calculate_line_height(line: Line) -> None:
    """Set the line's ascender and descender from its spans' font boxes."""
    ascender = 0.0
    descender = 0.0
    for span in line.content:
        size = font_size_from_ctm(span.ctm)
        min_y = span.font_bbox.min.y * size
        max_y = span.font_bbox.max.y * size
        if min_y < descender:
            descender = min_y
        if max_y > ascender:
            ascender = max_y
    line.ascender = ascender
    line.descender = descender


def _nearest_paragraph(
    content: list, paragraph_a: Paragraph
) -> tuple[Optional[Paragraph], int, float]:
    """Best paragraph below paragraph_a, its paragraph ordinal and its score."""
    line_a = paragraph_a.last_line()
    span_a = line_a.last_span()
    wmode = _wmode(span_a)
    nearest: Optional[Paragraph] = None
    nearest_b = -1
    nearest_score = 0.0

    b = -1
    for paragraph_b in content:
        if not isinstance(paragraph_b, Paragraph):
            continue
        b += 1
        if paragraph_b is paragraph_a:
            continue
        line_b = paragraph_b.first_line()
        if not lines_are_compatible(line_a, line_b):
            continue

        first_a = line_a.first_span().first_char()
        last_a_span = line_a.last_span()
        last_a = last_a_span.last_char()
        first_b = line_b.first_span().first_char()
        last_b_span = line_b.last_span()
        last_b = last_b_span.last_char()
        tdir_a = last_a_span.ctm.transform_xy(1 - wmode, wmode)
        tdir_b = last_b_span.ctm.transform_xy(1 - wmode, wmode)
        start_diff = Point(first_b.x - first_a.x, first_b.y - first_a.y)
        end_a = Point(last_a.x + last_a.adv * tdir_a.x, last_a.y + last_a.adv * tdir_a.y)
        end_b = Point(last_b.x + last_b.adv * tdir_b.x, last_b.y + last_b.adv * tdir_b.y)
        perp = _div(
            start_diff.x * tdir_a.y - start_diff.y * tdir_a.x,
            math.sqrt(_scale_squared(span_a)),
        )
        dot_saea = (end_a.x - first_a.x) * tdir_a.x + (end_a.y - first_a.y) * tdir_a.y
        dot_sasb = (first_b.x - first_a.x) * tdir_a.x + (first_b.y - first_a.y) * tdir_a.y
        dot_saeb = (end_b.x - first_a.x) * tdir_a.x + (end_b.y - first_a.y) * tdir_a.y

        score = -perp
        if dot_sasb > dot_saea:
            continue
        if dot_saeb < 0:
            continue
        if score >= 0 and (nearest is None or score < nearest_score):
            nearest = paragraph_b
            nearest_score = score
            nearest_b = b
    return nearest, nearest_b, nearest_score


def _join_line_end(paragraph_a: Paragraph, line_a: Line) -> bool:
    """Prepare the end of line_a for joining; True if line_a was removed."""
    a_span = line_a.last_span()
    last = a_span.last_char()
    if last.ucs in (ord("-"), _UNICODE_MINUS):
        a_span.chars.pop()
        if not a_span.chars:
            line_a.content.remove(a_span)
            if not line_a.content:
                paragraph_a.content.remove(line_a)
                return True
    elif last.ucs in (_SPACE, ord("/")):
        pass
    else:
        space = a_span.append_char(_SPACE)
        previous = a_span.chars[-2]
        space.x = previous.x + previous.adv * a_span.ctm.a
        space.y = previous.y + previous.adv * a_span.ctm.c
    return False


def make_paragraphs(content: list) -> None:
    """Replace the lines in content, in place, by paragraphs of nearby lines, sorted."""
    for k, item in enumerate(content):
        if isinstance(item, Line):
            content[k] = Paragraph(content=[item])
            calculate_line_height(item)

    i = 0
    a = 0
    while i < len(content):
        paragraph_a = content[i]
        if not isinstance(paragraph_a, Paragraph):
            i += 1
            continue

        nearest, nearest_b, nearest_score = _nearest_paragraph(content, paragraph_a)
        joined = False
        if nearest is not None:
            line_a = paragraph_a.last_line()
            line_b = nearest.first_line()
            expected_height = (
                (line_a.ascender - line_a.descender) + (line_b.ascender - line_b.descender)
            ) / 2
            if 0 < nearest_score < 2 * expected_height:
                if _join_line_end(paragraph_a, line_a):
                    a -= 1
                paragraph_a.content.extend(nearest.content)
                nearest.content = []
                j = _index_of(content, nearest)
                del content[j]
                if j < i:
                    i -= 1
                recheck = nearest_b > a
                a -= 1
                joined = True
                if not recheck:
                    i += 1
        if not joined:
            i += 1
        a += 1

    content.sort(key=functools.cmp_to_key(paragraphs_cmp))


def paragraphs_cmp(a: object, b: object) -> int:
    """Order paragraphs by writing mode, baseline matrix, then down the page."""
    if not isinstance(a, Paragraph) or not isinstance(b, Paragraph):
        return 0
    a_span = a.first_line().first_span()
    b_span = b.first_line().first_span()

    if _wmode(a_span) != _wmode(b_span):
        return _wmode(a_span) - _wmode(b_span)

    if not matrices_are_compatible(a_span.ctm, b_span.ctm, _wmode(a_span)):
        return matrix4_cmp(a_span.ctm, b_span.ctm)

    wmode = _wmode(a_span)
    tdir = a_span.ctm.transform_xy(1 - wmode, wmode)
    first_a = a_span.chars[0]
    first_b = b_span.chars[0]
    dx = first_a.x - first_b.x
    dy = first_a.y - first_b.y
    perp = dx * tdir.y - dy * tdir.x
    if perp < 0:
        return 1
    if perp > 0:
        return -1
    return 0