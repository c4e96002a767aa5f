"""The document model: characters, spans, lines, paragraphs, tables and pages."""

from __future__ import annotations

import enum
import math
from dataclasses import dataclass, field
from typing import Iterator, Optional, Union

from pdfextract.geometry import Matrix4, Point, Rect


class StructType(enum.IntEnum):
    """Kinds of logical structure element a document may be tagged with."""

    INVALID = -1
    UNDEFINED = 0
    DOCUMENT = enum.auto()
    PART = enum.auto()
    ART = enum.auto()
    SECT = enum.auto()
    DIV = enum.auto()
    BLOCKQUOTE = enum.auto()
    CAPTION = enum.auto()
    TOC = enum.auto()
    TOCI = enum.auto()
    INDEX = enum.auto()
    NONSTRUCT = enum.auto()
    PRIVATE = enum.auto()
    DOCUMENTFRAGMENT = enum.auto()
    ASIDE = enum.auto()
    TITLE = enum.auto()
    FENOTE = enum.auto()
    SUB = enum.auto()
    P = enum.auto()
    H = enum.auto()
    H1 = enum.auto()
    H2 = enum.auto()
    H3 = enum.auto()
    H4 = enum.auto()
    H5 = enum.auto()
    H6 = enum.auto()
    LIST = enum.auto()
    LISTITEM = enum.auto()
    LABEL = enum.auto()
    LISTBODY = enum.auto()
    TABLE = enum.auto()
    TR = enum.auto()
    TH = enum.auto()
    TD = enum.auto()
    THEAD = enum.auto()
    TBODY = enum.auto()
    TFOOT = enum.auto()
    SPAN = enum.auto()
    QUOTE = enum.auto()
    NOTE = enum.auto()
    REFERENCE = enum.auto()
    BIBENTRY = enum.auto()
    CODE = enum.auto()
    LINK = enum.auto()
    ANNOT = enum.auto()
    EM = enum.auto()
    STRONG = enum.auto()
    RUBY = enum.auto()
    RB = enum.auto()
    RT = enum.auto()
    RP = enum.auto()
    WARICHU = enum.auto()
    WT = enum.auto()
    WP = enum.auto()
    FIGURE = enum.auto()
    FORMULA = enum.auto()
    FORM = enum.auto()
    ARTIFACT = enum.auto()

    def label(self) -> str:
        """Upper-case name used in output paths."""
        return self.name


@dataclass(eq=False)
class Structure:
    """A node in the tree of structure elements."""

    type: StructType
    uid: int = 0
    score: int = 0
    parent: Optional[Structure] = None
    children: list[Structure] = field(default_factory=list)

    def path(self) -> list[Structure]:
        """The chain of structures from the outermost ancestor down to this one."""
        chain: list[Structure] = []
        node: Optional[Structure] = self
        while node is not None:
            chain.append(node)
            node = node.parent
        chain.reverse()
        return chain


@dataclass
class Char:
    """One glyph: its origin, unicode value, advance and bounding box."""

    x: float = 0.0
    y: float = 0.0
    ucs: int = 0
    adv: float = 0.0
    bbox: Rect = field(default_factory=Rect.empty)


@dataclass(eq=False)
class Span:
    """A run of characters sharing font, matrix and writing mode."""

    ctm: Matrix4 = field(default_factory=Matrix4)
    font_name: str = ""
    font_bold: bool = False
    font_italic: bool = False
    wmode: int = 0
    font_bbox: Rect = field(default_factory=lambda: Rect(Point(), Point()))
    chars: list[Char] = field(default_factory=list)
    structure: Optional[Structure] = None

    def append_char(self, ucs: int) -> Char:
        """Append a fresh character with the given unicode value and return it."""
        char = Char(ucs=ucs)
        self.chars.append(char)
        return char

    def first_char(self) -> Char:
        """The first character; raises ValueError if the span is empty."""
        if not self.chars:
            raise ValueError("span has no characters")
        return self.chars[0]

    def last_char(self) -> Char:
        """The last character; raises ValueError if the span is empty."""
        if not self.chars:
            raise ValueError("span has no characters")
        return self.chars[-1]

    def last_non_space_char(self) -> Char:
        """The last non-space character, or the first one if all are spaces."""
        if not self.chars:
            raise ValueError("span has no characters")
        i = len(self.chars) - 1
        while i > 0 and self.chars[i].ucs == 32:
            i -= 1
        return self.chars[i]

    def end_point(self) -> Point:
        """Predicted position just after the last character."""
        return predicted_end_of_char(self.last_char(), self)

    def copy_empty(self) -> Span:
        """A new span with the same attributes and no characters."""
        return Span(
            ctm=self.ctm,
            font_name=self.font_name,
            font_bold=self.font_bold,
            font_italic=self.font_italic,
            wmode=self.wmode,
            font_bbox=self.font_bbox,
            structure=self.structure,
        )

    def describe(self) -> str:
        """Diagnostic description of the span and its characters."""
        c0 = c1 = 0
        x0 = y0 = x1 = y1 = 0.0
        if self.chars:
            first, last = self.chars[0], self.chars[-1]
            c0, x0, y0 = first.ucs, first.x, first.y
            c1, x1, y1 = last.ucs, last.x, last.y
        n = len(self.chars)
        parts = [
            f"span ctm={self.ctm.describe()} chars_num={n} "
            f"({chr(c0 & 0xFF)}:{x0:f},{y0:f})..({chr(c1 & 0xFF)}:{x1:f},{y1:f}) "
            f"font={self.font_name}:({self.ctm.font_size():f}) "
            f"wmode={1 if self.wmode else 0} chars_num={n}: "
        ]
        parts.extend(
            f" i={i} {{x={c.x:f} y={c.y:f} ucs={c.ucs} adv={c.adv:f}}}"
            for i, c in enumerate(self.chars)
        )
        parts.append(': "')
        parts.extend(chr(c.ucs & 0xFF) for c in self.chars)
        parts.append('"')
        return "".join(parts)


def predicted_end_of_char(char: Char, span: Span) -> Point:
    """Where the character ends, given its advance and the span's matrix."""
    wmode = 1 if span.wmode else 0
    direction = span.ctm.transform_xy(char.adv * (1 - wmode), char.adv * wmode)
    return Point(direction.x + char.x, direction.y + char.y)


@dataclass(eq=False)
class Line:
    """Spans that lie on one baseline, with the line's vertical extent."""

    content: list[Span] = field(default_factory=list)
    ascender: float = 0.0
    descender: float = 0.0

    def first_span(self) -> Span:
        """The first span of the line."""
        if not self.content:
            raise ValueError("line has no spans")
        return self.content[0]

    def last_span(self) -> Span:
        """The last span of the line."""
        if not self.content:
            raise ValueError("line has no spans")
        return self.content[-1]


class ParagraphFlags(enum.IntFlag):
    """Alignment properties discovered while analysing a paragraph."""

    NONE = 0
    NOT_ALIGNED_LEFT = 1
    NOT_ALIGNED_RIGHT = 2
    NOT_CENTRED = 4
    NOT_FULLY_JUSTIFIED = 8
    BREAKS_STRANGELY = 16


@dataclass(eq=False)
class Paragraph:
    """Lines joined into one paragraph."""

    content: list[Line] = field(default_factory=list)
    line_flags: ParagraphFlags = ParagraphFlags.NONE

    def first_line(self) -> Line:
        """The first line of the paragraph."""
        if not self.content:
            raise ValueError("paragraph has no lines")
        return self.content[0]

    def last_line(self) -> Line:
        """The last line of the paragraph."""
        if not self.content:
            raise ValueError("paragraph has no lines")
        return self.content[-1]


@dataclass(eq=False)
class Block:
    """A run of paragraphs sharing the same rotation."""

    content: list[Paragraph] = field(default_factory=list)


@dataclass(eq=False)
class Cell:
    """One cell of a table grid."""

    rect: Rect = field(default_factory=lambda: Rect(Point(), Point()))
    above: bool = False
    left: bool = False
    extend_right: int = 0
    extend_down: int = 0
    content: list = field(default_factory=list)


@dataclass(eq=False)
class Table:
    """A grid of cells, stored row by row."""

    pos: Point = field(default_factory=Point)
    cells: list[Cell] = field(default_factory=list)
    cells_num_x: int = 0
    cells_num_y: int = 0

    def cell(self, x: int, y: int) -> Cell:
        """The cell in column x of row y."""
        if not (0 <= x < self.cells_num_x and 0 <= y < self.cells_num_y):
            raise IndexError(f"cell ({x}, {y}) outside table")
        return self.cells[y * self.cells_num_x + x]


@dataclass(eq=False)
class Image:
    """An image placed on a page."""

    type: str
    x: float = 0.0
    y: float = 0.0
    w: float = 0.0
    h: float = 0.0
    data: bytes = b""
    id: str = ""
    name: str = ""


@dataclass
class TableLine:
    """A thin filled rectangle or stroked line that may divide table cells."""

    rect: Rect
    color: float = 0.0


ContentItem = Union[Span, Line, Paragraph, Block, Image, Table]


@dataclass(eq=False)
class Subpage:
    """A region of a page holding content and table dividers."""

    mediabox: Rect = field(default_factory=Rect.infinite)
    content: list = field(default_factory=list)
    tables: list[Table] = field(default_factory=list)
    tablelines_horizontal: list[TableLine] = field(default_factory=list)
    tablelines_vertical: list[TableLine] = field(default_factory=list)
    images_num: int = 0

    def spans(self) -> Iterator[Span]:
        """Spans held directly in the content list."""
        return (item for item in self.content if isinstance(item, Span))

    def images(self) -> Iterator[Image]:
        """Images held directly in the content list."""
        return (item for item in self.content if isinstance(item, Image))


@dataclass(eq=False)
class Page:
    """A page, made of one or more subpages."""

    mediabox: Rect = field(default_factory=Rect.infinite)
    subpages: list[Subpage] = field(default_factory=list)
    split: object = None


@dataclass(eq=False)
class Document:
    """Pages plus the tree of structure elements."""

    pages: list[Page] = field(default_factory=list)
    roots: list[Structure] = field(default_factory=list)
    current: Optional[Structure] = None

    def begin_struct(self, type: StructType, uid: int, score: int) -> Structure:
        """Open a structure element inside the current one and make it current."""
        structure = Structure(
            type=StructType(type), uid=uid, score=score, parent=self.current
        )
        if self.current is None:
            self.roots.append(structure)
        else:
            self.current.children.append(structure)
        self.current = structure
        return structure

    def end_struct(self) -> None:
        """Close the current structure element."""
        if self.current is None:
            raise RuntimeError("end_struct without matching begin_struct")
        self.current = self.current.parent

    def subpages(self) -> Iterator[Subpage]:
        """All subpages of all pages, in order."""
        for page in self.pages:
            yield from page.subpages


def block_pre_rotation_bounds(block: Block, angle: float) -> Rect:
    """Box that, rotated by angle about its centre, covers the block's text.

    The box is extended downward to twice its height to leave room for
    reflowed text.
    """
    cos_a = math.cos(angle)
    sin_a = math.sin(angle)
    unrotate = Matrix4(cos_a, -sin_a, sin_a, cos_a)
    rotate = Matrix4(cos_a, sin_a, -sin_a, cos_a)

    pre_box = Rect.empty()
    for paragraph in block.content:
        if not isinstance(paragraph, Paragraph):
            continue
        for line in paragraph.content:
            span0 = line.first_span()
            span1 = line.last_span()
            first = span0.first_char()
            start = unrotate.transform_xy(first.x, first.y)
            end = unrotate.transform_point(span1.end_point())
            bbox = span0.font_bbox
            hoff = bbox.max.y - (bbox.min.y if bbox.min.y < 0 else 0)
            hoff *= math.sqrt(span0.ctm.c * span0.ctm.c + span0.ctm.d * span0.ctm.d)
            if start.y < end.y:
                start = Point(start.x, start.y - hoff)
            else:
                end = Point(end.x, end.y - hoff)
            pre_box = pre_box.union_point(start).union_point(end)

    centre = Point(
        (pre_box.min.x + pre_box.max.x) / 2, (pre_box.min.y + pre_box.max.y) / 2
    )
    trans_centre = rotate.transform_point(centre)
    dx = centre.x - trans_centre.x
    dy = centre.y - trans_centre.y
    min_x = pre_box.min.x - dx
    min_y = pre_box.min.y - dy
    max_x = pre_box.max.x - dx
    max_y = pre_box.max.y - dy

    extra = max_y - min_y
    offset = Point(0.0, extra / 2)
    max_y += extra
    toffset = rotate.transform_point(offset)
    sx = toffset.x - offset.x
    sy = toffset.y - offset.y
    return Rect(Point(min_x + sx, min_y + sy), Point(max_x + sx, max_y + sy))