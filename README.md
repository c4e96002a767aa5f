# pdfextract

`pdfextract` works on glyphs whose positions are already known, such as
the output of a PDF interpreter. You place each character, with its
origin, advance and bounding box, into a span. The package can then join
aligned spans into lines and join nearby lines into paragraphs. It can
write the text as JSON, with one element for each run of text that shares
a font and a structure element.

The package uses only the standard library.

## Installation

```
pip install .
```

To run the tests:

```
pip install .[test]
pytest
```

## Example

```python
from pdfextract.document import Document, Page, Span, StructType, Subpage
from pdfextract.geometry import Matrix4, Point, Rect
from pdfextract.jsonout import document_to_json
from pdfextract.lines import make_lines, make_paragraphs

document = Document()
heading = document.begin_struct(StructType.P, 3, 0)

span = Span(
    ctm=Matrix4(12, 0, 0, 12),
    font_name="Helvetica",
    font_bbox=Rect(Point(0, -0.2), Point(1, 0.9)),
    structure=heading,
)
for i, ch in enumerate("Hello"):
    char = span.append_char(ord(ch))
    char.x = 72 + i * 6
    char.y = 100
    char.adv = 0.5
    char.bbox = Rect(Point(char.x, 100), Point(char.x + 6, 112))

document.end_struct()

subpage = Subpage(content=[span])
document.pages.append(Page(subpages=[subpage]))

make_lines(subpage.content, 0.5)   # spans -> Line objects
make_paragraphs(subpage.content)   # lines -> Paragraph objects, sorted

print(document_to_json(document))
```

Each element that `document_to_json` returns has `Bounds`, `Text`, `Font`
and `TextSize`. An element also has `Path` when its spans belong to a
structure element. In this example the path is `P[3]`. The elements are
separated by `",\n"`. They are not wrapped in an enclosing object.

## Modules

- `pdfextract.geometry`
  - `Point`, `Rect` (with `empty()`, `infinite()`, `union()` and
    `union_point()`), `Matrix4` and `Matrix`.
  - `Matrix4` has `invert`, `transform_point`, `transform_xy`,
    `multiply`, `expansion`, `font_size` and `baseline_angle`.
  - `Matrix.parse` reads six numbers.
  - Helpers `matrix4_cmp`, `matrices_are_compatible` and
    `font_size_from_ctm`.
- `pdfextract.document`
  - The content model: `Char`, `Span`, `Line`, `Paragraph`,
    `ParagraphFlags`, `Block`, `Cell`, `Table`, `Image`, `TableLine`,
    `Subpage`, `Page` and `Document`.
  - `StructType` and `Structure` describe tagged structure.
    `Document.begin_struct` and `end_struct` build that tree.
  - `predicted_end_of_char` gives where a glyph ends.
  - `block_pre_rotation_bounds` gives the unrotated box of a rotated
    block.
- `pdfextract.lines`
  - `make_lines` and `make_paragraphs` rewrite a content list in place.
  - Helpers `lines_are_compatible`, `calculate_line_height` and
    `paragraphs_cmp`, the comparison used to order paragraphs.
- `pdfextract.jsonout`
  - `document_to_json` and `structure_path`.

## What it does not do

- It does not read PDF files. You have to build the glyph positions and
  the `Document` yourself.
- There is no high-level driver that takes page, span, character and path
  events and collects them into a document.
- It does not detect tables from ruled lines. `Table`, `Cell` and
  `TableLine` exist only as data types.
- It does not group rotated paragraphs into blocks, and it does not
  analyse paragraph alignment.
- It has no plain-text or CSV writer. The only output is JSON.
- It has no command-line tool.