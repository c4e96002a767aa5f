import json

from pdfextract.document import (
    Char,
    Document,
    Line,
    Page,
    Paragraph,
    Span,
    StructType,
    Subpage,
)
from pdfextract.geometry import Matrix4, Point, Rect
from pdfextract.jsonout import document_to_json, structure_path


def _char(ucs, x):
    return Char(x=x, y=0.0, ucs=ucs, adv=1.0, bbox=Rect(Point(x, 0.0), Point(x + 1, 1.0)))


def _span(text, x=0.0, bold=False, structure=None, font="Helvetica"):
    return Span(
        ctm=Matrix4(12, 0, 0, 12),
        font_name=font,
        font_bold=bold,
        chars=[_char(ord(c), x + k) for k, c in enumerate(text)],
        structure=structure,
    )


def _document(*spans):
    paragraph = Paragraph(content=[Line(content=list(spans))])
    return Document(pages=[Page(subpages=[Subpage(content=[paragraph])])])


def _parse(output):
    return json.loads("[" + output + "]")


def test_structure_path_joins_names_and_uids():
    document = Document()
    document.begin_struct(StructType.DOCUMENT, 0, 0)
    inner = document.begin_struct(StructType.P, 3, 0)
    assert structure_path(inner) == "DOCUMENT\\P[3]"


def test_empty_document_gives_empty_string():
    assert document_to_json(Document()) == ""


def test_single_run_fields():
    output = document_to_json(_document(_span("Hi")))
    assert output.startswith('{\n"Bounds": [ 0.000000, 0.000000, 2.000000, 1.000000 ]')
    assert '"TextSize": 12' in output
    elements = _parse(output)
    assert len(elements) == 1
    assert elements[0]["Text"] == "Hi"
    assert elements[0]["Font"] == {"family_name": "Helvetica"}
    assert "Path" not in elements[0]


def test_spans_with_same_attributes_merge():
    output = document_to_json(_document(_span("ab"), _span("cd", x=2.0)))
    elements = _parse(output)
    assert [e["Text"] for e in elements] == ["abcd"]
    assert elements[0]["Bounds"] == [0.0, 0.0, 4.0, 1.0]


def test_change_of_bold_starts_new_element():
    output = document_to_json(_document(_span("ab"), _span("cd", x=2.0, bold=True)))
    elements = _parse(output)
    assert [e["Text"] for e in elements] == ["ab", "cd"]
    assert output.count('{\n"Bounds"') == 2


def test_change_of_font_starts_new_element():
    output = document_to_json(_document(_span("a"), _span("b", x=1.0, font="Times")))
    families = [e["Font"]["family_name"] for e in _parse(output)]
    assert families == ["Helvetica", "Times"]


def test_path_included_for_structured_spans():
    document = Document()
    document.begin_struct(StructType.DOCUMENT, 0, 0)
    para = document.begin_struct(StructType.P, 3, 0)
    doc = _document(_span("x", structure=para))
    elements = _parse(document_to_json(doc))
    assert elements[0]["Path"] == structure_path(para)


def test_quotes_are_escaped():
    output = document_to_json(_document(_span('say "hi"')))
    assert _parse(output)[0]["Text"] == 'say "hi"'


def test_invalid_code_points_are_skipped():
    span = _span("ab")
    span.chars.insert(1, Char(x=5.0, y=5.0, ucs=0xFFFFFFFF, bbox=Rect(Point(50, 50), Point(60, 60))))
    elements = _parse(document_to_json(_document(span)))
    assert elements[0]["Text"] == "ab"
    assert elements[0]["Bounds"][2] == 2.0