"""JSON output: text runs with their bounds, font and structure path."""

from __future__ import annotations

import json
from typing import Iterator, Optional

from pdfextract.document import Block, Document, Line, Paragraph, Span, Structure
from pdfextract.geometry import Rect

_MAX_UNICODE = 0x10FFFF


def _escape(text: str) -> str:
    return json.dumps(text, ensure_ascii=False)[1:-1]


def structure_path(structure: Structure) -> str:
    """Backslash-separated path of structure names from the root, e.g. DOCUMENT\\P[3]."""
    parts = []
    for node in structure.path():
        label = node.type.label() if hasattr(node.type, "label") else str(node.type)
        parts.append(f"{label}[{node.uid}]" if node.uid != 0 else label)
    return "\\".join(parts)


def _walk_spans(content: list) -> Iterator[Span]:
    for item in content:
        if isinstance(item, Span):
            yield item
        elif isinstance(item, (Line, Paragraph, Block)):
            yield from _walk_spans(item.content)


def _element(span: Span, structure: Optional[Structure], text: str, bbox: Rect) -> str:
    parts = [
        "{\n\"Bounds\": [ %f, %f, %f, %f ],\n\"Text\": \""
        % (bbox.min.x, bbox.min.y, bbox.max.x, bbox.max.y),
        _escape(text),
        "\",\n\"Font\": { \"family_name\": \"%s\" },\n\"TextSize\": %g"
        % (_escape(span.font_name), span.ctm.font_size()),
    ]
    if structure is not None:
        parts.append(",\n\"Path\" : \"" + _escape(structure_path(structure)) + "\"")
    parts.append("\n}")
    return "".join(parts)


def _same_run(last: Span, span: Span, structure: Optional[Structure]) -> bool:
    return (
        structure is span.structure
        and bool(last.font_bold) == bool(span.font_bold)
        and bool(last.font_italic) == bool(span.font_italic)
        and bool(last.wmode) == bool(span.wmode)
        and last.font_name == span.font_name
    )


def document_to_json(document: Document) -> str:
    """Comma-separated JSON objects, one per run of text sharing font and structure."""
    elements: list[str] = []
    for subpage in document.subpages():
        last_span: Optional[Span] = None
        structure: Optional[Structure] = None
        text: list[str] = []
        bbox = Rect.empty()
        for span in _walk_spans(subpage.content):
            if last_span is not None and not _same_run(last_span, span, structure):
                elements.append(_element(last_span, structure, "".join(text), bbox))
                text = []
                bbox = Rect.empty()
            last_span = span
            structure = span.structure
            for char in span.chars:
                if not 0 <= char.ucs <= _MAX_UNICODE:
                    continue
                text.append(chr(char.ucs))
                bbox = bbox.union(char.bbox)
        if last_span is not None:
            elements.append(_element(last_span, structure, "".join(text), bbox))
    return ",\n".join(elements)