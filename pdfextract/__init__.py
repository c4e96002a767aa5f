"""Geometry, document model, line and paragraph joining, and JSON output for positioned PDF glyphs."""

__version__ = "0.1.0"