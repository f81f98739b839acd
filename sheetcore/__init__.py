"""Core helpers for spreadsheet workbooks: coordinates, shared strings, formulas, colours, relationships and number formats."""

__version__ = "0.1.0"

__all__ = ["coords", "reftable", "formulas", "hsl", "rels", "numfmt_parse", "numfmt"]