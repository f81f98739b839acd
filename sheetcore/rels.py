"""Workbook relationship parts and worksheet XML truncation."""

from __future__ import annotations

import posixpath
import xml.etree.ElementTree as ElementTree
from collections.abc import Mapping
from xml.parsers import expat

RELATIONSHIPS_NAMESPACE = "http://schemas.openxmlformats.org/package/2006/relationships"
_REL_BASE = "http://schemas.openxmlformats.org/officeDocument/2006/relationships"
WORKSHEET_REL_TYPE = f"{_REL_BASE}/worksheet"
SHARED_STRINGS_REL_TYPE = f"{_REL_BASE}/sharedStrings"
THEME_REL_TYPE = f"{_REL_BASE}/theme"
STYLES_REL_TYPE = f"{_REL_BASE}/styles"

XML_HEADER = '<?xml version="1.0" encoding="UTF-8"?>\n'
SHEET_ENDING = b"</sheetData></worksheet>"

_ATTR_ESCAPES = {
    "&": "&amp;",
    "<": "&lt;",
    ">": "&gt;",
    '"': "&#34;",
    "'": "&#39;",
    "\t": "&#x9;",
    "\n": "&#xA;",
    "\r": "&#xD;",
}


class ReaderError(Exception):
    """Raised when a spreadsheet part cannot be read."""


def _escape_attr(text: str) -> str:
    return "".join(_ATTR_ESCAPES.get(char, char) for char in text)


def _relationship(rel_id: str, target: str, rel_type: str) -> str:
    return (
        f'<Relationship Id="{_escape_attr(rel_id)}" Target="{_escape_attr(target)}" '
        f'Type="{_escape_attr(rel_type)}"></Relationship>'
    )


def make_workbook_rels_xml(rels: Mapping[str, str]) -> str:
    """Serialise worksheet relationships plus the shared strings, theme and styles parts.

    ``rels`` maps ids such as ``"rId1"`` to worksheet targets; the ids must
    number the worksheets 1 to n. The three extra parts follow as n+1 to n+3.
    """
    count = len(rels)
    slots: list[str | None] = [None] * count
    for rel_id, target in rels.items():
        try:
            index = int(rel_id[3:])
        except ValueError:
            raise ValueError(f"invalid relationship id '{rel_id}'") from None
        if not 1 <= index <= count:
            raise ValueError(f"relationship id '{rel_id}' out of range")
        slots[index - 1] = _relationship(rel_id, target, WORKSHEET_REL_TYPE)

    extras = [
        ("sharedStrings.xml", SHARED_STRINGS_REL_TYPE),
        ("theme/theme1.xml", THEME_REL_TYPE),
        ("styles.xml", STYLES_REL_TYPE),
    ]
    body = "".join(slot for slot in slots if slot is not None)
    for offset, (target, rel_type) in enumerate(extras, start=1):
        body += _relationship(f"rId{count + offset}", target, rel_type)
    return f'{XML_HEADER}<Relationships xmlns="{RELATIONSHIPS_NAMESPACE}">{body}</Relationships>'


def _local_name(tag: str) -> str:
    if tag.startswith("{"):
        tag = tag.split("}", 1)[1]
    return tag.rsplit(":", 1)[-1]


def parse_workbook_rels(data: bytes | str) -> dict[str, str]:
    """Map relationship ids to worksheet names (file name without ``.xml``)."""
    try:
        root = ElementTree.fromstring(data)
    except ElementTree.ParseError as exc:
        raise ReaderError(f"invalid workbook relationships: {exc}") from exc
    sheets: dict[str, str] = {}
    for element in root.iter():
        if _local_name(element.tag) != "Relationship":
            continue
        target = element.get("Target", "")
        if target.endswith(".xml") and element.get("Type") == WORKSHEET_REL_TYPE:
            filename = posixpath.basename(target)
            sheets[element.get("Id", "")] = filename.replace(".xml", "", 1)
    return sheets


class _LimitReached(Exception):
    def __init__(self, offset: int) -> None:
        super().__init__(offset)
        self.offset = offset


def _tag_end(data: bytes, start: int) -> int:
    """Return the offset just past the tag beginning at ``start``."""
    quote: int | None = None
    for position in range(start, len(data)):
        byte = data[position]
        if quote is not None:
            if byte == quote:
                quote = None
        elif byte in (0x22, 0x27):
            quote = byte
        elif byte == 0x3E:
            return position + 1
    return len(data)


def truncate_sheet_xml(data: bytes | str, row_limit: int) -> bytes:
    """Keep only the first ``row_limit`` rows of a worksheet document.

    When the limit is reached everything after the last kept row is dropped
    and the sheet data and worksheet elements are closed. A document with
    fewer rows is returned unchanged.
    """
    raw = data.encode("utf-8") if isinstance(data, str) else bytes(data)
    parser = expat.ParserCreate()
    rows = 0

    def on_end(name: str) -> None:
        nonlocal rows
        if _local_name(name) != "row":
            return
        rows += 1
        if rows >= row_limit:
            raise _LimitReached(_tag_end(raw, parser.CurrentByteIndex))

    parser.EndElementHandler = on_end
    try:
        parser.Parse(raw, True)
    except _LimitReached as reached:
        return raw[: reached.offset] + SHEET_ENDING
    except expat.ExpatError as exc:
        raise ReaderError(f"invalid worksheet XML: {exc}") from exc
    return raw