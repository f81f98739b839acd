"""Shared string table mapping numeric indices to cell strings."""

from __future__ import annotations

from collections.abc import Iterable

SPREADSHEET_NAMESPACE = "http://schemas.openxmlformats.org/spreadsheetml/2006/main"
XML_HEADER = '<?xml version="1.0" encoding="UTF-8"?>\n'

_ESCAPES = {
    '"': "&#34;",
    "'": "&#39;",
    "&": "&amp;",
    "<": "&lt;",
    ">": "&gt;",
    "\t": "&#x9;",
    "\n": "&#xA;",
    "\r": "&#xD;",
}


def _is_xml_char(char: str) -> bool:
    code = ord(char)
    return (
        code in (0x09, 0x0A, 0x0D)
        or 0x20 <= code <= 0xD7FF
        or 0xE000 <= code <= 0xFFFD
        or 0x10000 <= code <= 0x10FFFF
    )


def _escape(text: str) -> str:
    return "".join(
        _ESCAPES.get(char, char) if _is_xml_char(char) else "\ufffd" for char in text
    )


class RefTable:
    """An ordered list of strings addressed by index.

    In write mode, adding a string that is already present returns its
    existing index instead of storing it again.
    """

    def __init__(self, is_write: bool = False) -> None:
        self.is_write = is_write
        self._strings: list[str] = []
        self._known: dict[str, int] = {}

    def add_string(self, text: str) -> int:
        """Add ``text`` and return its index."""
        if self.is_write and text in self._known:
            return self._known[text]
        self._strings.append(text)
        index = len(self._strings) - 1
        self._known[text] = index
        return index

    def resolve_shared_string(self, index: int) -> str:
        """Return the string stored at ``index``."""
        if index < 0:
            raise IndexError(f"shared string index {index} out of range")
        return self._strings[index]

    def __len__(self) -> int:
        return len(self._strings)

    def to_sst(self) -> dict:
        """Return the table as counts and strings, the shape of a shared string part."""
        count = len(self._strings)
        return {"count": count, "unique_count": count, "strings": list(self._strings)}

    def to_xml(self) -> str:
        """Serialise the table as a shared strings XML document."""
        count = len(self._strings)
        items = "".join(f"<si><t>{_escape(text)}</t></si>" for text in self._strings)
        return (
            f'{XML_HEADER}<sst xmlns="{SPREADSHEET_NAMESPACE}" '
            f'count="{count}" uniqueCount="{count}">{items}</sst>'
        )


def make_shared_string_ref_table(items: Iterable[str | Iterable[str]]) -> RefTable:
    """Build a read-mode table from shared string items.

    Each item is either a plain string or a sequence of rich text runs,
    which are joined into one string.
    """
    table = RefTable(is_write=False)
    for item in items:
        if isinstance(item, str):
            table.add_string(item)
        else:
            table.add_string("".join(item))
    return table