"""Conversions between spreadsheet cell references and zero based coordinates."""

from __future__ import annotations

import re

FIXED_REF_CHAR = "$"
RANGE_CHAR = ":"

_INT_PATTERN = re.compile(r"[+-]?[0-9]+")


def _atoi(text: str, message: str) -> int:
    if not _INT_PATTERN.fullmatch(text):
        raise ValueError(message)
    return int(text)


def _trunc_div(numerator: int, denominator: int) -> int:
    """Integer division rounding toward zero."""
    quotient = abs(numerator) // abs(denominator)
    return quotient if (numerator >= 0) == (denominator > 0) else -quotient


def get_range_from_string(range_string: str) -> tuple[int, int]:
    """Split a range such as ``"1:3"`` into its lower and upper integers."""
    lower_text, sep, upper_text = range_string.partition(RANGE_CHAR)
    if not sep or not lower_text or not upper_text:
        raise ValueError(f"Invalid range '{range_string}'")
    lower = _atoi(
        lower_text, f"Invalid range (not integer in lower bound) {range_string}"
    )
    upper = _atoi(
        upper_text, f"Invalid range (not integer in upper bound) {range_string}"
    )
    return lower, upper


def col_letters_to_index(letters: str) -> int:
    """Convert column letters such as ``"AA"`` to a zero based column index."""
    total = 0
    multiplier = 1
    offset = 0
    for char in reversed(letters):
        value = offset
        if "A" <= char <= "Z":
            value += ord(char) - ord("A")
        elif "a" <= char <= "z":
            value += ord(char) - ord("a")
        total += value * multiplier
        multiplier *= 26
        offset = 1
    return total


def largest_denominator(
    numerator: int, multiple: int, base_denominator: int, power: int
) -> tuple[int, int]:
    """Return the largest power of the base that still fits into ``numerator``.

    The result is the denominator together with its exponent; ``(1, power)``
    is returned when not even ``multiple`` fits.
    """
    if _trunc_div(numerator, multiple) == 0:
        return 1, power
    while _trunc_div(numerator, multiple * base_denominator) != 0:
        multiple *= base_denominator
        power += 1
    return multiple, power


def format_column_name(col_id: list[int]) -> str:
    """Render base-26 parts as column letters.

    The least significant part ranges over 0-25, all others over 1-26;
    leading zero parts are skipped.
    """
    if not col_id:
        return ""
    *leading, last = col_id
    prefix = "".join(chr(part + 64) for part in leading if part > 0)
    return prefix + chr(last + 65)


def smoosh_base26(parts: list[int]) -> list[int]:
    """Remove zeros from all but the least significant base-26 part."""
    result = list(parts)
    for i in range(len(result) - 2, 0, -1):
        if result[i] == 0 and result[i - 1] > 0:
            result[i - 1] -= 1
            result[i] = 26
    return result


def int_to_base26(x: int) -> list[int]:
    """Split a non-negative integer into plain base-26 digits."""
    denominator, _ = largest_denominator(x, 1, 26, 0)
    parts: list[int] = []
    while denominator > 0:
        parts.append(_trunc_div(x, denominator))
        x -= _trunc_div(x, denominator) * denominator
        denominator //= 26
    return parts


def col_index_to_letters(index: int) -> str:
    """Convert a zero based column index to its letters, e.g. 26 -> ``"AA"``."""
    return format_column_name(smoosh_base26(int_to_base26(index)))


def row_index_to_string(row: int) -> str:
    """Convert a zero based row index to the one based row label."""
    return str(row + 1)


def letters_only(text: str) -> str:
    """Keep only ASCII letters, upper-casing them."""
    return "".join(
        char.upper() for char in text if "A" <= char <= "Z" or "a" <= char <= "z"
    )


def digits_only(text: str) -> str:
    """Keep only ASCII digits."""
    return "".join(char for char in text if "0" <= char <= "9")


def get_coords_from_cell_id(cell_id: str) -> tuple[int, int]:
    """Return zero based ``(x, y)`` for a reference such as ``"B3"``."""
    digits = digits_only(cell_id)
    if not digits:
        raise ValueError(f"Invalid cell reference '{cell_id}': no row number")
    y = int(digits) - 1
    x = col_letters_to_index(letters_only(cell_id))
    return x, y


def get_cell_id_from_coords_with_fixed(
    x: int, y: int, x_fixed: bool, y_fixed: bool
) -> str:
    """Return the reference for ``(x, y)``, marking fixed parts with ``$``."""
    column = col_index_to_letters(x)
    if x_fixed:
        column = FIXED_REF_CHAR + column
    row = row_index_to_string(y)
    if y_fixed:
        row = FIXED_REF_CHAR + row
    return column + row


def get_cell_id_from_coords(x: int, y: int) -> str:
    """Return the reference for zero based ``(x, y)``, e.g. ``(0, 0)`` -> ``"A1"``."""
    return get_cell_id_from_coords_with_fixed(x, y, False, False)


def get_max_min_from_dimension_ref(ref: str) -> tuple[int, int, int, int]:
    """Return ``(minx, miny, maxx, maxy)`` for a dimension such as ``"A1:B2"``."""
    parts = ref.split(RANGE_CHAR)
    if len(parts) < 2:
        raise ValueError(f"Invalid dimension reference '{ref}'")
    minx, miny = get_coords_from_cell_id(parts[0])
    maxx, maxy = get_coords_from_cell_id(parts[1])
    return minx, miny, maxx, maxy