"""Rendering of cell values through their number format codes."""

from __future__ import annotations

import math
from datetime import datetime, timedelta
from decimal import Decimal
from enum import Enum

from .numfmt_parse import (
    GENERAL,
    FormatOptions,
    NumberFormatError,
    ParsedNumberFormat,
    is_12_hour_time,
    parse_full_number_format_string,
)

STRING_FORMAT = "@"

# Numbers outside this range are shown in scientific notation by "general".
MIN_NON_SCIENTIFIC_NUMBER = 1e-9
MAX_NON_SCIENTIFIC_NUMBER = 1e11
_SMALLEST_NONZERO_FLOAT = 5e-324

_EPOCH_1900 = datetime(1899, 12, 30)
_EPOCH_1904 = datetime(1904, 1, 1)

_FIXED_DIGITS = {
    "0": 0,
    "#,##0": 0,
    "0.0": 1,
    "#,##0.0": 1,
    "0.00": 2,
    "#,##0.00": 2,
    "0.000": 3,
    "#,##0.000": 3,
    "0.0000": 4,
    "#,##0.0000": 4,
}
_SCIENTIFIC_FORMATS = frozenset({"0.00e+00", "##0.0e+0"})

# Excel date codes mapped to layout tokens; each is replaced once, in order.
_TIME_REPLACEMENTS = (
    ("yyyy", "2006"),
    ("yy", "06"),
    ("mmmm", "%%%%"),
    ("dddd", "&&&&"),
    ("dd", "02"),
    ("d", "2"),
    ("mmm", "Jan"),
    ("mmss", "0405"),
    ("ss", "05"),
    ("mm:", "04:"),
    (":mm", ":04"),
    ("mm", "01"),
    ("am/pm", "pm"),
    ("m/", "1/"),
    ("%%%%", "January"),
    ("&&&&", "Monday"),
)

_MONTHS = (
    "January", "February", "March", "April", "May", "June", "July",
    "August", "September", "October", "November", "December",
)
_WEEKDAYS = (
    "Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday", "Sunday",
)
_ZONE_LAYOUTS = (
    ("070000", "+000000"),
    ("07:00:00", "+00:00:00"),
    ("0700", "+0000"),
    ("07:00", "+00:00"),
    ("07", "+00"),
)


class CellType(Enum):
    """The kind of value a cell holds."""

    STRING = "s"
    STRING_FORMULA = "str"
    NUMERIC = "n"
    BOOL = "b"
    INLINE = "inlineStr"
    ERROR = "e"
    DATE = "d"


def _parse_float(text: str) -> float:
    if text != text.strip() or "_" in text:
        raise ValueError(f"invalid number: {text!r}")
    value = float(text)
    if math.isinf(value) and "inf" not in text.lower():
        raise ValueError(f"number out of range: {text!r}")
    return value


def _special(value: float) -> str | None:
    if math.isnan(value):
        return "NaN"
    if math.isinf(value):
        return "+Inf" if value > 0 else "-Inf"
    return None


def _shortest_fixed(value: float) -> str:
    special = _special(value)
    if special is not None:
        return special
    return format(Decimal(repr(value)).normalize(), "f")


def _shortest_scientific(value: float) -> str:
    special = _special(value)
    if special is not None:
        return special
    sign, digit_tuple, exponent = Decimal(repr(value)).normalize().as_tuple()
    digits = "".join(str(d) for d in digit_tuple)
    power = len(digits) - 1 + exponent
    mantissa = digits[0] + ("." + digits[1:] if len(digits) > 1 else "")
    exp_sign = "-" if power < 0 else "+"
    return f"{'-' if sign else ''}{mantissa}E{exp_sign}{abs(power):02d}"


def _printf(value: float, spec: str) -> str:
    special = _special(value)
    if special is not None:
        return special
    return format(value, spec)


def excel_time_to_datetime(value: float | str, date1904: bool = False) -> datetime:
    """Convert a serial day number to a datetime in the 1900 or 1904 date system."""
    number = _parse_float(value) if isinstance(value, str) else float(value)
    epoch = _EPOCH_1904 if date1904 else _EPOCH_1900
    return epoch + timedelta(days=number)


def general_numeric_scientific(value: str, allow_scientific: bool = True) -> str:
    """Render a number the way the "general" format shows it.

    Very small and very large magnitudes switch to scientific notation when
    ``allow_scientific`` is true. Raises ``ValueError`` for non-numbers.
    """
    if value.strip() == "":
        return ""
    number = _parse_float(value)
    if allow_scientific:
        magnitude = abs(number)
        if (
            _SMALLEST_NONZERO_FLOAT <= magnitude < MIN_NON_SCIENTIFIC_NUMBER
        ) or magnitude >= MAX_NON_SCIENTIFIC_NUMBER:
            return _shortest_scientific(number)
    return _shortest_fixed(number)


def _is_lower_at(text: str, index: int) -> bool:
    return index < len(text) and "a" <= text[index] <= "z"


def _match_layout_token(layout: str, i: int, moment: datetime) -> tuple[str, int] | None:
    rest = layout[i:]
    char = rest[0]
    hour12 = moment.hour % 12 or 12
    year_day = moment.timetuple().tm_yday

    if char == "J" and rest.startswith("Jan"):
        if rest.startswith("January"):
            return _MONTHS[moment.month - 1], 7
        if not _is_lower_at(layout, i + 3):
            return _MONTHS[moment.month - 1][:3], 3
    elif char == "M":
        if rest.startswith("Mon"):
            if rest.startswith("Monday"):
                return _WEEKDAYS[moment.weekday()], 6
            if not _is_lower_at(layout, i + 3):
                return _WEEKDAYS[moment.weekday()][:3], 3
        if rest.startswith("MST"):
            return "UTC", 3
    elif char == "0":
        if rest.startswith("002"):
            return f"{year_day:03d}", 3
        if len(rest) >= 2 and rest[1] in "123456":
            padded = {
                "1": moment.month,
                "2": moment.day,
                "3": hour12,
                "4": moment.minute,
                "5": moment.second,
                "6": moment.year % 100,
            }[rest[1]]
            return f"{padded:02d}", 2
    elif char == "1":
        if rest.startswith("15"):
            return f"{moment.hour:02d}", 2
        return str(moment.month), 1
    elif char == "2":
        if rest.startswith("2006"):
            return f"{moment.year:04d}", 4
        return str(moment.day), 1
    elif char == "_":
        if rest.startswith("_2"):
            if rest.startswith("_2006"):
                return f"_{moment.year:04d}", 5
            return f"{moment.day:>2}", 2
        if rest.startswith("__2"):
            return f"{year_day:>3}", 3
    elif char == "3":
        return str(hour12), 1
    elif char == "4":
        return str(moment.minute), 1
    elif char == "5":
        return str(moment.second), 1
    elif char == "P" and rest.startswith("PM"):
        return ("PM" if moment.hour >= 12 else "AM"), 2
    elif char == "p" and rest.startswith("pm"):
        return ("pm" if moment.hour >= 12 else "am"), 2
    elif char in "-Z":
        for zone_layout, zero_offset in _ZONE_LAYOUTS:
            if rest[1:].startswith(zone_layout):
                text = "Z" if char == "Z" else zero_offset
                return text, 1 + len(zone_layout)
    elif char in ".," and len(rest) > 1 and rest[1] in "09":
        digit = rest[1]
        end = 1
        while end < len(rest) and rest[end] == digit:
            end += 1
        if not (end < len(rest) and rest[end].isdigit()):
            count = end - 1
            nanos = f"{moment.microsecond:06d}000"[:count]
            if digit == "9":
                nanos = nanos.rstrip("0")
                return (char + nanos if nanos else ""), end
            return char + nanos, end
    return None


def _render_layout(moment: datetime, layout: str) -> str:
    pieces: list[str] = []
    i = 0
    while i < len(layout):
        match = _match_layout_token(layout, i, moment)
        if match is None:
            pieces.append(layout[i])
            i += 1
        else:
            text, width = match
            pieces.append(text)
            i += width
    return "".join(pieces)


def format_time(parsed: ParsedNumberFormat, value: str, date1904: bool = False) -> str:
    """Render a serial date through a date or time format code."""
    moment = excel_time_to_datetime(_parse_float(value), date1904)
    layout = parsed.num_fmt
    # The am/pm marker, not the number of "h", decides the clock.
    if is_12_hour_time(layout):
        layout = layout.replace("hh", "03", 1).replace("h", "3", 1)
    else:
        layout = layout.replace("hh", "15", 1).replace("h", "15", 1)
    for excel_code, token in _TIME_REPLACEMENTS:
        layout = layout.replace(excel_code, token, 1)
    if moment.hour < 1:
        for old in ("]:", "[03]", "[3]", "[15]"):
            layout = layout.replace(old, "]" if old == "]:" else "", 1)
    else:
        layout = layout.replace("[3]", "3", 1).replace("[15]", "15", 1)
    return _render_layout(moment, layout)


def _choose_section(
    parsed: ParsedNumberFormat, number: float
) -> tuple[FormatOptions, float]:
    if number > 0:
        section = parsed.positive_format
    elif number < 0:
        if parsed.negative_format_expects_positive:
            number = abs(number)
        section = parsed.negative_format
    else:
        section = parsed.zero_format
    if section is None:
        raise NumberFormatError("number format has no section for this value")
    return section, number


def format_numeric(parsed: ParsedNumberFormat, value: str, date1904: bool = False) -> str:
    """Render a numeric cell value through a parsed number format.

    Raises ``ValueError`` if the value is not a number. Unsupported number
    formats give back the value unchanged.
    """
    raw = value.strip()
    if raw == "":
        return ""
    if parsed.is_time_format:
        return format_time(parsed, raw, date1904)

    number = _parse_float(raw)
    section, number = _choose_section(parsed, number)
    if section.show_percent:
        number *= 100

    reduced = section.reduced_format_string
    if reduced == GENERAL:
        try:
            return general_numeric_scientific(value, True)
        except ValueError:
            return raw
    if reduced == STRING_FORMAT:
        formatted = value
    elif reduced in _FIXED_DIGITS:
        formatted = _printf(number, f".{_FIXED_DIGITS[reduced]}f")
    elif reduced in _SCIENTIFIC_FORMATS:
        formatted = _printf(number, "e")
    elif reduced == "":
        formatted = ""
    else:
        return raw
    return section.prefix + formatted + section.suffix


def format_value(
    num_fmt: str, value: str, cell_type: CellType, date1904: bool = False
) -> str:
    """Render a cell value of the given type through the format code ``num_fmt``.

    Raises ``ValueError`` (or :class:`NumberFormatError`) where the value
    cannot be shown with the format.
    """
    parsed = parse_full_number_format_string(num_fmt)
    if cell_type is CellType.ERROR:
        return value
    if cell_type is CellType.BOOL:
        if value == "0":
            return "FALSE"
        if value == "1":
            return "TRUE"
        raise ValueError("invalid value in bool cell")
    if cell_type in (CellType.STRING, CellType.INLINE, CellType.STRING_FORMULA):
        text_format = parsed.text_format
        if text_format is None:
            return value
        reduced = text_format.reduced_format_string
        if reduced == GENERAL:
            return value
        if reduced == STRING_FORMAT:
            return text_format.prefix + value + text_format.suffix
        if reduced == "":
            # The format ignores the value and shows only its literals.
            return text_format.prefix + text_format.suffix
        raise NumberFormatError(
            "invalid or unsupported format, unsupported string format"
        )
    if cell_type is CellType.DATE:
        return value
    if cell_type is CellType.NUMERIC:
        return format_numeric(parsed, value, date1904)
    raise ValueError("unknown cell type")