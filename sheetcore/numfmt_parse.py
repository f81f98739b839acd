"""Parsing of number format codes into prefix, suffix and number format parts."""

from __future__ import annotations

from dataclasses import dataclass

GENERAL = "general"

# Kept in the reduced format; looked for in order so the two-character
# codes win over their one-character starts.
FORMATTING_CHARACTERS = (
    "0/", "#/", "?/", "E-", "E+", "e-", "e+", "0", "#", "?", ".", ",", "@", "*",
)

# Only used to detect time formats, not to decode them.
TIME_FORMAT_CHARACTERS = (
    "m", "d", "yy", "h", "m", "AM/PM", "A/P", "am/pm", "a/p", "r", "g", "e",
    "b1", "b2", "[hh]", "[h]", "[mm]", "[m]",
    "s.0000", "s.000", "s.00", "s.0", "s",
    "[ss].0000", "[ss].000", "[ss].00", "[ss].0", "[ss]",
    "[s].0000", "[s].000", "[s].00", "[s].0", "[s]",
)

# Symbols that may appear as literals without escaping.
_LITERAL_CHARS = frozenset("$-+/()!^&'~{}<>=: ")


class NumberFormatError(ValueError):
    """Raised when a number format code is invalid or unsupported."""


@dataclass(frozen=True)
class FormatOptions:
    """One section of a number format, split into its parts."""

    full_format_string: str = ""
    reduced_format_string: str = ""
    prefix: str = ""
    suffix: str = ""
    show_percent: bool = False
    is_time_format: bool = False


FALLBACK_ERROR_FORMAT = FormatOptions(
    full_format_string=GENERAL, reduced_format_string=GENERAL
)


@dataclass(frozen=True)
class ParsedNumberFormat:
    """A full number format with the section to use for each kind of value."""

    num_fmt: str
    is_time_format: bool = False
    negative_format_expects_positive: bool = False
    positive_format: FormatOptions | None = None
    negative_format: FormatOptions | None = None
    zero_format: FormatOptions | None = None
    text_format: FormatOptions | None = None
    parse_error: Exception | None = None


def compare_format_string(first: str, second: str) -> bool:
    """Compare two format codes, treating empty and any-case "general" as equal."""
    if first == second:
        return True

    def normalise(code: str) -> str:
        return GENERAL if code == "" or code.lower() == GENERAL else code

    return normalise(first) == normalise(second)


def _general() -> FormatOptions:
    return FormatOptions(full_format_string=GENERAL, reduced_format_string=GENERAL)


def split_format_on_semicolon(fmt: str) -> list[str]:
    """Split a format into its sections, ignoring escaped and quoted semicolons."""
    sections: list[str] = []
    start = 0
    i = 0
    while i < len(fmt):
        char = fmt[i]
        if char == ";":
            sections.append(fmt[start:i])
            start = i + 1
        elif char == "\\":
            i += 1
        elif char == '"':
            end_quote = fmt.find('"', i + 1)
            if end_quote == -1:
                raise NumberFormatError("invalid format string, unmatched double quote")
            i = end_quote
        i += 1
    sections.append(fmt[start:])
    return sections


def _starts_with_formatting(text: str) -> bool:
    return any(text.startswith(special) for special in FORMATTING_CHARACTERS)


def parse_literals(fmt: str) -> tuple[str, str, bool]:
    """Read leading literals of ``fmt``.

    Returns the literal text, the rest of the format starting at the first
    formatting character (empty if none), and whether a percent sign was seen.
    """
    prefix: list[str] = []
    show_percent = False
    i = 0
    while i < len(fmt):
        rest = fmt[i:]
        char = rest[0]
        if char == "\\":
            if len(rest) > 1:
                i += 1
                prefix.append(rest[1])
        elif char == "_":
            if len(rest) > 1:
                i += 1
        elif char == "*":
            pass
        elif char == '"':
            end_quote = rest.find('"', 1)
            if end_quote == -1:
                raise NumberFormatError("invalid formatting code, unmatched double quote")
            prefix.append(rest[1:end_quote])
            i += end_quote
        elif char == "%":
            show_percent = True
            prefix.append("%")
        elif char == "[":
            bracket = rest.find("]")
            if bracket == -1:
                raise NumberFormatError("invalid formatting code, invalid brackets")
            if len(rest) > 2 and rest[1] == "$":
                dash = rest.find("-")
                if dash != -1 and dash < bracket:
                    prefix.append(rest[2:dash])
                else:
                    raise NumberFormatError(
                        "invalid formatting code, invalid currency annotation"
                    )
            i += bracket
        elif char in _LITERAL_CHARS:
            prefix.append(char)
        elif _starts_with_formatting(rest):
            return "".join(prefix), rest, show_percent
        else:
            raise NumberFormatError(
                "invalid formatting code: unsupported or unescaped characters"
            )
        i += 1
    return "".join(prefix), "", show_percent


def split_format_and_suffix_format(fmt: str) -> tuple[str, str]:
    """Split ``fmt`` after its leading run of formatting characters."""
    i = 0
    while i < len(fmt):
        rest = fmt[i:]
        special = next((s for s in FORMATTING_CHARACTERS if rest.startswith(s)), None)
        if special is None:
            break
        i += len(special)
    return fmt[:i], fmt[i:]


def parse_number_format_section(section: str) -> FormatOptions:
    """Parse one format section into prefix, number format and suffix."""
    reduced = section.strip()
    if compare_format_string(reduced, GENERAL):
        return _general()

    prefix, reduced, percent_before = parse_literals(reduced)
    reduced, suffix_format = split_format_and_suffix_format(reduced)
    suffix, remaining, percent_after = parse_literals(suffix_format)
    if remaining:
        # Literals interleaved with number formatting are not supported.
        raise NumberFormatError("invalid or unsupported format string")

    return FormatOptions(
        full_format_string=section,
        reduced_format_string=reduced,
        prefix=prefix,
        suffix=suffix,
        show_percent=percent_before or percent_after,
        is_time_format=False,
    )


def parse_full_number_format_string(num_fmt: str) -> ParsedNumberFormat:
    """Parse a full format code into its positive, negative, zero and text sections.

    Invalid sections fall back to "general"; the last problem found is kept
    in ``parse_error``.
    """
    if is_time_format(num_fmt):
        return ParsedNumberFormat(
            num_fmt=num_fmt, is_time_format=True, text_format=_general()
        )

    error: Exception | None = None
    options: list[FormatOptions] = []
    try:
        sections = split_format_on_semicolon(num_fmt)
    except NumberFormatError as exc:
        options.append(FALLBACK_ERROR_FORMAT)
        error = exc
    else:
        for section in sections:
            try:
                options.append(parse_number_format_section(section))
            except NumberFormatError as exc:
                options.append(FALLBACK_ERROR_FORMAT)
                error = exc

    if len(options) > 4:
        options = [FALLBACK_ERROR_FORMAT]
        error = NumberFormatError("invalid number format, too many format sections")

    if len(options) == 1:
        only = options[0]
        text = only if "@" in only.full_format_string else _general()
        return ParsedNumberFormat(
            num_fmt=num_fmt,
            positive_format=only,
            negative_format=only,
            zero_format=only,
            text_format=text,
            parse_error=error,
        )
    if len(options) == 2:
        positive, negative = options
        return ParsedNumberFormat(
            num_fmt=num_fmt,
            negative_format_expects_positive=True,
            positive_format=positive,
            negative_format=negative,
            zero_format=positive,
            text_format=_general(),
            parse_error=error,
        )
    if len(options) == 3:
        positive, negative, zero = options
        return ParsedNumberFormat(
            num_fmt=num_fmt,
            negative_format_expects_positive=True,
            positive_format=positive,
            negative_format=negative,
            zero_format=zero,
            text_format=_general(),
            parse_error=error,
        )
    positive, negative, zero, text = options
    return ParsedNumberFormat(
        num_fmt=num_fmt,
        negative_format_expects_positive=True,
        positive_format=positive,
        negative_format=negative,
        zero_format=zero,
        text_format=text,
        parse_error=error,
    )


def is_time_format(fmt: str) -> bool:
    """Return whether ``fmt`` looks like a date or time format."""
    found = False
    i = 0
    while i < len(fmt):
        rest = fmt[i:]
        char = rest[0]
        if char in ("\\", "_"):
            if len(rest) > 1:
                i += 1
        elif char == "*" or char == "," or char in _LITERAL_CHARS:
            pass
        elif char == '"':
            end_quote = rest.find('"', 1)
            if end_quote == -1:
                return False
            i += end_quote
        else:
            special = next(
                (s for s in TIME_FORMAT_CHARACTERS if rest.startswith(s)), None
            )
            if special is not None:
                found = True
                i += len(special)
                continue
            if char == "[":
                bracket = rest.find("]")
                if bracket == -1:
                    return False
                i += bracket + 1
                continue
            return False
        i += 1
    return found


def is_12_hour_time(fmt: str) -> bool:
    """Return whether a time format uses a 12 hour clock."""
    return any(marker in fmt for marker in ("am/pm", "AM/PM", "a/p", "A/P"))