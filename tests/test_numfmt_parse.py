import pytest

from sheetcore.numfmt_parse import (
    FALLBACK_ERROR_FORMAT,
    NumberFormatError,
    compare_format_string,
    is_12_hour_time,
    is_time_format,
    parse_full_number_format_string,
    parse_literals,
    parse_number_format_section,
    split_format_and_suffix_format,
    split_format_on_semicolon,
)


@pytest.mark.parametrize(
    "first, second, expected",
    [
        ("", "General", True),
        ("GENERAL", "general", True),
        ("", "", True),
        ("0", "0.00", False),
        ("0", "general", False),
    ],
)
def test_compare_format_string(first, second, expected):
    assert compare_format_string(first, second) is expected


def test_split_on_semicolon_sections():
    assert split_format_on_semicolon('0;(0);"zero"') == ["0", "(0)", '"zero"']


def test_split_on_semicolon_skips_quoted():
    sections = split_format_on_semicolon('0;(0);"zero";"Behold; "@')
    assert sections == ["0", "(0)", '"zero"', '"Behold; "@']


def test_split_on_semicolon_skips_escaped():
    assert split_format_on_semicolon("0\\;0") == ["0\\;0"]


def test_split_on_semicolon_unmatched_quote():
    with pytest.raises(NumberFormatError):
        split_format_on_semicolon('0;"open')


def test_parse_literals_currency():
    assert parse_literals("[$$-409]0") == ("$", "0", False)


def test_parse_literals_percent():
    assert parse_literals("%0") == ("%", "0", True)


def test_parse_literals_quoted_and_escaped():
    assert parse_literals('"asdf"0') == ("asdf", "0", False)
    assert parse_literals("\\[0") == ("[", "0", False)
    assert parse_literals("_[0") == ("", "0", False)


def test_parse_literals_only_literals():
    assert parse_literals("(-)") == ("(-)", "", False)


@pytest.mark.parametrize("code", ["[red0", "[$USD]0", "x0", '"open'])
def test_parse_literals_errors(code):
    with pytest.raises(NumberFormatError):
        parse_literals(code)


def test_split_format_and_suffix():
    assert split_format_and_suffix_format("0.00[$USD-409]") == ("0.00", "[$USD-409]")
    assert split_format_and_suffix_format("#,##0") == ("#,##0", "")
    assert split_format_and_suffix_format("0.00e+00 x") == ("0.00e+00", " x")


def test_section_prefix_and_suffix():
    before = parse_number_format_section("[$USD-409] 0")
    assert before.prefix == "USD "
    assert before.reduced_format_string == "0"
    after = parse_number_format_section("0[$USD-409]")
    assert after.suffix == "USD"
    assert after.prefix == ""
    assert after.full_format_string == "0[$USD-409]"


def test_section_general_and_percent():
    general = parse_number_format_section("  General ")
    assert general.reduced_format_string == "general"
    percent = parse_number_format_section("0%")
    assert percent.show_percent is True
    assert percent.suffix == "%"


def test_section_interleaved_is_rejected():
    with pytest.raises(NumberFormatError):
        parse_number_format_section('0"a"0')


@pytest.mark.parametrize(
    "code, expected",
    [
        ("yyyy-mm-dd", True),
        ("hh:mm:ss", True),
        ("[h]:mm", True),
        ("m/d/yy", True),
        ("0.00", False),
        ("general", False),
        ("[red]0", False),
        ('"open', False),
        ("", False),
    ],
)
def test_is_time_format(code, expected):
    assert is_time_format(code) is expected


def test_is_12_hour_time():
    assert is_12_hour_time("h:mm AM/PM") is True
    assert is_12_hour_time("h:mm a/p") is True
    assert is_12_hour_time("hh:mm") is False


def test_full_single_section():
    parsed = parse_full_number_format_string("0")
    assert parsed.positive_format is parsed.negative_format is parsed.zero_format
    assert parsed.negative_format_expects_positive is False
    assert parsed.text_format.reduced_format_string == "general"
    assert parsed.parse_error is None


def test_full_single_text_section():
    parsed = parse_full_number_format_string('"Behold: "@')
    assert parsed.text_format.prefix == "Behold: "
    assert parsed.text_format.reduced_format_string == "@"


def test_full_two_sections():
    parsed = parse_full_number_format_string("0;(0)")
    assert parsed.negative_format_expects_positive is True
    assert parsed.zero_format is parsed.positive_format
    assert parsed.negative_format.prefix == "("
    assert parsed.negative_format.suffix == ")"


def test_full_three_sections():
    parsed = parse_full_number_format_string('0;(0);"zero"')
    assert parsed.zero_format.prefix == "zero"
    assert parsed.zero_format.reduced_format_string == ""
    assert parsed.text_format.reduced_format_string == "general"


def test_full_four_sections():
    parsed = parse_full_number_format_string('0;(0);"zero";"Behold: "@')
    assert parsed.text_format.prefix == "Behold: "
    assert parsed.text_format.reduced_format_string == "@"
    assert parsed.parse_error is None


def test_full_too_many_sections():
    parsed = parse_full_number_format_string("0;0;0;0;0")
    assert isinstance(parsed.parse_error, NumberFormatError)
    assert parsed.positive_format == FALLBACK_ERROR_FORMAT
    assert parsed.zero_format == FALLBACK_ERROR_FORMAT


def test_full_unmatched_quote_falls_back():
    parsed = parse_full_number_format_string('0;"open')
    assert isinstance(parsed.parse_error, NumberFormatError)
    assert parsed.positive_format == FALLBACK_ERROR_FORMAT


def test_full_invalid_section_falls_back():
    parsed = parse_full_number_format_string("0;x0")
    assert parsed.negative_format == FALLBACK_ERROR_FORMAT
    assert parsed.positive_format.reduced_format_string == "0"
    assert parsed.parse_error is not None and isinstance(
        parsed.parse_error, NumberFormatError
    )


def test_full_time_format():
    parsed = parse_full_number_format_string("yyyy-mm-dd")
    assert parsed.is_time_format is True
    assert parsed.positive_format is None
    assert parsed.text_format.reduced_format_string == "general"
    assert parsed.num_fmt == "yyyy-mm-dd"