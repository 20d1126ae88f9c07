"""Tests for the ICU message renderer.

Tests verify:
- Simple argument stringification
- Named number formats (units, percent, integer)
- Cardinal/ordinal plural selection, exact matches, offsets and '#'
- Select branches
- Date arguments
- Missing and malformed values
"""

from __future__ import annotations

from datetime import date
from decimal import Decimal

import pytest
from hypothesis import given
from hypothesis import strategies as st

from icuref.diagnostics import FormattingError, MissingValueError, TemplateSyntaxError
from icuref.runtime import (
    NUMBER_FORMATS,
    IcuMessageFormat,
    NumberFormatOptions,
    resolve_number_format,
    value_to_text,
)
from icuref.runtime.number_formats import DEFAULT_NUMBER_FORMAT
from icuref.syntax import MessageTemplate, parse_template

FILES = "{count, plural, one {# file} other {# files}}"


def fmt(template: str, values: dict[str, object] | None = None, locale: str = "en") -> str:
    return IcuMessageFormat(template, locale).format(values)


class TestValueToText:
    """value_to_text() stringifies like JavaScript."""

    @pytest.mark.parametrize(
        ("value", "expected"),
        [
            ("text", "text"),
            (True, "true"),
            (False, "false"),
            (None, "null"),
            (3.0, "3"),
            (2.5, "2.5"),
            (42, "42"),
            ([1, "a", None], "1,a,"),
            ((1, 2), "1,2"),
        ],
    )
    def test_conversion(self, value: object, expected: str) -> None:
        """Values stringify as a browser would."""
        assert value_to_text(value) == expected

    def test_simple_argument_uses_text(self) -> None:
        """{id} renders the stringified value without number formatting."""
        assert fmt("{url} ({n})", {"url": "https://example.com/a.js", "n": 1234}) == (
            "https://example.com/a.js (1234)"
        )


class TestNumberArguments:
    """{id, number, style}."""

    @pytest.mark.parametrize(
        ("template", "value", "expected"),
        [
            ("{n, number}", 1234.5678, "1,234.568"),
            ("{n, number, milliseconds}", 1230, "1,230"),
            ("{n, number, seconds}", 5.2, "5.2"),
            ("{n, number, seconds}", 5, "5.0"),
            ("{n, number, bytes}", 1.5, "2"),
            ("{n, number, integer}", 3.7, "4"),
            ("{n, number, percent}", 0.5, "50%"),
            ("{n, number, extendedPercent}", 0.12345, "12.35%"),
            ("{n, number, noSuchStyle}", 1.23456, "1.235"),
        ],
    )
    def test_named_formats(self, template: str, value: float, expected: str) -> None:
        """Each named format applies its digit bounds."""
        assert fmt(template, {"n": value}) == expected

    def test_locale_separators(self) -> None:
        """Numbers follow the formatter locale."""
        assert fmt("{n, number}", {"n": 1234.5}, locale="de") == "1.234,5"

    def test_numeric_string(self) -> None:
        """Numeric strings are accepted."""
        assert fmt("{n, number}", {"n": " 42.50 "}) == "42.5"

    def test_decimal(self) -> None:
        """Decimal values are accepted."""
        assert fmt("{n, number}", {"n": Decimal("0.125")}) == "0.125"

    @pytest.mark.parametrize("value", ["abc", True, None, [1], float("nan"), float("inf")])
    def test_non_numeric_rejected(self, value: object) -> None:
        """Booleans, text and non-finite values are not numbers."""
        with pytest.raises(FormattingError):
            fmt("{n, number}", {"n": value})

    def test_custom_formats(self) -> None:
        """Applications can pass their own named formats."""
        formats = {**NUMBER_FORMATS, "twoDigits": NumberFormatOptions(2, 2)}
        formatter = IcuMessageFormat("{n, number, twoDigits}", "en", formats)

        assert formatter.format({"n": 3}) == "3.00"


class TestNumberFormatOptions:
    """NumberFormatOptions validation and lookup."""

    def test_negative_digits_rejected(self) -> None:
        """Digit counts must be non-negative."""
        with pytest.raises(ValueError, match="non-negative"):
            NumberFormatOptions(minimum_fraction_digits=-1)

    def test_inverted_bounds_rejected(self) -> None:
        """Maximum must not be below minimum."""
        with pytest.raises(ValueError, match="maximum_fraction_digits"):
            NumberFormatOptions(minimum_fraction_digits=2, maximum_fraction_digits=1)

    def test_resolve(self) -> None:
        """Unknown and missing styles resolve to the default."""
        assert resolve_number_format("seconds") == NumberFormatOptions(1, 1)
        assert resolve_number_format(None) is DEFAULT_NUMBER_FORMAT
        assert resolve_number_format("unknown") is DEFAULT_NUMBER_FORMAT


class TestPlural:
    """Cardinal and ordinal plurals."""

    @pytest.mark.parametrize(
        ("count", "expected"),
        [(0, "0 files"), (1, "1 file"), (2, "2 files"), (1200, "1,200 files"), (1.5, "1.5 files")],
    )
    def test_categories_and_pound(self, count: float, expected: str) -> None:
        """'#' renders the number in the default format."""
        assert fmt(FILES, {"count": count}) == expected

    def test_integral_float_selects_one(self) -> None:
        """1.0 selects the same branch as 1."""
        assert fmt(FILES, {"count": 1.0}) == "1 file"
        assert fmt(FILES, {"count": Decimal("1.00")}) == "1 file"

    def test_exact_match_before_category(self) -> None:
        """=N branches win over categories."""
        template = "{n, plural, =0 {No files} one {# file} other {# files}}"

        assert fmt(template, {"n": 0}) == "No files"
        assert fmt(template, {"n": 1}) == "1 file"

    def test_offset(self) -> None:
        """Offset shifts '#' and category selection, not exact matches."""
        template = (
            "{n, plural, offset:1 =0 {Nobody} =1 {You} "
            "one {You and # other} other {You and # others}}"
        )

        assert fmt(template, {"n": 0}) == "Nobody"
        assert fmt(template, {"n": 1}) == "You"
        assert fmt(template, {"n": 2}) == "You and 1 other"
        assert fmt(template, {"n": 5}) == "You and 4 others"

    def test_locale_rules(self) -> None:
        """Categories come from the formatter locale."""
        template = "{n, plural, one {# plik} few {# pliki} many {# plików} other {# pliku}}"

        assert fmt(template, {"n": 2}, locale="pl") == "2 pliki"
        assert fmt(template, {"n": 5}, locale="pl") == "5 plików"

    def test_missing_category_uses_other(self) -> None:
        """A category without a branch falls back to 'other'."""
        assert fmt("{n, plural, other {# things}}", {"n": 1}) == "1 things"

    def test_selectordinal(self) -> None:
        """Ordinal rules pick st/nd/rd/th."""
        template = "{p, selectordinal, one {#st} two {#nd} few {#rd} other {#th}}"

        assert [fmt(template, {"p": p}) for p in (1, 2, 3, 4, 11, 22)] == [
            "1st",
            "2nd",
            "3rd",
            "4th",
            "11th",
            "22nd",
        ]

    def test_untaken_branch_values_not_required(self) -> None:
        """Only rendered branches need their values."""
        template = "{n, plural, one {{who} has one} other {# items}}"

        assert fmt(template, {"n": 3}) == "3 items"

    @given(st.integers(min_value=0, max_value=10**6))
    def test_pound_matches_number_format(self, count: int) -> None:
        """'#' renders exactly like {n, number}."""
        assert fmt("{n, plural, other {#}}", {"n": count}) == fmt("{n, number}", {"n": count})


class TestSelect:
    """Keyword select."""

    def test_matching_keyword(self) -> None:
        """The matching branch is rendered."""
        template = "{kind, select, script {Script} stylesheet {Stylesheet} other {Other}}"

        assert fmt(template, {"kind": "script"}) == "Script"
        assert fmt(template, {"kind": "font"}) == "Other"

    def test_boolean_keyword(self) -> None:
        """Booleans select 'true'/'false' branches."""
        template = "{flag, select, true {yes} other {no}}"

        assert fmt(template, {"flag": True}) == "yes"
        assert fmt(template, {"flag": False}) == "no"

    def test_pound_in_select_inside_plural(self) -> None:
        """'#' inside a nested select renders the plural value."""
        template = "{n, plural, other {{kind, select, a {# as} other {# others}}}}"

        assert fmt(template, {"n": 3, "kind": "a"}) == "3 as"


class TestDatesAndErrors:
    """date arguments, missing values and properties."""

    def test_date_argument(self) -> None:
        """date arguments format with the locale's CLDR patterns."""
        assert fmt("{d, date, short}", {"d": date(2024, 1, 15)}) == "1/15/24"

    def test_missing_value(self) -> None:
        """A rendered argument without a value raises MissingValueError."""
        with pytest.raises(MissingValueError) as exc_info:
            fmt("Hello {name}")

        assert exc_info.value.argument_id == "name"
        assert '("name")' in str(exc_info.value)

    def test_malformed_template(self) -> None:
        """Syntax errors surface at construction."""
        with pytest.raises(TemplateSyntaxError):
            IcuMessageFormat("{oops", "en")

    def test_properties(self) -> None:
        """template and locale are exposed."""
        formatter = IcuMessageFormat(FILES, "de")

        assert formatter.locale == "de"
        assert formatter.template == parse_template(FILES)

    def test_accepts_parsed_template(self) -> None:
        """A parsed MessageTemplate can be formatted directly."""
        template = MessageTemplate(())

        assert IcuMessageFormat(template, "en").format() == ""
