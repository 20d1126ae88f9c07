"""Tests for catalog-backed message formatting.

Tests verify:
- Unit preprocessing (milliseconds, seconds, bytes) with JavaScript rounding
- Catalog text is preferred; the supplied template is the fallback
- Fallbacks that disagree with the base catalog log a warning
- Strict mode, unsupported locales and missing values raise
- Pseudo-locales format numbers with the pseudo number locale
- Renderer strings are selected by source prefix
"""

from __future__ import annotations

import logging
from decimal import Decimal

import pytest

from icuref.config import I18nConfig
from icuref.diagnostics import (
    FormattingError,
    MessageNotFoundError,
    MissingValueError,
    UnsupportedLocaleError,
)
from icuref.localization import (
    LocaleCatalogs,
    format_catalog_message,
    format_message,
    preprocess_values,
    renderer_strings,
)
from icuref.localization.ui_strings import UI_STRINGS

MS_KEY = "lib/i18n.py | ms"
SECONDS_KEY = "lib/i18n.py | seconds"
BYTES_KEY = "lib/i18n.py | displayValueByteSavings"
TITLE_KEY = "core/audits/metrics.py | title"
DESCRIPTION_KEY = "core/audits/metrics.py | description"
FORMATTING_LOGGER = "icuref.localization.formatting"


class TestPreprocessValues:
    """preprocess_values() unit conversion."""

    @pytest.mark.parametrize(
        ("value", "expected"),
        [(1234, 1230), (1235, 1240), (1225, 1230), (-1225, -1220), (4, 0), (5, 10)],
    )
    def test_milliseconds_round_to_tens(self, value: int, expected: int) -> None:
        """Milliseconds round to 10 ms, halves toward +infinity."""
        result = preprocess_values("{wastedMs, number, milliseconds}", {"wastedMs": value})

        assert result == {"wastedMs": expected}

    def test_decimal_milliseconds(self) -> None:
        """Decimal values convert exactly."""
        result = preprocess_values("{t, number, milliseconds}", {"t": Decimal("1234.9")})

        assert result == {"t": 1230}

    def test_seconds(self) -> None:
        """timeInMs with the seconds style becomes seconds with one decimal."""
        result = preprocess_values(UI_STRINGS["seconds"], {"timeInMs": 5238})

        assert result == {"timeInMs": 5.2}

    def test_seconds_only_for_time_in_ms(self) -> None:
        """Other placeholders with the seconds style are left alone."""
        result = preprocess_values("{duration, number, seconds}", {"duration": 5238})

        assert result == {"duration": 5238}

    def test_bytes(self) -> None:
        """Bytes become kilobytes."""
        result = preprocess_values(UI_STRINGS["displayValueByteSavings"], {"wastedBytes": 2048})

        assert result == {"wastedBytes": 2.0}

    def test_conversion_order(self) -> None:
        """Milliseconds rounding runs before the seconds conversion."""
        template = "{timeInMs, number, milliseconds} / {timeInMs, number, seconds}"

        assert preprocess_values(template, {"timeInMs": 5238}) == {"timeInMs": 5.2}

    def test_nested_arguments_are_converted(self) -> None:
        """Unit arguments inside plural branches are found."""
        template = "{n, plural, other {# items, {wastedMs, number, milliseconds} ms}}"

        result = preprocess_values(template, {"n": 2, "wastedMs": 1234})

        assert result == {"n": 2, "wastedMs": 1230}

    def test_input_is_not_modified(self) -> None:
        """The caller's mapping and nested values are untouched."""
        values = {"wastedMs": 1234, "extra": {"items": [1, 2]}}

        result = preprocess_values("{wastedMs, number, milliseconds}", values)

        assert values == {"wastedMs": 1234, "extra": {"items": [1, 2]}}
        assert result["extra"] is not values["extra"]

    def test_missing_value(self) -> None:
        """Every placeholder needs a value, even in untaken branches."""
        template = "{n, plural, one {{who}} other {#}}"

        with pytest.raises(MissingValueError) as exc_info:
            preprocess_values(template, {"n": 5})

        assert exc_info.value.argument_id == "who"

    @pytest.mark.parametrize("value", ["1234", None, True, [1]])
    def test_non_numeric_unit_value(self, value: object) -> None:
        """Unit conversion requires a number."""
        with pytest.raises(FormattingError):
            preprocess_values("{wastedMs, number, milliseconds}", {"wastedMs": value})

    def test_no_values(self) -> None:
        """Templates without placeholders need no values."""
        assert preprocess_values("Metrics") == {}


class TestFormatMessage:
    """format_message()."""

    def test_english_units(self, catalogs: LocaleCatalogs, config: I18nConfig) -> None:
        """The unit templates render with English separators."""
        result = format_message(
            catalogs, "en", MS_KEY, UI_STRINGS["ms"], {"timeInMs": 1234}, config=config
        )

        assert result.formatted_string == "1,230\xa0ms"
        assert result.template == UI_STRINGS["ms"]

    @pytest.mark.parametrize(
        ("key", "values", "expected"),
        [
            (MS_KEY, {"timeInMs": 1234}, "1.230\xa0ms"),
            (SECONDS_KEY, {"timeInMs": 5238}, "5,2\xa0s"),
            (BYTES_KEY, {"wastedBytes": 2048}, "Mögliche Einsparung von 2\xa0KB"),
            (DESCRIPTION_KEY, {"count": 1}, "Erfasst 1 Messwert"),
            (DESCRIPTION_KEY, {"count": 1500}, "Erfasst 1.500 Messwerte"),
        ],
    )
    def test_german(
        self,
        catalogs: LocaleCatalogs,
        config: I18nConfig,
        key: str,
        values: dict[str, int],
        expected: str,
    ) -> None:
        """German catalog text and number rules are used."""
        template = catalogs["en"][key]["message"]

        result = format_message(catalogs, "de", key, template, values, config=config)

        assert result.formatted_string == expected

    def test_pseudo_locale_numbers(self, catalogs: LocaleCatalogs, config: I18nConfig) -> None:
        """Pseudo-locales keep their text but format numbers as de-DE."""
        result = format_message(
            catalogs, "en-XA", MS_KEY, UI_STRINGS["ms"], {"timeInMs": 1234}, config=config
        )

        assert result.formatted_string == "1.230\xa0ms"

    def test_catalog_text_preferred(self, catalogs: LocaleCatalogs, config: I18nConfig) -> None:
        """Catalog text wins over the supplied template."""
        result = format_message(catalogs, "de", TITLE_KEY, "Metrics", config=config)

        assert result.formatted_string == "Messwerte"

    def test_fallback_matching_base_is_silent(
        self, catalogs: LocaleCatalogs, config: I18nConfig, caplog: pytest.LogCaptureFixture
    ) -> None:
        """A missing translation falls back to the template without warning."""
        key = "report/renderer/util.py | warningHeader"

        with caplog.at_level(logging.WARNING, logger=FORMATTING_LOGGER):
            result = format_message(catalogs, "de", key, "Warnings: ", config=config)

        assert result.formatted_string == "Warnings: "
        assert caplog.records == []

    def test_fallback_differing_from_base_warns(
        self, catalogs: LocaleCatalogs, config: I18nConfig, caplog: pytest.LogCaptureFixture
    ) -> None:
        """A template that disagrees with the base catalog logs a warning."""
        key = "core/audits/metrics.py | undeclaredInCatalog"

        with caplog.at_level(logging.WARNING, logger=FORMATTING_LOGGER):
            result = format_message(
                catalogs, "de", key, "Only {n} in source", {"n": 2}, config=config
            )

        assert result.formatted_string == "Only 2 in source"
        assert len(caplog.records) == 1
        assert key in caplog.records[0].getMessage()
        assert "Regenerate the locale catalogs" in caplog.records[0].getMessage()

    def test_empty_catalog_text_falls_back(self, config: I18nConfig) -> None:
        """An empty translation counts as missing."""
        catalogs = LocaleCatalogs({
            "en": {TITLE_KEY: {"message": "Metrics"}},
            "de": {TITLE_KEY: {"message": ""}},
        })

        result = format_message(catalogs, "de", TITLE_KEY, "Metrics", config=config)

        assert result.formatted_string == "Metrics"

    def test_strict_mode_raises(self, catalogs: LocaleCatalogs) -> None:
        """With strict=True a missing translation is an error."""
        strict = I18nConfig(strict=True)

        with pytest.raises(MessageNotFoundError):
            format_message(
                catalogs, "en-XA", SECONDS_KEY, UI_STRINGS["seconds"], {"timeInMs": 10}, config=strict
            )

    def test_missing_without_template(self, catalogs: LocaleCatalogs, config: I18nConfig) -> None:
        """Without catalog text or template nothing can be rendered."""
        with pytest.raises(MessageNotFoundError) as exc_info:
            format_message(catalogs, "de", "nowhere.py | nothing", config=config)

        assert isinstance(exc_info.value, LookupError)
        assert "ICU message not found in destination locale" in str(exc_info.value)

    def test_unsupported_locale(self, catalogs: LocaleCatalogs, config: I18nConfig) -> None:
        """Locales without a catalog raise."""
        with pytest.raises(UnsupportedLocaleError):
            format_message(catalogs, "fr", TITLE_KEY, "Metrics", config=config)

    def test_missing_value(self, catalogs: LocaleCatalogs, config: I18nConfig) -> None:
        """Values must cover every placeholder of the rendered text."""
        with pytest.raises(MissingValueError):
            format_message(catalogs, "de", DESCRIPTION_KEY, None, {}, config=config)

    def test_default_config(self, catalogs: LocaleCatalogs) -> None:
        """config defaults to I18nConfig()."""
        result = format_message(catalogs, "en", TITLE_KEY)

        assert result.formatted_string == "Metrics"


class TestFormatCatalogMessage:
    """format_catalog_message()."""

    def test_format_by_key(self, catalogs: LocaleCatalogs, config: I18nConfig) -> None:
        """Catalog messages format directly by key."""
        result = format_catalog_message(catalogs, "de", DESCRIPTION_KEY, {"count": 2}, config=config)

        assert result == "Erfasst 2 Messwerte"

    def test_key_without_separator(self, catalogs: LocaleCatalogs) -> None:
        """Keys must contain ' | '."""
        with pytest.raises(ValueError, match="not a message key"):
            format_catalog_message(catalogs, "en", "title")

    def test_key_missing_from_catalog(self, catalogs: LocaleCatalogs) -> None:
        """There is no template to fall back to."""
        with pytest.raises(MessageNotFoundError):
            format_catalog_message(catalogs, "en-XA", DESCRIPTION_KEY, {"count": 2})


class TestRendererStrings:
    """renderer_strings()."""

    def test_prefix_selection(self, catalogs: LocaleCatalogs) -> None:
        """Only keys under the prefix are returned, by declared name."""
        assert renderer_strings(catalogs, "de", "report/renderer/") == {
            "passedAuditsGroupTitle": "Bestandene Audits",
        }
        assert renderer_strings(catalogs, "en", "report/renderer/") == {
            "passedAuditsGroupTitle": "Passed audits",
            "warningHeader": "Warnings: ",
        }

    def test_raw_text_is_not_formatted(self, catalogs: LocaleCatalogs) -> None:
        """Templates are returned unformatted."""
        assert renderer_strings(catalogs, "en", "lib/")["ms"] == UI_STRINGS["ms"]

    def test_unsupported_locale(self, catalogs: LocaleCatalogs) -> None:
        """Unknown locales raise."""
        with pytest.raises(UnsupportedLocaleError):
            renderer_strings(catalogs, "fr", "report/")
