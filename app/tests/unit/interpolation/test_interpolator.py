"""Tests for interpolation.interpolator module."""

from unittest.mock import MagicMock

import pytest
from babel import Locale

from interpolation import (
    InvalidFormatError,
    MissingFormatError,
    ValueFormatterMessageInterpolator,
)
from interpolation.interpolator import VALUE_PLACEHOLDER


class TestValuePlaceholderPattern:
    """Tests for placeholder recognition."""

    @pytest.mark.parametrize(
        "message,expression",
        [
            ("{validatedValue}", "validatedValue"),
            ("${validatedValue}", "validatedValue"),
            ("${validatedValue:%1$ty}", "validatedValue:%1$ty"),
            ("{validatedValue:%d}", "validatedValue:%d"),
            ("${validatedValue:}", "validatedValue:"),
        ],
    )
    def test_recognized(self, message, expression):
        """Both delimiter styles are recognized, delimiters are stripped."""
        match = VALUE_PLACEHOLDER.search(message)

        assert match is not None
        assert match.group("expression") == expression

    @pytest.mark.parametrize(
        "message", ["{value}", "{validatedValueX}", "validatedValue", "{min}"]
    )
    def test_not_recognized(self, message):
        """Other placeholders are left alone."""
        assert VALUE_PLACEHOLDER.search(message) is None


class TestValueFormatterMessageInterpolator:
    """Tests for ValueFormatterMessageInterpolator."""

    def test_default_rendering(self, en_us):
        """{validatedValue} renders the default string."""
        interpolator = ValueFormatterMessageInterpolator()

        message = interpolator.interpolate(
            "Value {validatedValue} is invalid", 42, en_us
        )
        assert message == "Value 42 is invalid"

    def test_formatted_rendering(self, en_us, sample_date):
        """${validatedValue:...} applies the pattern."""
        interpolator = ValueFormatterMessageInterpolator()

        message = interpolator.interpolate(
            "Year ${validatedValue:%1$tY} is in the past", sample_date, en_us
        )
        assert message == "Year 2024 is in the past"

    def test_multiple_placeholders(self, de_de):
        """Every occurrence is replaced."""
        interpolator = ValueFormatterMessageInterpolator()

        message = interpolator.interpolate(
            "{validatedValue} (${validatedValue:%,.2f})", 1234.5, de_de
        )
        assert message == "1234.5 (1.234,50)"

    def test_null_value(self, en_us):
        """None renders as null."""
        interpolator = ValueFormatterMessageInterpolator()

        assert interpolator.interpolate("{validatedValue}", None, en_us) == "null"

    def test_delegate_runs_first(self, brace_delegate, en_us):
        """The delegate resolves other placeholders with the resolved locale."""
        interpolator = ValueFormatterMessageInterpolator(delegate=brace_delegate)

        message = interpolator.interpolate(
            "{validatedValue} must be between {min} and {max}", 42, en_us
        )

        assert message == "42 must be between 1 and 10"
        assert brace_delegate.calls == [
            ("{validatedValue} must be between {min} and {max}", en_us)
        ]

    def test_without_delegate_other_placeholders_kept(self, en_us):
        """Without a delegate only value placeholders change."""
        interpolator = ValueFormatterMessageInterpolator()

        message = interpolator.interpolate("{validatedValue} > {max}", 42, en_us)
        assert message == "42 > {max}"

    def test_locale_tag(self, sample_date):
        """Locale tags are resolved."""
        interpolator = ValueFormatterMessageInterpolator()

        assert (
            interpolator.interpolate("${validatedValue:%tB}", sample_date, "fr-FR")
            == "mars"
        )

    def test_default_locale_argument(self, sample_date):
        """default_locale is used when no locale is passed."""
        interpolator = ValueFormatterMessageInterpolator(default_locale="de-DE")

        assert interpolator.default_locale == Locale("de", "DE")
        assert interpolator.interpolate("${validatedValue:%tB}", sample_date) == "März"

    def test_default_locale_from_settings(self, interpolation_settings, sample_date):
        """Without default_locale the configured locale is used."""
        interpolation_settings(DEFAULT_LOCALE="fr-FR")

        interpolator = ValueFormatterMessageInterpolator()

        assert interpolator.default_locale == Locale("fr", "FR")
        assert interpolator.interpolate("${validatedValue:%tB}", sample_date) == "mars"

    def test_custom_value_formatter(self, en_us):
        """The value renderer can be replaced."""
        value_formatter = MagicMock(return_value="<value>")
        interpolator = ValueFormatterMessageInterpolator(value_formatter=value_formatter)

        message = interpolator.interpolate("got ${validatedValue:%d}", 7, en_us)

        assert message == "got <value>"
        value_formatter.assert_called_once_with("validatedValue:%d", 7, en_us)

    def test_missing_format_propagates(self, en_us):
        """An empty pattern raises MissingFormatError."""
        interpolator = ValueFormatterMessageInterpolator()

        with pytest.raises(MissingFormatError) as exc_info:
            interpolator.interpolate("bad ${validatedValue:}", 7, en_us)

        assert exc_info.value.expression == "validatedValue:"

    def test_invalid_format_propagates(self, en_us):
        """A pattern that does not fit raises InvalidFormatError."""
        interpolator = ValueFormatterMessageInterpolator()

        with pytest.raises(InvalidFormatError) as exc_info:
            interpolator.interpolate("${validatedValue:%d}", "seven", en_us)

        assert exc_info.value.expression == "validatedValue:%d"

    def test_unsupported_locale(self):
        """Unknown locales raise ValueError."""
        interpolator = ValueFormatterMessageInterpolator()

        with pytest.raises(ValueError):
            interpolator.interpolate("{validatedValue}", 1, "xx-XX")
