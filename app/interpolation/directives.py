"""Locale-aware format engine for value format patterns.

Patterns use printf-style directives with positional argument indices:

    %[argument_index$][flags][width][.precision]conversion
    %[argument_index$][flags][width]t<suffix>      (T for upper case)

Digits are rendered by Python's format() mini-language, then grouped and
given locale symbols by babel.numbers.format_decimal. Month, weekday and
am/pm names come from babel's CLDR tables.

Usage:
    from interpolation.directives import format_pattern

    format_pattern("%,d", (1234567,), "de-DE")     # "1.234.567"
    format_pattern("%1$tB %<tY", (date(2024, 3, 5),), "en-US")  # "March 2024"
"""

import datetime as dt
import math
import os
import re
from dataclasses import dataclass
from decimal import Decimal, localcontext
from typing import Any, List, Optional, Sequence, Union

from babel import Locale
from babel.dates import get_day_names, get_month_names, get_period_names
from babel.numbers import format_decimal, get_decimal_symbol

from interpolation.errors import (
    FormatConversionMismatchError,
    IllegalFormatFlagsError,
    IllegalFormatPrecisionError,
    IllegalFormatWidthError,
    MissingFormatArgumentError,
    MissingFormatWidthError,
    UnknownFormatConversionError,
)
from interpolation.models import LocaleLike, resolve_locale

FORMAT_SPECIFIER = re.compile(
    r"%(?:(?P<index>\d+)\$)?"
    r"(?P<flags>[-#+ 0,(<]*)"
    r"(?P<width>\d+)?"
    r"(?:\.(?P<precision>\d+))?"
    r"(?P<time>[tT])?"
    r"(?P<conversion>[a-zA-Z%])"
)

GENERAL_CONVERSIONS = "bhsc"
INTEGRAL_CONVERSIONS = "dox"
FLOATING_CONVERSIONS = "efga"
UPPER_CASE_CONVERSIONS = "BHSCXEGA"

# Flags each conversion accepts, '<' is handled before this check
ALLOWED_FLAGS = {
    "b": "-",
    "h": "-",
    "s": "-",
    "c": "-",
    "d": "-+ 0,(",
    "o": "-#+ 0(",
    "x": "-#+ 0(",
    "e": "-#+ 0(",
    "f": "-#+ 0,(",
    "g": "-+ 0,(",
    "a": "-#+ 0",
    "t": "-",
    "%": "-",
    "n": "",
}

NO_PRECISION_CONVERSIONS = "cdoxatn%"

DATETIME_SUFFIXES = "HIklMSLNpzZsQBbhAaCYyjmdeRTrDFc"
DATE_SUFFIXES = "BbhAaCYyjmdeDFsQc"
TIME_SUFFIXES = "HIklMSLNpzZRTrsQc"

EPOCH = dt.datetime(1970, 1, 1, tzinfo=dt.timezone.utc)


@dataclass(frozen=True)
class FormatSpecifier:
    """A single parsed directive.

    Attributes:
        text: Directive exactly as written in the pattern.
        index: Explicit 1-based argument index, if any.
        flags: Flag characters, without '<'.
        relative: True when '<' asks for the previous argument.
        width: Minimum width, if any.
        precision: Precision, if any.
        conversion: Lower-cased conversion, or 't' for date/time directives.
        suffix: Date/time suffix for 't' directives, else "".
        upper: True for upper-case variants (S, X, T, ...).
    """

    text: str
    index: Optional[int]
    flags: str
    relative: bool
    width: Optional[int]
    precision: Optional[int]
    conversion: str
    suffix: str = ""
    upper: bool = False

    @classmethod
    def from_match(cls, match: "re.Match[str]") -> "FormatSpecifier":
        """Build a specifier from a FORMAT_SPECIFIER match.

        Raises:
            UnknownFormatConversionError: For unknown conversions.
        """
        raw_flags = match.group("flags") or ""
        index = match.group("index")
        width = match.group("width")
        precision = match.group("precision")
        conversion = match.group("conversion")
        time = match.group("time")

        if time:
            if conversion not in DATETIME_SUFFIXES:
                raise UnknownFormatConversionError(f"{time}{conversion}")
            return cls(
                text=match.group(0),
                index=int(index) if index is not None else None,
                flags=raw_flags.replace("<", ""),
                relative="<" in raw_flags,
                width=int(width) if width is not None else None,
                precision=int(precision) if precision is not None else None,
                conversion="t",
                suffix=conversion,
                upper=time == "T",
            )

        lowered = conversion.lower()
        known = (
            GENERAL_CONVERSIONS + INTEGRAL_CONVERSIONS + FLOATING_CONVERSIONS + "%n"
        )
        if lowered not in known or (
            conversion.isupper() and conversion not in UPPER_CASE_CONVERSIONS
        ):
            raise UnknownFormatConversionError(conversion)

        return cls(
            text=match.group(0),
            index=int(index) if index is not None else None,
            flags=raw_flags.replace("<", ""),
            relative="<" in raw_flags,
            width=int(width) if width is not None else None,
            precision=int(precision) if precision is not None else None,
            conversion=lowered,
            upper=conversion.isupper(),
        )

    def check(self) -> None:
        """Validate flags, width and precision against the conversion.

        Raises:
            IllegalFormatError: Subclass describing the first problem found.
        """
        for flag in self.flags:
            if self.flags.count(flag) > 1:
                raise IllegalFormatFlagsError(self.flags)
        if ("-" in self.flags and "0" in self.flags) or (
            "+" in self.flags and " " in self.flags
        ):
            raise IllegalFormatFlagsError(self.flags)

        allowed = ALLOWED_FLAGS[self.conversion]
        for flag in self.flags:
            if flag not in allowed:
                raise IllegalFormatFlagsError(self.flags, self.conversion)

        if self.conversion == "n" and self.width is not None:
            raise IllegalFormatWidthError(self.width)
        if ("-" in self.flags or "0" in self.flags) and self.width is None:
            raise MissingFormatWidthError(self.text)
        if self.precision is not None and self.conversion in NO_PRECISION_CONVERSIONS:
            raise IllegalFormatPrecisionError(self.precision)


def parse_pattern(pattern: str) -> List[Union[str, FormatSpecifier]]:
    """Split a pattern into literal text and directives.

    Args:
        pattern: Format pattern.

    Returns:
        Literal strings and FormatSpecifier objects, in pattern order.

    Raises:
        IllegalFormatError: If a directive is malformed.
    """
    segments: List[Union[str, FormatSpecifier]] = []
    position = 0
    while position < len(pattern):
        percent = pattern.find("%", position)
        if percent == -1:
            segments.append(pattern[position:])
            break
        if percent > position:
            segments.append(pattern[position:percent])

        match = FORMAT_SPECIFIER.match(pattern, percent)
        if match is None:
            raise UnknownFormatConversionError(pattern[percent : percent + 2])

        specifier = FormatSpecifier.from_match(match)
        specifier.check()
        segments.append(specifier)
        position = match.end()
    return segments


class PatternFormatter:
    """Applies parsed directives to arguments for one locale.

    Instances only hold the locale and the symbols read from it, so one
    can be created per call.

    Attributes:
        locale: babel Locale used for symbols and names.
    """

    def __init__(self, locale: LocaleLike):
        self.locale = resolve_locale(locale)
        self._decimal_symbol = get_decimal_symbol(self.locale)
        # Integer part of the locale's decimal pattern, e.g. "#,##,##0" for hi
        decimal_pattern = self.locale.decimal_formats[None].pattern
        self._grouped_pattern = decimal_pattern.split(";")[0].partition(".")[0]

    def format(self, pattern: str, args: Sequence[Any]) -> str:
        """Render a pattern against positional arguments.

        Args:
            pattern: Format pattern.
            args: Arguments referenced by the directives.

        Returns:
            Rendered text.

        Raises:
            IllegalFormatError: If the pattern is invalid for the arguments.
        """
        output = []
        ordinary_index = -1
        last_index = -1

        for segment in parse_pattern(pattern):
            if isinstance(segment, str):
                output.append(segment)
                continue

            if segment.conversion == "%":
                output.append(self._justify(segment, "%"))
                continue
            if segment.conversion == "n":
                output.append(os.linesep)
                continue

            if segment.relative:
                index = last_index
            elif segment.index is not None:
                index = segment.index - 1
            else:
                ordinary_index += 1
                index = ordinary_index

            if index < 0 or index >= len(args):
                raise MissingFormatArgumentError(segment.text)
            last_index = index

            output.append(self._format_argument(segment, args[index]))

        return "".join(output)

    def _format_argument(self, spec: FormatSpecifier, value: Any) -> str:
        if spec.conversion == "t":
            text = self._format_datetime(spec, value)
        elif spec.conversion == "b":
            text = self._truncate(spec, self._boolean(value))
        elif value is None:
            text = "null"
        elif spec.conversion in "hsc":
            text = self._truncate(spec, self._general(spec, value))
        elif spec.conversion in INTEGRAL_CONVERSIONS:
            return self._integral(spec, value)
        else:
            return self._floating(spec, value)

        if spec.upper:
            text = text.upper()
        return self._justify(spec, text)

    @staticmethod
    def _boolean(value: Any) -> str:
        if value is None:
            return "false"
        if isinstance(value, bool):
            return str(value).lower()
        return "true"

    def _general(self, spec: FormatSpecifier, value: Any) -> str:
        if spec.conversion == "s":
            return str(value)

        if spec.conversion == "h":
            try:
                return format(hash(value) & 0xFFFFFFFF, "x")
            except TypeError as e:
                raise FormatConversionMismatchError(spec.conversion, type(value)) from e

        # 'c'
        if isinstance(value, str) and len(value) == 1:
            return value
        if isinstance(value, int) and not isinstance(value, bool):
            try:
                return chr(value)
            except (ValueError, OverflowError) as e:
                raise FormatConversionMismatchError(spec.conversion, type(value)) from e
        raise FormatConversionMismatchError(spec.conversion, type(value))

    @staticmethod
    def _truncate(spec: FormatSpecifier, text: str) -> str:
        if spec.precision is not None:
            return text[: spec.precision]
        return text

    @staticmethod
    def _justify(spec: FormatSpecifier, text: str) -> str:
        if spec.width is None or len(text) >= spec.width:
            return text
        if "-" in spec.flags:
            return text.ljust(spec.width)
        return text.rjust(spec.width)

    def _integral(self, spec: FormatSpecifier, value: Any) -> str:
        if value is None:
            return self._justify(spec, "null")
        if not isinstance(value, int) or isinstance(value, bool):
            raise FormatConversionMismatchError(spec.conversion, type(value))

        negative = value < 0
        prefix = ""
        if spec.conversion == "d":
            body = str(abs(value))
            if "," in spec.flags:
                body = self._localize_decimal(body, spec)
        elif spec.conversion == "o":
            body = format(abs(value), "o")
            prefix = "0" if "#" in spec.flags else ""
        else:
            body = format(abs(value), "x")
            prefix = "0x" if "#" in spec.flags else ""

        text = self._signed(spec, body, negative, prefix)
        if spec.upper:
            text = text.upper()
        return text

    def _floating(self, spec: FormatSpecifier, value: Any) -> str:
        if value is None:
            return self._justify(spec, "null")
        if isinstance(value, bool) or not isinstance(value, (float, int, Decimal)):
            raise FormatConversionMismatchError(spec.conversion, type(value))
        if spec.conversion == "a" and not isinstance(value, float):
            raise FormatConversionMismatchError(spec.conversion, type(value))

        if isinstance(value, int):
            try:
                value = float(value)
            except OverflowError as e:
                raise FormatConversionMismatchError(spec.conversion, int) from e

        if isinstance(value, Decimal) and not value.is_finite():
            return self._non_finite(spec, math.nan if value.is_nan() else float(value))
        if isinstance(value, float) and not math.isfinite(value):
            return self._non_finite(spec, value)

        negative = value < 0 or (
            isinstance(value, float) and math.copysign(1.0, value) < 0
        )
        magnitude = abs(value)
        precision = 6 if spec.precision is None else spec.precision

        if spec.conversion == "a":
            # Hexadecimal significands are not localized
            text = self._signed(spec, self._hexadecimal(magnitude), negative)
            return text.upper() if spec.upper else text

        if spec.conversion == "e":
            body = self._scientific(spec, magnitude, precision)
        elif spec.conversion == "f":
            body = format(magnitude, f".{precision}f")
            if "#" in spec.flags and precision == 0:
                body += "."
        else:
            body = self._general_scientific(magnitude, precision or 1)

        text = self._signed(spec, self._localize_decimal(body, spec), negative)
        if spec.upper:
            text = text.upper()
        return text

    @staticmethod
    def _hexadecimal(magnitude: float) -> str:
        # 0x1.8000000000000p+1 -> 0x1.8p1
        significand, _, exponent = float.hex(magnitude).partition("p")
        head, _, fraction = significand.partition(".")
        return f"{head}.{fraction.rstrip('0') or '0'}p{int(exponent)}"

    @staticmethod
    def _scientific(spec: FormatSpecifier, magnitude: Any, precision: int) -> str:
        body = format(magnitude, f".{precision}e")
        if "#" in spec.flags and precision == 0:
            mantissa, _, exponent = body.partition("e")
            body = f"{mantissa}.e{exponent}"
        return body

    @staticmethod
    def _general_scientific(magnitude: Any, precision: int) -> str:
        # Significant digits are kept, trailing zeros included
        if magnitude:
            exponent = int(format(magnitude, f".{precision - 1}e").partition("e")[2])
        else:
            exponent = 0
        if -4 <= exponent < precision:
            return format(magnitude, f".{precision - 1 - exponent}f")
        return format(magnitude, f".{precision - 1}e")

    def _non_finite(self, spec: FormatSpecifier, value: float) -> str:
        if math.isnan(value):
            text = "NaN"
        elif value > 0:
            if "+" in spec.flags:
                text = "+Infinity"
            elif " " in spec.flags:
                text = " Infinity"
            else:
                text = "Infinity"
        elif "(" in spec.flags:
            text = "(Infinity)"
        else:
            text = "-Infinity"
        if spec.upper:
            text = text.upper()
        return self._justify(spec, text)

    def _localize_decimal(self, digits: str, spec: FormatSpecifier) -> str:
        """Apply locale symbols to unsigned digits rendered by format().

        Plain and grouped decimals go through babel with a pattern that
        keeps exactly the fraction digits already rendered. Scientific
        digits only get the decimal symbol.
        """
        if "e" in digits:
            mantissa, _, exponent = digits.partition("e")
            return mantissa.replace(".", self._decimal_symbol) + "e" + exponent

        _, point, fraction = digits.partition(".")
        pattern = self._grouped_pattern if "," in spec.flags else "0"
        if fraction:
            pattern += "." + "0" * len(fraction)

        with localcontext() as context:
            # Enough precision that babel never rounds the digits again
            context.prec = max(context.prec, len(digits))
            text = format_decimal(Decimal(digits), format=pattern, locale=self.locale)

        if point and not fraction:
            text += self._decimal_symbol
        return text

    def _signed(
        self,
        spec: FormatSpecifier,
        body: str,
        negative: bool,
        prefix: str = "",
    ) -> str:
        if negative:
            lead, trail = ("(", ")") if "(" in spec.flags else ("-", "")
        elif "+" in spec.flags:
            lead, trail = "+", ""
        elif " " in spec.flags:
            lead, trail = " ", ""
        else:
            lead, trail = "", ""
        lead += prefix

        if "0" in spec.flags and spec.width is not None:
            padding = spec.width - len(lead) - len(body) - len(trail)
            if padding > 0:
                body = "0" * padding + body

        return self._justify(spec, lead + body + trail)

    def _format_datetime(self, spec: FormatSpecifier, value: Any) -> str:
        if value is None:
            text = "null"
        else:
            moment = self._to_temporal(spec, value)
            text = self._datetime_field(spec.suffix, moment)
        if spec.upper:
            text = text.upper()
        return self._justify(spec, text)

    @staticmethod
    def _to_temporal(
        spec: FormatSpecifier, value: Any
    ) -> Union[dt.datetime, dt.date, dt.time]:
        if isinstance(value, bool):
            raise FormatConversionMismatchError(spec.suffix, type(value))
        if isinstance(value, int):
            # Epoch milliseconds
            try:
                return EPOCH + dt.timedelta(milliseconds=value)
            except OverflowError as e:
                raise FormatConversionMismatchError(spec.suffix, int) from e
        if not isinstance(value, (dt.datetime, dt.date, dt.time)):
            raise FormatConversionMismatchError(spec.suffix, type(value))

        if spec.suffix in DATE_SUFFIXES and not isinstance(value, dt.date):
            raise FormatConversionMismatchError(spec.suffix, type(value))
        if spec.suffix in TIME_SUFFIXES and not isinstance(
            value, (dt.datetime, dt.time)
        ):
            raise FormatConversionMismatchError(spec.suffix, type(value))
        return value

    @staticmethod
    def _offset(moment: Union[dt.datetime, dt.time]) -> dt.timedelta:
        # Naive values are read as UTC
        return moment.utcoffset() or dt.timedelta(0)

    @staticmethod
    def _as_aware(moment: dt.datetime) -> dt.datetime:
        if moment.tzinfo is None:
            return moment.replace(tzinfo=dt.timezone.utc)
        return moment

    def _datetime_field(self, suffix: str, moment: Any) -> str:
        if suffix == "H":
            return f"{moment.hour:02d}"
        if suffix == "I":
            return f"{moment.hour % 12 or 12:02d}"
        if suffix == "k":
            return str(moment.hour)
        if suffix == "l":
            return str(moment.hour % 12 or 12)
        if suffix == "M":
            return f"{moment.minute:02d}"
        if suffix == "S":
            return f"{moment.second:02d}"
        if suffix == "L":
            return f"{moment.microsecond // 1000:03d}"
        if suffix == "N":
            return f"{moment.microsecond * 1000:09d}"
        if suffix == "p":
            period = "am" if moment.hour < 12 else "pm"
            names = get_period_names(
                width="abbreviated", context="format", locale=self.locale
            )
            return names[period].lower()
        if suffix == "z":
            offset = self._offset(moment)
            sign = "-" if offset < dt.timedelta(0) else "+"
            minutes = abs(offset) // dt.timedelta(minutes=1)
            return f"{sign}{minutes // 60:02d}{minutes % 60:02d}"
        if suffix == "Z":
            return moment.tzname() or "UTC"
        if suffix == "s":
            return str((self._as_aware(moment) - EPOCH) // dt.timedelta(seconds=1))
        if suffix == "Q":
            return str((self._as_aware(moment) - EPOCH) // dt.timedelta(milliseconds=1))
        if suffix == "B":
            return get_month_names("wide", locale=self.locale)[moment.month]
        if suffix in "bh":
            return get_month_names("abbreviated", locale=self.locale)[moment.month]
        if suffix == "A":
            return get_day_names("wide", locale=self.locale)[moment.weekday()]
        if suffix == "a":
            return get_day_names("abbreviated", locale=self.locale)[moment.weekday()]
        if suffix == "C":
            return f"{moment.year // 100:02d}"
        if suffix == "Y":
            return f"{moment.year:04d}"
        if suffix == "y":
            return f"{moment.year % 100:02d}"
        if suffix == "j":
            return f"{moment.timetuple().tm_yday:03d}"
        if suffix == "m":
            return f"{moment.month:02d}"
        if suffix == "d":
            return f"{moment.day:02d}"
        if suffix == "e":
            return str(moment.day)

        def field(part: str) -> str:
            return self._datetime_field(part, moment)

        if suffix == "R":
            return f"{field('H')}:{field('M')}"
        if suffix == "T":
            return f"{field('H')}:{field('M')}:{field('S')}"
        if suffix == "r":
            return f"{field('I')}:{field('M')}:{field('S')} {field('p').upper()}"
        if suffix == "D":
            return f"{field('m')}/{field('d')}/{field('y')}"
        if suffix == "F":
            return f"{field('Y')}-{field('m')}-{field('d')}"
        # 'c'
        return (
            f"{field('a')} {field('b')} {field('d')} "
            f"{field('T')} {field('Z')} {field('Y')}"
        )


def format_pattern(pattern: str, args: Sequence[Any], locale: LocaleLike) -> str:
    """Render a format pattern against arguments for a locale.

    Args:
        pattern: printf-style format pattern.
        args: Positional arguments for the directives.
        locale: babel Locale or locale tag.

    Returns:
        Rendered text.

    Raises:
        IllegalFormatError: If the pattern is invalid for the arguments.
        ValueError: If the locale is not supported.
    """
    return PatternFormatter(locale).format(pattern, tuple(args))
