"""Value placeholder models.

Defines the placeholder expression value object and locale resolution.
"""

from dataclasses import dataclass
from typing import Optional, Union

from babel import Locale, UnknownLocaleError

VALIDATED_VALUE_FORMAT_SEPARATOR = ":"

LocaleLike = Union[Locale, str]


def resolve_locale(locale: LocaleLike) -> Locale:
    """Convert a locale tag or babel Locale into a babel Locale.

    Accepts IETF BCP 47 tags ("en-US") as well as POSIX style
    identifiers ("en_US").

    Args:
        locale: Locale tag or babel Locale.

    Returns:
        Matching babel Locale.

    Raises:
        ValueError: If the locale is missing or not known to babel.
    """
    if isinstance(locale, Locale):
        return locale
    if not locale:
        raise ValueError("A locale is required")
    try:
        return Locale.parse(str(locale).replace("-", "_"))
    except (UnknownLocaleError, ValueError) as e:
        raise ValueError(f"Unsupported locale: {locale}") from e


@dataclass(frozen=True)
class PlaceholderExpression:
    """A validated value placeholder with its optional format pattern.

    The expression is the text between the placeholder delimiters, e.g.
    "validatedValue" or "validatedValue:%1$ty". Frozen to keep it hashable.

    Attributes:
        text: Raw expression text.
        name: Placeholder name, everything before the separator.
        format_pattern: Everything after the first separator. None when the
            separator is absent, "" when it is present with nothing after it.
    """

    text: str
    name: str
    format_pattern: Optional[str] = None

    def __str__(self) -> str:
        return self.text

    @property
    def has_format(self) -> bool:
        """True when the expression carries a format separator."""
        return self.format_pattern is not None

    @classmethod
    def from_string(cls, expression: str) -> "PlaceholderExpression":
        """Split an expression on the first format separator.

        Args:
            expression: Placeholder expression without its delimiters.

        Returns:
            PlaceholderExpression instance.
        """
        name, separator, pattern = expression.partition(
            VALIDATED_VALUE_FORMAT_SEPARATOR
        )
        if not separator:
            return cls(text=expression, name=expression)
        return cls(text=expression, name=name, format_pattern=pattern)
