"""Message interpolator for validated value placeholders.

Finds validated value placeholders in a message and replaces them with
the rendered value. Every other placeholder is left to an optional delegate
interpolator, which runs first.

Recognized placeholders:
    {validatedValue}
    ${validatedValue}
    {validatedValue:<format pattern>}
    ${validatedValue:<format pattern>}
"""

import re
from abc import ABC, abstractmethod
from typing import Any, Callable, Optional

from babel import Locale

from core.config import settings
from core.logging import get_module_logger
from interpolation.formatter import render
from interpolation.models import (
    VALIDATED_VALUE_FORMAT_SEPARATOR,
    LocaleLike,
    resolve_locale,
)

VALIDATED_VALUE = "validatedValue"

VALUE_PLACEHOLDER = re.compile(
    r"\$?\{(?P<expression>"
    + re.escape(VALIDATED_VALUE)
    + r"(?:"
    + re.escape(VALIDATED_VALUE_FORMAT_SEPARATOR)
    + r"[^{}]*)?)\}"
)

ValueRenderer = Callable[[str, Any, LocaleLike], str]

logger = get_module_logger()


class MessageInterpolator(ABC):
    """Interpolator for the placeholders this package does not handle.

    Implementations typically resolve message keys against a bundle and
    substitute constraint attributes.
    """

    @abstractmethod
    def interpolate(self, message_template: str, locale: Locale) -> str:
        """Interpolate a message template for a locale.

        Args:
            message_template: Message template to interpolate.
            locale: Locale to interpolate for.

        Returns:
            Interpolated message.
        """
        pass


class ValueFormatterMessageInterpolator:
    """Interpolates the validated value into messages.

    Attributes:
        delegate: Optional interpolator run before value placeholders are
            replaced.
        value_formatter: Callable rendering one placeholder expression.
        default_locale: Locale used when interpolate() is called without one.
    """

    def __init__(
        self,
        delegate: Optional[MessageInterpolator] = None,
        value_formatter: ValueRenderer = render,
        default_locale: Optional[LocaleLike] = None,
    ):
        """Initialize the interpolator.

        Args:
            delegate: Interpolator for all other placeholders.
            value_formatter: Renderer for value placeholder expressions.
            default_locale: Fallback locale (default:
                settings.interpolation.DEFAULT_LOCALE).
        """
        self.delegate = delegate
        self.value_formatter = value_formatter
        self.default_locale = resolve_locale(
            default_locale or settings.interpolation.DEFAULT_LOCALE
        )

    def interpolate(
        self,
        message_template: str,
        validated_value: Any,
        locale: Optional[LocaleLike] = None,
    ) -> str:
        """Interpolate a message, rendering validated value placeholders.

        Args:
            message_template: Message template.
            validated_value: The value under validation, may be None.
            locale: Locale to render with (default: default_locale).

        Returns:
            Interpolated message.

        Raises:
            MissingFormatError: If a placeholder has an empty format pattern.
            InvalidFormatError: If a format pattern does not fit the value.
            ValueError: If the locale is not supported.
        """
        resolved_locale = (
            resolve_locale(locale) if locale is not None else self.default_locale
        )

        message = message_template
        if self.delegate is not None:
            message = self.delegate.interpolate(message, resolved_locale)

        count = 0

        def _replace(match: "re.Match[str]") -> str:
            nonlocal count
            count += 1
            return self.value_formatter(
                match.group("expression"), validated_value, resolved_locale
            )

        message = VALUE_PLACEHOLDER.sub(_replace, message)

        logger.debug(
            "interpolated_value_placeholders",
            placeholder_count=count,
            locale=str(resolved_locale),
        )
        return message
