"""Validated value rendering.

Renders the expression of a validated value placeholder, e.g.
"validatedValue" or "validatedValue:%1$ty", into text. Without a format
pattern the value's default string is used; with one, the pattern is applied
to the value through the locale-aware format engine.
"""

from typing import Any

from core.logging import get_module_logger
from interpolation.directives import format_pattern
from interpolation.errors import (
    IllegalFormatError,
    InvalidFormatError,
    MissingFormatError,
)
from interpolation.models import LocaleLike, PlaceholderExpression

NULL_LITERAL = "null"

logger = get_module_logger()


def default_string(value: Any) -> str:
    """Null-safe string form of a value."""
    if value is None:
        return NULL_LITERAL
    return str(value)


def render(expression: str, value: Any, locale: LocaleLike) -> str:
    """Render a validated value placeholder expression.

    Args:
        expression: Placeholder expression without its delimiters.
        value: The validated value, may be None.
        locale: babel Locale or locale tag used by the format pattern.

    Returns:
        Rendered value.

    Raises:
        MissingFormatError: If the separator is not followed by a pattern.
        InvalidFormatError: If the pattern cannot be applied to the value.
    """
    placeholder = PlaceholderExpression.from_string(expression)

    if not placeholder.has_format:
        return default_string(value)

    if not placeholder.format_pattern:
        logger.warning("missing_format_pattern", expression=expression)
        raise MissingFormatError(expression)

    try:
        return format_pattern(placeholder.format_pattern, (value,), locale)
    except IllegalFormatError as e:
        logger.warning(
            "invalid_format_pattern",
            expression=expression,
            value_type=type(value).__name__,
            error=str(e),
        )
        raise InvalidFormatError(expression, str(e)) from e
