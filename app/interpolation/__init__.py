"""Validated value interpolation.

Renders the validated value placeholder of a message, either as the value's
default string or through an inline locale-aware format pattern.

Main components:
- formatter: render() and default_string()
- directives: format engine for printf-style patterns with positional indices
- models: PlaceholderExpression and locale resolution
- interpolator: ValueFormatterMessageInterpolator and the MessageInterpolator delegate contract
- errors: MissingFormatError, InvalidFormatError and format engine diagnostics
"""

from interpolation.directives import format_pattern, parse_pattern
from interpolation.errors import (
    IllegalFormatError,
    InvalidFormatError,
    MissingFormatError,
    ValueFormattingError,
)
from interpolation.formatter import default_string, render
from interpolation.interpolator import (
    MessageInterpolator,
    ValueFormatterMessageInterpolator,
)
from interpolation.models import PlaceholderExpression, resolve_locale

__all__ = [
    "render",
    "default_string",
    "format_pattern",
    "parse_pattern",
    "PlaceholderExpression",
    "resolve_locale",
    "MessageInterpolator",
    "ValueFormatterMessageInterpolator",
    "ValueFormattingError",
    "MissingFormatError",
    "InvalidFormatError",
    "IllegalFormatError",
]
