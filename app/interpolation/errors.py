"""Exceptions raised while rendering validated value placeholders.

Two families live here:

- ``ValueFormattingError`` and its subclasses are what callers of
  ``render`` see. They always carry the placeholder expression that failed.
- ``IllegalFormatError`` and its subclasses are diagnostics raised by the
  format engine in ``interpolation.directives``. ``render`` wraps them into
  ``InvalidFormatError``.
"""


class ValueFormattingError(Exception):
    """Base exception for validated value rendering failures.

    Attributes:
        expression: Placeholder expression that could not be rendered.

    Example:
        try:
            render(expression, value, locale)
        except ValueFormattingError as e:
            logger.error("value_formatting_error", expression=e.expression)
    """

    def __init__(self, message: str, expression: str):
        super().__init__(message)
        self.expression = expression


class MissingFormatError(ValueFormattingError):
    """Raised when the format separator is not followed by a pattern.

    Example:
        >>> render("validatedValue:", 7, "en-US")
        Traceback (most recent call last):
        ...
        MissingFormatError: Missing format string in template: validatedValue:
    """

    def __init__(self, expression: str):
        super().__init__(f"Missing format string in template: {expression}", expression)


class InvalidFormatError(ValueFormattingError):
    """Raised when a format pattern cannot be applied to the validated value.

    Attributes:
        expression: Placeholder expression that could not be rendered.
        diagnostic: Message reported by the format engine.

    Example:
        >>> render("validatedValue:%d", "abc", "en-US")
        Traceback (most recent call last):
        ...
        InvalidFormatError: Invalid format: d != str
    """

    def __init__(self, expression: str, diagnostic: str):
        super().__init__(f"Invalid format: {diagnostic}", expression)
        self.diagnostic = diagnostic


class IllegalFormatError(ValueError):
    """Base exception for format engine diagnostics."""

    pass


class UnknownFormatConversionError(IllegalFormatError):
    """Raised for a conversion character the engine does not know."""

    def __init__(self, conversion: str):
        super().__init__(f"Conversion = '{conversion}'")
        self.conversion = conversion


class MissingFormatArgumentError(IllegalFormatError):
    """Raised when a directive refers to an argument that was not supplied."""

    def __init__(self, specifier: str):
        super().__init__(f"Format specifier '{specifier}'")
        self.specifier = specifier


class IllegalFormatFlagsError(IllegalFormatError):
    """Raised for duplicated, contradictory or unsupported flags."""

    def __init__(self, flags: str, conversion: str = ""):
        if conversion:
            message = f"Conversion = {conversion}, Flags = {flags}"
        else:
            message = f"Flags = '{flags}'"
        super().__init__(message)
        self.flags = flags


class MissingFormatWidthError(IllegalFormatError):
    """Raised when '-' or '0' is used without a width."""

    def __init__(self, specifier: str):
        super().__init__(specifier)
        self.specifier = specifier


class IllegalFormatWidthError(IllegalFormatError):
    """Raised when a width is given to a conversion that takes none."""

    def __init__(self, width: int):
        super().__init__(str(width))
        self.width = width


class IllegalFormatPrecisionError(IllegalFormatError):
    """Raised when a precision is given to a conversion that takes none."""

    def __init__(self, precision: int):
        super().__init__(str(precision))
        self.precision = precision


class FormatConversionMismatchError(IllegalFormatError):
    """Raised when the argument type does not fit the conversion."""

    def __init__(self, conversion: str, argument_type: type):
        super().__init__(f"{conversion} != {argument_type.__name__}")
        self.conversion = conversion
        self.argument_type = argument_type
