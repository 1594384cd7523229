"""Feature-level fixtures for validated value interpolation tests.

Provides locales, temporal values and a fake delegate interpolator.
"""

import datetime as dt

import pytest
from babel import Locale

from interpolation import MessageInterpolator


@pytest.fixture
def en_us():
    """English (United States) locale."""
    return Locale.parse("en_US")


@pytest.fixture
def de_de():
    """German (Germany) locale."""
    return Locale.parse("de_DE")


@pytest.fixture
def fr_fr():
    """French (France) locale."""
    return Locale.parse("fr_FR")


@pytest.fixture
def sample_date():
    """Tuesday 5 March 2024 (day 65 of a leap year)."""
    return dt.date(2024, 3, 5)


@pytest.fixture
def sample_datetime():
    """Naive afternoon timestamp on the sample date."""
    return dt.datetime(2024, 3, 5, 14, 7, 9, 123456)


@pytest.fixture
def sample_aware_datetime():
    """Timestamp at UTC+02:00 on the sample date."""
    return dt.datetime(
        2024, 3, 5, 14, 7, 9, tzinfo=dt.timezone(dt.timedelta(hours=2))
    )


class BraceDelegate(MessageInterpolator):
    """Replaces {name} placeholders from a fixed mapping, records calls."""

    def __init__(self, values):
        self.values = values
        self.calls = []

    def interpolate(self, message_template, locale):
        self.calls.append((message_template, locale))
        message = message_template
        for name, value in self.values.items():
            message = message.replace(f"{{{name}}}", str(value))
        return message


@pytest.fixture
def brace_delegate():
    """Delegate resolving {min} and {max} constraint attributes."""
    return BraceDelegate({"min": 1, "max": 10})
