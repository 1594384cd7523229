"""Test data factories for deterministic test data generation."""

from tests.factories.interpolation import (
    make_placeholder_expression,
    make_value_expression,
)

__all__ = [
    "make_placeholder_expression",
    "make_value_expression",
]
