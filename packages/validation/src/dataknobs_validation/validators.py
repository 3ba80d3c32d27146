"""Builders for common field validations.

Each builder returns a function taking a value and returning ``Valid(value)``
or ``Invalid([message])``, ready to be listed in a field's ``validations``.
Every builder accepts a ``message`` to replace its default error text.

Example:
    ```python
    from dataknobs_validation import validate
    from dataknobs_validation.validators import greater_than, matches, min_length

    schema = {
        "password": {
            "validations": [
                min_length(6, "Password must have more than 5 characters"),
                matches(r"\\W", "Password must contain special characters"),
            ]
        },
        "age": {"validations": [greater_than(12, "Age must be greater than 12")]},
    }
    ```
"""

from __future__ import annotations

import re
from collections.abc import Callable, Iterable
from numbers import Real
from re import Pattern as RegexPattern
from typing import Any

from .outcome import Invalid, Outcome, Valid
from .schema import ValidationFn


def predicate(check: Callable[[Any], bool], message: str) -> ValidationFn:
    """Build a validation from a boolean check.

    Args:
        check: Returns True when the value is acceptable
        message: Error reported when the check returns False

    Returns:
        Validation function
    """

    def validation(value: Any) -> Outcome:
        return Valid(value) if check(value) else Invalid([message])

    return validation


def min_length(minimum: int, message: str | None = None) -> ValidationFn:
    """Value length must be at least ``minimum``."""
    if minimum < 0:
        raise ValueError(f"min length cannot be negative: {minimum}")
    message = message or f"Length must be at least {minimum}"

    def validation(value: Any) -> Outcome:
        if not hasattr(value, "__len__"):
            return Invalid([f"Value does not have a length: {type(value).__name__}"])
        return Valid(value) if len(value) >= minimum else Invalid([message])

    return validation


def max_length(maximum: int, message: str | None = None) -> ValidationFn:
    """Value length must be at most ``maximum``."""
    if maximum < 0:
        raise ValueError(f"max length cannot be negative: {maximum}")
    message = message or f"Length must be at most {maximum}"

    def validation(value: Any) -> Outcome:
        if not hasattr(value, "__len__"):
            return Invalid([f"Value does not have a length: {type(value).__name__}"])
        return Valid(value) if len(value) <= maximum else Invalid([message])

    return validation


def greater_than(bound: Real, message: str | None = None) -> ValidationFn:
    """Numeric value must be strictly greater than ``bound``."""
    message = message or f"Value must be greater than {bound}"

    def validation(value: Any) -> Outcome:
        if not _is_number(value):
            return Invalid([f"Value must be a number, got {type(value).__name__}"])
        return Valid(value) if value > bound else Invalid([message])

    return validation


def less_than(bound: Real, message: str | None = None) -> ValidationFn:
    """Numeric value must be strictly less than ``bound``."""
    message = message or f"Value must be less than {bound}"

    def validation(value: Any) -> Outcome:
        if not _is_number(value):
            return Invalid([f"Value must be a number, got {type(value).__name__}"])
        return Valid(value) if value < bound else Invalid([message])

    return validation


def matches(pattern: str | RegexPattern, message: str | None = None) -> ValidationFn:
    """String value must contain a match for ``pattern`` (``re.search``)."""
    regex = re.compile(pattern) if isinstance(pattern, str) else pattern
    message = message or f"Value does not match pattern '{regex.pattern}'"

    def validation(value: Any) -> Outcome:
        if not isinstance(value, str):
            return Invalid(
                [f"Value must be a string for pattern matching, got {type(value).__name__}"]
            )
        return Valid(value) if regex.search(value) else Invalid([message])

    return validation


def one_of(values: Iterable[Any], message: str | None = None) -> ValidationFn:
    """Value must be one of ``values``."""
    allowed = list(values)
    if not allowed:
        raise ValueError("one_of requires at least one allowed value")
    message = message or f"Value must be one of: {', '.join(repr(v) for v in allowed)}"

    def validation(value: Any) -> Outcome:
        return Valid(value) if value in allowed else Invalid([message])

    return validation


def not_blank(message: str = "Value is required") -> ValidationFn:
    """Value must not be None, empty, or only whitespace."""

    def validation(value: Any) -> Outcome:
        if value is None:
            return Invalid([message])
        if isinstance(value, str) and not value.strip():
            return Invalid([message])
        if isinstance(value, (list, dict, set, tuple)) and len(value) == 0:
            return Invalid([message])
        return Valid(value)

    return validation


def _is_number(value: Any) -> bool:
    # bool is an int subclass; reject it
    return isinstance(value, Real) and not isinstance(value, bool)
