"""Exception hierarchy for the dataknobs_validation package.

Expected validation failures are never raised: they are carried by the
``Invalid`` branch of an :class:`~dataknobs_validation.outcome.Outcome`.
The exceptions below signal programming errors instead, such as a malformed
schema or reading the value out of a failed outcome.

Example:
    ```python
    from dataknobs_validation.exceptions import SchemaError

    try:
        validate({"password": {}}, {"password": "secret"})
    except SchemaError as e:
        logger.error(f"Bad schema: {e}")
        logger.error(f"Context: {e.context}")
    ```
"""

from __future__ import annotations

from typing import Any


class DataknobsValidationError(Exception):
    """Base exception for the validation package.

    Attributes:
        context: Dictionary containing contextual information about the error
        details: Alias for context

    Args:
        message: Human-readable error message
        context: Optional dictionary with error context (field names, values, etc.)
        details: Alternative to context (takes precedence when both are given)
    """

    def __init__(
        self,
        message: str,
        context: dict[str, Any] | None = None,
        details: dict[str, Any] | None = None,
    ):
        super().__init__(message)
        self.context = details or context or {}
        self.details = self.context


class SchemaError(DataknobsValidationError):
    """Raised when a schema does not have the expected shape.

    A field declared with no validations list at all is malformed; a field
    declared with an empty list is not.
    """

    def __init__(self, message: str, field_name: str | None = None):
        self.field_name = field_name
        if field_name is not None:
            message = f"Field '{field_name}': {message}"
        super().__init__(message, context={"field_name": field_name} if field_name else None)


class OutcomeError(DataknobsValidationError):
    """Raised when an Outcome is used in a way its branch does not support."""

    pass


class SettingsError(DataknobsValidationError):
    """Raised when validation settings are invalid or cannot be loaded."""

    pass
