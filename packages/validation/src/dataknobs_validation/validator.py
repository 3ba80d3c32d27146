"""Accumulating record validation.

Validate a record against a schema, collecting every error from every field
instead of stopping at the first one.

Example:
    ```python
    from dataknobs_validation import invalid, valid, validate

    def min_age(age):
        return valid(age) if age > 12 else invalid(["Age must be greater than 12"])

    schema = {"age": {"validations": [min_age]}}

    validate(schema, {"age": 23})
    # Valid(value={'age': 23})
    validate(schema, {"age": 11})
    # Invalid(errors=({'age': ['Age must be greater than 12']},))

    check_person = validate(schema)  # bound to the schema
    check_person({"age": 11}).is_invalid
    # True
    ```
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping
from typing import Any

from .exceptions import OutcomeError
from .outcome import Invalid, Outcome, Valid, curried, reduce_outcomes
from .schema import FieldDefinition, Schema, check_schema, field_validations, restrict_to_schema
from .settings import ValidationSettings, get_settings

logger = logging.getLogger(__name__)

_MISSING: Any = object()


def validate(
    schema: Schema,
    record: Any = _MISSING,
    *,
    settings: ValidationSettings | None = None,
) -> Any:
    """Validate a record against a schema.

    Only fields declared in the schema and present in the record are checked.
    Fields missing from the record are skipped and undeclared fields are
    ignored.

    Args:
        schema: Mapping from field name to its validations
        record: Mapping to validate. When omitted, a :class:`Validator` bound
            to ``schema`` is returned instead.
        settings: Engine settings (process defaults if None)

    Returns:
        ``Valid(record)`` holding the very same record object when every check
        passes; otherwise ``Invalid([{field: [errors, ...], ...}])`` with one
        entry per failing field. A record that is not a mapping yields
        ``Invalid([message])`` and no validation is run.

    Raises:
        SchemaError: If the schema is malformed
    """
    settings = settings or get_settings()

    if record is _MISSING:
        return Validator(schema, settings=settings)

    if not isinstance(record, Mapping):
        return _invalid_input(record, settings)

    if settings.strict_schema:
        check_schema(schema)

    return _validate_record(schema, record, settings)


def validate_field(
    spec: FieldDefinition, value: Any, field_name: str | None = None
) -> Outcome:
    """Run every validation of a field against its value.

    Args:
        spec: Field specification holding the ordered validations
        value: Value to check
        field_name: Field name, used in error messages

    Returns:
        ``Valid(value)`` if every validation passed, otherwise ``Invalid``
        holding the errors of all failing validations in declaration order
    """
    outcomes = [
        _checked(validation(value), field_name)
        for validation in field_validations(spec, field_name)
    ]
    # Validations only diagnose; the result always carries the original value.
    sentinel = Valid(curried(len(outcomes), lambda *_: value))
    return reduce_outcomes([sentinel, *outcomes])


def to_aggregate(field_name: str, outcome: Outcome) -> Outcome:
    """Key a failing field's errors by its name.

    ``Invalid(errors)`` becomes ``Invalid([{field_name: [errors...]}])``;
    a ``Valid`` outcome is returned unchanged.
    """
    return outcome.failure_map(lambda errors: [{field_name: list(errors)}])


def merge_all(objects: Iterable[Mapping[str, Any]]) -> dict[str, Any]:
    """Shallow-merge mappings into one dict, later keys winning."""
    merged: dict[str, Any] = {}
    for obj in objects:
        merged.update(obj)
    return merged


class Validator:
    """A schema bound once and applied to many records.

    The schema shape is checked when the validator is created, unless the
    settings disable strict schemas.
    """

    def __init__(self, schema: Schema, settings: ValidationSettings | None = None):
        self.settings = settings or get_settings()
        if self.settings.strict_schema:
            check_schema(schema)
        self.schema = schema

    @property
    def fields(self) -> list[str]:
        """Declared field names, in schema order."""
        return list(self.schema)

    def __call__(self, record: Any) -> Outcome:
        return self.validate(record)

    def __repr__(self) -> str:
        return f"Validator(fields={self.fields!r})"

    def validate(self, record: Any) -> Outcome:
        """Validate one record; see :func:`validate`."""
        if not isinstance(record, Mapping):
            return _invalid_input(record, self.settings)
        return _validate_record(self.schema, record, self.settings)

    def validate_many(
        self, records: Iterable[Any], stop_on_error: bool = False
    ) -> list[Outcome]:
        """Validate several records independently.

        Args:
            records: Records to validate
            stop_on_error: If True, stop after the first invalid record

        Returns:
            One outcome per validated record, in input order
        """
        results = []
        for record in records:
            result = self.validate(record)
            results.append(result)
            if result.is_invalid and stop_on_error:
                break
        return results


def _validate_record(
    schema: Schema, record: Mapping[str, Any], settings: ValidationSettings
) -> Outcome:
    fields = restrict_to_schema(schema, record)
    logger.debug(f"Validating fields: {', '.join(fields) or '(none)'}")

    outcomes = [
        to_aggregate(name, validate_field(schema[name], value, name))
        for name, value in fields.items()
    ]
    sentinel = Valid(curried(len(outcomes), _collect))
    result = reduce_outcomes([sentinel, *outcomes])

    if settings.log_failures and isinstance(result, Invalid):
        failed = [name for failure in result.errors for name in failure]
        logger.debug(f"Validation failed for fields: {', '.join(failed)}")

    return result.bimap(lambda errors: [merge_all(errors)], lambda _: record)


def _invalid_input(record: Any, settings: ValidationSettings) -> Invalid:
    logger.debug(f"Cannot validate non-mapping input of type {type(record).__name__}")
    return Invalid([settings.format_invalid_input(record)])


def _checked(outcome: Any, field_name: str | None) -> Outcome:
    if not isinstance(outcome, Outcome):
        raise OutcomeError(
            f"Validation for field '{field_name}' returned {type(outcome).__name__}, "
            "expected an Outcome",
            context={"field_name": field_name},
        )
    return outcome


def _collect(*values: Any) -> tuple[Any, ...]:
    return values
