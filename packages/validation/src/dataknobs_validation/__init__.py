"""DataKnobs Validation Package - Accumulating record validation.

Validate a record (a mapping of field names to values) against a schema that
lists, per field, an ordered sequence of validations. Every error from every
field is collected; when there are none the original record is returned.

Modules:
    outcome: Valid/Invalid outcome algebra and the reduction primitive
    schema: Schema and field specification shapes
    validator: The validation engine (validate, Validator)
    validators: Builders for common field validations
    settings: Engine settings from defaults, files, and environment
    exceptions: Exception hierarchy for misuse and malformed schemas

Quick Example:

    ```python
    from dataknobs_validation import invalid, valid, validate

    def password_length(value):
        if len(value) > 5:
            return valid(value)
        return invalid(["Password must have more than 5 characters"])

    def password_strength(value):
        if any(not c.isalnum() for c in value):
            return valid(value)
        return invalid(["Password must contain special characters"])

    schema = {"password": {"validations": [password_length, password_strength]}}

    validate(schema, {"password": "f"})
    # Invalid(errors=({'password': ['Password must have more than 5 characters',
    #                               'Password must contain special characters']},))
    ```
"""

from dataknobs_validation.exceptions import (
    DataknobsValidationError,
    OutcomeError,
    SchemaError,
    SettingsError,
)
from dataknobs_validation.outcome import (
    Invalid,
    Outcome,
    Valid,
    combine,
    curried,
    invalid,
    reduce_outcomes,
    valid,
)
from dataknobs_validation.schema import (
    FieldSpec,
    Schema,
    ValidationFn,
    check_schema,
    field_validations,
    restrict_to_schema,
)
from dataknobs_validation.settings import ValidationSettings, get_settings, reset_settings
from dataknobs_validation.validator import (
    Validator,
    merge_all,
    to_aggregate,
    validate,
    validate_field,
)

__version__ = "1.0.0"

__all__ = [
    # Version
    "__version__",
    # Outcome algebra
    "Outcome",
    "Valid",
    "Invalid",
    "valid",
    "invalid",
    "combine",
    "curried",
    "reduce_outcomes",
    # Schema
    "Schema",
    "FieldSpec",
    "ValidationFn",
    "check_schema",
    "field_validations",
    "restrict_to_schema",
    # Engine
    "validate",
    "validate_field",
    "to_aggregate",
    "merge_all",
    "Validator",
    # Settings
    "ValidationSettings",
    "get_settings",
    "reset_settings",
    # Exceptions
    "DataknobsValidationError",
    "SchemaError",
    "OutcomeError",
    "SettingsError",
]
