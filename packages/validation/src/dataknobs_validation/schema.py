"""Schema shape for record validation.

A schema maps field names to field specifications. A field specification is
either a :class:`FieldSpec` or a plain mapping with a ``validations`` entry:

```python
schema = {
    "password": {"validations": [password_length, password_strength]},
    "age": FieldSpec([min_age]),
}
```

Each validation is a function taking the field's value and returning an
:class:`~dataknobs_validation.outcome.Outcome`.
"""

from __future__ import annotations

from collections.abc import Callable, Mapping, Sequence
from dataclasses import dataclass
from typing import Any, Union

from .exceptions import SchemaError
from .outcome import Outcome

ValidationFn = Callable[[Any], Outcome]


@dataclass(frozen=True)
class FieldSpec:
    """Ordered validations for one field."""

    validations: tuple[ValidationFn, ...] = ()

    def __post_init__(self) -> None:
        object.__setattr__(self, "validations", tuple(self.validations))


FieldDefinition = Union[FieldSpec, Mapping[str, Any]]
Schema = Mapping[str, FieldDefinition]


def field_validations(
    spec: FieldDefinition, field_name: str | None = None
) -> tuple[ValidationFn, ...]:
    """Extract the ordered validations declared for a field.

    Args:
        spec: FieldSpec or mapping with a ``validations`` entry
        field_name: Field name, used in error messages

    Returns:
        Tuple of validation functions (possibly empty)

    Raises:
        SchemaError: If the field declares no validations list or a
            validation is not callable
    """
    if isinstance(spec, FieldSpec):
        validations: Any = spec.validations
    elif isinstance(spec, Mapping):
        validations = spec.get("validations")
    else:
        raise SchemaError(
            f"expected a FieldSpec or a mapping, got {type(spec).__name__}", field_name=field_name
        )

    if validations is None:
        raise SchemaError("missing 'validations' list", field_name=field_name)
    if isinstance(validations, (str, bytes)) or not isinstance(validations, Sequence):
        raise SchemaError(
            f"'validations' must be a sequence, got {type(validations).__name__}",
            field_name=field_name,
        )

    for validation in validations:
        if not callable(validation):
            raise SchemaError(f"validation is not callable: {validation!r}", field_name=field_name)

    return tuple(validations)


def check_schema(schema: Schema) -> None:
    """Verify the shape of every field specification in a schema.

    Raises:
        SchemaError: If the schema or any of its fields is malformed
    """
    if not isinstance(schema, Mapping):
        raise SchemaError(f"Schema must be a mapping, got {type(schema).__name__}")
    for name, spec in schema.items():
        field_validations(spec, name)


def restrict_to_schema(schema: Schema, record: Mapping[str, Any]) -> dict[str, Any]:
    """Keep only the schema-declared fields that are present in the record.

    Fields are returned in schema order.
    """
    return {name: record[name] for name in schema if name in record}
