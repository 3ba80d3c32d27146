"""Settings controlling the validation engine.

Settings come from, in increasing precedence, the defaults below, a YAML or
JSON settings file, and ``DATAKNOBS_VALIDATION_<NAME>`` environment variables.

Example settings file:
    ```yaml
    validation:
      strict_schema: true
      log_failures: false
      invalid_input_message: "Error: cannot validate object: {value}"
    ```
"""

from __future__ import annotations

import json
import logging
import os
from dataclasses import asdict, dataclass, fields
from functools import lru_cache
from pathlib import Path
from typing import Any, Union

import yaml  # type: ignore[import-untyped]

from .exceptions import SettingsError

logger = logging.getLogger(__name__)

ENV_PREFIX = "DATAKNOBS_VALIDATION_"
SECTION = "validation"


@dataclass(frozen=True)
class ValidationSettings:
    """Engine settings.

    Attributes:
        invalid_input_message: Error for inputs that are not mappings; ``{value}``
            is replaced with the stringified input
        strict_schema: Check the whole schema shape before validating a record
        log_failures: Emit DEBUG log records for fields that fail validation
    """

    invalid_input_message: str = "Error: cannot validate object: {value}"
    strict_schema: bool = True
    log_failures: bool = True

    def __post_init__(self) -> None:
        if not isinstance(self.invalid_input_message, str):
            raise SettingsError(
                "invalid_input_message must be a string",
                context={"invalid_input_message": self.invalid_input_message},
            )
        try:
            self.invalid_input_message.format(value="")
        except (AttributeError, KeyError, IndexError, ValueError) as e:
            raise SettingsError(
                f"invalid_input_message is not a valid template: {e}",
                context={"invalid_input_message": self.invalid_input_message},
            ) from e
        for name in ("strict_schema", "log_failures"):
            if not isinstance(getattr(self, name), bool):
                raise SettingsError(
                    f"{name} must be a boolean", context={name: getattr(self, name)}
                )

    def format_invalid_input(self, value: Any) -> str:
        """Build the error descriptor for a non-mapping input."""
        return self.invalid_input_message.format(value=str(value))

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)

    def merge(self, overrides: dict[str, Any]) -> ValidationSettings:
        """Return new settings with ``overrides`` applied on top of these."""
        data = self.to_dict()
        data.update(overrides)
        return ValidationSettings.from_dict(data)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> ValidationSettings:
        """Create settings from a dictionary.

        Args:
            data: Setting values, either flat or nested under a ``validation`` key

        Returns:
            ValidationSettings instance

        Raises:
            SettingsError: If a key is unknown or a value has the wrong type
        """
        if SECTION in data and isinstance(data[SECTION], dict):
            data = data[SECTION]

        known = {f.name for f in fields(cls)}
        unknown = set(data) - known
        if unknown:
            raise SettingsError(
                f"Unknown validation settings: {', '.join(sorted(unknown))}",
                context={"unknown": sorted(unknown), "known": sorted(known)},
            )
        return cls(**data)

    @classmethod
    def from_env(
        cls, prefix: str = ENV_PREFIX, base: ValidationSettings | None = None
    ) -> ValidationSettings:
        """Create settings from environment variables.

        ``DATAKNOBS_VALIDATION_STRICT_SCHEMA=false`` sets ``strict_schema`` and
        so on. Variables for unknown settings are ignored.

        Args:
            prefix: Environment variable prefix
            base: Settings to override (defaults if None)

        Returns:
            ValidationSettings instance
        """
        base = base or cls()
        known = {f.name for f in fields(cls)}
        overrides: dict[str, Any] = {}

        for key, value in os.environ.items():
            if not key.startswith(prefix):
                continue
            name = key[len(prefix):].lower()
            if name not in known:
                logger.debug(f"Ignoring unknown validation setting from environment: {key}")
                continue
            if name == "invalid_input_message":
                overrides[name] = value
            else:
                overrides[name] = _parse_value(value)

        if not overrides:
            return base
        return base.merge(overrides)

    @classmethod
    def from_file(cls, path: Union[str, Path]) -> ValidationSettings:
        """Load settings from a YAML or JSON file.

        Args:
            path: Path to the settings file

        Returns:
            ValidationSettings instance

        Raises:
            SettingsError: If the file is missing, has an unsupported
                extension, or does not hold a mapping
        """
        path = Path(path).resolve()

        if not path.exists():
            raise SettingsError(f"Settings file not found: {path}", context={"path": str(path)})

        suffix = path.suffix.lower()
        with open(path) as f:
            if suffix in [".yaml", ".yml"]:
                data = yaml.safe_load(f)
            elif suffix == ".json":
                data = json.load(f)
            else:
                raise SettingsError(f"Unsupported file format: {suffix}", context={"path": str(path)})

        if data is None:
            return cls()
        if not isinstance(data, dict):
            raise SettingsError(
                f"Settings file must hold a mapping, got {type(data).__name__}",
                context={"path": str(path)},
            )
        logger.debug(f"Loaded validation settings from {path}")
        return cls.from_dict(data)


@lru_cache
def get_settings() -> ValidationSettings:
    """Get process-wide settings (defaults plus environment overrides)."""
    return ValidationSettings.from_env()


def reset_settings() -> None:
    """Forget cached settings so the environment is read again."""
    get_settings.cache_clear()


def _parse_value(value: str) -> Any:
    """Parse an environment variable value to bool, int, float or str."""
    if value.lower() in ["true", "yes", "1"]:
        return True
    elif value.lower() in ["false", "no", "0"]:
        return False

    try:
        return int(value)
    except ValueError:
        pass

    try:
        return float(value)
    except ValueError:
        pass

    return value
