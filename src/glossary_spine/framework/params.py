"""Parameter validation framework for operations.

Manifesto:
    Operations must validate inputs before executing.  Declarative
    parameter specs keep that validation consistent and self-documenting.

Tags:
    glossary-spine, framework, params, validation

Doc-Types:
    api-reference
"""

from collections.abc import Callable
from dataclasses import dataclass, field
from enum import Enum
from typing import Any


@dataclass
class ParamDef:
    """Definition of an operation parameter."""

    name: str
    type: type
    description: str
    required: bool = True
    default: Any = None
    validator: Callable[[Any], bool] | None = None
    error_message: str | None = None

    def validate(self, value: Any) -> tuple[bool, str | None]:
        """
        Validate a parameter value.

        Returns:
            (is_valid, error_message)
        """
        if value is not None and not isinstance(value, self.type):
            return False, f"Expected type {self.type.__name__}, got {type(value).__name__}"

        if self.validator and value is not None:
            try:
                if not self.validator(value):
                    return False, self.error_message or f"Validation failed for {self.name}"
            except Exception as e:
                return False, str(e)

        return True, None


@dataclass
class ValidationResult:
    """Result of parameter validation."""

    valid: bool
    missing_params: list[str] = field(default_factory=list)
    invalid_params: dict[str, str] = field(default_factory=dict)

    def get_error_message(self) -> str:
        """Get human-readable error message."""
        messages = []

        if self.missing_params:
            messages.append(f"Missing required parameters: {', '.join(self.missing_params)}")

        for param, error in self.invalid_params.items():
            messages.append(f"Invalid parameter '{param}': {error}")

        return ". ".join(messages) if messages else "Validation passed"


class OperationSpec:
    """Operation parameter specification."""

    def __init__(
        self,
        required_params: dict[str, ParamDef] | None = None,
        optional_params: dict[str, ParamDef] | None = None,
        description: str | None = None,
    ):
        self.required_params = required_params or {}
        self.optional_params = optional_params or {}
        self.description = description

        for param in self.required_params.values():
            param.required = True
        for param in self.optional_params.values():
            param.required = False

    def validate(self, params: dict[str, Any]) -> ValidationResult:
        """
        Validate parameters against this spec.

        Defaults of missing optional params are written into *params*.
        """
        missing_params = []
        invalid_params = {}

        for name, param_def in self.required_params.items():
            if name not in params or params[name] is None:
                missing_params.append(name)
            else:
                is_valid, error = param_def.validate(params[name])
                if not is_valid:
                    invalid_params[name] = error

        for name, param_def in self.optional_params.items():
            if name in params and params[name] is not None:
                is_valid, error = param_def.validate(params[name])
                if not is_valid:
                    invalid_params[name] = error
            elif param_def.default is not None:
                params[name] = param_def.default

        valid = not missing_params and not invalid_params
        return ValidationResult(valid=valid, missing_params=missing_params, invalid_params=invalid_params)


# =============================================================================
# Built-in Validators
# =============================================================================


def enum_value(enum_class: type[Enum]) -> Callable[[str], bool]:
    """Create a validator for enum values."""

    def validator(value: str) -> bool:
        try:
            enum_class(value)
            return True
        except (ValueError, KeyError):
            return False

    return validator


def non_blank(value: str) -> bool:
    """Validate that a string has non-whitespace content."""
    return bool(value.strip())
