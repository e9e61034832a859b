"""
Validation framework with Strategy pattern.

This module provides:
- Abstract Validator interface
- ValidationResult for consistent validation reporting
- Shared field checks used by the customer and payment validators
"""

import re
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any, Dict, Optional, Pattern


@dataclass
class ValidationResult:
    """
    Result of form validation.

    Attributes:
        is_valid: Whether validation passed
        errors: Field name -> error message
    """

    is_valid: bool
    errors: Dict[str, str] = field(default_factory=dict)

    def add_error(self, field_name: str, message: str) -> 'ValidationResult':
        """
        Record an error for a field.

        Only the first error per field is kept.

        Examples:
            >>> result = ValidationResult(is_valid=True)
            >>> result.add_error("name", "Name is required")
        """
        self.errors.setdefault(field_name, message)
        self.is_valid = False
        return self

    def merge(self, other: 'ValidationResult') -> 'ValidationResult':
        """Combine the findings of another validator into this result."""
        for field_name, message in other.errors.items():
            self.add_error(field_name, message)
        return self

    def get_summary(self) -> str:
        """
        Get validation summary.

        Returns:
            Human-readable summary of validation results
        """
        if self.is_valid:
            return "Validation passed"

        parts = [f"Errors ({len(self.errors)}):"]
        for field_name, message in self.errors.items():
            parts.append(f"  - {field_name}: {message}")

        return "\n".join(parts)


def matches(pattern: Pattern, value: Any) -> bool:
    """Check that a whole string value matches a compiled pattern."""
    return isinstance(value, str) and pattern.fullmatch(value) is not None


class Validator(ABC):
    """
    Abstract base class for form validators.

    Subclasses implement validate() for one form section.
    """

    @abstractmethod
    def validate(self, data: Any) -> ValidationResult:
        """
        Validate data.

        Returns:
            ValidationResult with per-field errors
        """
        pass

    def validate_required(self, value: Any, field_name: str) -> Optional[str]:
        """
        Validate that a text field has been filled in.

        Returns:
            Error message if empty, None otherwise
        """
        if value is None or (isinstance(value, str) and not value.strip()):
            return f"{field_name} is required"
        return None

    def validate_pattern(
        self,
        value: str,
        pattern: Pattern,
        field_name: str,
        hint: str
    ) -> Optional[str]:
        """
        Validate a text field against a pattern.

        Args:
            value: Field value
            pattern: Compiled regex the whole value must match
            field_name: Name of the field (for error message)
            hint: Description of the expected format

        Returns:
            Error message if invalid, None if valid
        """
        if not matches(pattern, value):
            return f"{field_name} must contain {hint}"
        return None
