"""
Customer details validator.

The predicates are what the checkout button depends on; the validator
class turns them into messages shown next to the form fields.
"""

import re

from ..models.order import Customer
from .validators import Validator, ValidationResult, matches


NAME_PATTERN = re.compile(r"[A-Za-z\s]+")
PHONE_PATTERN = re.compile(r"[0-9]+")


def valid_name(name: str) -> bool:
    """
    Letters and whitespace only, at least one character.

    Examples:
        >>> valid_name("John Doe")
        True
        >>> valid_name("J0hn")
        False
    """
    return matches(NAME_PATTERN, name)


def valid_phone(phone: str) -> bool:
    """
    Digits only, at least one.

    Examples:
        >>> valid_phone("12345")
        True
        >>> valid_phone("123-45")
        False
    """
    return matches(PHONE_PATTERN, phone)


class CustomerValidator(Validator):
    """
    Validator for the customer section of the checkout form.

    Examples:
        >>> result = CustomerValidator().validate(Customer("Ann Lee", "5551234"))
        >>> result.is_valid
        True
    """

    def validate(self, data: Customer) -> ValidationResult:
        result = ValidationResult(is_valid=True)

        error = self.validate_required(data.name, "Name")
        if error is None and not valid_name(data.name):
            error = "Name must contain letters and spaces only"
        if error:
            result.add_error("name", error)

        error = self.validate_required(data.phone, "Phone")
        if error is None:
            error = self.validate_pattern(data.phone, PHONE_PATTERN, "Phone", "digits only")
        if error:
            result.add_error("phone", error)

        return result
