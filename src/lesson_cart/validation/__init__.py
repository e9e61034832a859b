"""
Form validation for the checkout.

Usage:
    >>> from lesson_cart.validation import valid_name, valid_phone
    >>> valid_name("Ann Lee") and valid_phone("5551234")
    True
"""

from .validators import ValidationResult, Validator
from .customer_validator import CustomerValidator, valid_name, valid_phone
from .payment_validator import (
    PaymentValidator,
    valid_card_number,
    valid_cvc,
    valid_expiry,
    valid_payment,
)

__all__ = [
    "ValidationResult",
    "Validator",
    "CustomerValidator",
    "valid_name",
    "valid_phone",
    "PaymentValidator",
    "valid_card_number",
    "valid_cvc",
    "valid_expiry",
    "valid_payment",
]
