"""
Mock payment validator.

Payment details are checked for shape only. Nothing here contacts a
payment provider and the details are never sent anywhere.
"""

import re
from typing import Optional

from ..models.order import Payment
from .validators import Validator, ValidationResult, matches


CARD_NUMBER_PATTERN = re.compile(r"([0-9]{4} ?){3}[0-9]{4}")
EXPIRY_PATTERN = re.compile(r"(0[1-9]|1[0-2])/[0-9]{2}")
CVC_PATTERN = re.compile(r"[0-9]{3,4}")


def valid_card_number(card_number: str) -> bool:
    """
    Sixteen digits, optionally as four groups separated by single spaces.

    Examples:
        >>> valid_card_number("4111 1111 1111 1111")
        True
        >>> valid_card_number("4111-1111")
        False
        >>> valid_card_number(" 4111111111111111")
        False
    """
    return matches(CARD_NUMBER_PATTERN, card_number)


def valid_expiry(expiry: str) -> bool:
    """MM/YY with a month between 01 and 12."""
    return matches(EXPIRY_PATTERN, expiry)


def valid_cvc(cvc: str) -> bool:
    """Three or four digits."""
    return matches(CVC_PATTERN, cvc)


def valid_payment(payment: Optional[Payment]) -> bool:
    """Check every payment field at once."""
    if payment is None:
        return False
    return (
        valid_card_number(payment.card_number.get_value())
        and valid_expiry(payment.expiry)
        and valid_cvc(payment.cvc.get_value())
    )


class PaymentValidator(Validator):
    """Validator for the mock payment section of the checkout form."""

    def validate(self, data: Optional[Payment]) -> ValidationResult:
        result = ValidationResult(is_valid=True)
        payment = data or Payment()

        if not valid_card_number(payment.card_number.get_value()):
            result.add_error("card_number", "Card number must be 16 digits")

        if not valid_expiry(payment.expiry):
            result.add_error("expiry", "Expiry must be in MM/YY format")

        if not valid_cvc(payment.cvc.get_value()):
            result.add_error("cvc", "CVC must be 3 or 4 digits")

        return result
