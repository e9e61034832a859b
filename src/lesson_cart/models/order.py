"""
Customer, payment and order data models.

This module provides the data structures used at checkout, from the
details typed in by the customer to the order payload posted to the
backend and the outcome reported back to the view.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional, Sequence

from ..utils.config import SecureString
from .lesson import Lesson


class CheckoutStatus(Enum):
    """Checkout state machine states."""
    IDLE = "idle"
    SUBMITTING = "submitting"
    SUCCESS = "success"
    FAILED = "failed"


@dataclass(frozen=True)
class Customer:
    """Customer details as typed into the checkout form."""

    name: str = ""
    phone: str = ""


@dataclass(frozen=True)
class Payment:
    """
    Mock payment details.

    These are validated before checkout but never sent to the backend.
    Card number and CVC are wrapped in SecureString so they do not leak
    into logs.

    Examples:
        >>> payment = Payment.from_plain("4111 1111 1111 1111", "12/27", "123")
        >>> str(payment.card_number)
        '********'
    """

    card_number: SecureString = field(default_factory=lambda: SecureString(""))
    expiry: str = ""
    cvc: SecureString = field(default_factory=lambda: SecureString(""))

    @classmethod
    def from_plain(cls, card_number: str, expiry: str, cvc: str) -> 'Payment':
        """Create payment details from plain strings."""
        return cls(
            card_number=SecureString(card_number),
            expiry=expiry,
            cvc=SecureString(cvc),
        )

    @property
    def is_empty(self) -> bool:
        """Check if nothing has been entered yet."""
        return not (
            self.card_number.get_value() or self.expiry or self.cvc.get_value()
        )


@dataclass(frozen=True)
class OrderItem:
    """One unit of a lesson in an order."""

    lesson_id: str
    qty: int = 1

    def to_dict(self) -> Dict[str, Any]:
        return {"lessonId": self.lesson_id, "qty": self.qty}


@dataclass(frozen=True)
class Order:
    """
    Order payload for ``POST /orders``.

    Each cart entry becomes its own item with ``qty`` 1, so two entries
    for the same lesson produce two items.

    Examples:
        >>> order = Order.from_cart(Customer("Ann Lee", "5551234"), cart)
        >>> order.to_dict()
        {'name': 'Ann Lee', 'phone': '5551234', 'items': [{'lessonId': 'L1', 'qty': 1}]}
    """

    name: str
    phone: str
    items: List[OrderItem] = field(default_factory=list)

    @classmethod
    def from_cart(cls, customer: Customer, cart: Sequence[Lesson]) -> 'Order':
        return cls(
            name=customer.name,
            phone=customer.phone,
            items=[OrderItem(lesson_id=lesson.id) for lesson in cart],
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "phone": self.phone,
            "items": [item.to_dict() for item in self.items],
        }


@dataclass
class CheckoutOutcome:
    """
    Result of one checkout attempt.

    Attributes:
        status: SUCCESS or FAILED
        order: Order that was submitted
        confirmation: Message to show to the user
        updated_spaces: Lesson id -> space sent with ``PUT /lessons/:id``
        error_message: Failure reason, if any
    """

    status: CheckoutStatus
    order: Order
    confirmation: str
    updated_spaces: Dict[str, int] = field(default_factory=dict)
    error_message: Optional[str] = None

    @property
    def is_success(self) -> bool:
        """Check if the order was placed and all spaces saved."""
        return self.status == CheckoutStatus.SUCCESS

    def to_dict(self) -> Dict[str, Any]:
        """Convert to a report-friendly dictionary."""
        return {
            "status": self.status.value,
            "order": self.order.to_dict(),
            "confirmation": self.confirmation,
            "updated_spaces": dict(self.updated_spaces),
            "error_message": self.error_message,
        }
