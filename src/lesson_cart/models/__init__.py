"""
Data models for the lesson cart.

Usage:
    >>> from lesson_cart.models import Lesson, CartState, Customer
"""

from .lesson import Lesson, parse_lessons, SORT_FIELDS, SORT_DIRECTIONS
from .order import CheckoutOutcome, CheckoutStatus, Customer, Order, OrderItem, Payment
from .result import Result, ResultStatus
from .state import CartState

__all__ = [
    "Lesson",
    "parse_lessons",
    "SORT_FIELDS",
    "SORT_DIRECTIONS",
    "CheckoutOutcome",
    "CheckoutStatus",
    "Customer",
    "Order",
    "OrderItem",
    "Payment",
    "Result",
    "ResultStatus",
    "CartState",
]
