"""
Cart state transitions and derived values.

Usage:
    >>> from lesson_cart.cart import reducer, derived
    >>> state = reducer.add_to_cart(state, lesson)
    >>> derived.cart_total(state)
"""

from . import derived, reducer
from .reducer import CartIndexError

__all__ = ["derived", "reducer", "CartIndexError"]
