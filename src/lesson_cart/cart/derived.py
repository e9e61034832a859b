"""
Values derived from a cart state snapshot.

Recomputed on demand; nothing is cached.
"""

from collections import Counter
from typing import Dict, List

from ..models.lesson import Lesson
from ..models.state import CartState
from ..validation.customer_validator import valid_name, valid_phone
from ..validation.payment_validator import valid_payment


def sorted_lessons(state: CartState) -> List[Lesson]:
    """
    Lessons ordered by ``state.sort_by`` / ``state.sort_dir``.

    The sort is stable in both directions and the store itself is left in
    backend order.
    """
    return sorted(
        state.lessons,
        key=lambda lesson: getattr(lesson, state.sort_by),
        reverse=state.sort_dir == "desc",
    )


def cart_count(state: CartState) -> int:
    return len(state.cart)


def cart_total(state: CartState) -> float:
    """Sum of the prices of every unit in the cart."""
    return sum(item.price for item in state.cart)


def can_add(state: CartState, lesson_id: str) -> bool:
    """Whether the add button for a lesson is enabled."""
    lesson = state.find_lesson(lesson_id)
    return lesson is not None and lesson.is_available


def customer_valid(state: CartState) -> bool:
    return valid_name(state.customer.name) and valid_phone(state.customer.phone)


def can_checkout(state: CartState, require_payment: bool = False) -> bool:
    """
    Whether the order may be submitted.

    Needs valid customer details and a non-empty cart, plus valid payment
    details when ``require_payment`` is set.
    """
    if not state.cart or not customer_valid(state):
        return False
    if require_payment and not valid_payment(state.payment):
        return False
    return True


def space_updates(state: CartState) -> Dict[str, int]:
    """
    Space to save for each distinct lesson in the cart.

    Uses the store's current value. A lesson missing from the store (for
    example hidden by a search) falls back to its lowest cart snapshot
    minus the one unit that snapshot was taken before.
    """
    updates: Dict[str, int] = {}
    for lesson_id in Counter(item.id for item in state.cart):
        current = state.find_lesson(lesson_id)
        if current is not None:
            updates[lesson_id] = current.space
        else:
            lowest = min(item.space for item in state.cart if item.id == lesson_id)
            updates[lesson_id] = max(0, lowest - 1)
    return updates
