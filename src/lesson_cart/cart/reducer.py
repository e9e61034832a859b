"""
Cart reducer.

Pure state transitions for the cart client. Each function takes a
``CartState`` snapshot and returns a new one; nothing here touches the
network. The lesson store's ``space`` counters and the cart contents are
always changed together.
"""

import logging
from collections import Counter
from dataclasses import replace
from typing import Iterable, Optional

from ..models.lesson import Lesson, SORT_DIRECTIONS, SORT_FIELDS
from ..models.order import Customer, Payment
from ..models.state import CartState


logger = logging.getLogger(__name__)


class CartIndexError(IndexError):
    """Raised when a cart position does not exist."""
    pass


def _replace_lesson(lessons: Iterable[Lesson], updated: Lesson) -> tuple:
    return tuple(updated if lesson.id == updated.id else lesson for lesson in lessons)


def add_to_cart(state: CartState, lesson: Lesson) -> CartState:
    """
    Put one unit of a lesson in the cart.

    The store's copy of the lesson is authoritative: the passed-in lesson
    may be a stale snapshot. When the store has no place left (or does not
    know the lesson) the state is returned unchanged.

    Examples:
        >>> state = add_to_cart(state, state.lessons[0])
        >>> len(state.cart)
        1
    """
    current = state.find_lesson(lesson.id)
    if current is None or not current.is_available:
        logger.debug(f"Lesson {lesson.id} not available, cart unchanged")
        return state

    return replace(
        state,
        lessons=_replace_lesson(state.lessons, current.with_space(current.space - 1)),
        cart=state.cart + (current,),
    )


def remove_from_cart(state: CartState, index: int) -> CartState:
    """
    Remove the cart entry at ``index`` and give its place back.

    Raises:
        CartIndexError: If ``index`` is outside ``0 <= index < len(cart)``
    """
    if not 0 <= index < len(state.cart):
        raise CartIndexError(
            f"Cart index {index} out of range (cart has {len(state.cart)} items)"
        )

    removed = state.cart[index]
    cart = state.cart[:index] + state.cart[index + 1:]

    lessons = state.lessons
    current = state.find_lesson(removed.id)
    if current is not None:
        lessons = _replace_lesson(lessons, current.with_space(current.space + 1))

    return replace(state, lessons=lessons, cart=cart)


def replace_lessons(state: CartState, lessons: Iterable[Lesson]) -> CartState:
    """
    Replace the lesson store wholesale.

    Places held by the cart have not been saved to the backend yet, so
    they are taken off the fresh ``space`` values again.
    """
    reserved = Counter(item.id for item in state.cart)
    fresh = tuple(
        lesson.with_space(max(0, lesson.space - reserved[lesson.id]))
        if reserved[lesson.id] else lesson
        for lesson in lessons
    )
    return replace(state, lessons=fresh)


def set_customer(
    state: CartState,
    name: Optional[str] = None,
    phone: Optional[str] = None
) -> CartState:
    """Update one or both customer fields."""
    customer = Customer(
        name=state.customer.name if name is None else name,
        phone=state.customer.phone if phone is None else phone,
    )
    return replace(state, customer=customer)


def set_payment(state: CartState, payment: Optional[Payment]) -> CartState:
    return replace(state, payment=payment)


def set_sort(state: CartState, sort_by: str, sort_dir: str = "asc") -> CartState:
    """
    Change how the lesson list is ordered.

    Raises:
        ValueError: If the field or direction is unknown
    """
    if sort_by not in SORT_FIELDS:
        raise ValueError(
            f"Invalid sort field: {sort_by} (must be one of: {', '.join(SORT_FIELDS)})"
        )
    if sort_dir not in SORT_DIRECTIONS:
        raise ValueError(f"Invalid sort direction: {sort_dir} (must be asc or desc)")
    return replace(state, sort_by=sort_by, sort_dir=sort_dir)


def toggle_cart(state: CartState) -> CartState:
    return replace(state, show_cart=not state.show_cart)


def set_search_query(state: CartState, query: str) -> CartState:
    return replace(state, search_query=query)


def begin_checkout(state: CartState) -> CartState:
    return replace(state, is_checking_out=True, confirmation="")


def complete_checkout(state: CartState, confirmation: str) -> CartState:
    """Clear the cart and every form field after a placed order."""
    return replace(
        state,
        cart=(),
        customer=Customer(),
        payment=None if state.payment is None else Payment(),
        confirmation=confirmation,
        is_checking_out=False,
    )


def fail_checkout(state: CartState, confirmation: str) -> CartState:
    """Report a failed order; the cart and form fields are kept."""
    return replace(state, confirmation=confirmation, is_checking_out=False)
