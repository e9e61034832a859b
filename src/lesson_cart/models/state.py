"""
Cart state snapshot.

The whole client state lives in a single frozen dataclass. Reducers in
``lesson_cart.cart.reducer`` return new snapshots instead of mutating
this one, and views only ever read snapshots.
"""

from dataclasses import dataclass, field
from typing import Optional, Tuple

from .lesson import Lesson, SortDirection, SortField
from .order import Customer, Payment


@dataclass(frozen=True)
class CartState:
    """
    Immutable snapshot of the cart client.

    Attributes:
        lessons: Lesson store, in backend order
        cart: Lesson snapshots taken when each unit was added
        customer: Customer details
        payment: Mock payment details (None until entered)
        confirmation: Last message shown after checkout
        sort_by: Field used to sort the lesson list
        sort_dir: "asc" or "desc"
        show_cart: Whether the cart view is displayed
        search_query: Current text of the search box
        is_checking_out: True while an order is being submitted
    """

    lessons: Tuple[Lesson, ...] = ()
    cart: Tuple[Lesson, ...] = ()
    customer: Customer = field(default_factory=Customer)
    payment: Optional[Payment] = None
    confirmation: str = ""
    sort_by: SortField = "topic"
    sort_dir: SortDirection = "asc"
    show_cart: bool = False
    search_query: str = ""
    is_checking_out: bool = False

    def find_lesson(self, lesson_id: str) -> Optional[Lesson]:
        """Look up a lesson in the store by id."""
        for lesson in self.lessons:
            if lesson.id == lesson_id:
                return lesson
        return None
