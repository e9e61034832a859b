"""
Cart/checkout controller.

Owns the current CartState and is the only place that replaces it.
Views call the controller's operations and receive each new snapshot
through subscribed listeners.
"""

import logging
import threading
from typing import Callable, List, Optional, Union

from .api.interfaces import LessonsApi
from .cart import reducer
from .checkout.orchestrator import CheckoutOrchestrator
from .models.lesson import Lesson
from .models.order import CheckoutOutcome, Payment
from .models.state import CartState
from .search.debouncer import DEFAULT_DELAY, Debouncer, TimerFactory
from .store.lesson_store import LessonStore


logger = logging.getLogger(__name__)

Listener = Callable[[CartState], None]


class CartController:
    """
    Single entry point for the cart client.

    Examples:
        >>> with CartController(api) as controller:
        ...     controller.subscribe(render)
        ...     controller.load()
        ...     controller.add_to_cart("L1")
        ...     controller.update_customer(name="Ann Lee", phone="5551234")
        ...     outcome = controller.checkout()
    """

    def __init__(
        self,
        api: LessonsApi,
        require_payment: bool = False,
        debounce_delay: float = DEFAULT_DELAY,
        max_workers: int = 4,
        timer_factory: Optional[TimerFactory] = None,
        initial_state: Optional[CartState] = None
    ):
        """
        Initialize CartController.

        Args:
            api: Lessons backend
            require_payment: Whether checkout needs valid mock payment details
            debounce_delay: Search debounce delay in seconds
            max_workers: Concurrent space updates after an order
            timer_factory: Timer used by the search debouncer (tests inject a fake)
            initial_state: Starting snapshot (an empty state by default)
        """
        self.api = api
        self.store = LessonStore(api)
        self.orchestrator = CheckoutOrchestrator(
            api, require_payment=require_payment, max_workers=max_workers
        )

        debouncer_kwargs = {"delay": debounce_delay}
        if timer_factory is not None:
            debouncer_kwargs["timer_factory"] = timer_factory
        self.debouncer = Debouncer(self.run_search, **debouncer_kwargs)

        self._state = initial_state or CartState()
        self._lock = threading.RLock()
        self._listeners: List[Listener] = []

    @property
    def state(self) -> CartState:
        """Current snapshot."""
        return self._state

    @property
    def require_payment(self) -> bool:
        return self.orchestrator.require_payment

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """
        Register a view callback.

        Returns:
            A function that removes the listener again
        """
        with self._lock:
            self._listeners.append(listener)

        def unsubscribe():
            with self._lock:
                if listener in self._listeners:
                    self._listeners.remove(listener)

        return unsubscribe

    def _update(self, transition: Callable[..., CartState], *args, **kwargs) -> CartState:
        with self._lock:
            new_state = transition(self._state, *args, **kwargs)
            changed = new_state is not self._state
            self._state = new_state
            listeners = list(self._listeners)

        if changed:
            for listener in listeners:
                try:
                    listener(new_state)
                except Exception as e:
                    logger.error(f"State listener failed: {e}", exc_info=True)

        return new_state

    # Lesson store

    def load(self) -> Optional[CartState]:
        """Load the initial lesson list."""
        return self.fetch_lessons()

    def fetch_lessons(self) -> Optional[CartState]:
        """
        Replace the store from ``GET /lessons``.

        Returns:
            The new state, or None if the request failed or was superseded
            (the current state is kept)
        """
        lessons = self.store.fetch_lessons()
        if lessons is None:
            return None
        return self._update(reducer.replace_lessons, lessons)

    def fetch_search_results(self, query: str) -> Optional[CartState]:
        """Like fetch_lessons(), for ``GET /search``."""
        lessons = self.store.fetch_search_results(query)
        if lessons is None:
            return None
        return self._update(reducer.replace_lessons, lessons)

    def run_search(self, query: str):
        """Debouncer target: search, or reload everything for a blank query."""
        self.fetch_search_results(query)

    def on_search_input(self, text: str) -> CartState:
        """Handle a keystroke in the search box."""
        state = self._update(reducer.set_search_query, text)
        self.debouncer.submit(text)
        return state

    # Cart

    def add_to_cart(self, lesson: Union[Lesson, str]) -> CartState:
        """
        Add one unit of a lesson.

        Args:
            lesson: The lesson, or its id
        """
        if isinstance(lesson, str):
            found = self._state.find_lesson(lesson)
            if found is None:
                logger.debug(f"Unknown lesson id: {lesson}")
                return self._state
            lesson = found
        return self._update(reducer.add_to_cart, lesson)

    def remove_from_cart(self, index: int) -> CartState:
        """
        Raises:
            CartIndexError: If there is no cart entry at ``index``
        """
        return self._update(reducer.remove_from_cart, index)

    def update_customer(self, name: Optional[str] = None, phone: Optional[str] = None) -> CartState:
        return self._update(reducer.set_customer, name=name, phone=phone)

    def update_payment(self, card_number: str, expiry: str, cvc: str) -> CartState:
        return self._update(
            reducer.set_payment, Payment.from_plain(card_number, expiry, cvc)
        )

    def set_sort(self, sort_by: str, sort_dir: str = "asc") -> CartState:
        return self._update(reducer.set_sort, sort_by, sort_dir)

    def toggle_cart(self) -> CartState:
        return self._update(reducer.toggle_cart)

    # Checkout

    def checkout(self) -> Optional[CheckoutOutcome]:
        """
        Submit the current cart.

        Returns:
            The outcome, or None if nothing was submitted
        """
        outcome = self.orchestrator.checkout(
            self._state,
            on_submit=lambda: self._update(reducer.begin_checkout)
        )
        if outcome is None:
            return None

        if outcome.is_success:
            self._update(reducer.complete_checkout, outcome.confirmation)
        else:
            self._update(reducer.fail_checkout, outcome.confirmation)
        return outcome

    # Lifetime

    def close(self):
        """Cancel any pending search. The api is owned by the caller."""
        self.debouncer.close()

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()
        return False
