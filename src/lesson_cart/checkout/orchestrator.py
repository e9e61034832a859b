"""
Checkout orchestration.

Sequences order submission and the follow-up space updates:

    IDLE -> SUBMITTING -> (SUCCESS | FAILED) -> IDLE

Only one checkout runs at a time; a call made while another is
submitting returns immediately without touching the backend.
"""

import logging
import threading
from concurrent.futures import ThreadPoolExecutor
from typing import Callable, Dict, Optional

from ..api.interfaces import LessonsApi
from ..cart.derived import can_checkout, space_updates
from ..models.order import CheckoutOutcome, CheckoutStatus, Order
from ..models.result import Result
from ..models.state import CartState


logger = logging.getLogger(__name__)

SUCCESS_MESSAGE = "Your order has been placed!"
ORDER_FAILED_REASON = "Failed to create order"
SPACE_UPDATE_FAILED_REASON = "Failed to update lesson spaces"


def failure_message(reason: str) -> str:
    """Confirmation text shown when checkout fails."""
    return f"Checkout failed: {reason}. Please refresh and try again."


class CheckoutOrchestrator:
    """
    Submits orders for a cart state snapshot.

    Examples:
        >>> orchestrator = CheckoutOrchestrator(api)
        >>> outcome = orchestrator.checkout(state)
        >>> if outcome is None:
        ...     pass  # invalid form, empty cart, or already submitting
        >>> elif outcome.is_success:
        ...     state = reducer.complete_checkout(state, outcome.confirmation)
    """

    def __init__(
        self,
        api: LessonsApi,
        require_payment: bool = False,
        max_workers: int = 4
    ):
        """
        Initialize CheckoutOrchestrator.

        Args:
            api: Backend used for the order and the space updates
            require_payment: Whether valid mock payment details are needed
            max_workers: Upper bound on concurrent space updates
        """
        if max_workers <= 0:
            raise ValueError(f"max_workers must be positive, got: {max_workers}")

        self.api = api
        self.require_payment = require_payment
        self.max_workers = max_workers
        self._busy = threading.Lock()
        self._status = CheckoutStatus.IDLE

    @property
    def status(self) -> CheckoutStatus:
        return self._status

    def checkout(
        self,
        state: CartState,
        on_submit: Optional[Callable[[], None]] = None
    ) -> Optional[CheckoutOutcome]:
        """
        Place an order for the cart in ``state``.

        Args:
            state: Snapshot whose cart, customer and payment are submitted
            on_submit: Called once validation passed, right before the order is posted

        Returns:
            The outcome, or None when nothing was submitted (busy or invalid)
        """
        if not self._busy.acquire(blocking=False):
            logger.info("Checkout already in progress, ignoring request")
            return None

        try:
            self._status = CheckoutStatus.SUBMITTING

            if not can_checkout(state, self.require_payment):
                logger.info("Checkout blocked: cart empty or form invalid")
                return None

            if on_submit is not None:
                on_submit()

            return self._submit(state)

        finally:
            self._status = CheckoutStatus.IDLE
            self._busy.release()

    def _submit(self, state: CartState) -> CheckoutOutcome:
        order = Order.from_cart(state.customer, state.cart)
        logger.info(f"Submitting order with {len(order.items)} items")

        order_result = self.api.create_order(order)
        if order_result.is_failure:
            return self._failed(order, ORDER_FAILED_REASON, order_result)

        updates = space_updates(state)
        update_result = self._save_spaces(updates)
        if update_result.is_failure:
            # The order exists; spaces already saved are left as they are
            return self._failed(order, SPACE_UPDATE_FAILED_REASON, update_result, updates)

        logger.info(f"Order placed, saved space for {len(updates)} lessons")
        return CheckoutOutcome(
            status=CheckoutStatus.SUCCESS,
            order=order,
            confirmation=SUCCESS_MESSAGE,
            updated_spaces=updates,
        )

    def _save_spaces(self, updates: Dict[str, int]) -> Result[list]:
        """Send every space update concurrently and wait for all of them."""
        if not updates:
            return Result.success([])

        workers = min(self.max_workers, len(updates))
        try:
            with ThreadPoolExecutor(max_workers=workers, thread_name_prefix="space-update") as pool:
                results = list(pool.map(
                    lambda item: self.api.update_lesson_space(*item),
                    updates.items()
                ))
        except Exception as e:
            logger.error(f"Unexpected error while saving spaces: {e}", exc_info=True)
            return Result.failure(str(e), e)

        return Result.collect(results)

    def _failed(
        self,
        order: Order,
        reason: str,
        result: Result,
        updates: Optional[Dict[str, int]] = None
    ) -> CheckoutOutcome:
        logger.error(f"Checkout error: {reason}: {result.message}")
        return CheckoutOutcome(
            status=CheckoutStatus.FAILED,
            order=order,
            confirmation=failure_message(reason),
            updated_spaces=updates or {},
            error_message=result.message,
        )
