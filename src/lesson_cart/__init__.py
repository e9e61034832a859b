"""
Lesson cart client.

Browse lessons from the booking backend, keep a cart, and place orders.

Usage:
    >>> from lesson_cart import CartController, LessonsApiClient, ApiClientConfig
    >>>
    >>> api = LessonsApiClient(ApiClientConfig(base_url="http://localhost:3000"))
    >>> with api, CartController(api) as controller:
    ...     controller.load()
    ...     controller.add_to_cart(controller.state.lessons[0])
"""

from .api import ApiClientConfig, LessonsApi, LessonsApiClient, NetworkOrServerError
from .cart import CartIndexError
from .controller import CartController
from .models import CartState, Customer, Lesson, Order, Payment

__all__ = [
    "ApiClientConfig",
    "LessonsApi",
    "LessonsApiClient",
    "NetworkOrServerError",
    "CartIndexError",
    "CartController",
    "CartState",
    "Customer",
    "Lesson",
    "Order",
    "Payment",
]

__version__ = "0.1.0"
