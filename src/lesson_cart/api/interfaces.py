"""
Abstract interface for the lessons backend.

The controller and checkout orchestrator depend on this interface
rather than on the HTTP client, so tests can substitute a fake.
"""

from abc import ABC, abstractmethod
from typing import List

from ..models.lesson import Lesson
from ..models.order import Order
from ..models.result import Result


class LessonsApi(ABC):
    """
    Operations offered by the lessons backend.

    Implementations must not raise for remote failures; they return a
    failure Result whose ``error`` is a NetworkOrServerError.
    """

    @abstractmethod
    def get_lessons(self) -> Result[List[Lesson]]:
        """
        ``GET /lessons``.

        Returns:
            Result containing every lesson, in backend order
        """
        pass

    @abstractmethod
    def search_lessons(self, query: str) -> Result[List[Lesson]]:
        """
        ``GET /search?q=<query>``.

        Returns:
            Result containing the matching lessons
        """
        pass

    @abstractmethod
    def create_order(self, order: Order) -> Result[None]:
        """
        ``POST /orders``. The created order in the response is ignored.
        """
        pass

    @abstractmethod
    def update_lesson_space(self, lesson_id: str, space: int) -> Result[None]:
        """
        ``PUT /lessons/<lesson_id>`` with body ``{"space": space}``.
        """
        pass

    def close(self):
        """Release network resources. Must not raise."""
        pass

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()
        return False
