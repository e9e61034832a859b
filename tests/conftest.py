"""
Shared fixtures: sample lessons and an in-memory backend.
"""

import threading
from typing import Dict, List, Optional, Set

import pytest

from lesson_cart.api.errors import NetworkOrServerError
from lesson_cart.api.interfaces import LessonsApi
from lesson_cart.models.lesson import Lesson
from lesson_cart.models.result import Result
from lesson_cart.models.state import CartState


class FakeLessonsApi(LessonsApi):
    """
    In-memory LessonsApi that records every call.

    Attributes:
        lessons: Returned by get_lessons()
        search_results: query -> lessons returned by search_lessons()
        fail_lessons: Make get_lessons() fail
        fail_search: Make search_lessons() fail
        fail_order: Make create_order() fail
        fail_updates: Lesson ids whose space update fails
        order_gate: If set, create_order() waits for it before answering
    """

    def __init__(self, lessons: List[Lesson]):
        self.lessons = list(lessons)
        self.search_results: Dict[str, List[Lesson]] = {}
        self.fail_lessons = False
        self.fail_search = False
        self.fail_order = False
        self.fail_updates: Set[str] = set()
        self.order_gate: Optional[threading.Event] = None
        self.order_started = threading.Event()
        self.calls: List[tuple] = []
        self.closed = False
        self._lock = threading.Lock()

    def _record(self, *call):
        with self._lock:
            self.calls.append(call)

    def calls_to(self, name: str) -> List[tuple]:
        return [call for call in self.calls if call[0] == name]

    def get_lessons(self):
        self._record("get_lessons")
        if self.fail_lessons:
            return Result.failure("GET /lessons returned HTTP 500", NetworkOrServerError("boom", 500))
        return Result.success(list(self.lessons))

    def search_lessons(self, query):
        self._record("search_lessons", query)
        if self.fail_search:
            return Result.failure("GET /search returned HTTP 500", NetworkOrServerError("boom", 500))
        return Result.success(list(self.search_results.get(query, [])))

    def create_order(self, order):
        self._record("create_order", order.to_dict())
        self.order_started.set()
        if self.order_gate is not None:
            self.order_gate.wait(timeout=5)
        if self.fail_order:
            return Result.failure("POST /orders returned HTTP 500", NetworkOrServerError("boom", 500))
        return Result.success(None)

    def update_lesson_space(self, lesson_id, space):
        self._record("update_lesson_space", lesson_id, space)
        if lesson_id in self.fail_updates:
            return Result.failure(
                f"PUT /lessons/{lesson_id} returned HTTP 404",
                NetworkOrServerError("missing", 404)
            )
        return Result.success(None)

    def close(self):
        self.closed = True


@pytest.fixture
def lessons():
    """Three lessons, the last one fully booked."""
    return [
        Lesson(id="L1", topic="Math", location="Hendon", price=20, space=4),
        Lesson(id="L2", topic="Art", location="Colindale", price=35, space=1),
        Lesson(id="L3", topic="Music", location="Brent", price=10, space=0),
    ]


@pytest.fixture
def state(lessons):
    """State with the sample lessons loaded and an empty cart."""
    return CartState(lessons=tuple(lessons))


@pytest.fixture
def fake_api(lessons):
    return FakeLessonsApi(lessons)


class ManualTimer:
    """Timer that only fires when the test says so."""

    def __init__(self, delay, callback):
        self.delay = delay
        self.callback = callback
        self.started = False
        self.cancelled = False

    def start(self):
        self.started = True

    def cancel(self):
        self.cancelled = True

    def fire(self):
        self.callback()


class ManualTimerFactory:
    """Debouncer timer factory that keeps every timer it creates."""

    def __init__(self):
        self.timers: List[ManualTimer] = []

    def __call__(self, delay, callback):
        timer = ManualTimer(delay, callback)
        self.timers.append(timer)
        return timer

    @property
    def last(self) -> ManualTimer:
        return self.timers[-1]


@pytest.fixture
def timers():
    return ManualTimerFactory()
