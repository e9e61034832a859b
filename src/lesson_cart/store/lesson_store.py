"""
Lesson store loading.

Fetches the lesson list or search results from the backend. Failures
are logged and swallowed: the caller keeps its current lessons.

Requests are numbered. When a slow response comes back after a newer
fetch or search was started, it is dropped so it cannot overwrite the
newer results.
"""

import logging
import threading
from typing import Callable, List, Optional

from ..api.interfaces import LessonsApi
from ..models.lesson import Lesson
from ..models.result import Result


logger = logging.getLogger(__name__)


class LessonStore:
    """
    Loads lessons for the controller.

    Examples:
        >>> store = LessonStore(api)
        >>> lessons = store.fetch_search_results("math")
        >>> if lessons is not None:
        ...     state = reducer.replace_lessons(state, lessons)
    """

    def __init__(self, api: LessonsApi):
        self.api = api
        self._lock = threading.Lock()
        self._generation = 0

    def _next_generation(self) -> int:
        with self._lock:
            self._generation += 1
            return self._generation

    def _is_current(self, generation: int) -> bool:
        with self._lock:
            return generation == self._generation

    def _load(
        self,
        fetch: Callable[[], Result[List[Lesson]]],
        description: str
    ) -> Optional[List[Lesson]]:
        generation = self._next_generation()
        result = fetch()

        if result.is_failure:
            logger.error(f"Fetch {description} error: {result.message}")
            return None

        if not self._is_current(generation):
            logger.info(f"Discarding stale response for {description}")
            return None

        logger.debug(f"Loaded {len(result.value)} lessons ({description})")
        return result.value

    def fetch_lessons(self) -> Optional[List[Lesson]]:
        """
        Load every lesson from ``GET /lessons``.

        Returns:
            The lessons, or None if the request failed or was superseded
        """
        return self._load(self.api.get_lessons, "lessons")

    def fetch_search_results(self, query: str) -> Optional[List[Lesson]]:
        """
        Load lessons matching ``query`` from ``GET /search``.

        A query that is blank after trimming loads the full list instead.

        Returns:
            The lessons, or None if the request failed or was superseded
        """
        query = query.strip()
        if not query:
            return self.fetch_lessons()

        return self._load(
            lambda: self.api.search_lessons(query),
            f"search results for {query!r}"
        )
