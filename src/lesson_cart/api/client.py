"""
HTTP client for the lessons backend.

This module provides LessonsApiClient, a ``requests`` based
implementation of the LessonsApi interface with:
- Result<T> return values instead of exceptions
- One error type (NetworkOrServerError) for every remote failure
- A circuit breaker that fails fast while the backend is down
"""

import logging
from datetime import timedelta
from typing import Any, List, Optional

import requests

from .client_config import ApiClientConfig
from .errors import NetworkOrServerError
from .interfaces import LessonsApi
from ..models.lesson import Lesson, parse_lessons
from ..models.order import Order
from ..models.result import Result
from ..resilience.circuit_breaker import CircuitBreaker, CircuitBreakerOpenError


logger = logging.getLogger(__name__)


class LessonsApiClient(LessonsApi):
    """
    Client for the lessons REST API.

    Examples:
        >>> config = ApiClientConfig(base_url="https://shopping-backend-express.onrender.com")
        >>> with LessonsApiClient(config) as api:
        ...     result = api.get_lessons()
        ...     if result.is_success:
        ...         print(f"{len(result.value)} lessons")
    """

    def __init__(
        self,
        config: Optional[ApiClientConfig] = None,
        session: Optional[requests.Session] = None,
        circuit_breaker: Optional[CircuitBreaker] = None
    ):
        """
        Initialize LessonsApiClient.

        Args:
            config: Client configuration (defaults to ApiClientConfig())
            session: requests session to use (one is created if omitted)
            circuit_breaker: Breaker shared by all calls (one is created if omitted)
        """
        self.config = config or ApiClientConfig()
        self.base_url = self.config.base_url

        self._owns_session = session is None
        self.session = session or requests.Session()
        self.session.headers.update({"Accept": "application/json"})
        if self.config.user_agent:
            self.session.headers["User-Agent"] = self.config.user_agent

        self.circuit_breaker = circuit_breaker or CircuitBreaker(
            failure_threshold=self.config.failure_threshold,
            timeout=timedelta(seconds=self.config.circuit_timeout),
            expected_exception=NetworkOrServerError
        )

        logger.info(f"LessonsApiClient initialized with base_url: {self.base_url}")

    def _send(self, method: str, url: str, **kwargs) -> requests.Response:
        """Perform one HTTP request, raising NetworkOrServerError on any failure."""
        try:
            response = self.session.request(
                method, url, timeout=self.config.timeout, **kwargs
            )
        except requests.RequestException as e:
            raise NetworkOrServerError(f"{method} {url} failed: {e}", url=url) from e

        if not 200 <= response.status_code < 300:
            raise NetworkOrServerError(
                f"{method} {url} returned HTTP {response.status_code}",
                status_code=response.status_code,
                url=url
            )

        return response

    def _request(self, method: str, path: str, **kwargs) -> Result[requests.Response]:
        url = f"{self.base_url}{path}"
        logger.debug(f"{method} {url}")

        try:
            response = self.circuit_breaker.call(self._send, method, url, **kwargs)
        except CircuitBreakerOpenError as e:
            logger.warning(f"Skipping {method} {url}: {e}")
            return Result.failure(
                f"Backend unavailable: {e}",
                NetworkOrServerError(str(e), url=url)
            )
        except NetworkOrServerError as e:
            logger.error(f"Request failed: {e}")
            return Result.failure(str(e), e)

        return Result.success(response, f"{method} {url} -> {response.status_code}")

    def _get_json(self, path: str, **kwargs) -> Result[Any]:
        result = self._request("GET", path, **kwargs)
        if result.is_failure:
            return result

        try:
            return Result.success(result.value.json())
        except ValueError as e:
            logger.error(f"Invalid JSON from GET {path}: {e}")
            return Result.failure(
                f"GET {path} returned invalid JSON",
                NetworkOrServerError(str(e), status_code=result.value.status_code)
            )

    def get_lessons(self) -> Result[List[Lesson]]:
        return self._get_json("/lessons").map(parse_lessons)

    def search_lessons(self, query: str) -> Result[List[Lesson]]:
        return self._get_json("/search", params={"q": query}).map(parse_lessons)

    def create_order(self, order: Order) -> Result[None]:
        result = self._request("POST", "/orders", json=order.to_dict())
        if result.is_failure:
            return Result.failure(result.message, result.error)
        logger.info(f"Order created with {len(order.items)} items")
        return Result.success(None, "Order created")

    def update_lesson_space(self, lesson_id: str, space: int) -> Result[None]:
        result = self._request("PUT", f"/lessons/{lesson_id}", json={"space": space})
        if result.is_failure:
            return Result.failure(result.message, result.error)
        logger.debug(f"Lesson {lesson_id} space saved: {space}")
        return Result.success(None, f"Lesson {lesson_id} updated")

    def close(self):
        """Close the underlying session if this client created it."""
        if self._owns_session:
            try:
                self.session.close()
            except Exception as e:
                logger.warning(f"Error closing HTTP session: {e}")
