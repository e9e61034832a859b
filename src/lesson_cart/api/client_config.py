"""
API client configuration dataclass.

Groups the HTTP settings of the lessons backend client so they can be
built from the environment or from presets in tests.
"""

from dataclasses import dataclass
from typing import Optional
from urllib.parse import urlparse

from ..utils.config import Config, DEFAULT_API_BASE_URL


@dataclass
class ApiClientConfig:
    """
    Configuration for LessonsApiClient.

    Attributes:
        base_url: Backend root URL, without trailing slash
        timeout: Timeout for each HTTP request in seconds
        failure_threshold: Consecutive failures before the circuit opens
        circuit_timeout: Seconds the circuit stays open before a trial call
        user_agent: Custom User-Agent header

    Examples:
        >>> config = ApiClientConfig(base_url="http://localhost:3000", timeout=5)
        >>> config = ApiClientConfig.for_testing()
    """

    base_url: str = DEFAULT_API_BASE_URL
    timeout: float = 10
    failure_threshold: int = 5
    circuit_timeout: float = 30
    user_agent: Optional[str] = None

    def __post_init__(self):
        """Validate configuration after initialization."""
        parsed = urlparse(self.base_url)
        if parsed.scheme not in ("http", "https") or not parsed.netloc:
            raise ValueError(
                f"base_url must be an http(s) URL, got: {self.base_url}"
            )
        self.base_url = self.base_url.rstrip("/")

        if self.timeout <= 0:
            raise ValueError(f"timeout must be positive, got: {self.timeout}")

        if self.failure_threshold <= 0:
            raise ValueError(
                f"failure_threshold must be positive, got: {self.failure_threshold}"
            )

        if self.circuit_timeout < 0:
            raise ValueError(
                f"circuit_timeout must not be negative, got: {self.circuit_timeout}"
            )

    @classmethod
    def for_testing(cls) -> 'ApiClientConfig':
        """Local backend, short timeouts."""
        return cls(
            base_url="http://localhost:3000",
            timeout=2,
            failure_threshold=3,
            circuit_timeout=1,
        )

    @classmethod
    def from_config(cls, config: Config, base_url: Optional[str] = None) -> 'ApiClientConfig':
        """
        Build from the application configuration.

        Args:
            config: Loaded application configuration
            base_url: Overrides ``config.api_base_url`` (e.g. from the CLI)
        """
        return cls(
            base_url=base_url or config.api_base_url,
            timeout=config.request_timeout,
        )
