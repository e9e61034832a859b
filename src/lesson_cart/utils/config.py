"""
Configuration management with environment variables.

This module provides centralized configuration for the lesson cart
client, loaded from the environment (and a ``.env`` file if present).
"""

import os
from pathlib import Path
from urllib.parse import urlparse
from dotenv import load_dotenv


DEFAULT_API_BASE_URL = "https://shopping-backend-express.onrender.com"


class SecureString:
    """
    Wrapper for sensitive strings that prevents accidental exposure.

    Used for card numbers and CVC codes, which must never be printed
    or logged.

    Examples:
        >>> cvc = SecureString("123")
        >>> str(cvc)  # Returns "********"
        >>> cvc.get_value()  # Returns actual value
    """

    def __init__(self, value: str):
        self._value = value

    def get_value(self) -> str:
        """
        Get the actual value (use with caution).

        Warning:
            This exposes the sensitive value. Never log the result.
        """
        return self._value

    def __str__(self) -> str:
        return "********"

    def __repr__(self) -> str:
        return "SecureString(********)"

    def __eq__(self, other) -> bool:
        if isinstance(other, SecureString):
            return self._value == other._value
        return False

    def __hash__(self) -> int:
        return hash(self._value)


def _parse_bool(value: str) -> bool:
    return value.strip().lower() in ("1", "true", "yes", "on")


class Config:
    """
    Application configuration manager.

    Attributes:
        api_base_url: Base URL of the lessons backend
        request_timeout: HTTP timeout in seconds
        search_debounce_ms: Delay between the last keystroke and the search request
        update_workers: Threads used to save lesson spaces after an order
        require_payment: Whether checkout needs valid (mock) payment details
        output_dir: Directory for reports and log files
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)

    Examples:
        >>> config = Config()
        >>> if config.validate():
        ...     print(f"Backend: {config.api_base_url}")
    """

    @staticmethod
    def _validate_url(url: str, name: str) -> str:
        """
        Validate URL format and scheme.

        Raises:
            ValueError: If URL is invalid
        """
        parsed = urlparse(url)

        if not parsed.scheme:
            raise ValueError(f"{name} must include URL scheme (http/https)")

        if parsed.scheme not in ['http', 'https']:
            raise ValueError(f"{name} must use http or https scheme, got: {parsed.scheme}")

        if not parsed.netloc:
            raise ValueError(f"{name} must have a valid domain")

        return url.rstrip('/')

    def __init__(self):
        """Initialize configuration by loading environment variables."""
        load_dotenv()

        url = os.getenv("CART_API_BASE_URL", DEFAULT_API_BASE_URL)
        self._api_base_url = self._validate_url(url, "CART_API_BASE_URL")

        self._request_timeout = float(os.getenv("CART_REQUEST_TIMEOUT", "10"))
        self._search_debounce_ms = int(os.getenv("CART_SEARCH_DEBOUNCE_MS", "300"))
        self._update_workers = int(os.getenv("CART_UPDATE_WORKERS", "4"))
        self._require_payment = _parse_bool(os.getenv("CART_REQUIRE_PAYMENT", "false"))

        self._output_dir = Path(os.getenv("OUTPUT_DIR", "output"))
        self._log_level = os.getenv("LOG_LEVEL", "INFO").upper()

    @property
    def api_base_url(self) -> str:
        return self._api_base_url

    @property
    def request_timeout(self) -> float:
        return self._request_timeout

    @property
    def search_debounce_ms(self) -> int:
        return self._search_debounce_ms

    @property
    def search_debounce_seconds(self) -> float:
        """Debounce delay converted for ``threading.Timer``."""
        return self._search_debounce_ms / 1000.0

    @property
    def update_workers(self) -> int:
        return self._update_workers

    @property
    def require_payment(self) -> bool:
        return self._require_payment

    @property
    def output_dir(self) -> Path:
        return self._output_dir

    @property
    def log_level(self) -> str:
        return self._log_level

    def validate(self) -> bool:
        """
        Validate configuration values.

        Returns:
            True if all configuration is valid

        Raises:
            ValueError: If validation fails (lists every problem found)
        """
        errors = []

        if self._request_timeout <= 0:
            errors.append("CART_REQUEST_TIMEOUT must be positive")

        if self._search_debounce_ms < 0:
            errors.append("CART_SEARCH_DEBOUNCE_MS must not be negative")

        if self._update_workers <= 0:
            errors.append("CART_UPDATE_WORKERS must be positive")

        valid_levels = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
        if self._log_level not in valid_levels:
            errors.append(
                f"LOG_LEVEL must be one of: {', '.join(valid_levels)}"
            )

        if errors:
            error_msg = "Configuration validation failed:\n  - " + "\n  - ".join(errors)
            raise ValueError(error_msg)

        return True


# Singleton instance
config = Config()
