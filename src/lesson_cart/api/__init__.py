"""
Lessons backend client.

Usage:
    >>> from lesson_cart.api import LessonsApiClient, ApiClientConfig
    >>> api = LessonsApiClient(ApiClientConfig(base_url="http://localhost:3000"))
    >>> result = api.get_lessons()
    >>> lessons = result.value if result.is_success else []
"""

from .client import LessonsApiClient
from .client_config import ApiClientConfig
from .errors import NetworkOrServerError
from .interfaces import LessonsApi

__all__ = [
    "LessonsApiClient",
    "ApiClientConfig",
    "NetworkOrServerError",
    "LessonsApi",
]
