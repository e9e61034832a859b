"""Errors raised by the lessons backend client."""

from typing import Optional


class NetworkOrServerError(Exception):
    """
    Any failed call to the backend.

    Covers transport failures (DNS, refused connection, timeout) as well
    as non-2xx responses. ``status_code`` is None for transport failures.
    """

    def __init__(
        self,
        message: str,
        status_code: Optional[int] = None,
        url: Optional[str] = None
    ):
        super().__init__(message)
        self.status_code = status_code
        self.url = url
