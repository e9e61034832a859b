"""
Result<T> pattern for API calls.

Every call to the lessons backend returns a Result instead of raising,
so callers decide whether a failure is logged, shown to the user, or
silently ignored.
"""

from dataclasses import dataclass
from typing import Optional, Generic, TypeVar, Callable, Iterable, List
from enum import Enum


T = TypeVar('T')
U = TypeVar('U')


class ResultStatus(Enum):
    """Status of a Result."""
    SUCCESS = "success"
    FAILURE = "failure"


@dataclass
class Result(Generic[T]):
    """
    Outcome of an operation that may fail.

    Attributes:
        status: SUCCESS or FAILURE
        value: Payload on success (None on failure)
        error: Exception that caused the failure, if any
        message: Human-readable description

    Examples:
        >>> result = api.get_lessons()
        >>> if result.is_success:
        ...     lessons = result.value
        ... else:
        ...     logger.error(result.message)
    """

    status: ResultStatus
    value: Optional[T] = None
    error: Optional[Exception] = None
    message: Optional[str] = None

    @property
    def is_success(self) -> bool:
        """Check if the result represents success."""
        return self.status == ResultStatus.SUCCESS

    @property
    def is_failure(self) -> bool:
        """Check if the result represents failure."""
        return self.status == ResultStatus.FAILURE

    @classmethod
    def success(cls, value: T, message: Optional[str] = None) -> 'Result[T]':
        """Create a successful result."""
        return cls(status=ResultStatus.SUCCESS, value=value, message=message)

    @classmethod
    def failure(
        cls,
        message: str,
        error: Optional[Exception] = None
    ) -> 'Result[T]':
        """Create a failure result."""
        return cls(status=ResultStatus.FAILURE, message=message, error=error)

    def map(self, func: Callable[[T], U]) -> 'Result[U]':
        """
        Apply ``func`` to the success value.

        Exceptions raised by ``func`` turn into a failure result. Used to
        decode JSON payloads into model objects.

        Examples:
            >>> Result.success([{"_id": "L1"}]).map(parse_lessons)
        """
        if self.is_failure:
            return Result.failure(self.message, self.error)

        try:
            return Result.success(func(self.value), self.message)
        except Exception as e:
            return Result.failure(f"Invalid response payload: {e}", e)

    @staticmethod
    def collect(results: Iterable['Result[T]']) -> 'Result[List[T]]':
        """
        Join several results into one.

        The joined result succeeds only when every input succeeded; the
        first failure (in input order) is returned otherwise.

        Examples:
            >>> joined = Result.collect([Result.success(1), Result.success(2)])
            >>> joined.value
            [1, 2]
        """
        values = []
        for result in results:
            if result.is_failure:
                return Result.failure(result.message, result.error)
            values.append(result.value)
        return Result.success(values)
