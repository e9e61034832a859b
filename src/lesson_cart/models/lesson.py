"""
Lesson data models.

Lessons arrive from the backend as JSON objects keyed by ``_id``.
They are converted into immutable ``Lesson`` records so that state
snapshots can share them safely.
"""

from dataclasses import dataclass, field, replace
from typing import Any, Dict, List, Literal


SortField = Literal["topic", "location", "price", "space"]
SortDirection = Literal["asc", "desc"]

SORT_FIELDS = ("topic", "location", "price", "space")
SORT_DIRECTIONS = ("asc", "desc")

_KNOWN_KEYS = {"_id", "id", "topic", "location", "price", "space"}


@dataclass(frozen=True)
class Lesson:
    """
    A bookable lesson.

    Attributes:
        id: Backend identifier (``_id`` on the wire)
        topic: Subject name
        location: Where the lesson takes place
        price: Price per unit
        space: Remaining capacity, never negative
        extra: Any other fields the backend sent (image, icon, ...)
    """

    id: str
    topic: str = ""
    location: str = ""
    price: float = 0
    space: int = 0
    extra: Dict[str, Any] = field(default_factory=dict)

    def __post_init__(self):
        if self.space < 0:
            raise ValueError(f"space must not be negative, got {self.space}")

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'Lesson':
        """
        Build a lesson from a backend payload.

        Missing or null fields fall back to empty text and zero.

        Raises:
            ValueError: If the payload has no identifier
        """
        lesson_id = data.get("_id", data.get("id"))
        if lesson_id is None:
            raise ValueError(f"Lesson payload has no _id: {data!r}")

        return cls(
            id=str(lesson_id),
            topic=str(data.get("topic") or ""),
            location=str(data.get("location") or ""),
            price=data.get("price") or 0,
            space=int(data.get("space") or 0),
            extra={k: v for k, v in data.items() if k not in _KNOWN_KEYS},
        )

    def to_dict(self) -> Dict[str, Any]:
        """Convert back to the backend's JSON shape."""
        data = dict(self.extra)
        data.update({
            "_id": self.id,
            "topic": self.topic,
            "location": self.location,
            "price": self.price,
            "space": self.space,
        })
        return data

    def with_space(self, space: int) -> 'Lesson':
        """Return a copy with a different remaining capacity."""
        return replace(self, space=space)

    @property
    def is_available(self) -> bool:
        """Whether at least one place is left."""
        return self.space > 0


def parse_lessons(payload: Any) -> List[Lesson]:
    """
    Decode a ``GET /lessons`` or ``GET /search`` response body.

    Raises:
        ValueError: If the body is not a JSON array of lesson objects
    """
    if not isinstance(payload, list):
        raise ValueError(
            f"Expected a list of lessons, got {type(payload).__name__}"
        )
    return [Lesson.from_dict(item) for item in payload]
