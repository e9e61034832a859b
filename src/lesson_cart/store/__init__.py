from .lesson_store import LessonStore

__all__ = ["LessonStore"]
