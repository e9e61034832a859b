"""
Unit tests for report file helpers.
"""

import json

import pandas as pd

from lesson_cart.models.lesson import Lesson
from lesson_cart.utils.file_utils import (
    LESSON_COLUMNS,
    lessons_to_dataframe,
    save_csv,
    save_json,
)


class TestJson:

    def test_save_json_creates_directories(self, tmp_path):
        path = tmp_path / "reports" / "order.json"

        assert save_json({"status": "success", "items": [1, 2]}, path)
        assert json.loads(path.read_text(encoding="utf-8")) == {"status": "success", "items": [1, 2]}

    def test_save_json_unserializable(self, tmp_path):
        assert not save_json({"when": object()}, tmp_path / "bad.json")


class TestCsv:

    def test_lessons_to_dataframe_column_order(self):
        lessons = [
            Lesson(id="L1", topic="Math", location="Hendon", price=20, space=4,
                   extra={"image": "math.png"}),
        ]

        df = lessons_to_dataframe(lessons)

        assert list(df.columns) == LESSON_COLUMNS + ["image"]
        assert df.iloc[0]["topic"] == "Math"

    def test_empty_lessons(self):
        df = lessons_to_dataframe([])

        assert df.empty
        assert list(df.columns) == LESSON_COLUMNS

    def test_save_csv(self, tmp_path, lessons):
        path = tmp_path / "exports" / "lessons.csv"

        assert save_csv(lessons_to_dataframe(lessons), path)

        loaded = pd.read_csv(path)
        assert list(loaded["_id"]) == ["L1", "L2", "L3"]
        assert list(loaded["space"]) == [4, 1, 0]
