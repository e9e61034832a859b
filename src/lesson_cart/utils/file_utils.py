"""
File operation utilities.

This module provides helpers for writing lesson exports and order
reports as JSON and CSV.
"""

import json
import logging
from pathlib import Path
from typing import Any, Dict, Iterable

import pandas as pd

from ..models.lesson import Lesson


logger = logging.getLogger(__name__)

LESSON_COLUMNS = ["_id", "topic", "location", "price", "space"]


def save_json(data: Dict[str, Any], filepath: Path) -> bool:
    """
    Save data to JSON file.

    Returns:
        True if save successful, False otherwise

    Examples:
        >>> save_json({"status": "success"}, Path("output/reports/order.json"))
        True
    """
    try:
        filepath.parent.mkdir(parents=True, exist_ok=True)

        with open(filepath, 'w', encoding='utf-8') as f:
            json.dump(data, f, ensure_ascii=False, indent=2)

        logger.debug(f"Saved JSON file: {filepath}")
        return True

    except (OSError, TypeError) as e:
        logger.error(f"Failed to save JSON file {filepath}: {e}", exc_info=True)
        return False


def lessons_to_dataframe(lessons: Iterable[Lesson]) -> pd.DataFrame:
    """
    Tabulate lessons for export.

    Core columns come first; extra backend fields follow.

    Examples:
        >>> df = lessons_to_dataframe(state.lessons)
        >>> list(df.columns)[:5]
        ['_id', 'topic', 'location', 'price', 'space']
    """
    rows = [lesson.to_dict() for lesson in lessons]
    df = pd.DataFrame(rows)
    if df.empty:
        return pd.DataFrame(columns=LESSON_COLUMNS)

    extra_columns = [c for c in df.columns if c not in LESSON_COLUMNS]
    return df[LESSON_COLUMNS + extra_columns]


def save_csv(df: pd.DataFrame, filepath: Path) -> bool:
    """
    Save DataFrame to CSV file.

    Returns:
        True if save successful, False otherwise
    """
    try:
        filepath.parent.mkdir(parents=True, exist_ok=True)

        df.to_csv(filepath, index=False, encoding='utf-8')

        logger.debug(f"Saved CSV file: {filepath}")
        return True

    except OSError as e:
        logger.error(f"Failed to save CSV file {filepath}: {e}", exc_info=True)
        return False
