#!/usr/bin/env python3
"""
Duplicate-post guard and the JSON file that remembers the last posted meal.
"""

import json
import logging
import os
from typing import Optional

from .errors import PersistenceError

logger = logging.getLogger(__name__)

STATE_KEY = 'lastMealPosted'
DEFAULT_STATE_FILE = 'last_meal.json'


def should_post(last_posted: Optional[str], candidate: str) -> bool:
    """A meal is announced only when it differs from the last one posted."""
    return candidate != last_posted


class JsonStateStore:
    """Single-record store: {"lastMealPosted": <meal label or null>}."""

    def __init__(self, path: str = DEFAULT_STATE_FILE):
        self.path = path

    def read_last_meal(self) -> Optional[str]:
        try:
            if os.path.exists(self.path):
                with open(self.path, 'r', encoding='utf-8') as f:
                    data = json.load(f)
                value = data.get(STATE_KEY) if isinstance(data, dict) else None
                if value is None or isinstance(value, str):
                    return value
                logger.warning(f"Ignoring non-string {STATE_KEY} in {self.path}: {value!r}")
                return None
        except (OSError, ValueError) as e:
            logger.warning(f"Error loading last meal state from {self.path}: {e}")

        self._initialize()
        return None

    def write_last_meal(self, meal_label: str) -> None:
        """
        Replace the stored record.

        Raises:
            PersistenceError: If the file cannot be written
        """
        try:
            with open(self.path, 'w', encoding='utf-8') as f:
                json.dump({STATE_KEY: meal_label}, f, indent=2)
        except OSError as e:
            raise PersistenceError(f"Could not write {self.path}: {e}") from e
        logger.debug(f"Saved {STATE_KEY}={meal_label!r} to {self.path}")

    def _initialize(self) -> None:
        try:
            with open(self.path, 'w', encoding='utf-8') as f:
                json.dump({STATE_KEY: None}, f, indent=2)
            logger.info(f"📁 Initialized meal state file {self.path}")
        except OSError as e:
            logger.warning(f"Error initializing meal state file {self.path}: {e}")
