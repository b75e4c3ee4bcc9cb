#!/usr/bin/env python3
"""
Near-meal detection.

A meal slot is "near" when the current time of day falls in
[start - window, start + window). Comparison is on wall-clock time of day only;
windows do not wrap across midnight.
"""

from datetime import time, timedelta
from typing import Optional, Sequence

from .models import MealSlot

DEFAULT_WINDOW = timedelta(hours=1)


def _minutes(value: time) -> float:
    return value.hour * 60 + value.minute + value.second / 60.0


def is_near(start: time, now: time, window: timedelta = DEFAULT_WINDOW) -> bool:
    window_minutes = window.total_seconds() / 60.0
    start_minutes = _minutes(start)
    return start_minutes - window_minutes <= _minutes(now) < start_minutes + window_minutes


def find_near_meal_index(slots: Sequence[MealSlot], now: time,
                         window: timedelta = DEFAULT_WINDOW) -> Optional[int]:
    """Return the index of the first slot whose window contains now, or None."""
    for index, slot in enumerate(slots):
        if is_near(slot.start, now, window):
            return index
    return None


def find_near_meal(slots: Sequence[MealSlot], now: time,
                   window: timedelta = DEFAULT_WINDOW) -> Optional[MealSlot]:
    index = find_near_meal_index(slots, now, window)
    return None if index is None else slots[index]
