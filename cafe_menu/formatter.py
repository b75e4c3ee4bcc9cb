#!/usr/bin/env python3
"""
Turns classified menu items into the text of a tweet thread: one header post
followed by one post per station.
"""

from datetime import date
from types import MappingProxyType
from typing import List, Mapping, Optional, Sequence, Tuple

from .classifier import ClassifiedItem

STATION_EMOJIS = MappingProxyType({
    'breakfast': '🍳',
    'grill': '🍔',
    'pizza': '🍕',
    'pasta': '🍝',
    'deli': '🥪',
    'salad bar': '🥗',
    'salad': '🥗',
    'soup': '🍲',
    'soups': '🍲',
    'homestyle': '🍗',
    'comfort': '🍗',
    'global': '🌏',
    'international': '🌏',
    'wok': '🥡',
    'stir fry': '🥡',
    'sushi': '🍣',
    'taqueria': '🌮',
    'vegan': '🌱',
    'bakery': '🥐',
    'dessert': '🍰',
    'desserts': '🍰',
})

DEFAULT_CELEBRATION_PHRASE = 'Chicken Tenders'
DEFAULT_CELEBRATION_SUFFIX = '🎉 Chicken Tenders! 🎉'


def format_menu_date(day: date) -> str:
    """e.g. 'Monday, October 19'"""
    return f"{day:%A, %B} {day.day}"


class MenuFormatter:
    def __init__(self, station_emojis: Mapping[str, str] = STATION_EMOJIS,
                 celebration_phrase: Optional[str] = DEFAULT_CELEBRATION_PHRASE,
                 celebration_suffix: str = DEFAULT_CELEBRATION_SUFFIX):
        self.station_emojis = MappingProxyType({k.lower(): v for k, v in station_emojis.items()})
        self.celebration_phrase = celebration_phrase
        self.celebration_suffix = celebration_suffix

    def format_item(self, item: ClassifiedItem) -> str:
        if item.notices:
            return f"{item.label} ({' '.join(item.notices)})"
        return item.label

    def station_emoji(self, station_label: str) -> Optional[str]:
        return self.station_emojis.get(station_label.strip().lower())

    def format_station(self, station_label: str, items: Sequence[ClassifiedItem]) -> Optional[str]:
        """Render one station block, or None when no items survived classification."""
        if not items:
            return None
        emoji = self.station_emoji(station_label)
        title = f"{emoji} {station_label}" if emoji else station_label
        lines = [self.format_item(item) for item in items]
        return title + "\n" + "\n".join(lines)

    def is_celebration(self, station_texts: Sequence[str]) -> bool:
        if not self.celebration_phrase:
            return False
        return any(self.celebration_phrase in text for text in station_texts)

    def format_header(self, location: str, meal_label: str, day: date, celebrate: bool = False) -> str:
        header = " ".join(part for part in (location, meal_label, format_menu_date(day)) if part)
        if celebrate and self.celebration_suffix:
            header = f"{header} {self.celebration_suffix}"
        return header

    def format_menu(self, meal_label: str,
                    station_items: Sequence[Tuple[str, Sequence[ClassifiedItem]]],
                    location: str, day: date) -> List[str]:
        """
        Build the full thread text.

        Args:
            meal_label: Name of the meal slot, e.g. 'Lunch'
            station_items: (station label, classified items) pairs in station order
            location: Cafe name used in the header
            day: Date shown in the header

        Returns:
            [header, station block, station block, ...]; empty stations are omitted
        """
        station_texts = []
        for station_label, items in station_items:
            text = self.format_station(station_label, items)
            if text is not None:
                station_texts.append(text)

        header = self.format_header(location, meal_label, day, self.is_celebration(station_texts))
        return [header] + station_texts
