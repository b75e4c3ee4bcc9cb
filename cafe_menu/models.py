#!/usr/bin/env python3
"""
Data model for the Bon Appetit menu payload.

Only the parts the monitor reads are modelled: the first day, the cafes of that
day with their dayparts, and the flat item map. Parsing is tolerant of the
provider's quirks (empty lists instead of empty objects, string ids, string
tiers) and raises ParseError only when the overall shape is unusable.
"""

import logging
from dataclasses import dataclass, field
from datetime import date, time
from typing import Any, Dict, List, Mapping, Optional

from dateutil import parser as date_parser

from .errors import ParseError

logger = logging.getLogger(__name__)


def parse_clock_time(value: str) -> time:
    """Parse a provider time such as '7:30', '07:30' or '17:00:00'."""
    if not isinstance(value, str) or not value.strip():
        raise ParseError(f"Invalid meal time: {value!r}")
    try:
        return date_parser.parse(value.strip()).time()
    except (ValueError, OverflowError) as e:
        raise ParseError(f"Invalid meal time {value!r}: {e}") from e


def parse_tier(value: Any) -> Optional[int]:
    # bool is an int subclass; True must not count as tier 1
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, str) and value.strip().lstrip('-').isdigit():
        return int(value.strip())
    return None


def parse_icons(value: Any) -> Dict[Any, Any]:
    # the provider sends [] instead of {} for items without icons
    if not isinstance(value, Mapping):
        return {}
    icons = {}
    for code, flag in value.items():
        if isinstance(code, str) and code.strip().isdigit():
            code = int(code.strip())
        icons[code] = flag
    return icons


@dataclass
class Item:
    item_id: str
    label: str
    description: str = ""
    tier: Optional[int] = None
    icons: Dict[Any, Any] = field(default_factory=dict)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any], item_id: str = "") -> "Item":
        return cls(
            item_id=str(data.get('id', item_id)),
            label=str(data.get('label') or '').strip(),
            description=str(data.get('description') or '').strip(),
            tier=parse_tier(data.get('tier')),
            icons=parse_icons(data.get('cor_icon')),
        )


@dataclass
class Station:
    label: str
    item_ids: List[str] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "Station":
        return cls(
            label=str(data.get('label') or '').strip(),
            item_ids=[str(item_id) for item_id in data.get('items') or []],
        )


@dataclass
class MealSlot:
    label: str
    start: time
    end: time
    stations: List[Station] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "MealSlot":
        return cls(
            label=str(data.get('label') or '').strip(),
            start=parse_clock_time(data.get('starttime')),
            end=parse_clock_time(data.get('endtime')),
            stations=[Station.from_dict(s) for s in data.get('stations') or []],
        )


@dataclass
class Cafe:
    cafe_id: str
    name: str
    dayparts: List[List[MealSlot]] = field(default_factory=list)

    @property
    def meal_slots(self) -> List[MealSlot]:
        """The first daypart group, the only one the monitor uses."""
        return self.dayparts[0] if self.dayparts else []

    @classmethod
    def from_dict(cls, cafe_id: str, data: Mapping[str, Any]) -> "Cafe":
        dayparts = []
        for group in data.get('dayparts') or []:
            dayparts.append([MealSlot.from_dict(slot) for slot in group or []])
        return cls(cafe_id=str(cafe_id), name=str(data.get('name') or '').strip(), dayparts=dayparts)


@dataclass
class MenuResponse:
    cafes: Dict[str, Cafe]
    items: Dict[str, Item]
    menu_date: Optional[date] = None

    def get_cafe(self, cafe_id) -> Cafe:
        try:
            return self.cafes[str(cafe_id)]
        except KeyError:
            raise ParseError(f"Cafe {cafe_id} not present in menu payload") from None

    def get_item(self, item_id) -> Optional[Item]:
        return self.items.get(str(item_id))

    @classmethod
    def from_dict(cls, data: Any) -> "MenuResponse":
        """
        Build a MenuResponse from the decoded JSON document.

        Raises:
            ParseError: If the document has no usable first day.
        """
        if not isinstance(data, Mapping):
            raise ParseError(f"Menu payload must be an object, got {type(data).__name__}")

        days = data.get('days')
        if not isinstance(days, list) or not days or not isinstance(days[0], Mapping):
            raise ParseError("Menu payload has no 'days' entries")
        day = days[0]

        try:
            cafes = {
                str(cafe_id): Cafe.from_dict(cafe_id, cafe_data)
                for cafe_id, cafe_data in (day.get('cafes') or {}).items()
            }
        except (AttributeError, TypeError) as e:
            raise ParseError(f"Malformed cafe data: {e}") from e

        raw_items = data.get('items')
        if not isinstance(raw_items, Mapping):
            raw_items = day.get('items')
        if not isinstance(raw_items, Mapping):
            # an empty list stands in for {} (same quirk as cor_icon)
            if raw_items:
                raise ParseError(f"Menu items must be an object, got {type(raw_items).__name__}")
            raw_items = {}
        items = {}
        for item_id, raw_item in raw_items.items():
            if not isinstance(raw_item, Mapping):
                logger.debug(f"Skipping malformed item {item_id}: {raw_item!r}")
                continue
            items[str(item_id)] = Item.from_dict(raw_item, str(item_id))

        menu_date = None
        if day.get('date'):
            try:
                menu_date = date_parser.parse(str(day['date'])).date()
            except (ValueError, OverflowError):
                logger.debug(f"Unparseable menu date: {day.get('date')!r}")

        return cls(cafes=cafes, items=items, menu_date=menu_date)
