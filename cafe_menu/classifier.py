#!/usr/bin/env python3
"""
Item classification: which menu items are worth announcing, and which dietary
notices they carry.
"""

import logging
from dataclasses import dataclass
from types import MappingProxyType
from typing import Any, List, Mapping, Optional, Tuple, Union

from .models import Item, MenuResponse, Station

logger = logging.getLogger(__name__)

PRIMARY_TIER = 1

# Bon Appetit cor_icon codes
NOTICE_LABELS = MappingProxyType({
    1: 'vegetarian',
    4: 'vegan',
    9: 'gluten-free',
})


@dataclass(frozen=True)
class ClassifiedItem:
    label: str
    description: str = ""
    notices: Tuple[str, ...] = ()


def derive_notices(icons: Any) -> Tuple[str, ...]:
    """Map icon codes to notice labels, keeping the order the codes appear in."""
    if not isinstance(icons, Mapping):
        return ()
    notices = []
    for code, flag in icons.items():
        if flag is None or flag is False:
            continue
        notice = NOTICE_LABELS.get(code)
        if notice and notice not in notices:
            notices.append(notice)
    return tuple(notices)


def classify_item(item: Union[Item, Mapping[str, Any]]) -> Optional[ClassifiedItem]:
    """
    Classify one item.

    Args:
        item: An Item, or a raw item record from the provider

    Returns:
        ClassifiedItem for tier-1 items, None for everything else
    """
    if not isinstance(item, Item):
        item = Item.from_dict(item)

    if item.tier != PRIMARY_TIER:
        return None

    return ClassifiedItem(
        label=item.label,
        description=item.description,
        notices=derive_notices(item.icons),
    )


def classify_station(station: Station, menu: MenuResponse) -> List[ClassifiedItem]:
    """Classify every item of a station, skipping unknown ids and bad records."""
    classified = []
    for item_id in station.item_ids:
        item = menu.get_item(item_id)
        if item is None:
            logger.debug(f"Station '{station.label}' references unknown item {item_id}")
            continue
        try:
            result = classify_item(item)
        except Exception as e:
            logger.warning(f"⚠️ Could not classify item {item_id} ({item.label!r}): {e}")
            continue
        if result is not None:
            classified.append(result)
    return classified
