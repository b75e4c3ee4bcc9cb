#!/usr/bin/env python3
"""
Lists Bon Appetit cafe ids and names so MENU_CAFE_ID can be chosen.
Cafe ids are sequential numbers; the default range covers 200-224.
"""

import argparse
import json
import logging
import sys
from typing import Any, Dict, List

import requests

from cafe_menu.client import DEFAULT_MENU_URL, USER_AGENT
from cafe_menu.errors import ParseError
from cafe_menu.models import MenuResponse

logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)


def describe_cafe(payload: Any, cafe_id: int) -> Dict[str, Any]:
    """Extract the cafe name from a decoded menu payload."""
    try:
        cafe = MenuResponse.from_dict(payload).get_cafe(cafe_id)
    except ParseError as e:
        return {'id': cafe_id, 'name': None, 'error': str(e)}
    return {'id': cafe_id, 'name': cafe.name, 'meals': [slot.label for slot in cafe.meal_slots]}


def lookup_cafe(session: requests.Session, url: str, cafe_id: int, timeout: float = 10) -> Dict[str, Any]:
    try:
        response = session.get(url, params={'cafe': cafe_id}, timeout=timeout)
        response.raise_for_status()
        payload = response.json()
    except requests.RequestException as e:
        return {'id': cafe_id, 'name': None, 'error': str(e)}
    except ValueError as e:
        return {'id': cafe_id, 'name': None, 'error': f'Invalid JSON: {e}'}
    return describe_cafe(payload, cafe_id)


def lookup_cafes(start: int, count: int, url: str = DEFAULT_MENU_URL) -> List[Dict[str, Any]]:
    with requests.Session() as session:
        session.headers['User-Agent'] = USER_AGENT
        return [lookup_cafe(session, url, cafe_id) for cafe_id in range(start, start + count)]


def format_output(cafes: List[Dict[str, Any]], format_type: str = 'summary') -> str:
    if format_type == 'json':
        return json.dumps(cafes, indent=2, default=str)

    output = []
    for cafe in cafes:
        if cafe.get('error'):
            output.append(f"❌ {cafe['id']}: {cafe['error']}")
        else:
            meals = ', '.join(cafe.get('meals') or []) or 'no meals today'
            output.append(f"✅ {cafe['id']}: {cafe['name']} ({meals})")
    return "\n".join(output)


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(description='List Bon Appetit cafe ids and names')
    parser.add_argument('--start', type=int, default=200, help='first cafe id (default: 200)')
    parser.add_argument('--count', type=int, default=25, help='number of ids to scan (default: 25)')
    parser.add_argument('--url', default=DEFAULT_MENU_URL, help='menu API endpoint')
    parser.add_argument('--format', choices=['summary', 'json'], default='summary')
    args = parser.parse_args(argv)

    logger.info(f"Scanning cafe ids {args.start}-{args.start + args.count - 1}")
    cafes = lookup_cafes(args.start, args.count, args.url)
    print(format_output(cafes, args.format))
    return 0 if any(not cafe.get('error') for cafe in cafes) else 1


if __name__ == '__main__':
    sys.exit(main())
