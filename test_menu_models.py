from datetime import date, time

import pytest

from cafe_menu.errors import ParseError
from cafe_menu.models import MenuResponse, parse_clock_time, parse_icons, parse_tier


def test_parses_first_day_and_first_daypart_group(menu_payload):
    menu = MenuResponse.from_dict(menu_payload)
    cafe = menu.get_cafe(224)

    assert cafe.name == 'Commons'
    assert [slot.label for slot in cafe.meal_slots] == ['Breakfast', 'Lunch', 'Dinner']
    assert cafe.meal_slots[1].start == time(11, 30)
    assert cafe.meal_slots[1].stations[0].item_ids == ['20', '21']
    assert menu.menu_date == date(2026, 10, 19)


def test_items_are_normalized(menu_payload):
    menu = MenuResponse.from_dict(menu_payload)

    assert menu.get_item('20').icons == {4: 'Vegan'}
    assert menu.get_item(31).tier == 1
    assert menu.get_item('11').icons == {}
    assert menu.get_item('30').icons == {}


def test_items_nested_under_day_are_found(menu_payload):
    menu_payload['days'][0]['items'] = menu_payload.pop('items')
    assert MenuResponse.from_dict(menu_payload).get_item('10').label == 'scrambled eggs'


def test_malformed_payloads_raise_parse_error(menu_payload):
    with pytest.raises(ParseError):
        MenuResponse.from_dict([])
    with pytest.raises(ParseError):
        MenuResponse.from_dict({'days': []})
    with pytest.raises(ParseError):
        MenuResponse.from_dict(menu_payload).get_cafe(1)


def test_time_and_field_helpers():
    assert parse_clock_time('7:30') == time(7, 30)
    assert parse_clock_time('17:00:00') == time(17, 0)
    with pytest.raises(ParseError):
        parse_clock_time('')
    assert parse_tier('2') == 2
    assert parse_tier(False) is None
    assert parse_icons([]) == {}
    assert parse_icons({'9': 'GF', 'x': 1}) == {9: 'GF', 'x': 1}


def test_day_level_items_must_be_an_object(menu_payload):
    menu_payload.pop('items')
    menu_payload['days'][0]['items'] = [{'id': '20'}]

    with pytest.raises(ParseError):
        MenuResponse.from_dict(menu_payload)


def test_empty_item_list_means_no_items(menu_payload):
    menu_payload['items'] = []

    assert MenuResponse.from_dict(menu_payload).items == {}
