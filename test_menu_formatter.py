from datetime import date

from cafe_menu.classifier import ClassifiedItem
from cafe_menu.formatter import MenuFormatter, format_menu_date

MONDAY = date(2026, 10, 19)

burger = ClassifiedItem('black bean burger', notices=('vegan',))
fries = ClassifiedItem('fries')
tenders = ClassifiedItem('Chicken Tenders')


def test_item_text_includes_notices_only_when_present():
    formatter = MenuFormatter()
    assert formatter.format_item(burger) == 'black bean burger (vegan)'
    assert formatter.format_item(ClassifiedItem('eggs', notices=('vegetarian', 'gluten-free'))) == \
        'eggs (vegetarian gluten-free)'
    assert formatter.format_item(fries) == 'fries'


def test_station_block_uses_emoji_for_known_labels():
    formatter = MenuFormatter()
    assert formatter.format_station('grill', [burger, fries]) == '🍔 grill\nblack bean burger (vegan)\nfries'
    assert formatter.format_station('Pizza', [fries]) == '🍕 Pizza\nfries'
    assert formatter.format_station('Chef Table', [fries]) == 'Chef Table\nfries'


def test_empty_station_renders_nothing():
    assert MenuFormatter().format_station('grill', []) is None


def test_menu_date_format():
    assert format_menu_date(MONDAY) == 'Monday, October 19'
    assert format_menu_date(date(2026, 3, 5)) == 'Thursday, March 5'


def test_format_menu_drops_empty_stations_and_keeps_order():
    texts = MenuFormatter().format_menu(
        'Lunch',
        [('grill', [burger]), ('condiments', []), ('deli', [fries])],
        'Commons', MONDAY,
    )
    assert texts == [
        'Commons Lunch Monday, October 19',
        '🍔 grill\nblack bean burger (vegan)',
        '🥪 deli\nfries',
    ]


def test_header_only_when_every_station_is_empty():
    texts = MenuFormatter().format_menu('Dinner', [('grill', [])], 'Commons', MONDAY)
    assert texts == ['Commons Dinner Monday, October 19']


def test_celebration_phrase_changes_header():
    texts = MenuFormatter().format_menu('Dinner', [('homestyle', [tenders])], 'Commons', MONDAY)
    assert texts[0] == 'Commons Dinner Monday, October 19 🎉 Chicken Tenders! 🎉'


def test_celebration_phrase_is_case_sensitive():
    texts = MenuFormatter().format_menu('Dinner', [('homestyle', [ClassifiedItem('chicken tenders')])],
                                        'Commons', MONDAY)
    assert texts[0] == 'Commons Dinner Monday, October 19'


def test_celebration_phrase_and_suffix_are_configurable():
    formatter = MenuFormatter(celebration_phrase='Waffle', celebration_suffix='🧇 WAFFLE DAY')
    texts = formatter.format_menu('Breakfast', [('breakfast', [ClassifiedItem('Belgian Waffle')])],
                                  'Commons', MONDAY)
    assert texts[0] == 'Commons Breakfast Monday, October 19 🧇 WAFFLE DAY'

    disabled = MenuFormatter(celebration_phrase=None)
    assert not disabled.is_celebration(['Chicken Tenders'])
