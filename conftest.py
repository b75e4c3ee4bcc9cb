import pytest


def build_menu_payload():
    """Bon Appetit style payload for cafe 224 with three meals."""
    return {
        'days': [{
            'date': '2026-10-19',
            'cafes': {
                '224': {
                    'name': 'Commons',
                    'dayparts': [[
                        {
                            'label': 'Breakfast',
                            'starttime': '07:00',
                            'endtime': '10:00',
                            'stations': [{'label': 'breakfast', 'items': ['10', '11']}],
                        },
                        {
                            'label': 'Lunch',
                            'starttime': '11:30',
                            'endtime': '14:00',
                            'stations': [
                                {'label': 'grill', 'items': ['20', '21']},
                                {'label': 'condiments', 'items': ['22']},
                            ],
                        },
                        {
                            'label': 'Dinner',
                            'starttime': '17:00',
                            'endtime': '20:00',
                            'stations': [
                                {'label': 'homestyle', 'items': ['30']},
                                {'label': 'Chef Table', 'items': ['31', '32']},
                            ],
                        },
                    ]],
                },
            },
        }],
        'items': {
            '10': {'id': '10', 'label': 'scrambled eggs', 'description': 'cage-free eggs',
                   'tier': 1, 'cor_icon': {'1': 'Vegetarian', '9': 'Made without Gluten-Containing Ingredients'}},
            '11': {'id': '11', 'label': 'hot sauce', 'description': '', 'tier': 3, 'cor_icon': []},
            '20': {'id': '20', 'label': 'black bean burger', 'description': 'house-made patty',
                   'tier': 1, 'cor_icon': {'4': 'Vegan'}},
            '21': {'id': '21', 'label': 'pickles', 'description': '', 'tier': 2, 'cor_icon': {'4': 'Vegan'}},
            '22': {'id': '22', 'label': 'ketchup', 'description': '', 'tier': 2, 'cor_icon': {'4': 'Vegan'}},
            '30': {'id': '30', 'label': 'Chicken Tenders', 'description': 'buttermilk fried', 'tier': 1},
            '31': {'id': '31', 'label': 'roasted broccoli', 'description': '', 'tier': '1',
                   'cor_icon': {'4': 'Vegan', '9': 'Made without Gluten-Containing Ingredients'}},
            '32': {'id': '32', 'label': 'mac and cheese', 'description': '', 'tier': 1,
                   'cor_icon': {'1': 'Vegetarian'}},
        },
    }


@pytest.fixture
def menu_payload():
    return build_menu_payload()
