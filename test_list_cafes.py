import json

from list_cafes import describe_cafe, format_output


def test_describe_cafe_reports_name_and_meals(menu_payload):
    assert describe_cafe(menu_payload, 224) == {
        'id': 224, 'name': 'Commons', 'meals': ['Breakfast', 'Lunch', 'Dinner'],
    }


def test_describe_cafe_reports_missing_cafe(menu_payload):
    result = describe_cafe(menu_payload, 200)
    assert result['name'] is None
    assert '200' in result['error']


def test_format_output():
    cafes = [
        {'id': 224, 'name': 'Commons', 'meals': ['Lunch']},
        {'id': 225, 'name': None, 'error': 'HTTP 404'},
    ]
    assert format_output(cafes) == '✅ 224: Commons (Lunch)\n❌ 225: HTTP 404'
    assert json.loads(format_output(cafes, 'json'))[0]['name'] == 'Commons'
