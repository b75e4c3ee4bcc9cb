import asyncio

import pytest
from aiohttp import web
from aiohttp import test_utils

from cafe_menu.client import MenuClient
from cafe_menu.errors import FetchError, ParseError

MENU_PATH = '/api/2/menus'


async def fetch_from(handler, cafe_id=224):
    app = web.Application()
    app.router.add_get(MENU_PATH, handler)
    server = test_utils.TestServer(app)
    await server.start_server()
    try:
        async with MenuClient(str(server.make_url(MENU_PATH)), timeout=5) as client:
            return await client.fetch_menu(cafe_id)
    finally:
        await server.close()


def test_fetches_and_parses_menu(menu_payload):
    seen = {}

    async def handler(request):
        seen['cafe'] = request.query.get('cafe')
        seen['agent'] = request.headers.get('User-Agent')
        return web.json_response(menu_payload)

    menu = asyncio.run(fetch_from(handler))

    assert seen == {'cafe': '224', 'agent': 'CafeMenuMonitor/1.0'}
    assert menu.get_cafe(224).name == 'Commons'


def test_error_status_is_a_fetch_error():
    async def handler(request):
        return web.Response(status=503, text='maintenance')

    with pytest.raises(FetchError) as excinfo:
        asyncio.run(fetch_from(handler))
    assert excinfo.value.status == 503


def test_invalid_json_is_a_parse_error():
    async def handler(request):
        return web.Response(text='<html>not a menu</html>', content_type='text/html')

    with pytest.raises(ParseError):
        asyncio.run(fetch_from(handler))


def test_missing_cafe_is_a_parse_error(menu_payload):
    async def handler(request):
        return web.json_response(menu_payload)

    with pytest.raises(ParseError):
        asyncio.run(fetch_from(handler, cafe_id=225))


def test_unreachable_server_is_a_fetch_error():
    async def scenario():
        async with MenuClient('http://127.0.0.1:1/api/2/menus', timeout=5) as client:
            await client.fetch_menu(224)

    with pytest.raises(FetchError):
        asyncio.run(scenario())


def test_client_requires_context_manager():
    with pytest.raises(RuntimeError):
        asyncio.run(MenuClient().fetch_menu(224))


def test_undecodable_body_is_a_parse_error():
    async def handler(request):
        return web.Response(body=b'\xff\xfe{bad', content_type='application/json')

    with pytest.raises(ParseError):
        asyncio.run(fetch_from(handler))
