#!/usr/bin/env python3
"""
Fetches daily menus from the Bon Appetit legacy menu API.
"""

import asyncio
import json
import logging
from typing import Optional

import aiohttp

from .errors import FetchError, ParseError
from .models import MenuResponse

logger = logging.getLogger(__name__)

DEFAULT_MENU_URL = 'https://legacy.cafebonappetit.com/api/2/menus'
USER_AGENT = 'CafeMenuMonitor/1.0'


class MenuClient:
    """
    Async menu fetcher. Use as an async context manager so the HTTP session is
    closed with the client.
    """

    def __init__(self, base_url: str = DEFAULT_MENU_URL, timeout: float = 15.0):
        self.base_url = base_url
        self.timeout = timeout
        self.session: Optional[aiohttp.ClientSession] = None

    async def __aenter__(self):
        self.session = aiohttp.ClientSession(
            timeout=aiohttp.ClientTimeout(total=self.timeout),
            headers={'User-Agent': USER_AGENT},
        )
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        if self.session:
            await self.session.close()
            self.session = None

    async def fetch_menu(self, cafe_id) -> MenuResponse:
        """
        Fetch today's menu for one cafe.

        Raises:
            FetchError: Network failure, timeout or non-200 response
            ParseError: Body is not JSON or not a menu document
        """
        if self.session is None:
            raise RuntimeError("MenuClient must be used as an async context manager")

        params = {'cafe': str(cafe_id)}
        logger.debug(f'🔗 Fetching menu: {self.base_url}?cafe={cafe_id}')
        try:
            async with self.session.get(self.base_url, params=params) as response:
                body = await response.read()
                if response.status != 200:
                    preview = body[:200].decode("utf-8", errors="replace")
                    raise FetchError(f"Menu API returned HTTP {response.status}: {preview}",
                                     status=response.status)
        except aiohttp.ClientError as e:
            raise FetchError(f"Menu API request failed ({type(e).__name__}): {e}") from e
        except asyncio.TimeoutError as e:
            raise FetchError(f"Menu API request timed out after {self.timeout}s") from e

        try:
            data = json.loads(body)
        except ValueError as e:  # includes UnicodeDecodeError
            raise ParseError(f"Menu API returned invalid JSON: {e}") from e

        menu = MenuResponse.from_dict(data)
        menu.get_cafe(cafe_id)
        logger.debug(f'📋 Menu parsed: {len(menu.cafes)} cafe(s), {len(menu.items)} item(s)')
        return menu
