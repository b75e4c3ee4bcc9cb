#!/usr/bin/env python3
"""
Post publishers.

Every publisher exposes ``async publish(text, reply_to_id=None) -> post_id`` and
raises PublishError when a post could not be created.
"""

import abc
import asyncio
import itertools
import logging
from typing import List, Optional, Tuple

import aiohttp
import tweepy
from tweepy.asynchronous import AsyncClient

from .errors import PublishError

logger = logging.getLogger(__name__)

MAX_TWEET_LENGTH = 280
ELLIPSIS = '…'

# code point ranges X counts as one character; everything else (emoji, CJK) counts as two
LIGHT_RANGES = ((0x0000, 0x10FF), (0x2000, 0x200D), (0x2010, 0x201F), (0x2032, 0x2037))
# emoji presentation selectors ride along with the emoji they modify
ZERO_WIDTH = frozenset((0xFE0E, 0xFE0F))


def char_weight(char: str) -> int:
    code = ord(char)
    if code in ZERO_WIDTH:
        return 0
    for low, high in LIGHT_RANGES:
        if low <= code <= high:
            return 1
    return 2


def tweet_length(text: str) -> int:
    """Length of text as X counts it against the 280 limit."""
    return sum(char_weight(char) for char in text)


def fit_tweet(text: str, limit: int = MAX_TWEET_LENGTH) -> str:
    if tweet_length(text) <= limit:
        return text

    budget = limit - tweet_length(ELLIPSIS)
    used = 0
    kept = []
    for char in text:
        used += char_weight(char)
        if used > budget:
            break
        kept.append(char)
    fitted = ''.join(kept).rstrip() + ELLIPSIS
    logger.warning(f'✂️ Post truncated to fit {limit} characters, dropped: {text[len(kept):]!r}')
    return fitted


class Publisher(abc.ABC):
    @abc.abstractmethod
    async def publish(self, text: str, reply_to_id: Optional[str] = None) -> str:
        """Create a post, optionally as a reply, and return its id."""


class TweepyPublisher(Publisher):
    """Posts to X with user-context (OAuth 1.0a) credentials."""

    def __init__(self, consumer_key: str, consumer_secret: str,
                 access_token: str, access_token_secret: str,
                 timeout: float = 15.0, client: Optional[AsyncClient] = None):
        self.timeout = timeout
        self.client = client or AsyncClient(
            consumer_key=consumer_key,
            consumer_secret=consumer_secret,
            access_token=access_token,
            access_token_secret=access_token_secret,
        )

    async def publish(self, text: str, reply_to_id: Optional[str] = None) -> str:
        try:
            response = await asyncio.wait_for(
                self.client.create_tweet(text=fit_tweet(text), in_reply_to_tweet_id=reply_to_id),
                timeout=self.timeout,
            )
        except asyncio.TimeoutError as e:
            raise PublishError(f"Tweet timed out after {self.timeout}s", reply_to_id) from e
        except (tweepy.TweepyException, aiohttp.ClientError) as e:
            raise PublishError(f"Tweet failed ({type(e).__name__}): {e}", reply_to_id) from e

        data = getattr(response, 'data', None) or {}
        post_id = data.get('id')
        if not post_id:
            raise PublishError(f"Tweet response carried no id: {response!r}", reply_to_id)
        return str(post_id)

    async def verify_credentials(self) -> Optional[str]:
        """Return the authenticated username, or None when the credentials are rejected."""
        try:
            response = await asyncio.wait_for(self.client.get_me(user_auth=True), timeout=self.timeout)
        except (tweepy.TweepyException, aiohttp.ClientError, asyncio.TimeoutError) as e:
            logger.error(f'❌ X API credential check failed: {e}')
            return None
        user = getattr(response, 'data', None)
        return getattr(user, 'username', None) if user else None


class DryRunPublisher(Publisher):
    """Logs posts instead of sending them and hands out sequential ids."""

    def __init__(self, prefix: str = 'dry-run'):
        self.prefix = prefix
        self.posts: List[Tuple[str, Optional[str], str]] = []
        self._ids = itertools.count(1)

    async def publish(self, text: str, reply_to_id: Optional[str] = None) -> str:
        post_id = f"{self.prefix}-{next(self._ids)}"
        self.posts.append((post_id, reply_to_id, text))
        target = f"reply to {reply_to_id}" if reply_to_id else "standalone"
        logger.info(f'📝 [DRY RUN] {post_id} ({target}):\n{text}')
        return post_id
