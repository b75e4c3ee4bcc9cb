#!/usr/bin/env python3
"""
Publishes a list of texts as a reply-chain thread.
"""

import logging
from dataclasses import dataclass, field
from typing import List, Optional, Sequence, Tuple

from .errors import PublishError
from .publisher import Publisher

logger = logging.getLogger(__name__)


@dataclass
class ThreadResult:
    post_ids: List[Optional[str]] = field(default_factory=list)
    failures: List[Tuple[int, str]] = field(default_factory=list)
    aborted: bool = False

    @property
    def posted_count(self) -> int:
        return sum(1 for post_id in self.post_ids if post_id is not None)

    @property
    def failed_count(self) -> int:
        return len(self.failures)

    @property
    def all_posted(self) -> bool:
        return not self.failures and not self.aborted


class PostSequencer:
    """
    Posts element 0 standalone and every later element as a reply to the most
    recent post that went through.

    With abort_on_failure=False (the default) a failed post is logged and the
    thread carries on; later posts then reply to the last successful post, so
    the chain can skip a link.
    """

    def __init__(self, publisher: Publisher, abort_on_failure: bool = False):
        self.publisher = publisher
        self.abort_on_failure = abort_on_failure

    async def publish_thread(self, texts: Sequence[str]) -> ThreadResult:
        result = ThreadResult()
        previous_id: Optional[str] = None

        for index, text in enumerate(texts):
            try:
                post_id = await self.publisher.publish(text, reply_to_id=previous_id)
            except PublishError as e:
                logger.error(f'❌ Post {index + 1}/{len(texts)} failed: {e}')
                result.post_ids.append(None)
                result.failures.append((index, str(e)))
                if self.abort_on_failure:
                    logger.warning(f'🛑 Aborting thread after failed post {index + 1}/{len(texts)}')
                    result.aborted = True
                    break
                continue

            logger.info(f'✅ Post {index + 1}/{len(texts)} published: {post_id}')
            result.post_ids.append(post_id)
            previous_id = post_id

        return result
