"""
News Feed - simulated live headlines for the home page.

The periodic refresh reshuffles the articles and restamps them with the
current time so clients can see the feed moving.
"""

import asyncio
import logging
import random
from typing import Callable, List, Optional

from alertnet.models.base import NewsArticle
from alertnet.models.report import DisasterType
from alertnet.services.domain_store import Clock, utcnow
from alertnet.services.filter_engine import filter_news

logger = logging.getLogger(__name__)


class NewsFeed:

    def __init__(
        self,
        articles: List[NewsArticle],
        clock: Optional[Clock] = None,
        shuffle: Optional[Callable[[list], None]] = None,
    ):
        self._articles = list(articles)
        self._clock = clock or utcnow
        self._shuffle = shuffle or random.shuffle
        self._task: Optional[asyncio.Task] = None
        self.refresh_count = 0

    def articles(self, disaster_type: Optional[DisasterType] = None) -> List[NewsArticle]:
        return filter_news(self._articles, disaster_type)

    def get(self, article_id: str) -> Optional[NewsArticle]:
        for article in self._articles:
            if article.id == article_id:
                return article
        return None

    def refresh(self) -> None:
        now = self._clock()
        shuffled = list(self._articles)
        self._shuffle(shuffled)
        self._articles = [a.model_copy(update={"published_date": now}) for a in shuffled]
        self.refresh_count += 1
        logger.debug(f"News feed refreshed ({len(self._articles)} articles)")

    def start(self, interval_seconds: float) -> None:
        """Schedule the periodic refresh on the running loop. Non-positive intervals disable it."""
        if interval_seconds <= 0 or self._task is not None:
            return
        self._task = asyncio.get_running_loop().create_task(self._run(interval_seconds), name="news-refresh")
        logger.info(f"News refresh every {interval_seconds}s")

    async def _run(self, interval_seconds: float) -> None:
        while True:
            await asyncio.sleep(interval_seconds)
            try:
                self.refresh()
            except Exception as e:
                logger.error(f"News refresh failed: {e}", exc_info=True)

    def close(self) -> None:
        if self._task is not None:
            self._task.cancel()
            self._task = None
