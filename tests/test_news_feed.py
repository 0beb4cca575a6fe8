import asyncio

from alertnet.config.reference_data import seed_news
from alertnet.models.report import DisasterType
from alertnet.services.news_feed import NewsFeed


def test_refresh_reshuffles_and_restamps(clock):
    feed = NewsFeed(seed_news(clock()), clock=clock, shuffle=lambda items: items.reverse())
    clock.advance(30)

    feed.refresh()

    articles = feed.articles()
    assert [a.id for a in articles] == ["news2", "news1"]
    assert all(a.published_date == clock() for a in articles)
    assert feed.refresh_count == 1


def test_articles_filter_and_lookup(clock):
    feed = NewsFeed(seed_news(clock()), clock=clock)
    assert [a.id for a in feed.articles(DisasterType.STORM)] == ["news1"]
    assert feed.get("news2").title.startswith("Earthquake Preparedness")
    assert feed.get("missing") is None


def test_periodic_refresh_runs_until_closed(clock):
    feed = NewsFeed(seed_news(clock()), clock=clock)

    async def scenario():
        feed.start(0.01)
        await asyncio.sleep(0.055)
        feed.close()
        count = feed.refresh_count
        await asyncio.sleep(0.03)
        return count

    count = asyncio.run(scenario())
    assert count >= 2
    assert feed.refresh_count == count


def test_non_positive_interval_disables_refresh(clock):
    feed = NewsFeed(seed_news(clock()), clock=clock)

    async def scenario():
        feed.start(0)
        await asyncio.sleep(0.01)

    asyncio.run(scenario())
    assert feed.refresh_count == 0
