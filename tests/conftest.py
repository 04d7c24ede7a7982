"""Fixtures for integration tests against running MongoDB and Redis.

Point MONGO_URI / REDIS_URL at running servers and run
``pytest -m integration``. Tests use the ``salesgraph_test`` database.
"""

import pytest
from pymongo import AsyncMongoClient

from salesgraph.core.cache import CacheAside, RedisCacheStore, create_redis_client
from salesgraph.core.config import get_settings
from salesgraph.core.database import MongoQueryExecutor
from salesgraph.features.analytics.service import AnalyticsService
from salesgraph.features.orders.service import OrderService

TEST_DATABASE = "salesgraph_test"
CACHE_KEY_PATTERNS = ("customerSpending:*", "topSellingProducts:*", "salesAnalytics:*")


async def _clear_cache_keys(client) -> None:
    for pattern in CACHE_KEY_PATTERNS:
        async for key in client.scan_iter(match=pattern):
            await client.delete(key)


@pytest.fixture
async def mongo_database():
    """Dedicated test database, dropped before and after each test."""
    settings = get_settings()
    client = AsyncMongoClient(settings.mongo_uri, tz_aware=True)
    await client.drop_database(TEST_DATABASE)
    try:
        yield client[TEST_DATABASE]
    finally:
        await client.drop_database(TEST_DATABASE)
        await client.close()


@pytest.fixture
async def redis_store():
    """Redis-backed cache store with analytics keys cleared around each test."""
    client = create_redis_client(get_settings())
    await _clear_cache_keys(client)
    try:
        yield RedisCacheStore(client)
    finally:
        await _clear_cache_keys(client)
        await client.aclose()


@pytest.fixture
def executor(mongo_database):
    """Query executor over the test database."""
    return MongoQueryExecutor(mongo_database)


@pytest.fixture
def live_analytics(executor, redis_store):
    """AnalyticsService over real stores."""
    return AnalyticsService(executor, CacheAside(redis_store, ttl_seconds=60))


@pytest.fixture
def live_orders(executor):
    """OrderService over the test database."""
    return OrderService(executor)
