"""Shared pytest fixtures: in-memory store doubles and an HTTP client."""

import copy
from typing import Any
from unittest.mock import AsyncMock, MagicMock

import pytest
from fastapi import FastAPI
from httpx import ASGITransport, AsyncClient

from salesgraph.core.cache import CacheAside
from salesgraph.core.database import CUSTOMERS, ORDERS, PRODUCTS
from salesgraph.core.exceptions import CacheUnavailableError
from salesgraph.features.analytics.service import AnalyticsService
from salesgraph.features.orders.service import OrderService
from salesgraph.main import create_app

Document = dict[str, Any]


class FakeCacheStore:
    """In-memory CacheStore recording calls; ``fail=True`` simulates an outage."""

    def __init__(self) -> None:
        self.entries: dict[str, tuple[bytes, int]] = {}
        self.get_calls = 0
        self.set_calls = 0
        self.fail = False

    async def get(self, key: str) -> bytes | None:
        self.get_calls += 1
        if self.fail:
            raise CacheUnavailableError("cache down")
        entry = self.entries.get(key)
        return entry[0] if entry else None

    async def set(self, key: str, value: bytes, ttl_seconds: int) -> None:
        self.set_calls += 1
        if self.fail:
            raise CacheUnavailableError("cache down")
        self.entries[key] = (value, ttl_seconds)

    async def ping(self) -> bool:
        return not self.fail


class FakeQueryExecutor:
    """In-memory QueryExecutor.

    ``find``/``count``/``find_one`` evaluate equality filters over stored
    documents. ``aggregate`` records the pipeline and returns the next
    queued result (``[]`` when nothing is queued).
    """

    def __init__(self) -> None:
        self.collections: dict[str, dict[str, Document]] = {
            CUSTOMERS: {},
            ORDERS: {},
            PRODUCTS: {},
        }
        self.aggregate_results: list[list[Document]] = []
        self.pipelines: list[tuple[str, list[Document]]] = []
        self.inserted: list[tuple[str, Document]] = []

    def add(self, collection: str, *documents: Document) -> None:
        for document in documents:
            self.collections[collection][document["_id"]] = copy.deepcopy(document)

    def queue_aggregate(self, *results: list[Document]) -> None:
        self.aggregate_results.extend(results)

    def _matching(self, collection: str, query: Document) -> list[Document]:
        return [
            copy.deepcopy(doc)
            for doc in self.collections[collection].values()
            if all(doc.get(field) == value for field, value in query.items())
        ]

    async def find_one(self, collection: str, query: Document) -> Document | None:
        matches = self._matching(collection, query)
        return matches[0] if matches else None

    async def find(
        self,
        collection: str,
        query: Document,
        *,
        sort: list[tuple[str, int]] | None = None,
        skip: int = 0,
        limit: int = 0,
    ) -> list[Document]:
        documents = self._matching(collection, query)
        for field, direction in reversed(sort or []):
            documents.sort(key=lambda doc: doc[field], reverse=direction < 0)
        documents = documents[skip:]
        return documents[:limit] if limit else documents

    async def count(self, collection: str, query: Document) -> int:
        return len(self._matching(collection, query))

    async def aggregate(self, collection: str, pipeline: list[Document]) -> list[Document]:
        self.pipelines.append((collection, pipeline))
        return self.aggregate_results.pop(0) if self.aggregate_results else []

    async def insert_one(self, collection: str, document: Document) -> None:
        self.inserted.append((collection, copy.deepcopy(document)))
        self.add(collection, document)

    async def replace_all(self, collection: str, documents: list[Document]) -> int:
        self.collections[collection] = {}
        self.add(collection, *documents)
        return len(documents)


@pytest.fixture
def fake_cache_store() -> FakeCacheStore:
    """Empty in-memory cache store."""
    return FakeCacheStore()


@pytest.fixture
def cache(fake_cache_store: FakeCacheStore) -> CacheAside:
    """Cache-aside helper over the fake store with a 300s TTL."""
    return CacheAside(fake_cache_store, ttl_seconds=300)


@pytest.fixture
def fake_executor() -> FakeQueryExecutor:
    """Empty in-memory query executor."""
    return FakeQueryExecutor()


@pytest.fixture
def analytics_service(fake_executor: FakeQueryExecutor, cache: CacheAside) -> AnalyticsService:
    """AnalyticsService wired to the fakes."""
    return AnalyticsService(fake_executor, cache)


@pytest.fixture
def order_service(fake_executor: FakeQueryExecutor) -> OrderService:
    """OrderService wired to the fake executor."""
    return OrderService(fake_executor)


@pytest.fixture
def app(fake_executor: FakeQueryExecutor, fake_cache_store: FakeCacheStore) -> FastAPI:
    """Application with store doubles in place of MongoDB and Redis.

    ASGITransport does not run the lifespan, so the state it would create is
    set directly.
    """
    application = create_app()
    mongo_db = MagicMock()
    mongo_db.command = AsyncMock(return_value={"ok": 1})
    application.state.mongo_db = mongo_db
    application.state.query_executor = fake_executor
    application.state.cache_store = fake_cache_store
    application.state.cache = CacheAside(fake_cache_store, ttl_seconds=300)
    return application


@pytest.fixture
async def client(app: FastAPI):
    """Async HTTP client for the application."""
    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test",
    ) as ac:
        yield ac
