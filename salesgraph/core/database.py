"""Async MongoDB access through a narrow query-executor interface.

Services never touch driver objects directly: they issue filters, sorts and
aggregation pipelines against named collections through ``QueryExecutor``,
which keeps them testable against in-memory doubles.
"""

from __future__ import annotations

from typing import Any, Protocol, runtime_checkable

from fastapi import Request
from pymongo import AsyncMongoClient
from pymongo.asynchronous.database import AsyncDatabase
from pymongo.errors import PyMongoError

from salesgraph.core.config import Settings, get_settings
from salesgraph.core.exceptions import DatabaseError
from salesgraph.core.logging import get_logger

logger = get_logger(__name__)

CUSTOMERS = "customers"
ORDERS = "orders"
PRODUCTS = "products"

Document = dict[str, Any]
SortSpec = list[tuple[str, int]]


@runtime_checkable
class QueryExecutor(Protocol):
    """Query service over the document collections."""

    async def find_one(self, collection: str, query: Document) -> Document | None:
        """Return the first document matching ``query``, if any."""
        ...

    async def find(
        self,
        collection: str,
        query: Document,
        *,
        sort: SortSpec | None = None,
        skip: int = 0,
        limit: int = 0,
    ) -> list[Document]:
        """Return documents matching ``query`` (``limit=0`` means no limit)."""
        ...

    async def count(self, collection: str, query: Document) -> int:
        """Count documents matching ``query``."""
        ...

    async def aggregate(self, collection: str, pipeline: list[Document]) -> list[Document]:
        """Run an aggregation pipeline and return every output document."""
        ...

    async def insert_one(self, collection: str, document: Document) -> None:
        """Insert a single document."""
        ...

    async def replace_all(self, collection: str, documents: list[Document]) -> int:
        """Replace the full contents of a collection, returning the inserted count."""
        ...


class MongoQueryExecutor:
    """QueryExecutor backed by a PyMongo async database.

    Driver failures are re-raised as DatabaseError so they surface to the
    API layer as operation failures.
    """

    def __init__(self, database: AsyncDatabase[Document]) -> None:
        self.database = database

    async def find_one(self, collection: str, query: Document) -> Document | None:
        try:
            return await self.database[collection].find_one(query)
        except PyMongoError as e:
            raise self._wrap("find_one", collection, e) from e

    async def find(
        self,
        collection: str,
        query: Document,
        *,
        sort: SortSpec | None = None,
        skip: int = 0,
        limit: int = 0,
    ) -> list[Document]:
        cursor = self.database[collection].find(query)
        if sort:
            cursor = cursor.sort(sort)
        if skip:
            cursor = cursor.skip(skip)
        if limit:
            cursor = cursor.limit(limit)
        try:
            return await cursor.to_list()
        except PyMongoError as e:
            raise self._wrap("find", collection, e) from e

    async def count(self, collection: str, query: Document) -> int:
        try:
            return await self.database[collection].count_documents(query)
        except PyMongoError as e:
            raise self._wrap("count", collection, e) from e

    async def aggregate(self, collection: str, pipeline: list[Document]) -> list[Document]:
        try:
            cursor = await self.database[collection].aggregate(pipeline)
            return await cursor.to_list()
        except PyMongoError as e:
            raise self._wrap("aggregate", collection, e) from e

    async def insert_one(self, collection: str, document: Document) -> None:
        try:
            await self.database[collection].insert_one(document)
        except PyMongoError as e:
            raise self._wrap("insert_one", collection, e) from e

    async def replace_all(self, collection: str, documents: list[Document]) -> int:
        try:
            await self.database[collection].delete_many({})
            if not documents:
                return 0
            result = await self.database[collection].insert_many(documents)
            return len(result.inserted_ids)
        except PyMongoError as e:
            raise self._wrap("replace_all", collection, e) from e

    @staticmethod
    def _wrap(operation: str, collection: str, exc: PyMongoError) -> DatabaseError:
        logger.error(
            "database.operation_failed",
            operation=operation,
            collection=collection,
            error=str(exc),
            error_type=type(exc).__name__,
        )
        return DatabaseError(
            message=f"Database {operation} on '{collection}' failed",
            details={"collection": collection, "operation": operation},
        )


def create_mongo_client(settings: Settings | None = None) -> AsyncMongoClient[Document]:
    """Create the async MongoDB client from settings.

    Timestamps come back timezone-aware (UTC).
    """
    settings = settings or get_settings()
    return AsyncMongoClient(
        settings.mongo_uri,
        tz_aware=True,
        serverSelectionTimeoutMS=settings.mongo_server_selection_timeout_ms,
    )


def get_database(
    client: AsyncMongoClient[Document],
    settings: Settings | None = None,
) -> AsyncDatabase[Document]:
    """Return the database named in the URI, or the configured default."""
    settings = settings or get_settings()
    return client.get_default_database(default=settings.mongo_default_database)


def get_query_executor(request: Request) -> QueryExecutor:
    """Dependency returning the executor opened in the application lifespan."""
    executor: QueryExecutor = request.app.state.query_executor
    return executor
