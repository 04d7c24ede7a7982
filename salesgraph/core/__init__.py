"""Core infrastructure: config, database, cache, logging, middleware, exceptions."""

from salesgraph.core.cache import CacheAside, CacheStore, RedisCacheStore, cache_key
from salesgraph.core.config import Settings, get_settings
from salesgraph.core.database import MongoQueryExecutor, QueryExecutor
from salesgraph.core.logging import get_logger, request_id_ctx

__all__ = [
    "CacheAside",
    "CacheStore",
    "MongoQueryExecutor",
    "QueryExecutor",
    "RedisCacheStore",
    "Settings",
    "cache_key",
    "get_logger",
    "get_settings",
    "request_id_ctx",
]
