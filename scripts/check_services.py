#!/usr/bin/env python
"""Check MongoDB and Redis connectivity.

Usage:
    uv run python scripts/check_services.py
"""

import asyncio
import sys

from pymongo.errors import PyMongoError

from salesgraph.core.cache import RedisCacheStore, create_redis_client
from salesgraph.core.config import get_settings
from salesgraph.core.database import (
    CUSTOMERS,
    ORDERS,
    PRODUCTS,
    create_mongo_client,
    get_database,
)


async def check_services() -> int:
    """Verify both stores respond and report collection sizes."""
    settings = get_settings()

    print("SalesGraph - Service Connectivity Check")
    print("=" * 40)
    print(f"MongoDB: {settings.mongo_uri.split('@')[-1]}")  # Hide credentials
    print(f"Redis:   {settings.redis_url.split('@')[-1]}")
    print()

    status = 0
    mongo_client = create_mongo_client(settings)
    try:
        database = get_database(mongo_client, settings)
        await database.command("ping")
        print(f"[OK] MongoDB reachable (database '{database.name}')")
        for collection in (CUSTOMERS, ORDERS, PRODUCTS):
            count = await database[collection].estimated_document_count()
            print(f"[OK] {collection}: {count} documents")
    except PyMongoError as e:
        print(f"[FAIL] MongoDB connection failed: {e}")
        print("       Check MONGO_URI in your .env file")
        status = 1
    finally:
        await mongo_client.close()

    redis_client = create_redis_client(settings)
    try:
        if await RedisCacheStore(redis_client).ping():
            print("[OK] Redis reachable")
        else:
            print("[WARN] Redis unreachable; analytics will run uncached")
    finally:
        await redis_client.aclose()

    print()
    print("Service check completed." if status == 0 else "Service check failed.")
    return status


if __name__ == "__main__":
    sys.exit(asyncio.run(check_services()))
