"""FastAPI application entry point serving the GraphQL API."""

from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI
from strawberry.fastapi import GraphQLRouter

from salesgraph.api import build_schema, get_context
from salesgraph.core.cache import CacheAside, RedisCacheStore, create_redis_client
from salesgraph.core.config import get_settings
from salesgraph.core.database import MongoQueryExecutor, create_mongo_client, get_database
from salesgraph.core.exceptions import register_exception_handlers
from salesgraph.core.health import router as health_router
from salesgraph.core.logging import configure_logging, get_logger
from salesgraph.core.middleware import RequestIdMiddleware

logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Open the MongoDB and Redis clients for the application's lifetime.

    Args:
        app: FastAPI application; clients and helpers are kept on ``app.state``.

    Yields:
        None after startup, closes the clients on shutdown.
    """
    settings = get_settings()

    configure_logging()
    logger.info(
        "app.startup_started",
        app_name=settings.app_name,
        app_env=settings.app_env,
        debug=settings.debug,
    )

    mongo_client = create_mongo_client(settings)
    redis_client = create_redis_client(settings)

    app.state.mongo_db = get_database(mongo_client, settings)
    app.state.query_executor = MongoQueryExecutor(app.state.mongo_db)
    app.state.cache_store = RedisCacheStore(redis_client)
    app.state.cache = CacheAside(app.state.cache_store, settings.cache_ttl_seconds)

    logger.info(
        "app.startup_completed",
        database=app.state.mongo_db.name,
        cache_ttl_seconds=settings.cache_ttl_seconds,
    )

    try:
        yield
    finally:
        await redis_client.aclose()
        await mongo_client.close()
        logger.info("app.shutdown_completed")


def create_app() -> FastAPI:
    """Create and configure FastAPI application.

    Returns:
        Configured FastAPI application instance.
    """
    settings = get_settings()

    app = FastAPI(
        title=settings.app_name,
        description="GraphQL sales analytics over customers, orders and products",
        version="0.1.0",
        lifespan=lifespan,
        docs_url="/docs" if settings.is_development else None,
        redoc_url=None,
    )

    app.add_middleware(RequestIdMiddleware)
    register_exception_handlers(app)

    graphql_router: GraphQLRouter = GraphQLRouter(
        build_schema(settings),
        context_getter=get_context,
        graphql_ide="graphiql" if settings.is_development else None,
    )

    app.include_router(health_router)
    app.include_router(graphql_router, prefix=settings.graphql_path)

    return app


app = create_app()


def run() -> None:
    """Serve the application with uvicorn on the configured host and port."""
    settings = get_settings()
    uvicorn.run(
        "salesgraph.main:app",
        host=settings.api_host,
        port=settings.api_port,
        reload=settings.debug,
    )
