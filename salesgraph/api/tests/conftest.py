"""Test fixtures for the GraphQL API."""

import pytest

from salesgraph.api.deps import GraphQLContext
from salesgraph.api.schema import build_schema
from salesgraph.core.config import Settings
from salesgraph.core.database import CUSTOMERS, PRODUCTS


@pytest.fixture
def schema():
    """Schema as built for the testing environment (errors unmasked)."""
    return build_schema(Settings(app_env="testing"))


@pytest.fixture
def production_schema():
    """Schema as built for production (unexpected errors masked)."""
    return build_schema(Settings(app_env="production"))


@pytest.fixture
def context(analytics_service, order_service):
    """Resolver context over the in-memory doubles."""
    return GraphQLContext(analytics=analytics_service, orders=order_service)


@pytest.fixture
def seeded_catalog(fake_executor):
    """One customer and two products priced 10.0 and 5.0."""
    fake_executor.add(CUSTOMERS, {"_id": "c1", "name": "Ada", "email": "ada@example.com"})
    fake_executor.add(
        PRODUCTS,
        {"_id": "pA", "name": "A", "category": "Tools", "price": 10.0},
        {"_id": "pB", "name": "B", "category": "Toys", "price": 5.0},
    )
    return fake_executor
