"""GraphQL API surface over the analytics and orders services."""

from salesgraph.api.deps import GraphQLContext, get_context
from salesgraph.api.schema import SalesGraphSchema, build_schema

__all__ = [
    "GraphQLContext",
    "SalesGraphSchema",
    "build_schema",
    "get_context",
]
