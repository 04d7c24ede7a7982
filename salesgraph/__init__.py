"""SalesGraph: GraphQL sales-analytics service over MongoDB with a Redis side cache."""
