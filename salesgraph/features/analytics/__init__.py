"""Analytics module: cached aggregate queries over orders.

Customer lifetime spending, top-selling products and revenue by category
for a date range, each memoized in the side cache with a fixed TTL.
"""

from salesgraph.features.analytics.schemas import (
    CategoryRevenue,
    CustomerSpending,
    SalesAnalytics,
    TopProduct,
)
from salesgraph.features.analytics.service import AnalyticsService

__all__ = [
    "AnalyticsService",
    "CategoryRevenue",
    "CustomerSpending",
    "SalesAnalytics",
    "TopProduct",
]
