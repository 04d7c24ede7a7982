"""Aggregation pipeline builders for the analytics queries.

Each builder returns a plain list of stages so the pipelines can be
inspected in tests and run by any QueryExecutor.
"""

from datetime import datetime
from typing import Any

from salesgraph.core.database import PRODUCTS
from salesgraph.shared.models import COMPLETED_STATUS

Pipeline = list[dict[str, Any]]


def customer_spending_pipeline(customer_id: str) -> Pipeline:
    """Totals, mean and latest date over every order of one customer (any status)."""
    return [
        {"$match": {"customerId": customer_id}},
        {"$sort": {"orderDate": -1}},
        {
            "$group": {
                "_id": None,
                "totalSpent": {"$sum": "$total"},
                "averageOrderValue": {"$avg": "$total"},
                "lastOrderDate": {"$first": "$orderDate"},
            }
        },
    ]


def top_selling_products_pipeline(limit: int) -> Pipeline:
    """Units sold per product, highest first, joined to product names.

    Groups whose product is missing from the catalog are dropped by the
    ``$unwind`` after the join, so fewer than ``limit`` rows may come back.
    Equal totals are ordered by product id.
    """
    return [
        {"$unwind": "$items"},
        {
            "$group": {
                "_id": "$items.productId",
                "totalSold": {"$sum": "$items.quantity"},
            }
        },
        {"$sort": {"totalSold": -1, "_id": 1}},
        {"$limit": limit},
        {
            "$lookup": {
                "from": PRODUCTS,
                "localField": "_id",
                "foreignField": "_id",
                "as": "product",
            }
        },
        {"$unwind": "$product"},
        {
            "$project": {
                "_id": 0,
                "productId": "$_id",
                "name": "$product.name",
                "totalSold": 1,
            }
        },
    ]


def sales_analytics_pipeline(start: datetime, end: datetime) -> Pipeline:
    """Per-item revenue of completed orders in ``[start, end]``.

    Produces at most one document holding the distinct order ids and the
    ``{category, revenue}`` of every line item in pipeline order; the
    per-category fold happens in the service so first-occurrence order is
    kept.
    """
    return [
        {
            "$match": {
                "status": COMPLETED_STATUS,
                "orderDate": {"$gte": start, "$lte": end},
            }
        },
        {"$unwind": "$items"},
        {
            "$lookup": {
                "from": PRODUCTS,
                "localField": "items.productId",
                "foreignField": "_id",
                "as": "product",
            }
        },
        {"$unwind": "$product"},
        {
            "$project": {
                "orderId": "$_id",
                "category": "$product.category",
                "revenue": {"$multiply": ["$items.quantity", "$product.price"]},
            }
        },
        {
            "$group": {
                "_id": None,
                "orderIds": {"$addToSet": "$orderId"},
                "lineItems": {"$push": {"category": "$category", "revenue": "$revenue"}},
            }
        },
    ]
