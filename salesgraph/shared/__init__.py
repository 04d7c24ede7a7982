"""Shared contracts and helpers used across features."""

from salesgraph.shared.models import COMPLETED_STATUS, Customer, Order, OrderLineItem, Product
from salesgraph.shared.schemas import PaginationParams
from salesgraph.shared.utils import parse_timestamp, to_iso, total_pages, validate_params

__all__ = [
    "COMPLETED_STATUS",
    "Customer",
    "Order",
    "OrderLineItem",
    "PaginationParams",
    "Product",
    "parse_timestamp",
    "to_iso",
    "total_pages",
    "validate_params",
]
