"""Bulk CSV import of customers, orders and products (administrative)."""

from salesgraph.features.importer.schemas import ImportSummary
from salesgraph.features.importer.service import import_directory, read_csv_documents

__all__ = [
    "ImportSummary",
    "import_directory",
    "read_csv_documents",
]
