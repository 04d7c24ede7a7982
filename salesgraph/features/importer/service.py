"""Bulk loader replacing each collection with the contents of a CSV file.

This is an administrative action, not part of request serving. All three
files are read and validated before anything is written, so a bad row
leaves the existing data untouched.
"""

from __future__ import annotations

import csv
from pathlib import Path
from typing import Any

import pydantic

from salesgraph.core.database import CUSTOMERS, ORDERS, PRODUCTS, QueryExecutor
from salesgraph.core.exceptions import ValidationError
from salesgraph.core.logging import get_logger
from salesgraph.features.importer.schemas import (
    CustomerRow,
    ImportRowError,
    ImportSummary,
    OrderRow,
    ProductRow,
)
from salesgraph.shared.models import DocumentModel

logger = get_logger(__name__)

# (collection, file name, row model) in load order
IMPORT_PLAN: list[tuple[str, str, type[DocumentModel]]] = [
    (CUSTOMERS, "customers.csv", CustomerRow),
    (ORDERS, "orders.csv", OrderRow),
    (PRODUCTS, "products.csv", ProductRow),
]


def read_csv_documents(
    path: Path,
    model: type[DocumentModel],
) -> tuple[list[dict[str, Any]], list[ImportRowError]]:
    """Parse and validate every row of a CSV file.

    Args:
        path: CSV file with a header row.
        model: Row contract used to validate and coerce each row.

    Returns:
        Documents ready for insertion, and the errors of rejected rows.

    Raises:
        FileNotFoundError: If the file doesn't exist.
    """
    if not path.exists():
        raise FileNotFoundError(f"CSV file not found: {path}")

    documents: list[dict[str, Any]] = []
    errors: list[ImportRowError] = []

    with path.open(newline="", encoding="utf-8") as f:
        for idx, row in enumerate(csv.DictReader(f)):
            try:
                documents.append(model.model_validate(row).to_document())
            except pydantic.ValidationError as e:
                errors.append(
                    ImportRowError(
                        file=path.name,
                        row_index=idx,
                        error_message="; ".join(
                            f"{'.'.join(str(p) for p in err['loc'])}: {err['msg']}"
                            for err in e.errors()
                        ),
                    )
                )

    return documents, errors


async def import_directory(
    executor: QueryExecutor,
    data_dir: Path,
    dry_run: bool = False,
) -> ImportSummary:
    """Replace customers, orders and products with the CSVs in ``data_dir``.

    Args:
        executor: Query executor for the target database.
        data_dir: Directory holding customers.csv, orders.csv, products.csv.
        dry_run: Validate and count without writing.

    Returns:
        Per-collection document counts.

    Raises:
        FileNotFoundError: If a CSV file is missing.
        ValidationError: If any row fails validation (nothing is written).
    """
    logger.info("importer.started", data_dir=str(data_dir), dry_run=dry_run)

    loaded: list[tuple[str, list[dict[str, Any]]]] = []
    errors: list[ImportRowError] = []
    for collection, file_name, model in IMPORT_PLAN:
        documents, file_errors = read_csv_documents(data_dir / file_name, model)
        loaded.append((collection, documents))
        errors.extend(file_errors)

    if errors:
        logger.warning("importer.rows_rejected", error_count=len(errors))
        raise ValidationError(
            message=f"Import aborted: {len(errors)} invalid row(s)",
            details={"errors": [e.model_dump() for e in errors]},
        )

    summary = ImportSummary(dry_run=dry_run)
    for collection, documents in loaded:
        if dry_run:
            summary.counts[collection] = len(documents)
            continue
        summary.counts[collection] = await executor.replace_all(collection, documents)
        logger.info(
            "importer.collection_replaced",
            collection=collection,
            count=summary.counts[collection],
        )

    logger.info("importer.completed", counts=summary.counts, dry_run=dry_run)
    return summary
