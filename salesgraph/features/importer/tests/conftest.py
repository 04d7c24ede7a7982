"""Test fixtures for the CSV bulk loader."""

import csv
import json

import pytest

CUSTOMER_HEADER = ["_id", "name", "email"]
ORDER_HEADER = ["_id", "customerId", "orderDate", "status", "items", "total"]
PRODUCT_HEADER = ["_id", "name", "category", "price"]


def write_csv(path, header, rows):
    with path.open("w", newline="", encoding="utf-8") as f:
        writer = csv.writer(f)
        writer.writerow(header)
        writer.writerows(rows)


@pytest.fixture
def sample_rows():
    """Valid rows for each file."""
    return {
        "customers": [
            ["c1", "Ada", "ada@example.com"],
            ["c2", "Grace", "grace@example.com"],
        ],
        "orders": [
            [
                "o1",
                "c1",
                "2024-03-01T10:00:00Z",
                "Completed",
                json.dumps([{"productId": "pA", "quantity": 2}]),
                "20.0",
            ],
            ["o2", "c2", "2024-03-02", "Pending", "", "0"],
        ],
        "products": [
            ["pA", "A", "Tools", "10.0"],
            ["pB", "B", "Toys", "5"],
        ],
    }


@pytest.fixture
def data_dir(tmp_path, sample_rows):
    """Directory holding valid customers.csv, orders.csv and products.csv."""
    write_csv(tmp_path / "customers.csv", CUSTOMER_HEADER, sample_rows["customers"])
    write_csv(tmp_path / "orders.csv", ORDER_HEADER, sample_rows["orders"])
    write_csv(tmp_path / "products.csv", PRODUCT_HEADER, sample_rows["products"])
    return tmp_path


@pytest.fixture
def csv_file():
    """Helper writing a CSV file with a header row."""
    return write_csv
