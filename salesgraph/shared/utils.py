"""Shared utility functions."""

import math
from datetime import UTC, datetime
from typing import Any

import pydantic

from salesgraph.core.exceptions import ValidationError


def total_pages(total: int, page_size: int) -> int:
    """Number of pages needed for ``total`` items (0 when there are none)."""
    return math.ceil(total / page_size) if total > 0 else 0


def parse_timestamp(value: str) -> datetime:
    """Parse an ISO-8601 date or date-time string into an aware UTC datetime.

    Date-only strings and naive date-times are taken as UTC.

    Raises:
        ValueError: If the string is not ISO-8601.
    """
    text = value.strip()
    if not text:
        raise ValueError("empty date string")
    parsed = datetime.fromisoformat(text)
    if parsed.tzinfo is None:
        return parsed.replace(tzinfo=UTC)
    return parsed.astimezone(UTC)


def to_iso(value: datetime) -> str:
    """Format a timestamp as ``YYYY-MM-DDTHH:MM:SS.mmmZ`` in UTC."""
    if value.tzinfo is None:
        value = value.replace(tzinfo=UTC)
    return value.astimezone(UTC).isoformat(timespec="milliseconds").replace("+00:00", "Z")


def validate_params[M: pydantic.BaseModel](model: type[M], **values: Any) -> M:
    """Validate caller input, converting pydantic failures into ValidationError."""
    try:
        return model.model_validate(values)
    except pydantic.ValidationError as e:
        raise ValidationError.from_pydantic(e) from e
