"""Shared Pydantic schemas."""

from pydantic import BaseModel, Field


class PaginationParams(BaseModel):
    """Pagination parameters (both strictly positive)."""

    page: int = Field(..., ge=1, description="Page number (1-indexed)")
    page_size: int = Field(..., ge=1, description="Items per page")

    @property
    def offset(self) -> int:
        """Number of documents to skip before this page."""
        return (self.page - 1) * self.page_size

    @property
    def limit(self) -> int:
        """Return page size as the query limit."""
        return self.page_size
