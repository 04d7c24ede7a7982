"""Application exceptions and FastAPI exception handlers.

Domain absences (unknown customer, customer without orders, missing product
on order placement) are never raised; they are modelled as null results or
``success: false`` payloads. Exceptions here cover caller errors and
upstream failures only.
"""

from typing import Any

import pydantic
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from salesgraph.core.logging import get_logger, request_id_ctx

logger = get_logger(__name__)


# =============================================================================
# Exception Classes
# =============================================================================


class SalesGraphError(Exception):
    """Base exception for SalesGraph application errors.

    Each subclass carries a machine-readable ``code`` that is reported in
    GraphQL error extensions and REST problem details.
    """

    def __init__(
        self,
        message: str,
        code: str = "INTERNAL_ERROR",
        status_code: int = 500,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.code = code
        self.status_code = status_code
        self.details = details or {}

    @property
    def title(self) -> str:
        """Short summary of the problem type."""
        return self.code.replace("_", " ").title()

    @property
    def extensions(self) -> dict[str, Any]:
        """GraphQL error extensions (picked up by graphql-core from the original error)."""
        extensions: dict[str, Any] = {"code": self.code}
        if self.details:
            extensions["details"] = self.details
        return extensions


class ValidationError(SalesGraphError):
    """Malformed caller input (non-positive paging values, bad dates, ...)."""

    def __init__(
        self,
        message: str = "Validation failed",
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(
            message=message,
            code="VALIDATION_ERROR",
            status_code=422,
            details=details,
        )

    @classmethod
    def from_pydantic(cls, exc: pydantic.ValidationError) -> "ValidationError":
        """Build from a pydantic error, keeping one entry per failing field."""
        field_errors: list[dict[str, str]] = []
        for error in exc.errors():
            field_errors.append(
                {
                    "field": ".".join(str(part) for part in error.get("loc", ())),
                    "message": str(error.get("msg", "Validation failed")),
                    "type": str(error.get("type", "unknown")),
                }
            )
        summary = "; ".join(
            f"{e['field']}: {e['message']}" if e["field"] else e["message"] for e in field_errors
        )
        return cls(message=f"Invalid input: {summary}", details={"errors": field_errors})


class DatabaseError(SalesGraphError):
    """Document store operation failed or the store is unreachable."""

    def __init__(
        self,
        message: str = "Database operation failed",
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(
            message=message,
            code="DATABASE_ERROR",
            status_code=503,
            details=details,
        )


class CacheUnavailableError(SalesGraphError):
    """Side cache operation failed.

    Raised by cache store implementations. The analytics layer treats it as
    a cache miss and never lets it reach the caller.
    """

    def __init__(
        self,
        message: str = "Cache store unavailable",
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(
            message=message,
            code="CACHE_UNAVAILABLE",
            status_code=503,
            details=details,
        )


# =============================================================================
# Exception Handlers
# =============================================================================


def problem_response(
    status: int,
    title: str,
    detail: str | None = None,
    error_code: str = "INTERNAL_ERROR",
    errors: list[dict[str, Any]] | None = None,
) -> JSONResponse:
    """Create an ``application/problem+json`` response carrying the request id."""
    request_id = request_id_ctx.get()
    content: dict[str, Any] = {
        "type": f"/errors/{error_code.lower().replace('_', '-')}",
        "title": title,
        "status": status,
        "code": error_code,
    }
    if detail is not None:
        content["detail"] = detail
    if errors:
        content["errors"] = errors
    if request_id:
        content["request_id"] = request_id
    return JSONResponse(
        status_code=status,
        content=content,
        media_type="application/problem+json",
    )


async def salesgraph_exception_handler(
    _request: Request,
    exc: SalesGraphError,
) -> JSONResponse:
    """Handle SalesGraphError exceptions raised outside GraphQL resolvers."""
    logger.error(
        "app.error_handled",
        error=exc.message,
        error_type=type(exc).__name__,
        error_code=exc.code,
        status_code=exc.status_code,
        details=exc.details,
    )

    return problem_response(
        status=exc.status_code,
        title=exc.title,
        detail=exc.message,
        error_code=exc.code,
        errors=exc.details.get("errors"),
    )


async def unhandled_exception_handler(
    request: Request,
    exc: Exception,
) -> JSONResponse:
    """Handle unexpected exceptions with a generic problem response."""
    logger.error(
        "app.unhandled_error",
        error=str(exc),
        error_type=type(exc).__name__,
        path=str(request.url.path),
        exc_info=True,
    )

    return problem_response(
        status=500,
        title="Internal Server Error",
        detail="An unexpected error occurred. Please try again later or "
        "contact support with the request_id.",
        error_code="INTERNAL_ERROR",
    )


def register_exception_handlers(app: FastAPI) -> None:
    """Register exception handlers with FastAPI app."""
    app.add_exception_handler(SalesGraphError, salesgraph_exception_handler)  # type: ignore[arg-type]
    app.add_exception_handler(Exception, unhandled_exception_handler)
