# =============================================================================
# app/exceptions.py - Custom Exception Handlers
# =============================================================================
# Centralized exception handling for the storefront API.
# Errors carry a machine-readable code and a suggestion for the caller.
# =============================================================================

from typing import Any

from fastapi import Request
from fastapi.responses import JSONResponse


class StorefrontException(Exception):
    """
    Base exception for the storefront API.

    All custom exceptions inherit from this class.
    """

    def __init__(
        self,
        message: str,
        code: str = "STOREFRONT_ERROR",
        status_code: int = 500,
        suggestion: str | None = None,
        details: dict[str, Any] | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.code = code
        self.status_code = status_code
        self.suggestion = suggestion
        self.details = details or {}

    def to_dict(self) -> dict[str, Any]:
        """Convert exception to API response dict."""
        result = {
            "detail": self.message,
            "code": self.code,
        }
        if self.suggestion:
            result["suggestion"] = self.suggestion
        if self.details:
            result["details"] = self.details
        return result


# =============================================================================
# Catalog Exceptions
# =============================================================================

class ProductNotFoundError(StorefrontException):
    """Raised when a product ID doesn't exist or is not active."""

    def __init__(self, product_id: str):
        super().__init__(
            message=f"Product not found: {product_id}",
            code="PRODUCT_NOT_FOUND",
            status_code=404,
            suggestion="Browse GET /api/v1/products for available products",
            details={"product_id": product_id}
        )


class BlogPostNotFoundError(StorefrontException):
    """Raised when no published post has the requested slug."""

    def __init__(self, slug: str):
        super().__init__(
            message=f"Blog post not found: {slug}",
            code="BLOG_POST_NOT_FOUND",
            status_code=404,
            suggestion="Check the slug or list posts with GET /api/v1/blog",
            details={"slug": slug}
        )


# =============================================================================
# Analytics Exceptions
# =============================================================================

class VisitorSessionNotFoundError(StorefrontException):
    """Raised when a visitor session ID is unknown."""

    def __init__(self, session_id: str):
        super().__init__(
            message=f"Visitor session not found: {session_id}",
            code="VISITOR_SESSION_NOT_FOUND",
            status_code=404,
            suggestion="Start a session with POST /api/v1/analytics/sessions first",
            details={"session_id": session_id}
        )


class VisitorSessionConflictError(StorefrontException):
    """Raised when a session keeps changing underneath an update."""

    def __init__(self, session_id: str, attempts: int):
        super().__init__(
            message=f"Visitor session {session_id} was modified concurrently",
            code="VISITOR_SESSION_CONFLICT",
            status_code=409,
            suggestion="Retry the request",
            details={"session_id": session_id, "attempts": attempts}
        )


# =============================================================================
# Backend Exceptions
# =============================================================================

class SubmissionFailedError(StorefrontException):
    """Raised when a form submission could not be stored."""

    def __init__(self, form: str, error: str):
        super().__init__(
            message=f"Failed to submit {form} form: {error}",
            code="SUBMISSION_FAILED",
            status_code=502,
            suggestion="Please try again in a moment",
            details={"form": form}
        )


class BackendUnavailableError(StorefrontException):
    """Raised when the hosted backend cannot serve a read."""

    def __init__(self, resource: str, error: str):
        super().__init__(
            message=f"Failed to load {resource}",
            code="BACKEND_UNAVAILABLE",
            status_code=503,
            suggestion="Reload the page to retry",
            details={"resource": resource, "error": error}
        )


# =============================================================================
# Exception Handlers
# =============================================================================

async def storefront_exception_handler(
    request: Request,
    exc: StorefrontException
) -> JSONResponse:
    """
    Convert StorefrontException to JSON response.

    Returns structured error with detail, code, suggestion and details.
    """
    return JSONResponse(
        status_code=exc.status_code,
        content=exc.to_dict()
    )
