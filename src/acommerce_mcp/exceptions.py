"""Common exceptions for the acommerce-mcp package."""

from typing import Any, Optional


class ACommerceError(Exception):
    """Raised when the aCommerce API returns an error."""

    def __init__(self, message: str, error_code: Optional[str] = None, details: Optional[dict] = None) -> None:
        super().__init__(message)
        self.error_code = error_code
        self.details = details or {}


class AuthError(ACommerceError):
    """Raised when the identity endpoint rejects or cannot be reached."""

    def __init__(self, message: str, status_code: Optional[int] = None, details: Optional[dict] = None) -> None:
        super().__init__(message, error_code="auth_failed", details=details)
        self.status_code = status_code


class HttpError(ACommerceError):
    """Raised when a resource endpoint answers with a non-2xx status."""

    def __init__(self, message: str, status_code: int, body: Any = None) -> None:
        if status_code in (401, 403):
            error_code = "auth_failed"
        elif status_code == 404:
            error_code = "not_found"
        else:
            error_code = "api_error"
        super().__init__(message, error_code=error_code)
        self.status_code = status_code
        self.body = body


class NetworkError(ACommerceError):
    """Raised on transport-level failures (connection, timeout, TLS)."""

    def __init__(self, message: str) -> None:
        super().__init__(message, error_code="network_error")


class PaginationError(ACommerceError):
    """Raised when an inventory walk has to stop before the last page."""

    def __init__(self, message: str, pages_fetched: int = 0) -> None:
        super().__init__(message, error_code="pagination_aborted")
        self.pages_fetched = pages_fetched
