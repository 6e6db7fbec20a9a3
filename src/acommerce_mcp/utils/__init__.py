"""Utility modules for aCommerce API operations."""

from .cache import InMemoryTokenCache, TokenCache
from .decorators import handle_api_errors
from .validators import (
    validate_identifier,
    validate_inventory_request,
    validate_iso8601_date,
    validate_order_payload,
    validate_page,
    validate_root,
)

__all__ = [
    "InMemoryTokenCache",
    "TokenCache",
    "handle_api_errors",
    "validate_identifier",
    "validate_inventory_request",
    "validate_iso8601_date",
    "validate_order_payload",
    "validate_page",
    "validate_root",
]
