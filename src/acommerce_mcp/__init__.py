"""aCommerce fulfillment and shipping API integration."""

from .api.auth import Credentials, TokenManager
from .client import ACommerceClient
from .config import Settings
from .exceptions import ACommerceError, AuthError, HttpError, NetworkError, PaginationError
from .utils.cache import InMemoryTokenCache, TokenCache

__all__ = [
    "ACommerceClient",
    "ACommerceError",
    "AuthError",
    "Credentials",
    "HttpError",
    "InMemoryTokenCache",
    "NetworkError",
    "PaginationError",
    "Settings",
    "TokenCache",
    "TokenManager",
]
