"""Constants and configuration for the aCommerce API."""

from datetime import timedelta

# Endpoint roots by environment
ENDPOINTS = {
    "production": {
        "identity": "https://api.acommerce.asia",
        "fulfillment": "https://fulfillment.api.acommerce.asia",
        "shipping": "https://shipping.api.acommerce.asia",
    },
    "sandbox": {
        "identity": "https://api.acommercedev.com",
        "fulfillment": "https://fulfillment.api.acommercedev.com",
        "shipping": "https://shipping.api.acommercedev.com",
    },
}

# Valid endpoint root names (extracted from ENDPOINTS)
VALID_ROOTS = set(ENDPOINTS["production"])

# API Paths
API_PATHS = {
    "token": "identity/token",
    "merchants": "channel/{channel_id}/merchants",
    "inventory": "channel/{channel_id}/allocation/merchant/{partner_id}",
    "sales_order": "channel/{channel_id}/order/{order_id}",
    "shipping_order": "partner/{partner_id}/order/{shipping_order_id}",
}

# Header carrying the bearer token
TOKEN_HEADER = "X-Subject-Token"

# Prefix of the token cache key
CACHE_KEY_PREFIX = "acommerce-"

# Token TTL, counted from the moment of caching
DEFAULT_TOKEN_TTL = timedelta(hours=2)

# Default request timeout (seconds)
DEFAULT_TIMEOUT = 30

# Default user agent when the environment does not name the application
DEFAULT_USER_AGENT = "acommerce-mcp/1.0 (Language=Python)"

# Upper bound of pages walked by a full inventory fetch
DEFAULT_MAX_INVENTORY_PAGES = 500

# aCommerce datetime wire format up to the seconds, milliseconds and Z follow
DATETIME_FORMAT = "%Y-%m-%dT%H:%M:%S"

# Error codes carried by failure results
ERROR_CODES = {
    "auth_failed": "Authentication issues",
    "not_found": "Resource does not exist",
    "invalid_input": "Validation failures",
    "api_error": "aCommerce API returned an error",
    "network_error": "Connection issues",
    "pagination_aborted": "Inventory pagination stopped early",
    "unexpected_error": "Unhandled exceptions",
}
