"""Input validation utilities for aCommerce API parameters."""

from datetime import datetime
from typing import Any, List, Optional

from ..constants import VALID_ROOTS


def validate_identifier(value: Any) -> bool:
    """Validate a path identifier (channel, partner, order ID).

    Args:
        value: The identifier to validate

    Returns:
        True if identifier can be placed in a URL path segment
    """
    if isinstance(value, bool) or not isinstance(value, (str, int)):
        return False

    text = str(value).strip()
    if not text:
        return False

    # Identifiers are single path segments
    forbidden_chars = ["/", "?", "#", "\\"]
    return not any(char in text for char in forbidden_chars)


def validate_iso8601_date(date_string: str) -> bool:
    """Validate ISO 8601 date format.

    Args:
        date_string: Date string to validate

    Returns:
        True if date format is valid
    """
    try:
        # Handle both with and without 'Z' suffix
        if date_string.endswith('Z'):
            datetime.fromisoformat(date_string.replace('Z', '+00:00'))
        else:
            datetime.fromisoformat(date_string)
        return True
    except (ValueError, TypeError, AttributeError):
        return False


def validate_page(page: Any) -> bool:
    """Validate an inventory page number.

    None, 0 and False all mean "no page" and are accepted.

    Args:
        page: The page number to validate

    Returns:
        True if page is valid
    """
    if page is None or page is False:
        return True
    return isinstance(page, int) and not isinstance(page, bool) and page >= 0


def validate_root(root: str) -> bool:
    """Validate an endpoint root name (identity, fulfillment, shipping)."""
    return root in VALID_ROOTS


def validate_order_payload(payload: Any) -> bool:
    """Validate an order body. Orders are opaque JSON objects."""
    return isinstance(payload, dict)


def validate_inventory_request(
    channel_id: Any, partner_id: Any, since: Optional[Any], page: Any
) -> List[str]:
    """Validate inventory request parameters.

    Args:
        channel_id: Channel ID
        partner_id: Partner (merchant) ID
        since: Earliest update datetime, ISO 8601 string or datetime
        page: Page number

    Returns:
        List of validation error messages
    """
    errors = []

    if not validate_identifier(channel_id):
        errors.append(f"Invalid channel_id: {channel_id!r}")

    if not validate_identifier(partner_id):
        errors.append(f"Invalid partner_id: {partner_id!r}")

    if since is not None and not isinstance(since, datetime) and not validate_iso8601_date(since):
        errors.append(f"since must be an ISO 8601 datetime, got {since!r}")

    if not validate_page(page):
        errors.append(f"page must be a non-negative integer, got {page!r}")

    return errors
