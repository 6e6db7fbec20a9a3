"""Inventory allocation API client for aCommerce fulfillment."""

import logging
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Dict, Iterator, List, Optional, Union
from urllib.parse import parse_qs, urlparse

from requests.utils import parse_header_links

from ..constants import API_PATHS, DATETIME_FORMAT, DEFAULT_MAX_INVENTORY_PAGES
from ..exceptions import ACommerceError, HttpError, PaginationError
from ..utils.validators import validate_inventory_request
from .base import BaseAPIClient

logger = logging.getLogger(__name__)

Since = Union[str, datetime, None]


@dataclass
class InventoryPage:
    """One page of allocation records and its navigation markers."""

    items: List[Any] = field(default_factory=list)
    page: Optional[int] = None
    next_page: Optional[int] = None
    prev_page: Optional[int] = None

    @property
    def has_next(self) -> bool:
        return self.next_page is not None


def normalize_page(page: Optional[int]) -> Optional[int]:
    """Map the "no page" values (None, 0, False) to None."""
    if page is None or page is False or page == 0:
        return None
    return int(page)


def format_since(since: Since) -> Optional[str]:
    """Render a datetime in the aCommerce wire format, pass strings through.

    Naive datetimes are taken to be UTC.
    """
    if since is None or isinstance(since, str):
        return since

    if since.tzinfo is not None:
        since = since.astimezone(timezone.utc)
    return since.strftime(DATETIME_FORMAT) + f".{since.microsecond // 1000:03d}Z"


def link_page(link_header: str, rel: str, current_page: Optional[int]) -> Optional[int]:
    """Find the page number a Link header points to for rel.

    The page query parameter of the matching link URL is used when present.
    Otherwise a header that merely mentions rel is read as "current page +/- 1",
    with an omitted current page counting as page 1.

    Args:
        link_header: Raw Link header value
        rel: "next" or "prev"
        current_page: The page that was requested

    Returns:
        Page number, or None when there is no such page
    """
    if not link_header or rel not in link_header:
        return None

    for link in parse_header_links(link_header):
        if rel not in link.get("rel", "").split():
            continue
        values = parse_qs(urlparse(link.get("url", "")).query).get("page")
        if values and values[0].isdigit():
            return int(values[0])

    base = current_page or 1
    candidate = base + 1 if rel == "next" else base - 1
    return candidate if candidate >= 1 else None


class InventoryAPIClient(BaseAPIClient):
    """Client for aCommerce inventory allocation by merchant."""

    def __init__(self, *args: Any, max_pages: int = DEFAULT_MAX_INVENTORY_PAGES, **kwargs: Any) -> None:
        super().__init__(*args, **kwargs)
        self.max_pages = max_pages

    def get_api_root(self) -> str:
        """Return the endpoint root for inventory operations."""
        return "fulfillment"

    def fetch_page(
        self,
        channel_id: Union[str, int],
        partner_id: Union[str, int],
        since: Since = None,
        page: Optional[int] = None,
    ) -> InventoryPage:
        """Fetch a single page of allocation records.

        Args:
            channel_id: Channel ID
            partner_id: Partner (merchant) ID
            since: Earliest updatedDateTime of the records to return,
                ISO 8601 string or datetime
            page: Page number, None/0/False lets the server default to page 1

        Returns:
            The page with its next/prev markers

        Raises:
            ValueError: For invalid parameters
            HttpError: For error responses
            NetworkError: For transport failures
        """
        errors = validate_inventory_request(channel_id, partner_id, since, page)
        if errors:
            raise ValueError("; ".join(errors))

        page = normalize_page(page)
        path = API_PATHS["inventory"].format(channel_id=channel_id, partner_id=partner_id)
        params = {"since": format_since(since), "page": page}

        response = self._send("GET", path, params=params)
        body = self._decode(response, "GET", path)

        if body is None:
            items: List[Any] = []
        elif isinstance(body, list):
            items = body
        else:
            raise HttpError(
                f"GET {path} returned {type(body).__name__}, expected a list",
                status_code=response.status_code,
                body=body,
            )

        link = response.headers.get("Link", "")
        return InventoryPage(
            items=items,
            page=page,
            next_page=link_page(link, "next", page),
            prev_page=link_page(link, "prev", page),
        )

    def get_inventory_page(
        self,
        channel_id: Union[str, int],
        partner_id: Union[str, int],
        since: Since = None,
        page: Optional[int] = None,
    ) -> Dict[str, Any]:
        """Get one inventory page as a formatted response.

        Returns:
            Dict containing the formatted response
        """
        try:
            result = self.fetch_page(channel_id, partner_id, since, page)
        except ValueError as e:
            return self._format_error_response("invalid_input", "Input validation failed", details=str(e).split("; "))
        except ACommerceError as e:
            logger.error(f"Error fetching inventory page {page} for partner {partner_id}: {e}")
            return self._handle_api_error(e)

        return self._format_success_response(
            {"inventory": result.items},
            metadata={
                "channel_id": str(channel_id),
                "partner_id": str(partner_id),
                "page": result.page or 1,
                "next_page": result.next_page,
                "prev_page": result.prev_page,
                "items_count": len(result.items),
            },
        )

    def iter_pages(
        self,
        channel_id: Union[str, int],
        partner_id: Union[str, int],
        since: Since = None,
        start_page: Optional[int] = None,
        max_pages: Optional[int] = None,
    ) -> Iterator[InventoryPage]:
        """Yield pages in order until one has no items or no next marker.

        Raises:
            PaginationError: When a next page was already visited or the
                max_pages guard is reached with more pages announced
        """
        max_pages = max_pages or self.max_pages
        visited: set[int] = set()
        page = normalize_page(start_page)

        while True:
            current = page or 1
            if current in visited:
                raise PaginationError(
                    f"Link header points back to page {current}, stopping",
                    pages_fetched=len(visited),
                )
            if len(visited) >= max_pages:
                raise PaginationError(
                    f"Stopped after {max_pages} pages with more pages announced",
                    pages_fetched=len(visited),
                )

            result = self.fetch_page(channel_id, partner_id, since, page)
            visited.add(current)
            yield result

            if not result.items or not result.has_next:
                return
            page = result.next_page

    def fetch_all(
        self,
        channel_id: Union[str, int],
        partner_id: Union[str, int],
        since: Since = None,
        start_page: Optional[int] = None,
        max_pages: Optional[int] = None,
    ) -> Dict[str, Any]:
        """Fetch every inventory page and aggregate the records.

        Pages are walked strictly in sequence. When the walk stops early the
        error response carries the records gathered so far in partial_data.

        Args:
            channel_id: Channel ID
            partner_id: Partner (merchant) ID
            since: Earliest updatedDateTime of the records to return
            start_page: First page to fetch
            max_pages: Override of the page guard

        Returns:
            Dict containing the formatted response
        """
        errors = validate_inventory_request(channel_id, partner_id, since, start_page)
        if errors:
            return self._format_error_response("invalid_input", "Input validation failed", details=errors)

        inventory: List[Any] = []
        pages_fetched = 0

        try:
            for result in self.iter_pages(channel_id, partner_id, since, start_page, max_pages):
                inventory.extend(result.items)
                pages_fetched += 1
        except PaginationError as e:
            logger.warning(f"Inventory walk for partner {partner_id} aborted: {e}")
            return self._format_error_response(
                "pagination_aborted",
                str(e),
                partial_data={"inventory": inventory},
                pages_fetched=pages_fetched,
            )
        except ACommerceError as e:
            logger.error(f"Inventory walk for partner {partner_id} failed after {pages_fetched} pages: {e}")
            response = self._handle_api_error(e)
            response["partial_data"] = {"inventory": inventory}
            response["pages_fetched"] = pages_fetched
            return response

        return self._format_success_response(
            {"inventory": inventory},
            metadata={
                "channel_id": str(channel_id),
                "partner_id": str(partner_id),
                "items_count": len(inventory),
                "total_api_calls": pages_fetched,
            },
        )
