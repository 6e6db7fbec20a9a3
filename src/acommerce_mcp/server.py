#!/usr/bin/env python3
"""MCP Server for the aCommerce fulfillment and shipping API using FastMCP.

This server exposes the aCommerce channel APIs as tools: merchant listing,
inventory allocation (single page or every page), sales orders and shipping
orders. Credentials and environment come from ACOM_* environment variables.
"""

import json
from typing import Annotated, Any, Optional

from dotenv import load_dotenv
from fastmcp import FastMCP

from .client import ACommerceClient
from .config import Settings
from .utils.decorators import handle_api_errors

# Load environment variables from .env file
load_dotenv()

mcp: FastMCP = FastMCP(
    "acommerce-mcp",
    instructions="Tools for the aCommerce fulfillment and shipping API: merchants, inventory allocation, sales orders and shipping orders.",
)

# One client per process, built on first use
_client: Optional[ACommerceClient] = None


def get_client() -> ACommerceClient:
    """Return the process-wide client, creating it from the environment."""
    global _client
    if _client is None:
        _client = ACommerceClient(settings=Settings.from_env())
    return _client


def _dump(result: dict[str, Any]) -> str:
    return json.dumps(result, indent=2, default=str)


def _load_order(order: str) -> Any:
    payload = json.loads(order)
    if not isinstance(payload, dict):
        raise ValueError("order must be a JSON object")
    return payload


@handle_api_errors
def get_merchants(
    channel_id: Annotated[str, "aCommerce channel ID (e.g., 'frisianflag')"],
) -> str:
    """List the merchants (partners) selling on an aCommerce channel."""
    return _dump(get_client().merchants_list(channel_id))


@handle_api_errors
def get_inventory(
    channel_id: Annotated[str, "aCommerce channel ID"],
    partner_id: Annotated[str, "Partner (merchant) ID whose allocation to read"],
    since: Annotated[
        str,
        "Only records updated after this ISO 8601 datetime (e.g., '2025-01-01T00:00:00.000Z'). Leave empty for all.",
    ] = "",
    page: Annotated[int, "Page number. 0 lets the server start at page 1."] = 0,
) -> str:
    """Get one page of inventory allocation for a partner.

    The response metadata carries next_page/prev_page when the API announces
    further pages.
    """
    return _dump(get_client().inventory_page(channel_id, partner_id, since or None, page))


@handle_api_errors
def get_all_inventory(
    channel_id: Annotated[str, "aCommerce channel ID"],
    partner_id: Annotated[str, "Partner (merchant) ID whose allocation to read"],
    since: Annotated[str, "Only records updated after this ISO 8601 datetime. Leave empty for all."] = "",
    start_page: Annotated[int, "First page to fetch. 0 starts at the server default."] = 0,
) -> str:
    """Walk every inventory page for a partner and return all allocation records.

    If the walk stops early the error response includes partial_data with
    the records gathered so far.
    """
    return _dump(get_client().all_inventory(channel_id, partner_id, since or None, start_page))


@handle_api_errors
def get_sales_order(
    channel_id: Annotated[str, "aCommerce channel ID"],
    order_id: Annotated[str, "Sales order ID"],
) -> str:
    """Get a sales order's detail."""
    return _dump(get_client().get_sales_order(channel_id, order_id))


@handle_api_errors
def create_sales_order(
    channel_id: Annotated[str, "aCommerce channel ID"],
    order_id: Annotated[str, "Sales order ID chosen by the channel"],
    order: Annotated[str, "Sales order body as a JSON object string"],
) -> str:
    """Create or update a sales order."""
    return _dump(get_client().create_sales_order(channel_id, order_id, _load_order(order)))


@handle_api_errors
def get_shipping_order(
    partner_id: Annotated[str, "Shipping partner ID"],
    shipping_order_id: Annotated[str, "Shipping order ID"],
) -> str:
    """Get a shipping order."""
    return _dump(get_client().get_shipping_order(partner_id, shipping_order_id))


@handle_api_errors
def create_shipping_order(
    partner_id: Annotated[str, "Shipping partner ID"],
    shipping_order_id: Annotated[str, "Shipping order ID"],
    order: Annotated[str, "Shipping order body as a JSON object string"],
) -> str:
    """Create or update a shipping order."""
    return _dump(get_client().create_shipping_order(partner_id, shipping_order_id, _load_order(order)))


# Registered without decorators: fastmcp 2 turns a decorated function into a
# FunctionTool object, and the functions must stay directly callable.
TOOLS = [
    get_merchants,
    get_inventory,
    get_all_inventory,
    get_sales_order,
    create_sales_order,
    get_shipping_order,
    create_shipping_order,
]

for _tool in TOOLS:
    mcp.tool()(_tool)


def main() -> None:
    """Entry point for the MCP server."""
    mcp.run()


if __name__ == "__main__":
    main()
