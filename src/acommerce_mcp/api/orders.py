"""Sales order API client for aCommerce fulfillment."""

import logging
from datetime import datetime
from typing import Any, Dict, Union

from ..constants import API_PATHS
from ..exceptions import ACommerceError
from ..utils.validators import validate_identifier, validate_order_payload
from .base import BaseAPIClient

logger = logging.getLogger(__name__)


class SalesOrdersAPIClient(BaseAPIClient):
    """Client for aCommerce sales order endpoints."""

    def get_api_root(self) -> str:
        """Return the endpoint root for sales orders."""
        return "fulfillment"

    def get_sales_order(self, channel_id: Union[str, int], order_id: Union[str, int]) -> Dict[str, Any]:
        """
        Retrieve a sales order's detail.

        Args:
            channel_id: Channel ID
            order_id: Order ID within the channel

        Returns:
            Dict containing order data
        """
        if not (validate_identifier(channel_id) and validate_identifier(order_id)):
            return self._format_error_response(
                "invalid_input", f"Invalid channel_id/order_id: {channel_id!r}/{order_id!r}"
            )

        path = API_PATHS["sales_order"].format(channel_id=channel_id, order_id=order_id)

        try:
            order = self._make_request("GET", path)
        except ACommerceError as e:
            logger.exception("Error fetching sales order %s", order_id)
            return self._handle_api_error(e)

        return self._format_success_response(
            order,
            metadata={
                "channel_id": str(channel_id),
                "order_id": str(order_id),
                "retrieved_at": datetime.now().isoformat() + "Z",
            },
        )

    def create_sales_order(
        self, channel_id: Union[str, int], order_id: Union[str, int], order: Dict[str, Any]
    ) -> Dict[str, Any]:
        """
        Create or update a sales order.

        aCommerce keys orders by the caller's order ID, so the same PUT both
        creates and updates.

        Args:
            channel_id: Channel ID
            order_id: Order ID within the channel
            order: Order body as documented by aCommerce

        Returns:
            Dict containing the API's answer
        """
        if not (validate_identifier(channel_id) and validate_identifier(order_id)):
            return self._format_error_response(
                "invalid_input", f"Invalid channel_id/order_id: {channel_id!r}/{order_id!r}"
            )
        if not validate_order_payload(order):
            return self._format_error_response("invalid_input", "order must be a JSON object")

        path = API_PATHS["sales_order"].format(channel_id=channel_id, order_id=order_id)

        try:
            logger.info(f"Submitting sales order {order_id} to channel {channel_id}")
            result = self._make_request("PUT", path, data=order)
        except ACommerceError as e:
            logger.exception("Error creating sales order %s", order_id)
            return self._handle_api_error(e)

        return self._format_success_response(
            result,
            metadata={
                "channel_id": str(channel_id),
                "order_id": str(order_id),
                "submitted_at": datetime.now().isoformat() + "Z",
            },
        )
