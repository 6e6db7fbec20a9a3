"""Shipping order API client for aCommerce shipping."""

import logging
from datetime import datetime
from typing import Any, Dict, Union

from ..constants import API_PATHS
from ..exceptions import ACommerceError
from ..utils.validators import validate_identifier, validate_order_payload
from .base import BaseAPIClient

logger = logging.getLogger(__name__)


class ShippingAPIClient(BaseAPIClient):
    """Client for aCommerce shipping orders, served from the shipping root."""

    def get_api_root(self) -> str:
        return "shipping"

    def _path(self, partner_id: Union[str, int], shipping_order_id: Union[str, int]) -> str:
        if not (validate_identifier(partner_id) and validate_identifier(shipping_order_id)):
            raise ValueError(f"Invalid partner_id/shipping_order_id: {partner_id!r}/{shipping_order_id!r}")
        return API_PATHS["shipping_order"].format(partner_id=partner_id, shipping_order_id=shipping_order_id)

    def get_shipping_order(
        self, partner_id: Union[str, int], shipping_order_id: Union[str, int]
    ) -> Dict[str, Any]:
        """Retrieve a shipping order.

        Args:
            partner_id: Shipping partner ID
            shipping_order_id: Shipping order ID

        Returns:
            Dict containing shipping order data
        """
        try:
            path = self._path(partner_id, shipping_order_id)
        except ValueError as e:
            return self._format_error_response("invalid_input", str(e))

        try:
            shipping_order = self._make_request("GET", path)
        except ACommerceError as e:
            logger.exception("Error fetching shipping order %s", shipping_order_id)
            return self._handle_api_error(e)

        return self._format_success_response(
            shipping_order,
            metadata={
                "partner_id": str(partner_id),
                "shipping_order_id": str(shipping_order_id),
                "retrieved_at": datetime.now().isoformat() + "Z",
            },
        )

    def create_shipping_order(
        self,
        partner_id: Union[str, int],
        shipping_order_id: Union[str, int],
        order: Dict[str, Any],
    ) -> Dict[str, Any]:
        """Create or update a shipping order.

        Args:
            partner_id: Shipping partner ID
            shipping_order_id: Shipping order ID
            order: Shipping order body

        Returns:
            Dict containing the API's answer
        """
        try:
            path = self._path(partner_id, shipping_order_id)
        except ValueError as e:
            return self._format_error_response("invalid_input", str(e))
        if not validate_order_payload(order):
            return self._format_error_response("invalid_input", "order must be a JSON object")

        try:
            logger.info(f"Submitting shipping order {shipping_order_id} for partner {partner_id}")
            result = self._make_request("PUT", path, data=order)
        except ACommerceError as e:
            logger.exception("Error creating shipping order %s", shipping_order_id)
            return self._handle_api_error(e)

        return self._format_success_response(
            result,
            metadata={
                "partner_id": str(partner_id),
                "shipping_order_id": str(shipping_order_id),
                "submitted_at": datetime.now().isoformat() + "Z",
            },
        )
