"""Merchants API client for aCommerce channel operations."""

import logging
from typing import Any, Dict, Union

from ..constants import API_PATHS
from ..exceptions import ACommerceError
from ..utils.validators import validate_identifier
from .base import BaseAPIClient

logger = logging.getLogger(__name__)


class MerchantsAPIClient(BaseAPIClient):
    """Client for the channel merchant listing."""

    def get_api_root(self) -> str:
        return "fulfillment"

    def list_merchants(self, channel_id: Union[str, int]) -> Dict[str, Any]:
        """List the merchants selling on a channel.

        Args:
            channel_id: Channel ID

        Returns:
            Dict containing the formatted response
        """
        if not validate_identifier(channel_id):
            return self._format_error_response("invalid_input", f"Invalid channel_id: {channel_id!r}")

        path = API_PATHS["merchants"].format(channel_id=channel_id)

        try:
            merchants = self._make_request("GET", path)
        except ACommerceError as e:
            logger.error(f"Error listing merchants for channel {channel_id}: {e}")
            return self._handle_api_error(e)

        return self._format_success_response(
            merchants,
            metadata={
                "channel_id": str(channel_id),
                "merchant_count": len(merchants) if isinstance(merchants, list) else None,
            },
        )
