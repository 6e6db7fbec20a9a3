"""Entry point bundling the aCommerce resource clients."""

import logging
from typing import Any, Dict, Optional, Union

from .api.auth import Credentials, TokenManager
from .api.inventory import InventoryAPIClient, Since
from .api.merchants import MerchantsAPIClient
from .api.orders import SalesOrdersAPIClient
from .api.shipping import ShippingAPIClient
from .config import Settings
from .utils.cache import TokenCache

logger = logging.getLogger(__name__)


class ACommerceClient:
    """One set of credentials, one token manager, every resource client.

    Example:
        client = ACommerceClient(Credentials("user", "key", production=False))
        client.all_inventory("frisianflag", "1234")
    """

    def __init__(
        self,
        credentials: Optional[Credentials] = None,
        cache: Optional[TokenCache] = None,
        settings: Optional[Settings] = None,
    ) -> None:
        if settings is None:
            # Explicit credentials need no environment
            settings = Settings() if credentials is not None else Settings.from_env()
        self.settings = settings

        if credentials is None:
            credentials = Credentials(
                self.settings.username, self.settings.api_key, production=self.settings.production
            )
        if not all([credentials.username, credentials.api_key]):
            raise ValueError(
                "Missing required aCommerce credentials. Please set ACOM_USERNAME and ACOM_APIKEY environment variables."
            )

        self.credentials = credentials
        self.token_manager = TokenManager(
            credentials,
            cache=cache,
            ttl=self.settings.cache_duration,
            timeout=self.settings.timeout,
            user_agent=self.settings.user_agent,
            verify_ssl=self.settings.verify_ssl,
        )

        options = {
            "timeout": self.settings.timeout,
            "user_agent": self.settings.user_agent,
            "verify_ssl": self.settings.verify_ssl,
        }
        self.merchants = MerchantsAPIClient(self.token_manager, **options)
        self.inventory = InventoryAPIClient(
            self.token_manager, max_pages=self.settings.max_inventory_pages, **options
        )
        self.orders = SalesOrdersAPIClient(self.token_manager, **options)
        self.shipping = ShippingAPIClient(self.token_manager, **options)

        logger.info(f"aCommerce client ready for {credentials.username!r} ({credentials.environment})")

    def token(self) -> Optional[str]:
        return self.token_manager.get_token()

    def send(
        self,
        method: str,
        path: str,
        root: str = "fulfillment",
        data: Optional[Any] = None,
        params: Optional[Dict[str, Any]] = None,
    ) -> Dict[str, Any]:
        return self.merchants.send(method, path, root=root, data=data, params=params)

    def merchants_list(self, channel_id: Union[str, int]) -> Dict[str, Any]:
        return self.merchants.list_merchants(channel_id)

    def inventory_page(
        self,
        channel_id: Union[str, int],
        partner_id: Union[str, int],
        since: Since = None,
        page: Optional[int] = None,
    ) -> Dict[str, Any]:
        return self.inventory.get_inventory_page(channel_id, partner_id, since, page)

    def all_inventory(
        self,
        channel_id: Union[str, int],
        partner_id: Union[str, int],
        since: Since = None,
        start_page: Optional[int] = None,
    ) -> Dict[str, Any]:
        return self.inventory.fetch_all(channel_id, partner_id, since, start_page)

    def get_sales_order(self, channel_id: Union[str, int], order_id: Union[str, int]) -> Dict[str, Any]:
        return self.orders.get_sales_order(channel_id, order_id)

    def create_sales_order(
        self, channel_id: Union[str, int], order_id: Union[str, int], order: Dict[str, Any]
    ) -> Dict[str, Any]:
        return self.orders.create_sales_order(channel_id, order_id, order)

    def get_shipping_order(
        self, partner_id: Union[str, int], shipping_order_id: Union[str, int]
    ) -> Dict[str, Any]:
        return self.shipping.get_shipping_order(partner_id, shipping_order_id)

    def create_shipping_order(
        self, partner_id: Union[str, int], shipping_order_id: Union[str, int], order: Dict[str, Any]
    ) -> Dict[str, Any]:
        return self.shipping.create_shipping_order(partner_id, shipping_order_id, order)
