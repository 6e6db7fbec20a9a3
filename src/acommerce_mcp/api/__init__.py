"""aCommerce API client modules."""

from .auth import Credentials, TokenManager
from .base import BaseAPIClient
from .inventory import InventoryAPIClient, InventoryPage
from .merchants import MerchantsAPIClient
from .orders import SalesOrdersAPIClient
from .shipping import ShippingAPIClient

__all__ = [
    "BaseAPIClient",
    "Credentials",
    "InventoryAPIClient",
    "InventoryPage",
    "MerchantsAPIClient",
    "SalesOrdersAPIClient",
    "ShippingAPIClient",
    "TokenManager",
]
