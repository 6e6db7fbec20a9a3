"""Test suite for merchants, sales orders, shipping orders and the client facade."""

from unittest.mock import patch

import pytest
import requests

from acommerce_mcp.api.auth import Credentials, TokenManager
from acommerce_mcp.api.merchants import MerchantsAPIClient
from acommerce_mcp.api.orders import SalesOrdersAPIClient
from acommerce_mcp.api.shipping import ShippingAPIClient
from acommerce_mcp.client import ACommerceClient
from acommerce_mcp.config import Settings
from acommerce_mcp.utils.cache import InMemoryTokenCache

ORDER = {
    "orderCreatedTime": "2025-01-30T10:00:00.000Z",
    "customerInfo": {"addressee": "Jane Doe", "country": "Thailand"},
    "orderItems": [{"partnerId": "1234", "itemId": "SKU-1", "qty": 2}],
}


class TestMerchantsAPIClient:
    """Test merchant listing."""

    @patch("requests.request")
    def test_list_merchants(self, mock_request, token_manager, make_response):
        mock_request.return_value = make_response(200, [{"partnerId": "1234"}, {"partnerId": "5678"}])

        result = MerchantsAPIClient(token_manager).list_merchants("frisianflag")

        assert result["success"] is True
        assert result["metadata"]["merchant_count"] == 2
        kwargs = mock_request.call_args.kwargs
        assert kwargs["url"] == "https://fulfillment.api.acommerce.asia/channel/frisianflag/merchants"
        assert kwargs["headers"]["User-Agent"] == "acommerce-mcp/1.0 (Language=Python)"

    def test_invalid_channel(self, token_manager):
        result = MerchantsAPIClient(token_manager).list_merchants("")
        assert result["error"] == "invalid_input"


class TestSalesOrdersAPIClient:
    """Test sales order retrieval and creation."""

    @pytest.fixture
    def client(self, token_manager):
        return SalesOrdersAPIClient(token_manager, timeout=5)

    @patch("requests.request")
    def test_get_sales_order(self, mock_request, client, make_response):
        mock_request.return_value = make_response(200, {"orderId": "ORD-1", "orderStatus": "NEW"})

        result = client.get_sales_order("frisianflag", "ORD-1")

        assert result["data"]["orderStatus"] == "NEW"
        kwargs = mock_request.call_args.kwargs
        assert kwargs["method"] == "GET"
        assert kwargs["url"] == "https://fulfillment.api.acommerce.asia/channel/frisianflag/order/ORD-1"
        assert kwargs["timeout"] == 5

    @patch("requests.request")
    def test_create_sales_order(self, mock_request, client, make_response):
        mock_request.return_value = make_response(201, text="")

        result = client.create_sales_order("frisianflag", "ORD-1", ORDER)

        assert result["success"] is True
        assert result["data"] is None
        kwargs = mock_request.call_args.kwargs
        assert kwargs["method"] == "PUT"
        assert kwargs["json"] == ORDER

    def test_create_sales_order_requires_object(self, client):
        result = client.create_sales_order("frisianflag", "ORD-1", ["not", "an", "object"])
        assert result["error"] == "invalid_input"

    @patch("requests.request")
    def test_validation_error_body(self, mock_request, client, make_response):
        body = {"code": 400, "message": "orderItems is required"}
        mock_request.return_value = make_response(400, body)

        result = client.create_sales_order("frisianflag", "ORD-1", {})

        assert result["success"] is False
        assert result["error"] == "api_error"
        assert result["status_code"] == 400
        assert result["details"] == body

    @patch("requests.request")
    def test_not_found(self, mock_request, client, make_response):
        mock_request.return_value = make_response(404, text="Not Found")

        result = client.get_sales_order("frisianflag", "missing")

        assert result["error"] == "not_found"
        assert result["details"] == "Not Found"

    @patch("requests.request")
    def test_network_error(self, mock_request, client):
        mock_request.side_effect = requests.Timeout("read timed out")

        result = client.get_sales_order("frisianflag", "ORD-1")

        assert result["error"] == "network_error"
        assert "status_code" not in result


class TestShippingAPIClient:
    """Test shipping orders against the shipping root."""

    @patch("requests.request")
    def test_get_shipping_order(self, mock_request, token_manager, make_response):
        mock_request.return_value = make_response(200, {"shipOrderId": "SHIP-1"})

        result = ShippingAPIClient(token_manager).get_shipping_order("kerry", "SHIP-1")

        assert result["data"] == {"shipOrderId": "SHIP-1"}
        assert (
            mock_request.call_args.kwargs["url"]
            == "https://shipping.api.acommerce.asia/partner/kerry/order/SHIP-1"
        )

    @patch("requests.request")
    def test_create_shipping_order(self, mock_request, token_manager, make_response):
        mock_request.return_value = make_response(200, {"status": "accepted"})

        result = ShippingAPIClient(token_manager).create_shipping_order("kerry", "SHIP-1", ORDER)

        assert result["success"] is True
        assert mock_request.call_args.kwargs["method"] == "PUT"
        assert mock_request.call_args.kwargs["json"] == ORDER

    def test_invalid_ids(self, token_manager):
        result = ShippingAPIClient(token_manager).get_shipping_order("kerry", "a/b")
        assert result["error"] == "invalid_input"


class TestEnvironmentSwitch:
    """A sandbox client never talks to production hosts."""

    @patch("requests.request")
    @patch("requests.post")
    def test_sandbox_hosts_for_every_root(self, mock_post, mock_request, make_response):
        mock_post.return_value = make_response(200, {"token": {"token_id": "sandbox-token"}})
        mock_request.return_value = make_response(200, [])
        settings = Settings(username="u", api_key="k", production=False)
        client = ACommerceClient(settings=settings, cache=InMemoryTokenCache())

        client.merchants_list("frisianflag")
        client.inventory_page("frisianflag", "1234")
        client.get_sales_order("frisianflag", "ORD-1")
        client.get_shipping_order("kerry", "SHIP-1")

        urls = [mock_post.call_args[0][0]] + [c.kwargs["url"] for c in mock_request.call_args_list]
        assert all("acommercedev.com" in url for url in urls)
        assert not any("acommerce.asia" in url for url in urls)
        assert {url.split("/")[2] for url in urls} == {
            "api.acommercedev.com",
            "fulfillment.api.acommercedev.com",
            "shipping.api.acommercedev.com",
        }


class TestAuthFailurePropagation:
    """Rejected credentials surface on the resource call, not on token retrieval."""

    @patch("requests.request")
    @patch("requests.post")
    def test_resource_call_reports_auth_failure(self, mock_post, mock_request, make_response):
        mock_post.return_value = make_response(401, {"message": "Invalid credentials"})
        mock_request.return_value = make_response(401, {"message": "Unauthorized"})
        manager = TokenManager(Credentials("u", "wrong"), cache=InMemoryTokenCache())
        client = SalesOrdersAPIClient(manager)

        assert manager.get_token() is None
        result = client.get_sales_order("frisianflag", "ORD-1")

        assert result["success"] is False
        assert result["error"] == "auth_failed"
        assert result["status_code"] == 401
        assert mock_request.call_args.kwargs["headers"]["X-Subject-Token"] == ""

    @patch("requests.request")
    @patch("requests.post")
    def test_forbidden_keeps_cached_token(self, mock_post, mock_request, make_response, credentials, clock):
        """A 403 inside the TTL window does not trigger a second login."""
        mock_post.return_value = make_response(200, {"token": {"token_id": "token-abc"}})
        mock_request.return_value = make_response(403, {"message": "Forbidden"})
        manager = TokenManager(credentials, cache=InMemoryTokenCache(clock=clock), ttl=7200)

        manager.get_token()
        result = SalesOrdersAPIClient(manager).get_sales_order("frisianflag", "ORD-1")
        clock.advance(60)
        token = manager.get_token()

        assert result["error"] == "auth_failed"
        assert result["status_code"] == 403
        assert token == "token-abc"
        assert mock_post.call_count == 1

    @patch("requests.request")
    @patch("requests.post")
    def test_unauthorized_keeps_cached_token(self, mock_post, mock_request, token_manager, make_response, credentials):
        mock_request.return_value = make_response(401, {"message": "Unauthorized"})

        SalesOrdersAPIClient(token_manager).get_sales_order("frisianflag", "ORD-1")

        assert token_manager.cache.get(credentials.cache_key) == "cached_token"
        mock_post.assert_not_called()


class TestACommerceClient:
    """Test the facade."""

    def test_missing_credentials(self):
        with pytest.raises(ValueError):
            ACommerceClient(settings=Settings())

    def test_explicit_credentials_ignore_environment(self, credentials):
        """A malformed environment does not break a client given credentials."""
        with patch("acommerce_mcp.config.load_dotenv") as mock_load, patch.dict(
            "os.environ", {"ACOM_TIMEOUT": "not-a-number"}
        ):
            client = ACommerceClient(credentials)

        assert client.settings == Settings()
        assert client.credentials is credentials
        mock_load.assert_not_called()

    @patch("requests.request")
    def test_send_arbitrary_path(self, mock_request, make_response, credentials):
        mock_request.return_value = make_response(200, {"ok": True})
        cache = InMemoryTokenCache()
        cache.put(credentials.cache_key, "cached_token", 60)
        client = ACommerceClient(credentials, cache=cache, settings=Settings())

        result = client.send("get", "channel/frisianflag/merchants", root="fulfillment", params={"x": None})

        assert result["data"] == {"ok": True}
        assert result["metadata"]["method"] == "GET"
        assert mock_request.call_args.kwargs["params"] is None

    def test_send_unknown_root(self, credentials):
        client = ACommerceClient(credentials, settings=Settings())
        result = client.send("GET", "anything", root="billing")
        assert result["error"] == "invalid_input"

    @patch("requests.post")
    def test_token_uses_configured_ttl(self, mock_post, make_response, credentials, clock):
        mock_post.return_value = make_response(200, {"token": {"token_id": "t"}})
        client = ACommerceClient(
            credentials, cache=InMemoryTokenCache(clock=clock), settings=Settings(cache_duration=60)
        )

        client.token()
        clock.advance(61)
        client.token()

        assert mock_post.call_count == 2
