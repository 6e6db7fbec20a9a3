"""Base API client for aCommerce API interactions."""

import logging
import uuid
from abc import ABC, abstractmethod
from datetime import datetime
from typing import Any, Dict, Optional

import requests

from ..constants import DEFAULT_TIMEOUT, DEFAULT_USER_AGENT, ENDPOINTS, TOKEN_HEADER
from ..exceptions import ACommerceError, HttpError, NetworkError
from ..utils.validators import validate_root
from .auth import TokenManager

logger = logging.getLogger(__name__)


class BaseAPIClient(ABC):
    """Base class for all aCommerce clients."""

    def __init__(
        self,
        token_manager: TokenManager,
        timeout: int = DEFAULT_TIMEOUT,
        user_agent: str = DEFAULT_USER_AGENT,
        verify_ssl: bool = True,
    ) -> None:
        """Initialize the base API client.

        Args:
            token_manager: Source of the X-Subject-Token header
            timeout: Per-request timeout in seconds
            user_agent: Client identifier sent as User-Agent
            verify_ssl: Whether to verify TLS certificates
        """
        self.token_manager = token_manager
        self.timeout = timeout
        self.user_agent = user_agent
        self.verify_ssl = verify_ssl

    @property
    def environment(self) -> str:
        return self.token_manager.credentials.environment

    @abstractmethod
    def get_api_root(self) -> str:
        """Return the endpoint root (fulfillment, shipping) for this client."""
        pass

    def base_url(self, root: Optional[str] = None) -> str:
        """Resolve the base URL of an endpoint root for the active environment."""
        root = root or self.get_api_root()
        if not validate_root(root):
            raise ValueError(f"Unknown endpoint root: {root!r}")
        return ENDPOINTS[self.environment][root]

    def _build_headers(self) -> Dict[str, str]:
        return {
            TOKEN_HEADER: self.token_manager.get_token() or "",
            "User-Agent": self.user_agent,
            "Content-Type": "application/json",
        }

    def _send(
        self,
        method: str,
        path: str,
        root: Optional[str] = None,
        params: Optional[Dict[str, Any]] = None,
        data: Optional[Any] = None,
    ) -> requests.Response:
        """Send an authenticated request and return the raw response.

        Args:
            method: HTTP method (GET, PUT, etc.)
            path: API path relative to the endpoint root
            root: Endpoint root, defaults to the client's own
            params: Query parameters, None values are dropped
            data: JSON request body

        Returns:
            The successful response

        Raises:
            HttpError: For non-2xx responses
            NetworkError: For transport failures
        """
        request_id = str(uuid.uuid4())
        start_time = datetime.now()

        url = f"{self.base_url(root)}/{path.lstrip('/')}"
        if params:
            params = {key: value for key, value in params.items() if value is not None}

        logger.info(f"Request {request_id}: Starting {method} {url}")

        try:
            response = requests.request(
                method=method,
                url=url,
                params=params or None,
                json=data,
                headers=self._build_headers(),
                timeout=self.timeout,
                verify=self.verify_ssl,
            )
        except requests.RequestException as e:
            duration_ms = int((datetime.now() - start_time).total_seconds() * 1000)
            logger.error(f"Request {request_id}: Network error in {duration_ms}ms: {e}")
            raise NetworkError(f"{method} {path} failed: {e}") from e

        duration_ms = int((datetime.now() - start_time).total_seconds() * 1000)

        if not 200 <= response.status_code < 300:
            logger.error(
                f"Request {request_id}: HTTP error in {duration_ms}ms, "
                f"status={response.status_code}"
            )
            raise HttpError(
                f"{method} {path} returned {response.status_code}",
                status_code=response.status_code,
                body=self._decode_error_body(response),
            )

        logger.info(
            f"Request {request_id}: Success in {duration_ms}ms, "
            f"status={response.status_code}"
        )
        return response

    def _make_request(
        self,
        method: str,
        path: str,
        root: Optional[str] = None,
        params: Optional[Dict[str, Any]] = None,
        data: Optional[Any] = None,
    ) -> Any:
        """Make an authenticated request and decode the JSON body.

        Returns:
            Decoded JSON, or None for an empty body

        Raises:
            HttpError: For non-2xx responses or undecodable bodies
            NetworkError: For transport failures
        """
        response = self._send(method, path, root=root, params=params, data=data)
        return self._decode(response, method, path)

    def _decode(self, response: requests.Response, method: str, path: str) -> Any:
        if not response.content:
            return None
        try:
            return response.json()
        except ValueError as e:
            raise HttpError(
                f"{method} {path} returned a non-JSON body",
                status_code=response.status_code,
                body=response.text,
            ) from e

    @staticmethod
    def _decode_error_body(response: requests.Response) -> Any:
        try:
            return response.json()
        except ValueError:
            return response.text or None

    def send(
        self,
        method: str,
        path: str,
        root: Optional[str] = None,
        data: Optional[Any] = None,
        params: Optional[Dict[str, Any]] = None,
    ) -> Dict[str, Any]:
        """Issue any authenticated request and return a formatted result.

        Args:
            method: HTTP method
            path: API path relative to the endpoint root
            root: identity, fulfillment or shipping
            data: JSON request body
            params: Query parameters

        Returns:
            Formatted success or error response
        """
        try:
            result = self._make_request(method.upper(), path, root=root, params=params, data=data)
        except ACommerceError as e:
            return self._handle_api_error(e)
        except ValueError as e:
            return self._format_error_response("invalid_input", str(e))

        return self._format_success_response(
            result, metadata={"method": method.upper(), "path": path, "environment": self.environment}
        )

    def _handle_api_error(self, error: ACommerceError) -> Dict[str, Any]:
        """Turn a client-layer exception into an error response.

        Args:
            error: The error to handle

        Returns:
            Formatted error response
        """
        if isinstance(error, HttpError):
            if error.error_code == "auth_failed":
                message = "Authentication failed. Check your aCommerce credentials."
            elif error.error_code == "not_found":
                message = "Resource not found."
            else:
                message = "aCommerce API request failed"
            return self._format_error_response(
                error.error_code or "api_error",
                message,
                details=error.body,
                status_code=error.status_code,
            )

        return self._format_error_response(error.error_code or "api_error", str(error), details=error.details or None)

    def _format_success_response(
        self, data: Any, metadata: Optional[Dict[str, Any]] = None
    ) -> Dict[str, Any]:
        """Format a successful response.

        Args:
            data: The response data
            metadata: Optional metadata to include

        Returns:
            Formatted success response
        """
        response = {
            "success": True,
            "data": data,
            "metadata": {
                "timestamp": datetime.now().isoformat() + "Z",
                "request_id": str(uuid.uuid4()),
            },
        }

        if metadata:
            response["metadata"].update(metadata)

        return response

    def _format_error_response(
        self,
        error_code: str,
        message: str,
        details: Optional[Any] = None,
        status_code: Optional[int] = None,
        **extra: Any,
    ) -> Dict[str, Any]:
        """Format an error response.

        Args:
            error_code: Standard error code (auth_failed, not_found, etc.)
            message: Human-readable error message
            details: Optional error details, usually the decoded response body
            status_code: HTTP status of the failed response, if any
            **extra: Additional top level fields (partial_data, ...)

        Returns:
            Formatted error response
        """
        response = {
            "success": False,
            "error": error_code,
            "message": message,
            "metadata": {
                "timestamp": datetime.now().isoformat() + "Z",
                "request_id": str(uuid.uuid4()),
            },
        }

        if details is not None:
            response["details"] = details
        if status_code is not None:
            response["status_code"] = status_code
        response.update(extra)

        return response
