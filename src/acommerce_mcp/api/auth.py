"""Authentication and token caching for the aCommerce identity service."""

import logging
from dataclasses import dataclass
from datetime import timedelta
from typing import Optional, Union

import requests

from ..constants import (
    API_PATHS,
    CACHE_KEY_PREFIX,
    DEFAULT_TIMEOUT,
    DEFAULT_TOKEN_TTL,
    DEFAULT_USER_AGENT,
    ENDPOINTS,
)
from ..exceptions import AuthError
from ..utils.cache import InMemoryTokenCache, TokenCache

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Credentials:
    """API key credentials for one aCommerce account."""

    username: str
    api_key: str
    production: bool = True

    @property
    def cache_key(self) -> str:
        """Deterministic cache key for this credential pair."""
        return f"{CACHE_KEY_PREFIX}{self.username}{self.api_key}"

    @property
    def environment(self) -> str:
        return "production" if self.production else "sandbox"

    def __repr__(self) -> str:
        return f"Credentials(username={self.username!r}, api_key='***', production={self.production})"


class TokenManager:
    """Obtains and caches the X-Subject-Token for a credential pair."""

    def __init__(
        self,
        credentials: Credentials,
        cache: Optional[TokenCache] = None,
        ttl: Union[int, float, timedelta] = DEFAULT_TOKEN_TTL,
        timeout: int = DEFAULT_TIMEOUT,
        user_agent: str = DEFAULT_USER_AGENT,
        verify_ssl: bool = True,
    ) -> None:
        """Initialize the token manager.

        Args:
            credentials: Account credentials
            cache: Token cache, a private in-memory cache when omitted
            ttl: Token lifetime in the cache, seconds or timedelta
            timeout: Request timeout for the identity call
            user_agent: User-Agent header value
            verify_ssl: Whether to verify TLS certificates
        """
        self.credentials = credentials
        self.cache: TokenCache = cache if cache is not None else InMemoryTokenCache()
        self.ttl = ttl.total_seconds() if isinstance(ttl, timedelta) else float(ttl)
        self.timeout = timeout
        self.user_agent = user_agent
        self.verify_ssl = verify_ssl

    @property
    def identity_url(self) -> str:
        root = ENDPOINTS[self.credentials.environment]["identity"]
        return f"{root}/{API_PATHS['token']}"

    def get_token(self) -> Optional[str]:
        """Return a cached token or authenticate for a new one.

        Authentication failures are logged and yield None so that the
        dependent request goes out without a token and is rejected by the
        resource endpoint.
        """
        key = self.credentials.cache_key
        token = self.cache.get(key)
        if token:
            return token

        try:
            token = self.authenticate()
        except AuthError as e:
            logger.warning(f"Authentication failed for {self.credentials.username!r}: {e}")
            return None

        self.cache.put(key, token, self.ttl)
        return token

    def authenticate(self) -> str:
        """Exchange username and API key for a token.

        Returns:
            The token ID issued by the identity service

        Raises:
            AuthError: When the identity service rejects the credentials,
                cannot be reached or answers without a token
        """
        payload = {
            "auth": {
                "apiKeyCredentials": {
                    "username": self.credentials.username,
                    "apiKey": self.credentials.api_key,
                }
            }
        }

        logger.info(f"Requesting token from {self.identity_url}")

        try:
            response = requests.post(
                self.identity_url,
                json=payload,
                headers={"User-Agent": self.user_agent, "Content-Type": "application/json"},
                timeout=self.timeout,
                verify=self.verify_ssl,
            )
        except requests.RequestException as e:
            raise AuthError(f"Identity service unreachable: {e}") from e

        if response.status_code >= 400:
            raise AuthError(
                f"Token request failed: {response.status_code}",
                status_code=response.status_code,
                details={"raw_response": response.text},
            )

        try:
            token = response.json()["token"]["token_id"]
        except (ValueError, KeyError, TypeError) as e:
            raise AuthError("Token response did not contain token.token_id", status_code=response.status_code) from e

        if not token:
            raise AuthError("Identity service returned an empty token", status_code=response.status_code)

        return str(token)

    def invalidate(self) -> None:
        """Drop the cached token so the next call authenticates again."""
        self.cache.forget(self.credentials.cache_key)
