"""Environment driven settings for the aCommerce integration."""

import os
from dataclasses import dataclass
from typing import Mapping, Optional

from dotenv import load_dotenv

from .constants import (
    DEFAULT_MAX_INVENTORY_PAGES,
    DEFAULT_TIMEOUT,
    DEFAULT_TOKEN_TTL,
    DEFAULT_USER_AGENT,
)

_TRUE_VALUES = {"1", "true", "yes", "on"}
_FALSE_VALUES = {"0", "false", "no", "off"}


def _parse_bool(value: Optional[str], default: bool) -> bool:
    if value is None or value.strip() == "":
        return default
    normalized = value.strip().lower()
    if normalized in _TRUE_VALUES:
        return True
    if normalized in _FALSE_VALUES:
        return False
    raise ValueError(f"Invalid boolean value: {value!r}")


def _parse_int(value: Optional[str], default: int, name: str) -> int:
    if value is None or value.strip() == "":
        return default
    try:
        parsed = int(value)
    except ValueError as e:
        raise ValueError(f"{name} must be an integer, got {value!r}") from e
    if parsed < 1:
        raise ValueError(f"{name} must be positive, got {parsed}")
    return parsed


@dataclass(frozen=True)
class Settings:
    """Runtime configuration.

    Mirrors the published config of the framework package: credentials come
    from ``ACOM_USERNAME`` / ``ACOM_APIKEY``, ``ACOM_PRODUCTION`` picks the
    host set and ``ACOM_CACHE_DURATION`` is the token TTL in seconds.
    """

    username: str = ""
    api_key: str = ""
    production: bool = True
    cache_duration: int = int(DEFAULT_TOKEN_TTL.total_seconds())
    user_agent: str = DEFAULT_USER_AGENT
    timeout: int = DEFAULT_TIMEOUT
    verify_ssl: bool = True
    max_inventory_pages: int = DEFAULT_MAX_INVENTORY_PAGES

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "Settings":
        """Build settings from environment variables.

        Args:
            environ: Mapping to read from. Defaults to ``os.environ`` after
                loading a ``.env`` file.

        Returns:
            Parsed settings

        Raises:
            ValueError: When a numeric or boolean variable cannot be parsed
        """
        if environ is None:
            load_dotenv()
            environ = os.environ

        user_agent = environ.get("ACOM_USER_AGENT") or environ.get("APP_NAME") or DEFAULT_USER_AGENT

        return cls(
            username=environ.get("ACOM_USERNAME", ""),
            api_key=environ.get("ACOM_APIKEY", ""),
            production=_parse_bool(environ.get("ACOM_PRODUCTION"), True),
            cache_duration=_parse_int(
                environ.get("ACOM_CACHE_DURATION"),
                int(DEFAULT_TOKEN_TTL.total_seconds()),
                "ACOM_CACHE_DURATION",
            ),
            user_agent=user_agent,
            timeout=_parse_int(environ.get("ACOM_TIMEOUT"), DEFAULT_TIMEOUT, "ACOM_TIMEOUT"),
            verify_ssl=_parse_bool(environ.get("ACOM_VERIFY_SSL"), True),
            max_inventory_pages=_parse_int(
                environ.get("ACOM_MAX_INVENTORY_PAGES"),
                DEFAULT_MAX_INVENTORY_PAGES,
                "ACOM_MAX_INVENTORY_PAGES",
            ),
        )

    @property
    def environment(self) -> str:
        """Name of the endpoint set in use."""
        return "production" if self.production else "sandbox"
