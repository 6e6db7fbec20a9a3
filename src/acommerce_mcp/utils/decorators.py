"""Decorators for aCommerce tool error handling."""

import functools
import json
import logging
import uuid
from datetime import datetime
from typing import Any, Callable

from ..exceptions import ACommerceError, HttpError

logger = logging.getLogger(__name__)


def _error_json(request_id: str, error_code: str, message: str, **extra: Any) -> str:
    response = {
        "success": False,
        "error": error_code,
        "message": message,
        **extra,
        "metadata": {
            "timestamp": datetime.now().isoformat() + "Z",
            "request_id": request_id,
        },
    }
    return json.dumps(response, indent=2, default=str)


def handle_api_errors(func: Callable[..., str]) -> Callable[..., str]:
    """Decorator to handle aCommerce errors consistently.

    Tool functions normally return a formatted result already; this catches
    whatever escapes them and renders it as a failure result.

    Args:
        func: The function to decorate

    Returns:
        Decorated function that handles errors consistently
    """

    @functools.wraps(func)
    def wrapper(*args: Any, **kwargs: Any) -> str:
        request_id = str(uuid.uuid4())
        start_time = datetime.now()

        try:
            logger.info(f"Request {request_id}: Starting {func.__name__}")
            result = func(*args, **kwargs)

            duration_ms = int((datetime.now() - start_time).total_seconds() * 1000)
            logger.info(f"Request {request_id}: Completed {func.__name__} in {duration_ms}ms")

            return result

        except HttpError as e:
            duration_ms = int((datetime.now() - start_time).total_seconds() * 1000)
            logger.exception(f"Request {request_id}: HTTP error {e.status_code} in {duration_ms}ms")
            return _error_json(
                request_id, e.error_code or "api_error", str(e), status_code=e.status_code, details=e.body
            )

        except ACommerceError as e:
            duration_ms = int((datetime.now() - start_time).total_seconds() * 1000)
            logger.exception(f"Request {request_id}: {e.error_code} in {duration_ms}ms")
            return _error_json(request_id, e.error_code or "api_error", str(e))

        except ValueError as e:
            duration_ms = int((datetime.now() - start_time).total_seconds() * 1000)
            logger.exception(f"Request {request_id}: Validation error in {duration_ms}ms: {e}")
            return _error_json(request_id, "invalid_input", str(e))

        except Exception as e:
            duration_ms = int((datetime.now() - start_time).total_seconds() * 1000)
            logger.exception(f"Request {request_id}: Unexpected error in {duration_ms}ms: {e}")
            return _error_json(request_id, "unexpected_error", f"An unexpected error occurred: {e!s}")

    return wrapper
