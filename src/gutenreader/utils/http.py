"""HTTP utilities for talking to the catalog and content hosts."""

import logging
from typing import Any

import certifi
import httpx

from gutenreader import __version__
from gutenreader.exceptions import NetworkError, RateLimitError

logger = logging.getLogger(__name__)

# Default timeout for HTTP requests (in seconds)
DEFAULT_TIMEOUT = 30.0

DEFAULT_HEADERS = {
    "User-Agent": f"Gutenreader/{__version__}",
    "Accept": "application/json, text/plain, text/html;q=0.9, */*;q=0.8",
}
"""Default HTTP headers used for outbound requests."""

# User-friendly HTTP error messages
HTTP_ERROR_MESSAGES = {
    400: "Bad request - the server couldn't understand the request",
    403: "Access denied - the server blocked this request",
    404: "Resource not found - the page or file doesn't exist",
    429: "Rate limited - please wait before making more requests",
    500: "Server error - the server encountered an internal problem",
    502: "Bad gateway - the server received an invalid response",
    503: "Service unavailable - the catalog is temporarily unavailable, try again in a few moments",
    504: "Gateway timeout - the server took too long to respond",
}


def get_friendly_error_message(status_code: int) -> str:
    """Get a user-friendly error message for an HTTP status code.

    Args:
        status_code: HTTP status code.

    Returns:
        User-friendly error message.
    """
    return HTTP_ERROR_MESSAGES.get(status_code, f"HTTP error {status_code}")


def get_client(**kwargs) -> httpx.Client:
    """Get a configured HTTP client.

    Args:
        **kwargs: Additional arguments to pass to httpx.Client.

    Returns:
        Configured httpx.Client instance.
    """
    kwargs.setdefault("verify", certifi.where())
    return httpx.Client(
        timeout=kwargs.pop("timeout", DEFAULT_TIMEOUT),
        headers={**DEFAULT_HEADERS, **kwargs.pop("headers", {})},
        follow_redirects=True,
        max_redirects=10,
        **kwargs,
    )


def request(
    client: httpx.Client,
    url: str,
    params: dict[str, Any] | None = None,
) -> httpx.Response:
    """Issue a GET request and translate failures into Gutenreader errors.

    Args:
        client: HTTP client to use.
        url: URL to fetch.
        params: Optional query parameters.

    Returns:
        Successful response (2xx).

    Raises:
        RateLimitError: If the server answers 429.
        NetworkError: For any other HTTP or transport failure.
    """
    logger.debug(f"GET {url} params={params}")
    try:
        response = client.get(url, params=params)
    except httpx.RequestError as e:
        raise NetworkError(
            f"Request failed: {e}",
            details=f"URL: {url}",
        ) from e

    if response.status_code == 429:
        raise RateLimitError(
            "Rate limited by server",
            details=f"URL: {url}",
        )

    try:
        response.raise_for_status()
    except httpx.HTTPStatusError as e:
        raise NetworkError(
            get_friendly_error_message(e.response.status_code),
            details=f"URL: {url}",
        ) from e

    return response
