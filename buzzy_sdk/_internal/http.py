"""Shared HTTP client configuration and the single transport call."""

import logging
from typing import Any

import httpx

from buzzy_sdk._internal.redaction import redact
from buzzy_sdk._version import __version__
from buzzy_sdk.exceptions import BuzzyAPIError
from buzzy_sdk.models.credential import RequestDescriptor

DEFAULT_TIMEOUT = 30.0

logger = logging.getLogger(__name__)


def create_http_client(*, timeout: float = DEFAULT_TIMEOUT) -> httpx.AsyncClient:
    """Create configured HTTP client.

    No base URL is set: every Buzzy operation supplies its own.

    Args:
        timeout: Request timeout in seconds.

    Returns:
        Configured httpx.AsyncClient instance.
    """
    return httpx.AsyncClient(
        timeout=timeout,
        headers={"User-Agent": f"buzzy-sdk/{__version__}"},
    )


async def send(client: httpx.AsyncClient, request: RequestDescriptor) -> Any:
    """Send one request and return its decoded JSON payload.

    A response whose body is not JSON yields ``None``; the envelope decoder
    treats that as "no data".

    Raises:
        BuzzyAPIError: On a non-2xx status, a timeout, a network error or a
            malformed URL.
    """
    logger.debug(
        "Sending %s %s headers=%s body=%s",
        request.method,
        request.url,
        redact(request.headers),
        redact(request.json_body),
    )
    try:
        response = await client.request(
            request.method,
            request.url,
            headers=request.headers,
            json=request.json_body,
        )
    except httpx.TimeoutException as e:
        raise BuzzyAPIError(f"Request to {request.url} timed out", url=request.url) from e
    except (httpx.HTTPError, httpx.InvalidURL) as e:
        raise BuzzyAPIError(f"Request to {request.url} failed: {e}", url=request.url) from e

    if response.status_code < 200 or response.status_code >= 300:
        raise BuzzyAPIError(
            f"Request to {request.url} failed with status {response.status_code}",
            status_code=response.status_code,
            url=request.url,
        )

    if not response.content:
        return None
    try:
        return response.json()
    except ValueError:
        logger.debug("Response from %s is not JSON", request.url)
        return None
