"""HTTP transport for signed SMS requests."""

import logging
from typing import Optional

import httpx

from aligo_sms.errors import TransportError

logger = logging.getLogger(__name__)


def dispatch(url: str, client: Optional[httpx.Client] = None, timeout: float = 10.0) -> bytes:
    """
    Send a GET request for a fully signed URL.

    Args:
        url: Signed request URL
        client: Optional httpx.Client to reuse. It is not closed here.
        timeout: Request timeout in seconds

    Returns:
        bytes: Raw response body, whatever the HTTP status

    Raises:
        TransportError: If the request could not be completed
    """
    try:
        if client is not None:
            response = client.get(url, timeout=timeout)
        else:
            with httpx.Client() as owned_client:
                response = owned_client.get(url, timeout=timeout)
    except httpx.HTTPError as e:
        logger.error(f"HTTP error during SMS request: {e}")
        raise TransportError(f"SMS request failed: {e}") from e

    # Error details arrive as an XML body on non-200 responses
    if response.status_code != 200:
        logger.warning(f"SMS API returned HTTP {response.status_code}")
    return response.content
