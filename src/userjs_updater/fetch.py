"""Retrieval of the upstream user.js."""

from __future__ import annotations

from typing import TYPE_CHECKING

import httpx

from userjs_updater.errors import NetworkError
from userjs_updater.log import get_logger


if TYPE_CHECKING:
    from collections.abc import Awaitable, Callable

    Fetcher = Callable[[str], Awaitable[str]]


logger = get_logger(__name__)

DEFAULT_URL = "https://raw.githubusercontent.com/ghacksuserjs/ghacks-user.js/master/user.js"
DEFAULT_TIMEOUT = 30.0


async def fetch_script(
    url: str = DEFAULT_URL,
    *,
    timeout: float = DEFAULT_TIMEOUT,
    client: httpx.AsyncClient | None = None,
) -> str:
    """Download the upstream script as text.

    Args:
        url: Location of the raw user.js
        timeout: Request timeout in seconds (ignored when a client is given)
        client: Existing client to send the request with

    Raises:
        NetworkError: The request failed or returned an error status.
    """
    logger.info("Retrieving upstream script", url=url)
    try:
        if client is None:
            async with httpx.AsyncClient(timeout=timeout, follow_redirects=True) as own:
                response = await own.get(url)
        else:
            response = await client.get(url)
        response.raise_for_status()
    except httpx.HTTPStatusError as e:
        msg = f"{url} returned HTTP {e.response.status_code}"
        raise NetworkError(msg) from e
    except httpx.HTTPError as e:
        msg = f"Failed to fetch {url}: {e}"
        raise NetworkError(msg) from e

    logger.debug("Fetched upstream script", url=url, size=len(response.content))
    return response.text
