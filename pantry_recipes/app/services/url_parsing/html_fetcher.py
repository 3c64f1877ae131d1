"""HTML fetching for recipe pages."""

import ipaddress
import logging
from urllib.parse import urlparse

import httpx

from pantry_recipes.app.core.config import get_settings
from pantry_recipes.app.services.url_parsing.errors import BadFormatError, LinkUnavailableError

logger = logging.getLogger(__name__)


def is_private_host(host: str) -> bool:
    """Check if a host is private/localhost."""
    hostname = host.split(":")[0]
    try:
        ip = ipaddress.ip_address(hostname)
        return ip.is_private or ip.is_loopback
    except ValueError:
        return hostname.lower() in {"localhost"}


async def fetch_html(url: str) -> str:
    """GET ``url`` and return the response body as text.

    Transport failures, timeouts and non-success statuses raise
    LinkUnavailableError; an empty body raises BadFormatError.
    """
    settings = get_settings()
    if settings.block_private_hosts and is_private_host(urlparse(url).hostname or ""):
        raise LinkUnavailableError(url, "URL points to a private or disallowed host")

    timeout = httpx.Timeout(
        settings.fetch_timeout_seconds, connect=settings.fetch_connect_timeout_seconds
    )
    try:
        async with httpx.AsyncClient(timeout=timeout, follow_redirects=True) as client:
            response = await client.get(url)
        response.raise_for_status()
    except httpx.TimeoutException as exc:
        logger.warning("Timed out fetching %s: %s", url, exc)
        raise LinkUnavailableError(url, "request timed out") from exc
    except httpx.HTTPStatusError as exc:
        logger.warning("Fetching %s returned status %s", url, exc.response.status_code)
        raise LinkUnavailableError(
            url, f"site returned status {exc.response.status_code}"
        ) from exc
    except (httpx.HTTPError, httpx.InvalidURL) as exc:
        logger.warning("Network error fetching %s: %s", url, exc)
        raise LinkUnavailableError(url, str(exc) or type(exc).__name__) from exc

    text = response.text
    if not text or not text.strip():
        raise BadFormatError(url, "No body")
    logger.info("Fetched %d characters from %s", len(text), url)
    return text
