"""Best-effort metadata enrichment for discovered media."""

import asyncio
import logging
from typing import List, Optional

import aiohttp

from ..normalizer import resolve_asset_details
from .base import Candidate, MediaItem, MediaType

logger = logging.getLogger(__name__)


def parse_content_length(value: Optional[str]) -> Optional[int]:
    """Parse a Content-Length header value; None unless it is a plain integer."""
    if value is None:
        return None
    value = value.strip()
    if not value.isdigit():
        return None
    return int(value)


async def probe_size(
    session: aiohttp.ClientSession,
    asset_url: str,
    timeout: float = 8,
) -> Optional[int]:
    """
    Fetch an asset's byte size with a HEAD request.

    Any failure (bad status, missing or non-numeric Content-Length, timeout,
    network error) yields None.
    """
    try:
        async with session.head(
            asset_url,
            allow_redirects=True,
            timeout=aiohttp.ClientTimeout(total=timeout),
        ) as response:
            if not 200 <= response.status < 300:
                logger.debug("Size probe for %s returned status %s", asset_url, response.status)
                return None
            return parse_content_length(response.headers.get("Content-Length"))
    except asyncio.TimeoutError:
        logger.debug("Size probe timed out after %ss: %s", timeout, asset_url)
    except (aiohttp.ClientError, ValueError) as e:
        logger.debug("Size probe failed for %s: %s", asset_url, e)
    return None


async def probe_sizes(
    session: aiohttp.ClientSession,
    urls: List[str],
    timeout: float = 8,
) -> List[Optional[int]]:
    """
    Probe many assets concurrently.

    Returns sizes in the same order as ``urls``; a probe that raises for any
    reason contributes None instead of aborting the others.
    """
    results = await asyncio.gather(
        *(probe_size(session, url, timeout) for url in urls),
        return_exceptions=True,
    )

    sizes: List[Optional[int]] = []
    for url, result in zip(urls, results):
        if isinstance(result, BaseException):
            logger.debug("Size probe for %s raised %r", url, result)
            sizes.append(None)
        else:
            sizes.append(result)
    return sizes


async def build_media_items(
    session: aiohttp.ClientSession,
    candidates: List[Candidate],
    probe_timeout: float = 8,
) -> List[MediaItem]:
    """
    Turn deduplicated candidates into MediaItems, in discovery order.

    Image candidates get a concurrent size probe; videos are not probed.
    """
    image_urls = [c.src for c in candidates if c.type == MediaType.IMAGE]
    sizes = dict(zip(image_urls, await probe_sizes(session, image_urls, probe_timeout)))

    items = []
    for candidate in candidates:
        details = resolve_asset_details(candidate.src)
        items.append(MediaItem(
            type=candidate.type,
            src=candidate.src,
            alt=candidate.alt,
            extension=details.extension,
            filename=details.filename,
            poster=candidate.poster,
            file_size=sizes.get(candidate.src) if candidate.type == MediaType.IMAGE else None,
        ))
    return items
