"""Static acquisition: fetch page markup directly and parse it without running scripts."""

import asyncio
import logging
from typing import List, Optional

import aiohttp
from bs4 import BeautifulSoup

from ..config import ExtractorSettings
from ..normalizer import resolve_candidate
from .base import (
    AcquisitionMethod,
    Candidate,
    ErrorKind,
    ExtractionResult,
    MediaType,
    dedupe_candidates,
)
from .metadata import build_media_items

logger = logging.getLogger(__name__)

ACCEPT_HTML = "text/html,application/xhtml+xml,application/xml;q=0.9,image/webp,*/*;q=0.8"


def first_srcset_url(srcset: Optional[str]) -> Optional[str]:
    """Collapse a srcset to its first candidate URL."""
    if not srcset:
        return None
    first = srcset.split(",")[0].strip()
    return first.split(" ")[0] or None


def find_candidates(html: str, origin: str) -> List[Candidate]:
    """
    Scan page markup for media references, resolved against ``origin``.

    Scan order is: ``<img>``, ``<picture><source>``, ``<video>``. Duplicates
    keep their first occurrence; unresolvable references are dropped.
    """
    soup = BeautifulSoup(html, "html.parser")
    found: List[Candidate] = []

    def add(media_type: MediaType, raw: Optional[str], alt: Optional[str] = None, poster: Optional[str] = None):
        if not raw:
            return
        src = resolve_candidate(raw, origin)
        if src is None:
            logger.warning("Skipping invalid media URL: %s", raw)
            return
        found.append(Candidate(type=media_type, src=src, alt=alt or None, poster=poster))

    for img in soup.find_all("img"):
        # Lazy-loaded images keep the real URL in data-src
        add(MediaType.IMAGE, img.get("src") or img.get("data-src"), img.get("alt"))

    for source in soup.select("picture source"):
        picture = source.find_parent("picture")
        img = picture.find("img") if picture else None
        add(MediaType.IMAGE, first_srcset_url(source.get("srcset")), img.get("alt") if img else None)

    for video in soup.find_all("video"):
        poster = resolve_candidate(video.get("poster"), origin)
        if video.get("src"):
            add(MediaType.VIDEO, video.get("src"), poster=poster)
            continue
        for source in video.find_all("source"):
            add(MediaType.VIDEO, source.get("src"), poster=poster)

    return dedupe_candidates(found)


def _is_html(content_type: str) -> bool:
    return "html" in content_type.lower()


async def extract_static(
    session: aiohttp.ClientSession,
    page_url: str,
    origin: str,
    settings: ExtractorSettings,
) -> ExtractionResult:
    """
    Fetch ``page_url`` and extract its media.

    Args:
        session: HTTP session for this extraction
        page_url: Absolute page URL
        origin: Base for resolving relative references
        settings: Timeouts and User-Agent

    Returns:
        ExtractionResult; zero items is a success
    """
    headers = {
        "User-Agent": settings.user_agent,
        "Accept": ACCEPT_HTML,
        "Accept-Language": "en-US,en;q=0.5",
    }
    timeout = aiohttp.ClientTimeout(total=settings.static_fetch_timeout)
    method = AcquisitionMethod.STATIC

    try:
        async with session.get(page_url, headers=headers, timeout=timeout, allow_redirects=True) as response:
            if not 200 <= response.status < 300:
                return ExtractionResult.failure(
                    ErrorKind.FETCH_FAILED,
                    f"Failed to fetch URL: {response.reason} (Status: {response.status})",
                    status=response.status,
                    method=method,
                )

            content_type = response.headers.get("Content-Type", "")
            if not _is_html(content_type):
                logger.warning("Expected HTML content for %s, received %s", page_url, content_type or "nothing")
                return ExtractionResult.failure(
                    ErrorKind.UNSUPPORTED_CONTENT_TYPE,
                    f"Expected HTML content, but received {content_type or 'no content type'}",
                    status=415,
                    method=method,
                )

            html = await response.text(errors="replace")

    except asyncio.TimeoutError:
        return ExtractionResult.failure(
            ErrorKind.FETCH_FAILED,
            "The request timed out while trying to fetch the URL.",
            method=method,
        )
    except aiohttp.ClientConnectorError as e:
        return ExtractionResult.failure(
            ErrorKind.FETCH_FAILED,
            "Could not resolve the provided URL.",
            detail=str(e),
            method=method,
        )
    except aiohttp.ClientError as e:
        return ExtractionResult.failure(
            ErrorKind.FETCH_FAILED,
            f"Failed to fetch URL: {e}",
            detail=repr(e),
            method=method,
        )

    candidates = find_candidates(html, origin)
    items = await build_media_items(session, candidates, settings.probe_timeout)
    logger.info("Found %d unique media items on %s", len(items), page_url)
    return ExtractionResult.ok(items, method=method)
