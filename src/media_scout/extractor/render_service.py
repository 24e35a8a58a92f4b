"""Client for an external headless-browser render service."""

import asyncio
import logging
from typing import Any, List

import aiohttp

from ..config import ExtractorSettings
from ..normalizer import validate_absolute
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

# Longest response body excerpt kept for diagnostics
SNIPPET_LENGTH = 200


def _is_valid_payload(data: Any) -> bool:
    return (
        isinstance(data, dict)
        and isinstance(data.get("images"), list)
        and isinstance(data.get("videos"), list)
    )


def candidates_from_payload(data: dict) -> List[Candidate]:
    """Validate the service's URL lists; entries that don't parse are dropped."""
    found = []
    for media_type, key in ((MediaType.IMAGE, "images"), (MediaType.VIDEO, "videos")):
        for raw in data[key]:
            src = validate_absolute(raw)
            if src is None:
                logger.warning("Render service returned an invalid %s URL: %r", media_type.value, raw)
                continue
            found.append(Candidate(type=media_type, src=src))
    return dedupe_candidates(found)


async def extract_via_render_service(
    session: aiohttp.ClientSession,
    page_url: str,
    settings: ExtractorSettings,
) -> ExtractionResult:
    """
    Ask the render service for the media a page shows after its scripts ran.

    Never raises for network or service failures; they come back as failed
    results so the caller can fall back.
    """
    method = AcquisitionMethod.RENDER_SERVICE
    endpoint = settings.render_service_url

    if not endpoint:
        logger.info("Render service not configured, skipping")
        return ExtractionResult.failure(
            ErrorKind.SERVICE_UNAVAILABLE,
            "Render service is not configured.",
            status=501,
            method=method,
        )

    timeout = aiohttp.ClientTimeout(total=settings.render_service_timeout)
    try:
        async with session.get(
            endpoint,
            params={"url": page_url},
            headers={"Accept": "application/json"},
            timeout=timeout,
        ) as response:
            if not 200 <= response.status < 300:
                snippet = (await response.text(errors="replace"))[:SNIPPET_LENGTH]
                logger.warning(
                    "Render service returned %s for %s: %s", response.status, page_url, snippet
                )
                return ExtractionResult.failure(
                    ErrorKind.RENDER_SERVICE_FAILED,
                    f"Render service responded with status {response.status}.",
                    status=response.status,
                    detail=snippet,
                    method=method,
                )

            try:
                data = await response.json(content_type=None)
            except ValueError as e:
                data = None
                logger.warning("Render service returned non-JSON body for %s: %s", page_url, e)

    except asyncio.TimeoutError:
        logger.warning("Render service timed out after %ss for %s", settings.render_service_timeout, page_url)
        return ExtractionResult.failure(
            ErrorKind.RENDER_SERVICE_FAILED,
            f"Render service timed out after {settings.render_service_timeout:g} seconds.",
            method=method,
        )
    except aiohttp.ClientError as e:
        logger.warning("Render service request failed for %s: %s", page_url, e)
        return ExtractionResult.failure(
            ErrorKind.RENDER_SERVICE_FAILED,
            f"Could not reach render service: {e.__class__.__name__}.",
            detail=str(e),
            method=method,
        )

    if not _is_valid_payload(data):
        return ExtractionResult.failure(
            ErrorKind.INVALID_SERVICE_RESPONSE,
            "Render service returned an unexpected response.",
            status=500,
            detail=repr(data)[:SNIPPET_LENGTH],
            method=method,
        )

    candidates = candidates_from_payload(data)
    items = await build_media_items(session, candidates, settings.probe_timeout)
    logger.info("Render service found %d unique media items on %s", len(items), page_url)
    return ExtractionResult.ok(items, method=method)
