"""Media extraction module - acquire media references from a page."""

from functools import partial
from typing import Awaitable, Callable, List, Tuple

import aiohttp

from ..config import ExtractorSettings
from ..normalizer import NormalizedUrl
from .base import (
    AcquisitionMethod,
    Candidate,
    ErrorKind,
    ExtractionError,
    ExtractionResult,
    MediaItem,
    MediaType,
)
from .metadata import build_media_items, probe_size, probe_sizes
from .render_service import extract_via_render_service
from .static import extract_static, find_candidates

Strategy = Callable[[aiohttp.ClientSession, NormalizedUrl], Awaitable[ExtractionResult]]


async def _render_strategy(settings: ExtractorSettings, session: aiohttp.ClientSession, target: NormalizedUrl):
    return await extract_via_render_service(session, target.url, settings)


async def _static_strategy(settings: ExtractorSettings, session: aiohttp.ClientSession, target: NormalizedUrl):
    return await extract_static(session, target.url, target.origin, settings)


def get_strategies(settings: ExtractorSettings) -> List[Tuple[AcquisitionMethod, Strategy]]:
    """Acquisition strategies in preference order: render service, then static fetch."""
    return [
        (AcquisitionMethod.RENDER_SERVICE, partial(_render_strategy, settings)),
        (AcquisitionMethod.STATIC, partial(_static_strategy, settings)),  # Always-available fallback
    ]


__all__ = [
    "AcquisitionMethod",
    "Candidate",
    "ErrorKind",
    "ExtractionError",
    "ExtractionResult",
    "MediaItem",
    "MediaType",
    "Strategy",
    "build_media_items",
    "extract_static",
    "extract_via_render_service",
    "find_candidates",
    "get_strategies",
    "probe_size",
    "probe_sizes",
]
