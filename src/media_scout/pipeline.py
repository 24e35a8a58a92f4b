"""Acquisition orchestrator: render service first, static fetch as fallback."""

import logging
from typing import List, Optional, Tuple

import aiohttp

from .config import ExtractorSettings
from .events import EventSink, EventStatus, LogEventSink, ScrapeEvent
from .extractor import AcquisitionMethod, ErrorKind, ExtractionResult, Strategy, get_strategies
from .extractor.base import ExtractionError
from .normalizer import InvalidUrlError, normalize_url

logger = logging.getLogger(__name__)

# Status reported when the preferred path failed server-side or never answered
UPSTREAM_FAILURE_STATUS = 502

UNHANDLED_MESSAGE = "An error occurred during scraping."


def upstream_status(error: ExtractionError) -> int:
    """Map a failed attempt's status: 4xx pass through, anything else is an upstream failure."""
    if error.status is not None and 400 <= error.status < 500:
        return error.status
    return UPSTREAM_FAILURE_STATUS


def _is_definitive(status: Optional[int]) -> bool:
    return status is not None and 400 <= status < 600


def combine_failures(failures: List[Tuple[AcquisitionMethod, ExtractionError]]) -> ExtractionError:
    """
    Fold every attempt's failure into one terminal error.

    The message lists each reason in attempt order. The status is the last
    attempt's own status when it is a real client/server error, otherwise the
    mapped status of the attempts before it, otherwise 500.
    """
    labels = {
        AcquisitionMethod.RENDER_SERVICE: "Render service",
        AcquisitionMethod.STATIC: "Static fetch",
    }
    message = " | ".join(f"{labels[method]}: {error.message}" for method, error in failures)

    last_method, last_error = failures[-1]
    if _is_definitive(last_error.status):
        status = last_error.status
    elif len(failures) > 1:
        status = upstream_status(failures[-2][1])
    else:
        status = 500

    return ExtractionError(
        kind=last_error.kind,
        message=message,
        status=status,
        detail="; ".join(error.detail for _, error in failures if error.detail) or None,
    )


class MediaPipeline:
    """Runs one extraction per call; holds only read-only configuration."""

    def __init__(
        self,
        settings: Optional[ExtractorSettings] = None,
        event_sink: Optional[EventSink] = None,
        strategies: Optional[List[Tuple[AcquisitionMethod, Strategy]]] = None,
    ):
        self.settings = settings or ExtractorSettings()
        self.event_sink = event_sink or LogEventSink()
        self.strategies = strategies or get_strategies(self.settings)

    async def extract(self, raw_url: Optional[str]) -> ExtractionResult:
        """
        Extract media from a user-supplied address.

        Always returns a result; unexpected faults become an Unhandled/500
        failure instead of propagating.
        """
        try:
            return await self._extract(raw_url)
        except Exception as e:
            return await self.unhandled(raw_url, e)

    async def unhandled(self, raw_url: Optional[str], exc: BaseException) -> ExtractionResult:
        """Convert an unexpected fault into a 500 result and record it."""
        logger.exception("Unexpected error while extracting %s", raw_url, exc_info=exc)
        await self._emit(ScrapeEvent(
            url=raw_url or "N/A (Error before URL processing)",
            status=EventStatus.FAILURE,
            items_found=0,
            error_message=str(exc) or exc.__class__.__name__,
            status_code=500,
        ))
        return ExtractionResult.failure(ErrorKind.UNHANDLED, UNHANDLED_MESSAGE, status=500)

    async def _extract(self, raw_url: Optional[str]) -> ExtractionResult:
        try:
            target = normalize_url(raw_url)
        except InvalidUrlError as e:
            await self._emit(ScrapeEvent(
                url=(raw_url or "").strip() or "N/A",
                status=EventStatus.FAILURE,
                error_message=str(e),
                status_code=400,
            ))
            return ExtractionResult.failure(ErrorKind.INVALID_URL, str(e), status=400)

        logger.info("Scraping: %s", target.url)
        failures: List[Tuple[AcquisitionMethod, ExtractionError]] = []

        # No pool limit: every size probe starts at once
        connector = aiohttp.TCPConnector(limit=0)
        async with aiohttp.ClientSession(connector=connector) as session:
            for method, strategy in self.strategies:
                result = await strategy(session, target)
                result.method = method

                if result.success:
                    await self._emit(ScrapeEvent(
                        url=target.url,
                        status=EventStatus.SUCCESS,
                        items_found=len(result.items),
                        method=method,
                    ))
                    return result

                failures.append((method, result.error))
                status: Optional[int] = upstream_status(result.error)
                if result.error.kind == ErrorKind.SERVICE_UNAVAILABLE:
                    # Expected when no endpoint is configured; nothing failed upstream
                    status = None
                    logger.info("%s unavailable: %s", method.value, result.error.message)
                else:
                    logger.warning("%s failed for %s: %s", method.value, target.url, result.error.message)

                # The last attempt's failure is recorded with the terminal event
                if len(failures) < len(self.strategies):
                    await self._emit(ScrapeEvent(
                        url=target.url,
                        status=EventStatus.FAILURE,
                        items_found=0,
                        error_message=result.error.message,
                        method=method,
                        status_code=status,
                    ))

        error = combine_failures(failures)
        await self._emit(ScrapeEvent(
            url=target.url,
            status=EventStatus.FAILURE,
            items_found=0,
            error_message=error.message,
            method=failures[-1][0],
            status_code=error.status,
        ))
        return ExtractionResult(error=error, method=failures[-1][0])

    async def _emit(self, event: ScrapeEvent) -> None:
        try:
            await self.event_sink.record(event)
        except Exception as e:
            logger.warning("Failed to record scrape event: %s", e)


async def extract_media(
    url: str,
    settings: Optional[ExtractorSettings] = None,
    event_sink: Optional[EventSink] = None,
) -> ExtractionResult:
    """Convenience wrapper: run one extraction with a fresh pipeline."""
    return await MediaPipeline(settings, event_sink).extract(url)
