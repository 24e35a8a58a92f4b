"""Destinations for extraction events."""

import asyncio
import json
import logging
from abc import ABC, abstractmethod
from pathlib import Path

from ..config import EventSettings
from .models import ScrapeEvent

logger = logging.getLogger(__name__)

# Field limits carried over from the record-keeping service
MAX_URL_LENGTH = 250
MAX_ERROR_LENGTH = 2000


class EventSink(ABC):
    """Receives one event per extraction outcome."""

    @abstractmethod
    async def record(self, event: ScrapeEvent) -> None:
        pass


class LogEventSink(EventSink):
    """Writes events to the application log."""

    def __init__(self, name: str = "media_scout.events"):
        self.logger = logging.getLogger(name)

    async def record(self, event: ScrapeEvent) -> None:
        record = event.to_record()
        self.logger.info(
            "Scrape %s: %s (method=%s, items=%s, status=%s)%s",
            record["status"],
            record["url"],
            record.get("method", "-"),
            record.get("itemsFound", "-"),
            record.get("statusCode", "-"),
            f" - {record['errorMessage']}" if "errorMessage" in record else "",
            extra={"scrape_event": record},
        )


class JsonlEventSink(EventSink):
    """Appends events to a JSON-lines file."""

    def __init__(self, path: Path):
        self.path = Path(path)
        self.path.parent.mkdir(parents=True, exist_ok=True)

    async def record(self, event: ScrapeEvent) -> None:
        record = event.to_record()
        record["url"] = record["url"][:MAX_URL_LENGTH]
        if "errorMessage" in record:
            record["errorMessage"] = record["errorMessage"][:MAX_ERROR_LENGTH]

        await asyncio.to_thread(self._append, json.dumps(record, ensure_ascii=False))

    def _append(self, line: str) -> None:
        with open(self.path, "a", encoding="utf-8") as f:
            f.write(line + "\n")


def create_sink(settings: EventSettings) -> EventSink:
    """Build the sink named in the config."""
    if settings.sink == "jsonl":
        return JsonlEventSink(settings.jsonl_path)
    return LogEventSink()
