"""Event log for extraction outcomes."""

from .models import EventStatus, ScrapeEvent
from .sinks import EventSink, JsonlEventSink, LogEventSink, create_sink

__all__ = [
    "EventStatus",
    "ScrapeEvent",
    "EventSink",
    "JsonlEventSink",
    "LogEventSink",
    "create_sink",
]
