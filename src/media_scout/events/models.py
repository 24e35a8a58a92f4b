"""Data models for extraction events."""

from enum import Enum
from datetime import datetime
from typing import Optional
from pydantic import BaseModel, Field

from ..extractor.base import AcquisitionMethod


class EventStatus(str, Enum):
    """Outcome recorded for an extraction attempt."""

    SUCCESS = "Success"
    FAILURE = "Failure"


class ScrapeEvent(BaseModel):
    """One record handed to the event log."""

    url: str = Field(..., description="Page URL, or N/A when none was usable")
    status: EventStatus
    items_found: Optional[int] = Field(None, ge=0, alias="itemsFound")
    error_message: Optional[str] = Field(None, alias="errorMessage")
    method: Optional[AcquisitionMethod] = None
    status_code: Optional[int] = Field(None, alias="statusCode")
    timestamp: datetime = Field(default_factory=datetime.now)

    class Config:
        populate_by_name = True
        use_enum_values = True

    def to_record(self) -> dict:
        """camelCase dict with absent fields omitted."""
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)
