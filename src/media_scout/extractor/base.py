from dataclasses import dataclass, field
from enum import Enum
from typing import Any, List, Optional


class MediaType(str, Enum):
    IMAGE = "image"
    VIDEO = "video"


class AcquisitionMethod(str, Enum):
    """How a page's media was acquired."""

    RENDER_SERVICE = "RenderService"
    STATIC = "Static"


class ErrorKind(str, Enum):
    """Failure taxonomy for an extraction attempt."""

    INVALID_URL = "InvalidUrl"
    SERVICE_UNAVAILABLE = "ServiceUnavailable"
    RENDER_SERVICE_FAILED = "RenderServiceFailed"
    INVALID_SERVICE_RESPONSE = "InvalidServiceResponse"
    FETCH_FAILED = "FetchFailed"
    UNSUPPORTED_CONTENT_TYPE = "UnsupportedContentType"
    UNHANDLED = "Unhandled"


@dataclass(frozen=True)
class MediaItem:
    type: MediaType
    src: str  # absolute URL, unique within one result
    alt: Optional[str] = None
    extension: Optional[str] = None
    filename: Optional[str] = None
    poster: Optional[str] = None  # videos only
    file_size: Optional[int] = None  # bytes, images only

    def to_dict(self) -> dict[str, Any]:
        """Serialise with the camelCase keys consumers expect, omitting absent fields."""
        data = {
            "type": self.type.value,
            "src": self.src,
            "alt": self.alt,
            "extension": self.extension,
            "filename": self.filename,
            "poster": self.poster,
            "fileSize": self.file_size,
        }
        return {key: value for key, value in data.items() if value is not None}


@dataclass(frozen=True)
class Candidate:
    """A discovered, already-resolved media reference awaiting enrichment."""

    type: MediaType
    src: str
    alt: Optional[str] = None
    poster: Optional[str] = None


@dataclass(frozen=True)
class ExtractionError:
    kind: ErrorKind
    message: str  # human readable, safe to show
    status: Optional[int] = None  # HTTP-equivalent status, None if not informative
    detail: Optional[str] = None  # diagnostics for logs only


@dataclass
class ExtractionResult:
    """Outcome of one acquisition attempt: items on success, an error otherwise."""

    items: List[MediaItem] = field(default_factory=list)
    error: Optional[ExtractionError] = None
    method: Optional[AcquisitionMethod] = None

    @property
    def success(self) -> bool:
        return self.error is None

    @property
    def http_status(self) -> int:
        if self.error is None:
            return 200
        return self.error.status or 500

    @property
    def error_message(self) -> Optional[str]:
        return self.error.message if self.error else None

    @classmethod
    def ok(cls, items: List[MediaItem], method: Optional[AcquisitionMethod] = None) -> "ExtractionResult":
        return cls(items=list(items), method=method)

    @classmethod
    def failure(
        cls,
        kind: ErrorKind,
        message: str,
        status: Optional[int] = None,
        detail: Optional[str] = None,
        method: Optional[AcquisitionMethod] = None,
    ) -> "ExtractionResult":
        return cls(error=ExtractionError(kind, message, status, detail), method=method)

    def to_response(self) -> dict[str, Any]:
        """Body for the inbound interface: ``{"data": [...]}`` or ``{"error": "..."}``."""
        if self.error is not None:
            return {"error": self.error.message}
        return {"data": [item.to_dict() for item in self.items]}


def dedupe_candidates(candidates: List[Candidate]) -> List[Candidate]:
    """Drop repeated ``src`` values, keeping the first occurrence in order."""
    seen: set[str] = set()
    unique = []
    for candidate in candidates:
        if candidate.src in seen:
            continue
        seen.add(candidate.src)
        unique.append(candidate)
    return unique
