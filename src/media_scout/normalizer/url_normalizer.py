"""URL normalizer for user-supplied site addresses and discovered asset references."""

import re
from dataclasses import dataclass
from typing import Optional
from urllib.parse import quote, urljoin, urlsplit, urlunsplit


# Schemes a page or media asset may use
ALLOWED_SCHEMES = ("http", "https")

_SCHEME_PATTERN = re.compile(r"^[a-zA-Z][a-zA-Z0-9+.-]*://")

# Characters never valid in a host name
_BAD_HOST_CHARS = re.compile(r"[\s<>\"{}|\\^`]")

# Characters left untouched when re-quoting path/query components
_SAFE_CHARS = "/%:@!$&'()*+,;=-._~?#[]"


class InvalidUrlError(ValueError):
    """Raised when a user-supplied address cannot be turned into an absolute URL."""


@dataclass(frozen=True)
class NormalizedUrl:
    """An absolute, scheme-qualified page URL."""

    url: str
    scheme: str
    host: str
    pathname: str

    @property
    def origin(self) -> str:
        """Scheme + host, the base for resolving relative asset references."""
        return f"{self.scheme}://{self.host}"


@dataclass(frozen=True)
class AssetDetails:
    """File details derived from an asset URL's last path segment."""

    extension: Optional[str] = None
    filename: Optional[str] = None


def _canonicalize(url: str) -> Optional[str]:
    """Return the canonical string form of an absolute http(s) URL, or None."""
    try:
        parts = urlsplit(url.strip())
        # Accessing .port validates it
        parts.port
    except ValueError:
        return None

    scheme = parts.scheme.lower()
    if scheme not in ALLOWED_SCHEMES or not parts.hostname:
        return None
    if _BAD_HOST_CHARS.search(parts.hostname) or not parts.hostname.strip("."):
        return None

    netloc = parts.netloc
    userinfo, sep, hostport = netloc.rpartition("@")
    netloc = f"{userinfo}{sep}{hostport.lower()}"

    path = quote(parts.path, safe=_SAFE_CHARS) or "/"
    query = quote(parts.query, safe=_SAFE_CHARS)
    fragment = quote(parts.fragment, safe=_SAFE_CHARS)

    return urlunsplit((scheme, netloc, path, query, fragment))


def normalize_url(raw: Optional[str]) -> NormalizedUrl:
    """
    Validate and canonicalize a user-supplied site address.

    Prepends ``https://`` when the input carries no scheme.

    Args:
        raw: Address as typed by the user

    Returns:
        NormalizedUrl with the canonical URL string and its parts

    Raises:
        InvalidUrlError: if the input is empty or not a valid http(s) URL
    """
    if raw is None or not raw.strip():
        raise InvalidUrlError("URL is required")

    candidate = raw.strip()
    if not _SCHEME_PATTERN.match(candidate):
        candidate = f"https://{candidate}"

    url = _canonicalize(candidate)
    if url is None:
        raise InvalidUrlError(f"Invalid URL format: {raw.strip()}")

    parts = urlsplit(url)
    return NormalizedUrl(
        url=url,
        scheme=parts.scheme,
        host=parts.netloc.rpartition("@")[2],
        pathname=parts.path,
    )


def resolve_candidate(candidate: Optional[str], base: str) -> Optional[str]:
    """
    Resolve a possibly-relative asset reference against a base URL.

    Returns None when the candidate is empty or does not resolve to a valid
    absolute http(s) URL.
    """
    if not candidate or not candidate.strip():
        return None
    try:
        absolute = urljoin(base, candidate.strip())
    except ValueError:
        return None
    return _canonicalize(absolute)


def validate_absolute(candidate: object) -> Optional[str]:
    """Re-validate a URL reported as already absolute; None if it is not."""
    if not isinstance(candidate, str):
        return None
    return _canonicalize(candidate)


def resolve_asset_details(absolute_url: str) -> AssetDetails:
    """
    Derive extension and filename from an absolute URL. Never raises.

    >>> resolve_asset_details("https://x.com/path/photo.JPG?v=2")
    AssetDetails(extension='jpg', filename='photo.JPG')
    """
    if not isinstance(absolute_url, str):
        return AssetDetails()
    try:
        path = urlsplit(absolute_url).path
    except ValueError:
        return AssetDetails()

    filename = path[path.rfind("/") + 1:]
    filename = filename.split("?")[0].split("#")[0]
    if not filename:
        return AssetDetails()

    extension = None
    if "." in filename:
        extension = filename[filename.rfind(".") + 1:].lower() or None

    return AssetDetails(extension=extension, filename=filename)
