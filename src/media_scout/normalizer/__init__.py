"""Normalizer module for page addresses and asset references."""

from .url_normalizer import (
    AssetDetails,
    InvalidUrlError,
    NormalizedUrl,
    normalize_url,
    resolve_asset_details,
    resolve_candidate,
    validate_absolute,
)

__all__ = [
    "AssetDetails",
    "InvalidUrlError",
    "NormalizedUrl",
    "normalize_url",
    "resolve_asset_details",
    "resolve_candidate",
    "validate_absolute",
]
