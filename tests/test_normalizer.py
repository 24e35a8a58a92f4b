"""Tests for the normalizer module."""

import pytest

from media_scout.normalizer import (
    AssetDetails,
    InvalidUrlError,
    normalize_url,
    resolve_asset_details,
    resolve_candidate,
    validate_absolute,
)


class TestNormalizeUrl:
    """Tests for normalize_url."""

    def test_prepends_https_without_scheme(self):
        result = normalize_url("example.com/gallery")
        assert result.url == "https://example.com/gallery"
        assert result.scheme == "https"

    def test_keeps_existing_scheme(self):
        result = normalize_url("http://example.com/a?b=1")
        assert result.url == "http://example.com/a?b=1"

    def test_origin_and_pathname(self):
        result = normalize_url("https://Example.COM:8443/dir/page.html")
        assert result.origin == "https://example.com:8443"
        assert result.pathname == "/dir/page.html"

    def test_empty_path_becomes_root(self):
        assert normalize_url("example.com").url == "https://example.com/"

    def test_strips_surrounding_whitespace(self):
        assert normalize_url("  example.com  ").url == "https://example.com/"

    @pytest.mark.parametrize("raw", [None, "", "   "])
    def test_missing_input(self, raw):
        with pytest.raises(InvalidUrlError, match="URL is required"):
            normalize_url(raw)

    @pytest.mark.parametrize("raw", [
        "not a url",
        "https://",
        "ftp://example.com/file",
        "http://example.com:notaport/",
        "http://[::1/",
    ])
    def test_invalid_input(self, raw):
        with pytest.raises(InvalidUrlError):
            normalize_url(raw)

    def test_invalid_url_is_value_error(self):
        with pytest.raises(ValueError):
            normalize_url("https://")


class TestResolveCandidate:
    """Tests for relative reference resolution."""

    def test_parent_relative(self):
        assert resolve_candidate("../img/x.png", "https://example.com/dir/") == "https://example.com/img/x.png"

    def test_root_relative_against_origin(self):
        assert resolve_candidate("/a.jpg", "https://example.com") == "https://example.com/a.jpg"

    def test_protocol_relative(self):
        assert resolve_candidate("//cdn.example.com/v.mp4", "https://example.com") == "https://cdn.example.com/v.mp4"

    def test_absolute_passes_through(self):
        assert resolve_candidate("http://other.org/p.gif", "https://example.com") == "http://other.org/p.gif"

    def test_spaces_are_encoded(self):
        assert resolve_candidate("/my photo.jpg", "https://example.com") == "https://example.com/my%20photo.jpg"

    @pytest.mark.parametrize("candidate", [None, "", "  ", "data:image/png;base64,AAAA", "javascript:void(0)"])
    def test_unusable_candidates(self, candidate):
        assert resolve_candidate(candidate, "https://example.com") is None


class TestValidateAbsolute:
    """Tests for validate_absolute."""

    def test_valid(self):
        assert validate_absolute("https://example.com/a.png") == "https://example.com/a.png"

    @pytest.mark.parametrize("value", ["/relative.png", "not a url", 42, None, {"src": "x"}])
    def test_invalid(self, value):
        assert validate_absolute(value) is None


class TestResolveAssetDetails:
    """Tests for extension/filename derivation."""

    def test_extension_lowercased_and_query_stripped(self):
        details = resolve_asset_details("https://x.com/path/photo.JPG?v=2")
        assert details.extension == "jpg"
        assert details.filename == "photo.JPG"

    def test_trailing_slash_has_no_details(self):
        assert resolve_asset_details("https://x.com/path/") == AssetDetails()

    def test_fragment_stripped(self):
        details = resolve_asset_details("https://x.com/clip.webm#t=10")
        assert details.extension == "webm"
        assert details.filename == "clip.webm"

    def test_no_extension(self):
        details = resolve_asset_details("https://x.com/images/raw")
        assert details.extension is None
        assert details.filename == "raw"

    def test_last_dot_wins(self):
        assert resolve_asset_details("https://x.com/archive.tar.GZ").extension == "gz"

    def test_never_raises(self):
        assert resolve_asset_details(None) == AssetDetails()
        assert resolve_asset_details("http://[::1/") == AssetDetails()
