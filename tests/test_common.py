"""Tests for common utilities."""

import pytest

from shortspace.common.headers import build_base_url, extract_forwarded_headers, resolve_path_prefix
from shortspace.common.url_builder import build_short_path, build_short_url
from shortspace.common.validators import is_valid_custom_id, is_valid_url, parse_positive_int


class TestValidators:
    """Test validation utilities."""

    def test_valid_urls(self):
        valid, _ = is_valid_url("https://example.com")
        assert valid

        valid, _ = is_valid_url("http://example.com/path")
        assert valid

        valid, _ = is_valid_url("https://sub.example.com:8080/path?query=value")
        assert valid

    def test_invalid_urls(self):
        valid, error = is_valid_url("")
        assert not valid
        assert "required" in error.lower()

        valid, error = is_valid_url("not-a-url")
        assert not valid

        valid, error = is_valid_url("ftp://example.com")
        assert not valid
        assert "http" in error.lower()

        valid, error = is_valid_url("https://example.com/" + "a" * 2048)
        assert not valid
        assert "too long" in error.lower()

        valid, error = is_valid_url("http://[::1/x")
        assert not valid
        assert "malformed" in error.lower()

    def test_valid_custom_ids(self):
        for short_id in ("a", "abc123", "test-code", "test_code", "x" * 32):
            valid, _ = is_valid_custom_id(short_id)
            assert valid, short_id

    def test_invalid_custom_ids(self):
        valid, error = is_valid_custom_id("")
        assert not valid
        assert "required" in error.lower()

        valid, error = is_valid_custom_id("a" * 33)
        assert not valid
        assert "at most" in error.lower()

        valid, error = is_valid_custom_id("abc@123")
        assert not valid

        valid, error = is_valid_custom_id("a/b")
        assert not valid

        valid, error = is_valid_custom_id("abc\n")
        assert not valid
        assert "only contain" in error

    @pytest.mark.parametrize(
        "value,expected",
        [
            (None, 7),
            ("3", 3),
            (4, 4),
            ("abc", 7),
            ("0", 7),
            (-2, 7),
            ("", 7),
            (True, 7),
        ],
    )
    def test_parse_positive_int(self, value, expected):
        assert parse_positive_int(value, 7) == expected


class TestHeaders:
    """Test header utilities."""

    def test_extract_forwarded_headers(self):
        headers = {
            "X-Forwarded-Proto": "https",
            "X-Forwarded-Host": "short.example.com",
            "X-Forwarded-For": "1.2.3.4",
        }

        forwarded = extract_forwarded_headers(headers)

        assert forwarded == {
            "proto": "https",
            "host": "short.example.com",
            "for": "1.2.3.4",
            "prefix": None,
        }

    def test_build_base_url_prefers_forwarded(self):
        headers = {"x-forwarded-proto": "https", "x-forwarded-host": "short.example.com"}

        assert build_base_url(headers, "http://fallback", "http", "internal") == "https://short.example.com"

    def test_build_base_url_from_request(self):
        assert build_base_url({}, "http://fallback", "http", "localhost:8080") == "http://localhost:8080"

    def test_build_base_url_fallback(self):
        assert build_base_url({}, "http://fallback/") == "http://fallback"

    def test_forwarded_prefix_is_normalised(self):
        assert extract_forwarded_headers({"X-Forwarded-Prefix": "u_s/"})["prefix"] == "/u_s"
        assert extract_forwarded_headers({"X-Forwarded-Prefix": "/"})["prefix"] is None

    def test_resolve_path_prefix(self):
        assert resolve_path_prefix({"x-forwarded-prefix": "/u_s"}, "/s") == "/u_s"
        assert resolve_path_prefix({}, "/s") == "/s"
        assert resolve_path_prefix({}) == ""


class TestURLBuilder:
    """Test URL building utilities."""

    def test_build_short_path(self):
        assert build_short_path("d", "abc12") == "/d/abc12"
        assert build_short_path("d", "abc12", "/s/") == "/s/d/abc12"

    def test_build_short_url(self):
        assert build_short_url("d", "abc12", "https://example.com/") == "https://example.com/d/abc12"
        assert build_short_url("aa", "abc12", "https://example.com", "/s") == "https://example.com/s/aa/abc12"
