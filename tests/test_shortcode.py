"""Tests for short ID generation."""

from shortspace.shortcode import ShortCodeGenerator


class TestShortCodeGenerator:
    """Test short ID generation."""

    def test_generate_default_length(self):
        generator = ShortCodeGenerator()

        code = generator.generate("https://example.com", "d")
        assert len(code) == 5
        assert all(c in "0123456789abcdef" for c in code)

    def test_generate_custom_length(self):
        generator = ShortCodeGenerator(default_length=5)

        code = generator.generate("https://example.com", "d", length=12)
        assert len(code) == 12
        assert generator.is_valid_format(code)

    def test_generate_varies_over_time(self):
        """Same URL and space still yield varying IDs."""
        generator = ShortCodeGenerator(default_length=16)

        codes = {generator.generate("https://example.com", "d") for _ in range(20)}
        assert len(codes) > 1

    def test_is_valid_format(self):
        assert ShortCodeGenerator.is_valid_format("abc12")
        assert ShortCodeGenerator.is_valid_format("ABC_123")
        assert ShortCodeGenerator.is_valid_format("test-code")

        assert not ShortCodeGenerator.is_valid_format("")
        assert not ShortCodeGenerator.is_valid_format("abc 123")
        assert not ShortCodeGenerator.is_valid_format("abc/123")
