"""Tests for the metadata codec."""

import pytest

from shortspace.errors import CodecError
from shortspace.metadata import decode_metadata, encode_metadata


class TestEncode:
    """Test metadata encoding."""

    def test_none_stays_none(self):
        assert encode_metadata(None) is None

    def test_mapping_round_trips(self):
        meta = {"title": "Example", "description": "Ünïcode", "image": ""}
        assert decode_metadata(encode_metadata(meta)) == meta

    def test_empty_mapping_is_present(self):
        encoded = encode_metadata({})
        assert encoded is not None
        assert decode_metadata(encoded) == {}

    def test_non_string_values_rejected(self):
        with pytest.raises(CodecError):
            encode_metadata({"title": 3})


class TestDecode:
    """Test metadata decoding."""

    def test_null_is_absent(self):
        assert decode_metadata(None) is None

    def test_json_null_is_absent(self):
        assert decode_metadata("null") is None

    def test_bytes_accepted(self):
        assert decode_metadata(b'{"title": "x"}') == {"title": "x"}
        assert decode_metadata(memoryview(b'{"title": "x"}')) == {"title": "x"}

    @pytest.mark.parametrize("value", [
        "{not json",
        "[1, 2]",
        '"text"',
        '{"title": 1}',
        b"\xff\xfe",
        42,
        3.5,
    ])
    def test_malformed_or_unsupported(self, value):
        with pytest.raises(CodecError):
            decode_metadata(value)
