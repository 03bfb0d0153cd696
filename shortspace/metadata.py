"""Codec for page metadata stored alongside each short URL."""

import json
from typing import Any, Dict, Mapping, Optional

from .errors import CodecError


def encode_metadata(metadata: Optional[Mapping[str, str]]) -> Optional[str]:
    """Encode a string mapping for storage.

    ``None`` stays ``None`` so the column holds SQL NULL.
    """
    if metadata is None:
        return None

    for key, value in metadata.items():
        if not isinstance(key, str) or not isinstance(value, str):
            raise CodecError(f"Metadata must map strings to strings, got {key!r}: {value!r}")

    return json.dumps(dict(metadata), ensure_ascii=False)


def decode_metadata(value: Any) -> Optional[Dict[str, str]]:
    """Decode a stored metadata value.

    Returns ``None`` for NULL (and the JSON literal ``null``), which is
    distinct from an empty mapping.

    Raises:
        CodecError: If the value is malformed or of an unsupported type
    """
    if value is None:
        return None

    if isinstance(value, (bytes, bytearray, memoryview)):
        try:
            text = bytes(value).decode("utf-8")
        except UnicodeDecodeError as e:
            raise CodecError(f"Metadata is not valid UTF-8: {e}") from e
    elif isinstance(value, str):
        text = value
    else:
        raise CodecError(f"Unsupported type for metadata: {type(value).__name__}")

    try:
        decoded = json.loads(text)
    except json.JSONDecodeError as e:
        raise CodecError(f"Malformed metadata: {e}") from e

    if decoded is None:
        return None

    if not isinstance(decoded, dict):
        raise CodecError(f"Metadata must be a JSON object, got {type(decoded).__name__}")

    for key, item in decoded.items():
        if not isinstance(item, str):
            raise CodecError(f"Metadata value for '{key}' is not a string")

    return decoded
