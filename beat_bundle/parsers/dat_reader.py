"""Decode Beat Saber .dat bytes with automatic gzip and BOM handling."""

import gzip
import json
import math
import zlib

from beat_bundle.errors import FieldDecodeError

GZIP_MAGIC = b'\x1f\x8b'
UTF8_BOM = b'\xef\xbb\xbf'


def _finite_float(text: str) -> float:
    value = float(text)
    if math.isinf(value):
        raise ValueError(f"{text} is out of range for a JSON number")
    return value


def _reject_constant(name: str):
    raise ValueError(f"{name} is not a valid JSON number")


def read_dat_text(raw: bytes) -> str:
    """Return the JSON text of raw .dat content, gunzipped and BOM-stripped.

    Raises:
        FieldDecodeError: If the gzip stream is corrupt or the text is not
            UTF-8.
    """
    if raw[:2] == GZIP_MAGIC:
        try:
            raw = gzip.decompress(raw)
        except (OSError, EOFError, zlib.error) as exc:
            raise FieldDecodeError("", f"corrupt gzip data: {exc}") from exc
    if raw[:3] == UTF8_BOM:
        raw = raw[3:]
    try:
        return raw.decode("utf-8")
    except UnicodeDecodeError as exc:
        raise FieldDecodeError("", f"invalid JSON: {exc}") from exc


def parse_json(text: str) -> dict:
    """Parse document text into a JSON object.

    ``NaN``, ``Infinity`` and floats that overflow are rejected, as are integers
    too long to convert and nesting too deep to parse.

    Raises:
        FieldDecodeError: If the text is not JSON or its top level is not
            an object.
    """
    try:
        data = json.loads(text, parse_float=_finite_float, parse_constant=_reject_constant)
    except (ValueError, RecursionError) as exc:
        raise FieldDecodeError("", f"invalid JSON: {exc}") from exc
    if not isinstance(data, dict):
        raise FieldDecodeError("", f"expected a JSON object, got {type(data).__name__}")
    return data
