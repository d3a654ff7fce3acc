"""Decode and encode info and difficulty documents."""

from __future__ import annotations

import json
import logging

from beat_bundle.errors import SchemaVersionError
from beat_bundle.parsers.dat_reader import parse_json, read_dat_text
from beat_bundle.schemas.base import SchemaModel
from beat_bundle.schemas.detection import (
    DifficultyDocument,
    InfoDocument,
    Revision,
    detect_version,
    difficulty_revision,
    info_revision,
    version_key,
)
from beat_bundle.schemas.version import SchemaVersion

logger = logging.getLogger(__name__)


def _decode(raw: bytes, kind: str, select) -> SchemaModel:
    text = read_dat_text(raw)
    data = parse_json(text)
    key = version_key(data)
    version: SchemaVersion = detect_version(data)
    logger.debug("Decoding %s document version %s", kind, version)
    model: Revision = select(version)
    if model.VERSION_KEY != key:
        raise SchemaVersionError(
            f"{kind.capitalize()} version {version} is stored under {key!r}, "
            f"but revision {version.major} documents use {model.VERSION_KEY!r}"
        )
    return model.decode(text)


def decode_info(raw: bytes) -> InfoDocument:
    """Decode an ``Info.dat`` document using the revision its version names.

    Raises:
        SchemaVersionError: Missing, malformed or unsupported version, or a
            version stored under the key of another revision.
        FieldDecodeError: Invalid JSON or a field that does not match the
            selected revision.
    """
    return _decode(raw, "info", info_revision)


def decode_difficulty(raw: bytes) -> DifficultyDocument:
    """Decode a difficulty document using the revision its version names."""
    return _decode(raw, "difficulty", difficulty_revision)


def encode_document(document: InfoDocument | DifficultyDocument) -> bytes:
    """Serialize a document back to the JSON layout of its own revision."""
    data = document.model_dump(mode="json", by_alias=True, exclude_none=True)
    return json.dumps(data, ensure_ascii=False, allow_nan=False).encode("utf-8")
