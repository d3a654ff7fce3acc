"""Pick the schema revision for a raw info or difficulty document.

Every document carries its own version string (``_version`` or ``version``).
The major component selects a model class from a registry; an unknown major
is rejected rather than guessed. New revisions are added with
``register_info_revision`` / ``register_difficulty_revision``.
"""

from __future__ import annotations

from typing import Union

from beat_bundle.errors import SchemaVersionError
from beat_bundle.schemas.base import SchemaModel
from beat_bundle.schemas.v1 import LegacyDifficulty, LegacyInfo
from beat_bundle.schemas.v2 import Difficulty, Info
from beat_bundle.schemas.v3 import DifficultyV3
from beat_bundle.schemas.version import SchemaVersion

InfoDocument = Union[LegacyInfo, Info]
DifficultyDocument = Union[LegacyDifficulty, Difficulty, DifficultyV3]

Revision = type[SchemaModel]

_VERSION_KEYS = ("_version", "version")

_INFO_REVISIONS: dict[int, Revision] = {
    1: LegacyInfo,
    2: Info,
}

_DIFFICULTY_REVISIONS: dict[int, Revision] = {
    1: LegacyDifficulty,
    2: Difficulty,
    3: DifficultyV3,
}


def version_key(data: dict) -> str:
    """Return the key that holds the document's version string."""
    for key in _VERSION_KEYS:
        if key in data:
            return key
    raise SchemaVersionError(
        "Document has no version field. Expected one of: _version, version."
    )


def detect_version(data: dict) -> SchemaVersion:
    """Read the declared version of a document.

    Raises:
        SchemaVersionError: If there is no version field or it is not a
            valid ``major.minor.patch`` string.
    """
    return SchemaVersion.parse(data[version_key(data)])


def _lookup(registry: dict[int, Revision], version: SchemaVersion, kind: str) -> Revision:
    try:
        return registry[version.major]
    except KeyError:
        supported = ", ".join(str(m) for m in sorted(registry))
        raise SchemaVersionError(
            f"Unsupported {kind} version {version} (supported majors: {supported})"
        ) from None


def info_revision(version: SchemaVersion) -> Revision:
    return _lookup(_INFO_REVISIONS, version, "info")


def difficulty_revision(version: SchemaVersion) -> Revision:
    return _lookup(_DIFFICULTY_REVISIONS, version, "difficulty")


def register_info_revision(major: int, model: Revision) -> None:
    """Register the model used for info documents with this major version."""
    _INFO_REVISIONS[major] = model


def register_difficulty_revision(major: int, model: Revision) -> None:
    """Register the model used for difficulty documents with this major version."""
    _DIFFICULTY_REVISIONS[major] = model


def supported_info_majors() -> list[int]:
    return sorted(_INFO_REVISIONS)


def supported_difficulty_majors() -> list[int]:
    return sorted(_DIFFICULTY_REVISIONS)
