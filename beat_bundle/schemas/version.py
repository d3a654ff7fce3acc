"""Three-component schema version identifiers (``major.minor.patch``)."""

from __future__ import annotations

import re
from typing import Any, NamedTuple

from beat_bundle.errors import SchemaVersionError

_VERSION_RE = re.compile(
    r"^(0|[1-9]\d*)\.(0|[1-9]\d*)\.(0|[1-9]\d*)"
    r"(?:-([0-9A-Za-z-]+(?:\.[0-9A-Za-z-]+)*))?"
    r"(?:\+([0-9A-Za-z-]+(?:\.[0-9A-Za-z-]+)*))?$"
)


class SchemaVersion(NamedTuple):
    major: int
    minor: int
    patch: int
    prerelease: str = ""
    build: str = ""

    @classmethod
    def parse(cls, value: Any) -> SchemaVersion:
        """Parse a semantic version string, raising SchemaVersionError."""
        if not isinstance(value, str):
            raise SchemaVersionError(f"Version must be a string, got {value!r}")
        match = _VERSION_RE.match(value)
        if match is None:
            raise SchemaVersionError(f"Invalid version {value!r}: expected major.minor.patch")
        major, minor, patch, prerelease, build = match.groups()
        return cls(int(major), int(minor), int(patch), prerelease or "", build or "")

    def __str__(self) -> str:
        text = f"{self.major}.{self.minor}.{self.patch}"
        if self.prerelease:
            text += f"-{self.prerelease}"
        if self.build:
            text += f"+{self.build}"
        return text
