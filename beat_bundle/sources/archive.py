"""Read map documents straight out of a zip archive."""

from __future__ import annotations

import io
import logging
import zipfile
import zlib
from pathlib import Path
from typing import Sequence, Union

from beat_bundle.errors import DocumentNotFoundError, SourceError
from beat_bundle.sources.base import INFO_FILENAMES

logger = logging.getLogger(__name__)

ArchiveInput = Union[Path, str, bytes, zipfile.ZipFile]


def _open_zip(archive: ArchiveInput) -> zipfile.ZipFile:
    if isinstance(archive, zipfile.ZipFile):
        return archive
    try:
        if isinstance(archive, bytes):
            return zipfile.ZipFile(io.BytesIO(archive))
        return zipfile.ZipFile(Path(archive))
    except (OSError, zipfile.BadZipFile) as exc:
        raise SourceError(f"Cannot open map archive: {exc}") from exc


class ArchiveSource:
    """Resolves document names as entry names inside a zip archive.

    ``prefix`` is the folder (inside the archive) that holds the info
    document; names are looked up as ``prefix + name`` with an exact,
    case-sensitive match.
    """

    def __init__(self, archive: ArchiveInput, prefix: str = "", label: str = ""):
        self.zip = _open_zip(archive)
        self.prefix = prefix
        self.label = label or (self.zip.filename or "<in-memory archive>")
        self._names = set(self.zip.namelist())

    @classmethod
    def locate(
        cls,
        archive: ArchiveInput,
        info_filenames: Sequence[str] = INFO_FILENAMES,
        label: str = "",
    ) -> tuple[ArchiveSource, str]:
        """Find the info document and return a source rooted at its folder.

        Maps are usually zipped flat, but some archives wrap everything in a
        single top-level folder; the shallowest match wins.

        Returns:
            (source, info_name) where ``info_name`` is relative to the
            source's prefix.
        """
        source = cls(archive, label=label)
        candidates = []
        for entry in source._names:
            folder, _, base = entry.rpartition("/")
            if base in info_filenames:
                depth = entry.count("/")
                candidates.append((depth, info_filenames.index(base), folder, base))
        if not candidates:
            source.close()
            raise DocumentNotFoundError(" or ".join(info_filenames), source.describe())
        _, _, folder, base = min(candidates)
        source.prefix = f"{folder}/" if folder else ""
        logger.debug("Found %s%s in %s", source.prefix, base, source.describe())
        return source, base

    def describe(self) -> str:
        if self.prefix:
            return f"{self.label}:{self.prefix}"
        return self.label

    def exists(self, name: str) -> bool:
        return self.prefix + name in self._names

    def open(self, name: str) -> bytes:
        entry = self.prefix + name
        if entry not in self._names:
            raise DocumentNotFoundError(name, self.describe())
        logger.debug("Reading %s from %s", entry, self.label)
        try:
            return self.zip.read(entry)
        except (OSError, zipfile.BadZipFile, zlib.error) as exc:
            raise SourceError(f"Failed to read {entry} from {self.label}: {exc}") from exc

    def close(self) -> None:
        self.zip.close()

    def __enter__(self) -> ArchiveSource:
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.describe()!r})"
