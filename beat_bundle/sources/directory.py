"""Read map documents from a folder on disk."""

from __future__ import annotations

import logging
from pathlib import Path, PurePosixPath

from beat_bundle.errors import DocumentNotFoundError, SourceError

logger = logging.getLogger(__name__)


class DirectorySource:
    """Resolves document names relative to the folder holding ``Info.dat``.

    Each path component has to match a directory entry exactly, so lookups
    stay case-sensitive on case-insensitive file systems, and names that
    would leave the folder are never found.
    """

    def __init__(self, root: Path):
        self.root = Path(root)

    @classmethod
    def for_info_file(cls, info_path: Path) -> DirectorySource:
        return cls(Path(info_path).parent)

    def describe(self) -> str:
        return str(self.root)

    def _locate(self, name: str) -> Path | None:
        parts = PurePosixPath(name.replace("\\", "/")).parts
        if not parts or any(p in ("..", ".", "/") for p in parts):
            return None
        current = self.root
        for part in parts:
            if not current.is_dir():
                return None
            try:
                entries = {entry.name for entry in current.iterdir()}
            except OSError:
                return None
            if part not in entries:
                return None
            current = current / part
        return current if current.is_file() else None

    def exists(self, name: str) -> bool:
        return self._locate(name) is not None

    def open(self, name: str) -> bytes:
        path = self._locate(name)
        if path is None:
            raise DocumentNotFoundError(name, self.describe())
        logger.debug("Reading %s", path)
        try:
            return path.read_bytes()
        except OSError as exc:
            raise SourceError(f"Failed to read {path}: {exc}") from exc

    def __repr__(self) -> str:
        return f"{type(self).__name__}({str(self.root)!r})"
