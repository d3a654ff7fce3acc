"""The named-document interface shared by folder and archive sources."""

from __future__ import annotations

from typing import Protocol, Sequence, runtime_checkable

from beat_bundle.errors import DocumentNotFoundError

INFO_FILENAMES = ("Info.dat", "info.dat")


@runtime_checkable
class DocumentSource(Protocol):
    """Anything that can return the bytes of a document by exact name.

    Names are matched case-sensitively against the declared filename; no
    source may fall back to a fuzzy match.
    """

    def open(self, name: str) -> bytes:
        """Return the content of ``name``.

        Raises:
            DocumentNotFoundError: If no entry matches ``name`` exactly.
            SourceError: If the entry exists but cannot be read.
        """
        ...

    def exists(self, name: str) -> bool:
        ...

    def describe(self) -> str:
        """Short human-readable origin, used in logs and errors."""
        ...


def find_info_name(
    source: DocumentSource, candidates: Sequence[str] = INFO_FILENAMES
) -> str:
    """Return the first info filename the source provides."""
    for name in candidates:
        if source.exists(name):
            return name
    raise DocumentNotFoundError(" or ".join(candidates), source.describe())
