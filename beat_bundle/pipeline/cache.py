"""Remember bundles a loader has already resolved."""

from __future__ import annotations

import hashlib
import logging
import threading
from typing import Callable

from beat_bundle.errors import SourceError
from beat_bundle.schemas.bundle import Bundle
from beat_bundle.sources.base import DocumentSource

logger = logging.getLogger(__name__)

# document name -> SHA-256 of its content
Fingerprint = dict[str, str]


def compute_bytes_hash(data: bytes) -> str:
    return hashlib.sha256(data).hexdigest()


def fingerprint_documents(source: DocumentSource, names) -> Fingerprint:
    """Hash the current content of each named document."""
    return {name: compute_bytes_hash(source.open(name)) for name in names}


class RecordingSource:
    """A DocumentSource wrapper that remembers the digest of every read.

    After a bundle is built through it, ``fingerprint`` names exactly the
    documents the bundle depends on, wherever they live in the source.
    """

    def __init__(self, source: DocumentSource):
        self.source = source
        self.fingerprint: Fingerprint = {}
        self._lock = threading.Lock()

    def open(self, name: str) -> bytes:
        data = self.source.open(name)
        with self._lock:
            self.fingerprint[name] = compute_bytes_hash(data)
        return data

    def exists(self, name: str) -> bool:
        return self.source.exists(name)

    def describe(self) -> str:
        return self.source.describe()


class BundleCache:
    """Bundles keyed by reference, each stored with a content fingerprint.

    On lookup the caller recomputes the digests of the stored documents. A
    mismatch, or a document that can no longer be read, evicts the entry so
    edited folders or replaced archives are re-resolved. ``invalidate`` and
    ``clear`` drop entries explicitly. Owned by a single loader.
    """

    def __init__(self):
        self._entries: dict[str, tuple[Fingerprint, Bundle]] = {}

    def get(
        self, reference: str, current: Callable[[Fingerprint], Fingerprint]
    ) -> Bundle | None:
        entry = self._entries.get(reference)
        if entry is None:
            return None
        stored_fingerprint, bundle = entry
        try:
            fresh = current(stored_fingerprint)
        except SourceError as exc:
            logger.debug("Cached bundle for %s is unreadable: %s", reference, exc)
            fresh = None
        if fresh != stored_fingerprint:
            logger.debug("Cached bundle for %s is stale", reference)
            del self._entries[reference]
            return None
        return bundle

    def put(self, reference: str, fingerprint: Fingerprint, bundle: Bundle) -> None:
        self._entries[reference] = (dict(fingerprint), bundle)

    def invalidate(self, reference: str) -> bool:
        """Drop one entry. Returns True if it was cached."""
        return self._entries.pop(reference, None) is not None

    def clear(self) -> None:
        self._entries.clear()

    def __contains__(self, reference: str) -> bool:
        return reference in self._entries

    def __len__(self) -> int:
        return len(self._entries)
