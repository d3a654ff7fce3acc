"""Load bundles from info files, map folders, zip archives or BeatSaver keys."""

from __future__ import annotations

import dataclasses
import logging
from pathlib import Path
from typing import Callable

from beat_bundle.audio.probe import AudioFormatReader, probe_duration
from beat_bundle.errors import DocumentNotFoundError, SourceError
from beat_bundle.parsers.bundle_resolver import resolve
from beat_bundle.parsers.document_parser import decode_info
from beat_bundle.pipeline.cache import (
    BundleCache,
    Fingerprint,
    RecordingSource,
    compute_bytes_hash,
    fingerprint_documents,
)
from beat_bundle.pipeline.config import LoaderConfig
from beat_bundle.schemas.bundle import Bundle
from beat_bundle.sources.archive import ArchiveSource
from beat_bundle.sources.base import DocumentSource, find_info_name
from beat_bundle.sources.beatsaver import BeatSaverClient, extract_key
from beat_bundle.sources.directory import DirectorySource

logger = logging.getLogger(__name__)


class BundleLoader:
    """Entry point for turning a map reference into a Bundle.

    The Bundle Resolver only sees a DocumentSource; this class picks the
    source, runs the optional audio probe and owns the bundle cache. Archive
    download and audio probing are injected, so neither is needed for plain
    folder loads.
    """

    def __init__(
        self,
        config: LoaderConfig | None = None,
        client: BeatSaverClient | None = None,
        audio_reader: AudioFormatReader | None = None,
    ):
        self.config = config or LoaderConfig()
        self._client = client
        self.audio_reader = audio_reader
        self.cache = BundleCache()

    @property
    def client(self) -> BeatSaverClient:
        if self._client is None:
            self._client = BeatSaverClient(
                base_url=self.config.beatsaver_url,
                download_url=self.config.download_url,
                user_agent=self.config.user_agent,
            )
        return self._client

    # ── Public entry points ────────────────────────────────────────────────

    def load(self, reference: str | Path) -> Bundle:
        """Load from a folder, a .zip file, an info file, or a remote locator."""
        path = Path(reference)
        if path.is_dir():
            return self.load_directory(path)
        if path.is_file():
            if path.suffix.lower() == ".zip":
                return self.load_archive(path)
            return self.load_info_file(path)
        return self.load_remote(str(reference))

    def load_info_file(self, info_path: Path) -> Bundle:
        """Load a map given the path of its info document."""
        info_path = Path(info_path)
        source = DirectorySource.for_info_file(info_path)
        return self._load_cached(
            f"file:{info_path.resolve()}",
            lambda stored: fingerprint_documents(source, stored),
            lambda: self._load_recorded(source, info_path.name),
        )

    def load_directory(self, folder: Path) -> Bundle:
        """Load a map folder, looking for one of ``config.info_filenames``."""
        folder = Path(folder)
        source = DirectorySource(folder)
        return self._load_cached(
            f"dir:{folder.resolve()}",
            lambda stored: fingerprint_documents(source, stored),
            lambda: self._load_recorded(source),
        )

    def load_archive(self, archive: Path | bytes, key: str | None = None) -> Bundle:
        """Load a zipped map from a path or from raw archive bytes."""
        if isinstance(archive, bytes):
            data, label = archive, "<in-memory archive>"
        else:
            try:
                data, label = Path(archive).read_bytes(), str(archive)
            except OSError as exc:
                raise SourceError(f"Cannot read map archive {archive}: {exc}") from exc
        fingerprint = {"archive": compute_bytes_hash(data)}
        reference = (
            f"zip:{fingerprint['archive']}" if isinstance(archive, bytes) else f"zip:{label}"
        )
        return self._load_cached(
            reference,
            lambda stored: fingerprint,
            lambda: (self._load_archive_data(data, label, key), fingerprint),
        )

    def load_remote(self, reference: str) -> Bundle:
        """Download a map by BeatSaver key or URL and load the archive.

        Raises:
            InvalidReferenceError: If ``reference`` is not a key or map URL.
            RemoteFetchError: If the download fails.
        """
        key = extract_key(reference)
        # uploads are immutable per key, so the key doubles as fingerprint
        fingerprint = {"key": key}

        def build() -> tuple[Bundle, Fingerprint]:
            _, data = self.client.download_archive(key)
            return self._load_archive_data(data, f"beatsaver:{key}", key), fingerprint

        return self._load_cached(f"remote:{key}", lambda stored: fingerprint, build)

    # ── Internals ──────────────────────────────────────────────────────────

    def _load_cached(
        self,
        reference: str,
        current: Callable[[Fingerprint], Fingerprint],
        build: Callable[[], tuple[Bundle, Fingerprint]],
    ) -> Bundle:
        if not self.config.use_cache:
            bundle, _ = build()
            return bundle
        if self.config.probe_audio:
            reference += "#audio"
        cached = self.cache.get(reference, current)
        if cached is not None:
            logger.debug("Using cached bundle for %s", reference)
            return cached
        bundle, fingerprint = build()
        self.cache.put(reference, fingerprint, bundle)
        return bundle

    def _load_recorded(
        self, source: DocumentSource, info_name: str | None = None
    ) -> tuple[Bundle, Fingerprint]:
        recorder = RecordingSource(source)
        if info_name is None:
            info_name = find_info_name(recorder, self.config.info_filenames)
        return self._load_from_source(recorder, info_name), recorder.fingerprint

    def _load_archive_data(self, data: bytes, label: str, key: str | None) -> Bundle:
        source, info_name = ArchiveSource.locate(
            data, self.config.info_filenames, label=label
        )
        with source:
            return self._load_from_source(source, info_name, key=key)

    def _load_from_source(
        self, source: DocumentSource, info_name: str, key: str | None = None
    ) -> Bundle:
        info = decode_info(source.open(info_name))
        bundle = resolve(info, source, workers=self.config.workers)

        length = None
        if self.config.probe_audio:
            length = self._probe(source, info.song_filename)

        logger.info(
            "Loaded %r by %s from %s",
            info.song_name, info.level_author_name, source.describe(),
        )
        return dataclasses.replace(bundle, key=key, length=length)

    def _probe(self, source: DocumentSource, song_filename: str) -> float | None:
        try:
            audio = source.open(song_filename)
        except DocumentNotFoundError:
            logger.warning("Song file %s not found in %s", song_filename, source.describe())
            raise
        length = probe_duration(audio, self.audio_reader)
        if length is None:
            logger.warning("Could not determine the length of %s", song_filename)
        return length
