"""Resolve every difficulty an info document declares into one Bundle."""

from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor

from beat_bundle.errors import DecodeError, ResolutionError, SourceError
from beat_bundle.parsers.document_parser import decode_difficulty
from beat_bundle.schemas.bundle import Bundle
from beat_bundle.schemas.detection import DifficultyDocument, InfoDocument
from beat_bundle.schemas.enums import Characteristic
from beat_bundle.sources.base import DocumentSource

logger = logging.getLogger(__name__)


def _load_difficulty(
    source: DocumentSource, characteristic: Characteristic, filename: str
) -> DifficultyDocument:
    try:
        return decode_difficulty(source.open(filename))
    except (SourceError, DecodeError) as exc:
        raise ResolutionError(
            f"Failed to load {characteristic.value} difficulty {filename!r} "
            f"from {source.describe()}: {exc}",
            characteristic=characteristic.value,
            filename=filename,
        ) from exc


def resolve(info: InfoDocument, source: DocumentSource, workers: int = 0) -> Bundle:
    """Fetch and decode every difficulty declared by ``info``.

    Entries are keyed by (characteristic, difficulty rank). When the same
    pair is declared twice, the entry declared last wins. Each document is
    fetched and decoded exactly once.

    Args:
        info: Decoded info document.
        source: Where the difficulty files named by ``info`` are read from.
        workers: Fetch/decode in a thread pool of this size when > 1. The
            merge still runs in declaration order, so the result does not
            depend on scheduling.

    Raises:
        ResolutionError: On the first missing or undecodable difficulty (in
            declaration order). No partial bundle is returned.
    """
    entries = [
        (bset.beatmap_characteristic_name, bmap)
        for bset in info.difficulty_beatmap_sets
        for bmap in bset.difficulty_beatmaps
    ]

    def load(entry) -> DifficultyDocument:
        characteristic, bmap = entry
        return _load_difficulty(source, characteristic, bmap.beatmap_filename)

    if workers > 1 and len(entries) > 1:
        with ThreadPoolExecutor(max_workers=workers) as pool:
            # map() yields in submission order and re-raises the first failure
            documents = list(pool.map(load, entries))
    else:
        documents = [load(entry) for entry in entries]

    difficulties: dict[Characteristic, dict[int, DifficultyDocument]] = {}
    for bset in info.difficulty_beatmap_sets:
        difficulties.setdefault(bset.beatmap_characteristic_name, {})
    for (characteristic, bmap), document in zip(entries, documents):
        ranks = difficulties[characteristic]
        if bmap.difficulty_rank in ranks:
            logger.debug(
                "Duplicate rank %s in %s; keeping %s",
                bmap.difficulty_rank, characteristic.value, bmap.beatmap_filename,
            )
        ranks[bmap.difficulty_rank] = document

    logger.info(
        "Resolved %d difficulties across %d characteristics from %s",
        len(entries), len(difficulties), source.describe(),
    )
    return Bundle(info=info, difficulties=difficulties)
