"""The resolved in-memory form of one map: info plus every difficulty."""

from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Mapping

from beat_bundle.schemas.detection import DifficultyDocument, InfoDocument
from beat_bundle.schemas.enums import Characteristic

# characteristic -> difficulty rank -> decoded difficulty document
DifficultyMap = Mapping[Characteristic, Mapping[int, DifficultyDocument]]


@dataclass(frozen=True)
class Bundle:
    """A Beat Saber map with all of its difficulty documents resolved.

    ``difficulties`` is wrapped in read-only views on construction.
    """

    info: InfoDocument
    difficulties: DifficultyMap = field(default_factory=dict)
    key: str | None = None  # BeatSaver key for remote loads
    length: float | None = None  # probed audio length in seconds; None = unknown

    def __post_init__(self):
        frozen = MappingProxyType({
            characteristic: MappingProxyType(dict(ranks))
            for characteristic, ranks in self.difficulties.items()
        })
        object.__setattr__(self, "difficulties", frozen)

    def difficulty(self, characteristic: Characteristic | str, rank: int) -> DifficultyDocument:
        """Return the document stored for (characteristic, rank).

        Raises:
            KeyError: If the bundle has no such entry.
        """
        return self.difficulties[Characteristic(characteristic)][rank]
