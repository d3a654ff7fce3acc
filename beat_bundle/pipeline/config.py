"""Loader configuration: every tunable of BundleLoader in one dataclass."""

from __future__ import annotations

import json
from dataclasses import asdict, dataclass, fields
from pathlib import Path

from beat_bundle.sources.base import INFO_FILENAMES
from beat_bundle.sources.beatsaver import BASE_URL, DOWNLOAD_BASE_URL, USER_AGENT


@dataclass
class LoaderConfig:
    """Settings for BundleLoader."""

    # Info documents tried, in order, at the root of a folder or archive
    info_filenames: tuple[str, ...] = INFO_FILENAMES

    # Difficulty fetch/decode threads; 0 or 1 = sequential
    workers: int = 0

    # Read the song file and store its probed length on the bundle
    probe_audio: bool = False

    # Reuse bundles already loaded by the same loader
    use_cache: bool = True

    # Remote archives
    beatsaver_url: str = BASE_URL
    download_url: str = DOWNLOAD_BASE_URL
    user_agent: str = USER_AGENT

    def __post_init__(self) -> None:
        self.info_filenames = tuple(self.info_filenames)
        if self.workers < 0:
            raise ValueError(f"workers must be >= 0, got {self.workers}")

    def save(self, path: Path) -> None:
        """Save config to JSON file."""
        path = Path(path)
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(json.dumps(asdict(self), indent=2), encoding="utf-8")

    @classmethod
    def load(cls, path: Path) -> LoaderConfig:
        """Load config from JSON file."""
        data = json.loads(Path(path).read_text(encoding="utf-8"))
        # Only pass known fields to handle forward/backward compat
        known = {f.name for f in fields(cls)}
        return cls(**{k: v for k, v in data.items() if k in known})
