"""Revision 1 (legacy) of the info and difficulty documents.

Legacy info documents use plain snake_case keys and a free-form unsigned
``difficulty_rank``. Legacy difficulty documents share the underscore layout
of revision 2 but limit event values to a single byte.
"""

from __future__ import annotations

from typing import ClassVar

from pydantic import Field

from beat_bundle.schemas.base import U8, U32, SchemaModel, Version
from beat_bundle.schemas.common import BPMChange, Bookmark, Note, Obstacle
from beat_bundle.schemas.enums import Characteristic, DifficultyName, Environment


class LegacyContributor(SchemaModel):
    role: str
    name: str
    icon_path: str


class LegacyInfoCustomData(SchemaModel):
    contributors: tuple[LegacyContributor, ...] | None = None
    custom_environment: str | None = None
    custom_environment_hash: str | None = None


class LegacyDifficultyCustomData(SchemaModel):
    difficulty_label: str | None = None


class LegacyDifficultyBeatmap(SchemaModel):
    difficulty: DifficultyName
    difficulty_rank: U32  # any unsigned value; not restricted to 1/3/5/7/9
    beatmap_filename: str
    note_jump_movement_speed: float
    note_jump_start_beat_offset: float
    custom_data: LegacyDifficultyCustomData | None = None


class LegacyDifficultyBeatmapSet(SchemaModel):
    beatmap_characteristic_name: Characteristic
    difficulty_beatmaps: tuple[LegacyDifficultyBeatmap, ...]


class LegacyInfo(SchemaModel):
    """A revision 1 info document."""

    VERSION_KEY: ClassVar[str] = "version"

    version: Version
    song_name: str
    song_sub_name: str
    song_author_name: str
    level_author_name: str
    beats_per_minute: float
    song_time_offset: float
    shuffle: float
    shuffle_period: float
    preview_start_time: float
    preview_duration: float
    song_filename: str
    cover_image_filename: str
    environment_name: Environment
    custom_data: LegacyInfoCustomData | None = None
    difficulty_beatmap_sets: tuple[LegacyDifficultyBeatmapSet, ...]


class LegacyEvent(SchemaModel):
    """Event whose value fits in one byte."""

    time: float = Field(alias="_time")
    event_type: U8 = Field(alias="_type")
    value: U8 = Field(alias="_value")


class LegacyDifficulty(SchemaModel):
    """A revision 1 difficulty document."""

    VERSION_KEY: ClassVar[str] = "_version"

    version: Version = Field(alias="_version")
    bpm_changes: tuple[BPMChange, ...] = Field(alias="_BPMChanges")
    events: tuple[LegacyEvent, ...] = Field(alias="_events")
    notes: tuple[Note, ...] = Field(alias="_notes")
    obstacles: tuple[Obstacle, ...] = Field(alias="_obstacles")
    bookmarks: tuple[Bookmark, ...] | None = Field(None, alias="_bookmarks")
