"""Revision 2 of the info and difficulty documents.

V2 documents use underscore-prefixed keys (``_songName``, ``_notes``, ...).
The info document restricts ``_difficultyRank`` to the fixed values
1/3/5/7/9, and difficulty events carry 32-bit values.
"""

from __future__ import annotations

from typing import ClassVar

from pydantic import Field

from beat_bundle.schemas.base import U8, U32, SchemaModel, Version
from beat_bundle.schemas.common import BPMChange, Bookmark, Note, Obstacle
from beat_bundle.schemas.enums import (
    Characteristic,
    DifficultyName,
    DifficultyRank,
    Environment,
)


# ── Info document ───────────────────────────────────────────────────────────


class Contributor(SchemaModel):
    role: str = Field(alias="_role")
    name: str = Field(alias="_name")
    icon_path: str = Field(alias="_iconPath")


class InfoCustomData(SchemaModel):
    """SongCore extras attached to the whole map."""

    contributors: tuple[Contributor, ...] | None = Field(None, alias="_contributors")
    custom_environment: str | None = Field(None, alias="_customEnvironment")
    custom_environment_hash: str | None = Field(None, alias="_customEnvironmentHash")


class Color(SchemaModel):
    r: float
    g: float
    b: float


class DifficultyCustomData(SchemaModel):
    """SongCore per-difficulty extras. Every field is optional."""

    difficulty_label: str | None = Field(None, alias="_difficultyLabel")
    editor_offset: float | None = Field(None, alias="_editorOffset")
    editor_old_offset: float | None = Field(None, alias="_editorOldOffset")
    color_left: Color | None = Field(None, alias="_colorLeft")
    color_right: Color | None = Field(None, alias="_colorRight")
    warnings: tuple[str, ...] | None = Field(None, alias="_warnings")
    information: tuple[str, ...] | None = Field(None, alias="_information")
    suggestions: tuple[str, ...] | None = Field(None, alias="_suggestions")
    requirements: tuple[str, ...] | None = Field(None, alias="_requirements")


class DifficultyBeatmap(SchemaModel):
    """One difficulty entry of a characteristic set."""

    difficulty: DifficultyName = Field(alias="_difficulty")
    difficulty_rank: DifficultyRank = Field(alias="_difficultyRank")
    beatmap_filename: str = Field(alias="_beatmapFilename")
    note_jump_movement_speed: float = Field(alias="_noteJumpMovementSpeed")
    note_jump_start_beat_offset: float = Field(alias="_noteJumpStartBeatOffset")
    custom_data: DifficultyCustomData | None = Field(None, alias="_customData")


class DifficultyBeatmapSet(SchemaModel):
    beatmap_characteristic_name: Characteristic = Field(alias="_beatmapCharacteristicName")
    difficulty_beatmaps: tuple[DifficultyBeatmap, ...] = Field(alias="_difficultyBeatmaps")


class Info(SchemaModel):
    """A v2 ``Info.dat`` document."""

    VERSION_KEY: ClassVar[str] = "_version"

    version: Version = Field(alias="_version")
    song_name: str = Field(alias="_songName")
    song_sub_name: str = Field(alias="_songSubName")
    song_author_name: str = Field(alias="_songAuthorName")
    level_author_name: str = Field(alias="_levelAuthorName")
    beats_per_minute: float = Field(alias="_beatsPerMinute")
    song_time_offset: float = Field(alias="_songTimeOffset")
    shuffle: float = Field(alias="_shuffle")
    shuffle_period: float = Field(alias="_shufflePeriod")
    preview_start_time: float = Field(alias="_previewStartTime")
    preview_duration: float = Field(alias="_previewDuration")
    song_filename: str = Field(alias="_songFilename")
    cover_image_filename: str = Field(alias="_coverImageFilename")
    environment_name: Environment = Field(alias="_environmentName")
    custom_data: InfoCustomData | None = Field(None, alias="_customData")
    difficulty_beatmap_sets: tuple[DifficultyBeatmapSet, ...] = Field(
        alias="_difficultyBeatmapSets"
    )


# ── Difficulty document ─────────────────────────────────────────────────────


class Event(SchemaModel):
    """Lighting or gameplay event with a 32-bit value."""

    time: float = Field(alias="_time")  # beats
    event_type: U8 = Field(alias="_type")
    value: U32 = Field(alias="_value")


class Difficulty(SchemaModel):
    """A v2 difficulty document."""

    VERSION_KEY: ClassVar[str] = "_version"

    version: Version = Field(alias="_version")
    bpm_changes: tuple[BPMChange, ...] = Field(alias="_BPMChanges")
    events: tuple[Event, ...] = Field(alias="_events")
    notes: tuple[Note, ...] = Field(alias="_notes")
    obstacles: tuple[Obstacle, ...] = Field(alias="_obstacles")
    # editor-only, often absent
    bookmarks: tuple[Bookmark, ...] | None = Field(None, alias="_bookmarks")
