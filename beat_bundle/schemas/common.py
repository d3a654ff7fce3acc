"""Difficulty objects shared by the underscore-keyed revisions (1 and 2).

Only events differ between those revisions (event value width), so events
live in the revision modules; everything else is defined once here.
"""

from __future__ import annotations

from pydantic import Field

from beat_bundle.schemas.base import U8, U32, SchemaModel
from beat_bundle.schemas.enums import (
    CutDirection,
    LineIndex,
    LineLayer,
    NoteType,
    ObstacleType,
)


class BPMChange(SchemaModel):
    """A tempo change, as written by mapping editors."""

    bpm: float = Field(alias="_BPM")
    time: float = Field(alias="_time")  # beats
    beats_per_bar: U32 = Field(alias="_beatsPerBar")
    metronome_offset: U32 = Field(alias="_metronomeOffset")


class Note(SchemaModel):
    """A color note or bomb."""

    time: float = Field(alias="_time")  # beats
    line_index: LineIndex = Field(alias="_lineIndex")  # column 0-3
    line_layer: LineLayer = Field(alias="_lineLayer")  # row 0-2
    note_type: NoteType = Field(alias="_type")
    cut_direction: CutDirection = Field(alias="_cutDirection")


class Obstacle(SchemaModel):
    """A wall (full height) or ceiling (crouch) obstacle."""

    time: float = Field(alias="_time")  # beats
    line_index: LineIndex = Field(alias="_lineIndex")
    obstacle_type: ObstacleType = Field(alias="_type")
    duration: float = Field(alias="_duration")  # beats
    width: U8 = Field(alias="_width")  # columns, extending to the right


class Bookmark(SchemaModel):
    """Editor bookmark; ignored by the game."""

    time: float = Field(alias="_time")
    name: str = Field(alias="_name")
