"""Revision 3 difficulty documents.

V3 maps use short single-letter keys (b, x, y, c, d, a) and separate arrays
for color notes, bomb notes and obstacles. Arrays this module does not model
(sliders, rotation events, light event boxes, ...) are ignored on decode.
"""

from __future__ import annotations

from typing import ClassVar

from pydantic import Field

from beat_bundle.schemas.base import U32, SchemaModel, Version
from beat_bundle.schemas.enums import CutDirection, LineIndex, LineLayer, NoteColor


class BpmEvent(SchemaModel):
    beat: float = Field(alias="b")
    bpm: float = Field(alias="m")


class BasicEvent(SchemaModel):
    beat: float = Field(alias="b")
    event_type: U32 = Field(alias="et")
    value: int = Field(alias="i")
    float_value: float = Field(alias="f")


class ColorNote(SchemaModel):
    beat: float = Field(alias="b")
    line_index: LineIndex = Field(alias="x")
    line_layer: LineLayer = Field(alias="y")
    color: NoteColor = Field(alias="c")
    cut_direction: CutDirection = Field(alias="d")
    angle_offset: int = Field(alias="a")  # degrees, counter-clockwise


class BombNote(SchemaModel):
    beat: float = Field(alias="b")
    line_index: LineIndex = Field(alias="x")
    line_layer: LineLayer = Field(alias="y")


class WallObstacle(SchemaModel):
    beat: float = Field(alias="b")
    line_index: LineIndex = Field(alias="x")
    line_layer: LineLayer = Field(alias="y")
    duration: float = Field(alias="d")
    width: U32 = Field(alias="w")
    height: U32 = Field(alias="h")


class DifficultyV3(SchemaModel):
    """A v3 difficulty document."""

    VERSION_KEY: ClassVar[str] = "version"

    version: Version
    bpm_events: tuple[BpmEvent, ...] = Field(alias="bpmEvents")
    basic_events: tuple[BasicEvent, ...] = Field(alias="basicBeatmapEvents")
    color_notes: tuple[ColorNote, ...] = Field(alias="colorNotes")
    bomb_notes: tuple[BombNote, ...] = Field(alias="bombNotes")
    obstacles: tuple[WallObstacle, ...]
