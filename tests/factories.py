"""Builders for raw map documents, map folders and zip archives used in tests."""

import io
import json
import zipfile
from pathlib import Path

from beat_bundle.errors import DocumentNotFoundError


def note(time=4.0, line_index=1, line_layer=0, note_type=0, cut_direction=1):
    return {
        "_time": time,
        "_lineIndex": line_index,
        "_lineLayer": line_layer,
        "_type": note_type,
        "_cutDirection": cut_direction,
    }


def obstacle(time=10.0, line_index=0, obstacle_type=0, duration=2.0, width=1):
    return {
        "_time": time,
        "_lineIndex": line_index,
        "_type": obstacle_type,
        "_duration": duration,
        "_width": width,
    }


def event(time=0.0, event_type=1, value=3):
    return {"_time": time, "_type": event_type, "_value": value}


def difficulty_v2(notes=None, events=None, obstacles=None, version="2.2.0", bookmarks=None):
    data = {
        "_version": version,
        "_BPMChanges": [
            {"_BPM": 120.0, "_time": 0.0, "_beatsPerBar": 4, "_metronomeOffset": 4},
        ],
        "_events": events if events is not None else [event()],
        "_notes": notes if notes is not None else [note(), note(8.5, 2, 1, 1, 0)],
        "_obstacles": obstacles if obstacles is not None else [obstacle()],
    }
    if bookmarks is not None:
        data["_bookmarks"] = bookmarks
    return data


def difficulty_v1(**kwargs):
    kwargs.setdefault("version", "1.5.0")
    return difficulty_v2(**kwargs)


def difficulty_v3(version="3.2.0"):
    return {
        "version": version,
        "bpmEvents": [{"b": 0.0, "m": 140.0}],
        "rotationEvents": [],
        "colorNotes": [
            {"b": 4.0, "x": 1, "y": 0, "c": 0, "d": 1, "a": 0},
            {"b": 5.0, "x": 2, "y": 0, "c": 1, "d": 1, "a": 15},
        ],
        "bombNotes": [{"b": 6.0, "x": 0, "y": 2}],
        "obstacles": [{"b": 8.0, "x": 0, "y": 0, "d": 1.5, "w": 1, "h": 5}],
        "sliders": [],
        "basicBeatmapEvents": [{"b": 0.0, "et": 1, "i": 3, "f": 1.0}],
    }


def difficulty_beatmap(difficulty="Easy", rank=1, filename=None, custom_data=None):
    data = {
        "_difficulty": difficulty,
        "_difficultyRank": rank,
        "_beatmapFilename": filename or f"{difficulty}.dat",
        "_noteJumpMovementSpeed": 10.0,
        "_noteJumpStartBeatOffset": 0.0,
    }
    if custom_data is not None:
        data["_customData"] = custom_data
    return data


def beatmap_set(characteristic="Standard", beatmaps=None):
    return {
        "_beatmapCharacteristicName": characteristic,
        "_difficultyBeatmaps": beatmaps if beatmaps is not None else [difficulty_beatmap()],
    }


def info_v2(sets=None, version="2.0.0", song_filename="song.egg", custom_data=None):
    data = {
        "_version": version,
        "_songName": "Test Song",
        "_songSubName": "",
        "_songAuthorName": "Test Artist",
        "_levelAuthorName": "Test Mapper",
        "_beatsPerMinute": 120.0,
        "_songTimeOffset": 0,
        "_shuffle": 0,
        "_shufflePeriod": 0.5,
        "_previewStartTime": 12.0,
        "_previewDuration": 10.0,
        "_songFilename": song_filename,
        "_coverImageFilename": "cover.jpg",
        "_environmentName": "DefaultEnvironment",
        "_difficultyBeatmapSets": sets if sets is not None else [beatmap_set()],
    }
    if custom_data is not None:
        data["_customData"] = custom_data
    return data


def legacy_beatmap(difficulty="Easy", rank=1, filename=None):
    return {
        "difficulty": difficulty,
        "difficulty_rank": rank,
        "beatmap_filename": filename or f"{difficulty}.dat",
        "note_jump_movement_speed": 10.0,
        "note_jump_start_beat_offset": 0.0,
        "custom_data": {"difficulty_label": f"My {difficulty}"},
    }


def info_v1(beatmaps=None, characteristic="Standard", version="1.0.0"):
    return {
        "version": version,
        "song_name": "Legacy Song",
        "song_sub_name": "",
        "song_author_name": "Legacy Artist",
        "level_author_name": "Legacy Mapper",
        "beats_per_minute": 100.0,
        "song_time_offset": 0.0,
        "shuffle": 0.0,
        "shuffle_period": 0.5,
        "preview_start_time": 12.0,
        "preview_duration": 10.0,
        "song_filename": "song.egg",
        "cover_image_filename": "cover.jpg",
        "environment_name": "NiceEnvironment",
        "difficulty_beatmap_sets": [{
            "beatmap_characteristic_name": characteristic,
            "difficulty_beatmaps": beatmaps if beatmaps is not None else [legacy_beatmap()],
        }],
    }


def dumps(data) -> bytes:
    return json.dumps(data).encode("utf-8")


def write_map(folder: Path, info: dict, files: dict, info_name: str = "Info.dat") -> Path:
    """Write an info document plus difficulty files; returns the info path."""
    folder.mkdir(parents=True, exist_ok=True)
    info_path = folder / info_name
    info_path.write_bytes(dumps(info))
    for name, content in files.items():
        path = folder / name
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_bytes(content if isinstance(content, bytes) else dumps(content))
    return info_path


def zip_map(files: dict, prefix: str = "") -> bytes:
    """Build an in-memory zip; dict values are JSON-encoded."""
    buffer = io.BytesIO()
    with zipfile.ZipFile(buffer, "w") as zf:
        for name, content in files.items():
            zf.writestr(prefix + name, content if isinstance(content, bytes) else dumps(content))
    return buffer.getvalue()


class MemorySource:
    """DocumentSource over a dict, recording every name opened."""

    def __init__(self, files: dict):
        self.files = {
            name: content if isinstance(content, bytes) else dumps(content)
            for name, content in files.items()
        }
        self.opened: list[str] = []

    def describe(self) -> str:
        return "<memory>"

    def exists(self, name: str) -> bool:
        return name in self.files

    def open(self, name: str) -> bytes:
        self.opened.append(name)
        if name not in self.files:
            raise DocumentNotFoundError(name, self.describe())
        return self.files[name]
