"""Tests for dat_reader and document_parser."""

import gzip
import json

import pytest
from pydantic import ValidationError

from beat_bundle.errors import FieldDecodeError, SchemaVersionError
from beat_bundle.parsers.dat_reader import parse_json, read_dat_text
from beat_bundle.parsers.document_parser import (
    decode_difficulty,
    decode_info,
    encode_document,
)
from beat_bundle.schemas.common import BPMChange
from beat_bundle.schemas.v1 import LegacyDifficulty, LegacyInfo
from beat_bundle.schemas.v2 import Difficulty, Info
from beat_bundle.schemas.v3 import DifficultyV3

import factories as f


class TestDatReader:
    def test_read_json(self, tmp_path):
        dat = tmp_path / "test.dat"
        dat.write_text('{"_version": "2.0.0", "_notes": []}')
        result = parse_json(read_dat_text(dat.read_bytes()))
        assert result["_version"] == "2.0.0"

    def test_read_gzip(self, tmp_path):
        dat = tmp_path / "test.dat"
        content = json.dumps({"version": "3.0.0", "colorNotes": []}).encode()
        dat.write_bytes(gzip.compress(content))
        result = parse_json(read_dat_text(dat.read_bytes()))
        assert result["version"] == "3.0.0"

    def test_strips_bom(self):
        assert read_dat_text(b'\xef\xbb\xbf{"_version": "2.0.0"}') == '{"_version": "2.0.0"}'

    def test_not_utf8(self):
        with pytest.raises(FieldDecodeError, match="invalid JSON"):
            read_dat_text(b'{"_version": "\xff"}')

    def test_invalid_json(self):
        with pytest.raises(FieldDecodeError, match="invalid JSON"):
            parse_json('{"_version": ')

    def test_top_level_array(self):
        with pytest.raises(FieldDecodeError, match="expected a JSON object"):
            parse_json("[1, 2]")

    def test_corrupt_gzip(self):
        with pytest.raises(FieldDecodeError, match="corrupt gzip"):
            read_dat_text(b"\x1f\x8b\x08\x00garbage")

    @pytest.mark.parametrize("constant", ["NaN", "Infinity", "-Infinity"])
    def test_non_finite_constants(self, constant):
        with pytest.raises(FieldDecodeError, match=f"{constant} is not a valid JSON number"):
            parse_json(f'{{"_BPM": {constant}}}')

    def test_overlong_integer(self):
        with pytest.raises(FieldDecodeError, match="invalid JSON"):
            parse_json('{"_BPM": 1' + "0" * 5000 + "}")

    def test_deep_nesting(self):
        with pytest.raises(FieldDecodeError, match="invalid JSON"):
            parse_json('{"a": ' + "[" * 100000 + "]" * 100000 + "}")


class TestDecodeInfo:
    def test_dispatch_v2(self):
        assert isinstance(decode_info(f.dumps(f.info_v2())), Info)

    def test_dispatch_legacy(self):
        assert isinstance(decode_info(f.dumps(f.info_v1())), LegacyInfo)

    def test_unsupported_major(self):
        with pytest.raises(SchemaVersionError, match="Unsupported info version 4.0.0"):
            decode_info(f.dumps(f.info_v2(version="4.0.0")))

    def test_malformed_version(self):
        with pytest.raises(SchemaVersionError):
            decode_info(f.dumps(f.info_v2(version="2.0")))

    def test_version_field_missing(self):
        data = f.info_v2()
        del data["_version"]
        with pytest.raises(SchemaVersionError):
            decode_info(f.dumps(data))


class TestDecodeDifficulty:
    @pytest.mark.parametrize("data, expected", [
        (f.difficulty_v1(), LegacyDifficulty),
        (f.difficulty_v2(), Difficulty),
        (f.difficulty_v3(), DifficultyV3),
    ])
    def test_dispatch(self, data, expected):
        assert isinstance(decode_difficulty(f.dumps(data)), expected)

    def test_gzipped(self):
        document = decode_difficulty(gzip.compress(f.dumps(f.difficulty_v3())))
        assert len(document.color_notes) == 2

    def test_unknown_major(self):
        with pytest.raises(SchemaVersionError):
            decode_difficulty(f.dumps(f.difficulty_v2(version="9.0.0")))

    def test_field_error_path(self):
        raw = f.dumps(f.difficulty_v2(notes=[f.note(), f.note(), f.note(line_index=4)]))
        with pytest.raises(FieldDecodeError) as exc_info:
            decode_difficulty(raw)
        assert exc_info.value.path == "_notes[2]._lineIndex"


class TestEncode:
    def test_info_round_trip(self):
        info = decode_info(f.dumps(f.info_v2()))
        assert decode_info(encode_document(info)) == info

    def test_keeps_revision_layout(self):
        raw = encode_document(decode_difficulty(f.dumps(f.difficulty_v3())))
        data = json.loads(raw)
        assert data["version"] == "3.2.0"
        assert "colorNotes" in data
        assert "_notes" not in data

    def test_optional_fields_omitted(self):
        data = json.loads(encode_document(decode_difficulty(f.dumps(f.difficulty_v2()))))
        assert "_bookmarks" not in data

    def test_non_finite_never_constructed(self):
        with pytest.raises(ValidationError):
            BPMChange(bpm=float("nan"), time=0.0, beats_per_bar=4, metronome_offset=4)


class TestNumericLimits:
    def test_huge_float_field(self):
        data = f.dumps(f.difficulty_v2()).replace(b"120.0", b"1" + b"0" * 400)
        with pytest.raises(FieldDecodeError):
            decode_difficulty(data)

    def test_exponent_overflow(self):
        data = f.dumps(f.difficulty_v2()).replace(b"120.0", b"1e400")
        with pytest.raises(FieldDecodeError, match="1e400 is out of range"):
            decode_difficulty(data)

    def test_huge_integer_field(self):
        data = f.dumps(f.difficulty_v2(events=[f.event(value=10 ** 30)]))
        with pytest.raises(FieldDecodeError, match="_events\\[0\\]._value"):
            decode_difficulty(data)


class TestVersionKeyMismatch:
    def test_info_v2_under_plain_key(self):
        data = f.info_v2()
        data["version"] = data.pop("_version")
        with pytest.raises(SchemaVersionError) as exc_info:
            decode_info(f.dumps(data))
        message = str(exc_info.value)
        assert "stored under 'version'" in message
        assert "use '_version'" in message

    def test_legacy_info_under_underscore_key(self):
        data = f.info_v1()
        data["_version"] = data.pop("version")
        with pytest.raises(SchemaVersionError, match="revision 1 documents use 'version'"):
            decode_info(f.dumps(data))

    def test_v3_difficulty_under_underscore_key(self):
        data = f.difficulty_v3()
        data["_version"] = data.pop("version")
        with pytest.raises(SchemaVersionError, match="stored under '_version'"):
            decode_difficulty(f.dumps(data))
