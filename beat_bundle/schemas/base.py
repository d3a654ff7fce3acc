"""Pydantic base model and field types shared by every schema revision.

Documents are validated straight from JSON text in strict mode: integer
fields reject floats and booleans, float fields accept JSON integers, string
fields reject numbers, enumerations are closed and nothing is clamped.
Absent optional blocks stay ``None`` and are dropped again on encode.
"""

from __future__ import annotations

from typing import Annotated, Any, ClassVar, TypeVar

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    PlainSerializer,
    PlainValidator,
    ValidationError,
)

from beat_bundle.errors import DecodeError, FieldDecodeError, SchemaVersionError
from beat_bundle.schemas.version import SchemaVersion

U8_MAX = 0xFF
U32_MAX = 0xFFFFFFFF

U8 = Annotated[int, Field(ge=0, le=U8_MAX)]
U32 = Annotated[int, Field(ge=0, le=U32_MAX)]


def _parse_version(value: Any) -> SchemaVersion:
    if isinstance(value, SchemaVersion):
        return value
    return SchemaVersion.parse(value)


Version = Annotated[
    SchemaVersion,
    PlainValidator(_parse_version),
    PlainSerializer(str, return_type=str),
]

M = TypeVar("M", bound="SchemaModel")


def field_path(loc: tuple[int | str, ...]) -> str:
    """Render a pydantic error location as ``_notes[2]._lineIndex``."""
    path = ""
    for part in loc:
        if isinstance(part, int):
            path += f"[{part}]"
        else:
            path = f"{path}.{part}" if path else str(part)
    return path


class SchemaModel(BaseModel):
    """Frozen, strictly validated JSON object keyed by its on-disk aliases."""

    model_config = ConfigDict(
        strict=True,
        frozen=True,
        populate_by_name=True,
        allow_inf_nan=False,
    )

    # Key holding the document version; None for nested objects.
    VERSION_KEY: ClassVar[str | None] = None

    @classmethod
    def decode(cls: type[M], text: str | bytes) -> M:
        """Validate a JSON document against this model.

        Raises:
            SchemaVersionError: The version field is missing or malformed.
            FieldDecodeError: Any other field does not match, or the text is
                not valid JSON.
        """
        try:
            return cls.model_validate_json(text)
        except ValidationError as exc:
            raise cls._decode_error(exc) from exc

    @classmethod
    def _decode_error(cls, exc: ValidationError) -> DecodeError:
        errors = exc.errors(include_url=False)
        for error in errors:
            if cls.VERSION_KEY is not None and error["loc"] == (cls.VERSION_KEY,):
                return SchemaVersionError(f"{cls.VERSION_KEY}: {error['msg']}")
        first = errors[0]
        reason = first["msg"]
        if len(errors) > 1:
            reason += f" (and {len(errors) - 1} more errors)"
        return FieldDecodeError(field_path(first["loc"]), reason)
