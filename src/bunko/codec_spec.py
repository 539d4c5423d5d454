"""Codec spec (v1) for bunko.

Goal: make a compress/decompress plan reproducible and portable (CLI, CI).

This module intentionally stays *small* and strict:
  - JSON only
  - explicit schema id
  - unknown keys are rejected
"""

from __future__ import annotations

import json
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from bunko.core.formats import CompressionFormat, parse_format
from bunko.core.levels import CompressionLevel, parse_level
from bunko.errors import UsageError

SPEC_ID_V1 = "bunko.codec.v1"


class CodecSpecError(ValueError):
    pass


def _load_json_arg(spec_arg: str) -> dict[str, Any]:
    s = spec_arg.strip()
    if not s:
        raise CodecSpecError("spec: argomento vuoto")

    if s.startswith("@"):
        p = Path(s[1:]).expanduser()
        if not p.exists() or not p.is_file():
            raise CodecSpecError(f"spec: file non trovato: {p}")
        raw = p.read_text(encoding="utf-8")
        try:
            obj = json.loads(raw)
        except Exception as e:
            raise CodecSpecError(f"spec: JSON non valido in {p}: {e}") from e
        if not isinstance(obj, dict):
            raise CodecSpecError(f"spec: il JSON in {p} deve essere un oggetto")
        return obj

    try:
        obj = json.loads(s)
    except Exception as e:
        raise CodecSpecError(f"spec: JSON inline non valido: {e}") from e
    if not isinstance(obj, dict):
        raise CodecSpecError("spec: il JSON inline deve essere un oggetto")
    return obj


def _optional_str(obj: dict[str, Any], key: str, default: str) -> str:
    v = obj.get(key, default)
    if not isinstance(v, str) or not v.strip():
        raise CodecSpecError(f"spec: campo '{key}' deve essere stringa")
    return v.strip()


def _optional_buffer_size(obj: dict[str, Any]) -> int:
    v = obj.get("buffer_size")
    if v is None:
        return 0
    if isinstance(v, bool) or not isinstance(v, int):
        raise CodecSpecError("spec: campo 'buffer_size' deve essere un intero")
    if v < 0:
        raise CodecSpecError("spec: campo 'buffer_size' deve essere >= 0")
    return v


@dataclass(frozen=True)
class CodecSpecV1:
    """A single format/level plan."""

    name: str
    format: CompressionFormat
    level: CompressionLevel
    buffer_size: int = 0

    def to_json(self) -> str:
        """Canonical JSON (stable key order) that load_codec_spec() accepts back."""
        obj = {
            "spec": SPEC_ID_V1,
            "name": self.name,
            "format": self.format.value,
            "level": self.level.value,
            "buffer_size": self.buffer_size,
        }
        return json.dumps(obj, sort_keys=True, separators=(",", ":"))


def load_codec_spec(spec_arg: str) -> CodecSpecV1:
    """Load and validate a codec spec.

    spec_arg:
      - '@file.json'
      - inline JSON object
    """
    obj = _load_json_arg(spec_arg)

    allowed = {"spec", "name", "format", "level", "buffer_size"}
    extra = sorted(set(obj.keys()) - allowed)
    if extra:
        raise CodecSpecError(f"spec: chiavi non supportate: {', '.join(extra)}")

    spec_id = obj.get("spec")
    if spec_id != SPEC_ID_V1:
        raise CodecSpecError(f"spec: schema non supportato: {spec_id!r} (atteso {SPEC_ID_V1!r})")

    name = _optional_str(obj, "name", "codec")
    try:
        fmt = parse_format(_optional_str(obj, "format", "gzip"))
        level = parse_level(_optional_str(obj, "level", "default"))
    except UsageError as e:
        raise CodecSpecError(str(e)) from e

    return CodecSpecV1(name=name, format=fmt, level=level, buffer_size=_optional_buffer_size(obj))
