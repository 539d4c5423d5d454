from __future__ import annotations

import json
from typing import Any

import pytest

from bunko.api import (
    CompressionFormat,
    CompressionLevel,
    compress,
    compress_struct,
    decompress,
    decompress_struct,
)
from bunko.errors import DecompressionError, DeserializationError, SerializationError

VALUES: list[Any] = [
    None,
    0,
    -17,
    3.5,
    "ciao",
    "unicø∂e Ω λ",
    [],
    {},
    [1, 2, [3, 4], {"a": None}],
    {"name": "vite M3", "qty": 10, "price": 1.2, "tags": ["hw", "m3"], "ok": True},
]


@pytest.mark.parametrize("fmt", list(CompressionFormat))
@pytest.mark.parametrize("level", list(CompressionLevel))
def test_struct_roundtrip(fmt: CompressionFormat, level: CompressionLevel) -> None:
    for v in VALUES:
        comp = compress_struct(v, fmt, level)
        assert decompress_struct(comp, fmt) == v


def test_struct_serialization_is_canonical() -> None:
    a = {"b": 1, "a": [1, 2], "c": {"y": 2, "x": 1}}
    b = {"c": {"x": 1, "y": 2}, "a": [1, 2], "b": 1}
    ca = compress_struct(a, CompressionFormat.ZLIB, CompressionLevel.BEST)
    cb = compress_struct(b, CompressionFormat.ZLIB, CompressionLevel.BEST)
    assert ca == cb
    raw = decompress(ca, CompressionFormat.ZLIB)
    assert raw == b'{"a":[1,2],"b":1,"c":{"x":1,"y":2}}'


def test_struct_unserializable_value() -> None:
    with pytest.raises(SerializationError):
        compress_struct({"s": {1, 2, 3}}, CompressionFormat.GZIP, CompressionLevel.DEFAULT)
    with pytest.raises(SerializationError):
        compress_struct(float("nan"), CompressionFormat.GZIP, CompressionLevel.DEFAULT)


def test_struct_bad_payload_is_deserialization_error() -> None:
    comp = compress(b"{not json", CompressionFormat.GZIP, CompressionLevel.DEFAULT)
    with pytest.raises(DeserializationError):
        decompress_struct(comp, CompressionFormat.GZIP)

    comp_bin = compress(b"\xff\xfe", CompressionFormat.GZIP, CompressionLevel.DEFAULT)
    with pytest.raises(DeserializationError):
        decompress_struct(comp_bin, CompressionFormat.GZIP)


def test_struct_corrupt_stream_is_decompression_error() -> None:
    comp = compress_struct({"a": 1}, CompressionFormat.GZIP, CompressionLevel.DEFAULT)
    with pytest.raises(DecompressionError):
        decompress_struct(comp, CompressionFormat.ZLIB)


class _UpperSerializer:
    """Toy serializer: proves the serializer is pluggable."""

    def serialize(self, value: Any) -> bytes:
        return json.dumps(value).upper().encode("ascii")

    def deserialize(self, data: bytes) -> Any:
        return json.loads(data.decode("ascii").lower())


class _BrokenSerializer:
    def serialize(self, value: Any) -> bytes:
        return "not bytes"  # type: ignore[return-value]

    def deserialize(self, data: bytes) -> Any:
        raise RuntimeError("nope")


def test_struct_custom_serializer() -> None:
    s = _UpperSerializer()
    comp = compress_struct(["abc", "def"], CompressionFormat.DEFLATE, CompressionLevel.FASTEST, serializer=s)
    assert decompress(comp, CompressionFormat.DEFLATE) == b'["ABC", "DEF"]'
    assert decompress_struct(comp, CompressionFormat.DEFLATE, serializer=s) == ["abc", "def"]


def test_struct_broken_serializer() -> None:
    s = _BrokenSerializer()
    with pytest.raises(SerializationError):
        compress_struct(1, CompressionFormat.GZIP, CompressionLevel.DEFAULT, serializer=s)
    comp = compress(b"1", CompressionFormat.GZIP, CompressionLevel.DEFAULT)
    with pytest.raises(DeserializationError):
        decompress_struct(comp, CompressionFormat.GZIP, serializer=s)
