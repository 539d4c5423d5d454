"""Public API: one entry point per operation, no state between calls.

Every call opens its own encoder/decoder (see bunko.core.formats), feeds it,
finalizes it exactly once and returns the whole output. Failures are raised
as typed errors from bunko.errors; ``str(err)`` is the descriptive message.
"""

from __future__ import annotations

from collections.abc import Iterable
from typing import Any

from bunko.core.chunking import iter_chunks
from bunko.core.formats import CompressionFormat, open_decoder, open_encoder
from bunko.core.levels import CompressionLevel
from bunko.core.serializer import JSON, Serializer
from bunko.errors import (
    CompressionError,
    DecompressionError,
    DeserializationError,
    SerializationError,
    UsageError,
    Utf8Error,
)

BytesLike = bytes | bytearray | memoryview

__all__ = [
    "CompressionFormat",
    "CompressionLevel",
    "compress",
    "decompress",
    "compress_raw",
    "decompress_raw",
    "compress_struct",
    "decompress_struct",
    "compress_stream",
    "decompress_stream",
    "compress_with_buffer",
    "compress_string",
    "decompress_to_string",
    "calculate_compression_ratio",
    "CompressionError",
    "DecompressionError",
    "Utf8Error",
    "SerializationError",
    "DeserializationError",
]


def _encode_chunks(
    chunks: Iterable[BytesLike],
    fmt: CompressionFormat,
    level: CompressionLevel,
    *,
    stage: str,
) -> bytes:
    with open_encoder(fmt, level, stage=stage) as enc:
        for chunk in chunks:
            enc.write(chunk)
        return enc.finish()


def _decode_chunks(chunks: Iterable[BytesLike], fmt: CompressionFormat, *, stage: str) -> bytes:
    with open_decoder(fmt, stage=stage) as dec:
        for chunk in chunks:
            dec.write(chunk)
        return dec.finish()


# ---------------
# One-shot
# ---------------


def compress(data: BytesLike, fmt: CompressionFormat, level: CompressionLevel) -> bytes:
    """Compress a whole buffer: one write, one finish."""
    return _encode_chunks((data,), fmt, level, stage="compression")


def decompress(data: BytesLike, fmt: CompressionFormat) -> bytes:
    """Decompress a whole buffer produced with the same ``fmt``."""
    return _decode_chunks((data,), fmt, stage="decompression")


def compress_raw(data: BytesLike, level: CompressionLevel) -> bytes:
    """Raw DEFLATE (no header, no checksum)."""
    return compress(data, CompressionFormat.DEFLATE, level)


def decompress_raw(data: BytesLike) -> bytes:
    # no checksum here: only malformed-stream detection by the engine
    return decompress(data, CompressionFormat.DEFLATE)


# ---------------
# Streaming
# ---------------


def compress_stream(
    chunks: Iterable[BytesLike], fmt: CompressionFormat, level: CompressionLevel
) -> bytes:
    """
    Compress an ordered sequence of chunks into one stream.

    Chunks are fed one by one (never concatenated); the output is
    byte-identical to ``compress(b"".join(chunks), fmt, level)``.
    """
    return _encode_chunks(chunks, fmt, level, stage="stream compression")


def decompress_stream(chunks: Iterable[BytesLike], fmt: CompressionFormat) -> bytes:
    return _decode_chunks(chunks, fmt, stage="stream decompression")


def compress_with_buffer(
    data: BytesLike, fmt: CompressionFormat, level: CompressionLevel, buffer_size: int
) -> bytes:
    """
    Re-chunk ``data`` into pieces of at most ``buffer_size`` bytes and stream them.

    buffer_size == 0 means a single full-size chunk. Output equals compress().
    """
    if isinstance(buffer_size, bool) or not isinstance(buffer_size, int):
        raise TypeError("buffer_size must be int")
    if buffer_size < 0:
        raise UsageError(f"buffer_size must be >= 0, got {buffer_size}")
    return _encode_chunks(iter_chunks(data, buffer_size), fmt, level, stage="compression")


# ---------------
# Structured values
# ---------------


def compress_struct(
    value: Any,
    fmt: CompressionFormat,
    level: CompressionLevel,
    *,
    serializer: Serializer = JSON,
) -> bytes:
    """Serialize ``value`` to canonical bytes, then compress them."""
    try:
        raw = serializer.serialize(value)
    except Exception as e:
        raise SerializationError(f"Serialization error: {e}") from e
    if not isinstance(raw, (bytes, bytearray, memoryview)):
        raise SerializationError(
            f"Serialization error: serializer returned {type(raw).__name__}, expected bytes"
        )
    return compress(raw, fmt, level)


def decompress_struct(
    data: BytesLike, fmt: CompressionFormat, *, serializer: Serializer = JSON
) -> Any:
    raw = decompress(data, fmt)
    try:
        return serializer.deserialize(raw)
    except Exception as e:
        raise DeserializationError(f"Deserialization error: {e}") from e


# ---------------
# Strings & metrics
# ---------------


def compress_string(text: str, level: CompressionLevel) -> bytes:
    """UTF-8 encode, then gzip."""
    if not isinstance(text, str):
        raise TypeError("text must be str")
    try:
        raw = text.encode("utf-8")
    except UnicodeEncodeError as e:
        # lone surrogates
        raise CompressionError(f"Compression error: {e}") from e
    return compress(raw, CompressionFormat.GZIP, level)


def decompress_to_string(data: BytesLike) -> str:
    raw = decompress(data, CompressionFormat.GZIP)
    try:
        return raw.decode("utf-8")
    except UnicodeDecodeError as e:
        raise Utf8Error(f"UTF-8 error: {e}") from e


def calculate_compression_ratio(original_size: int, compressed_size: int) -> float:
    """
    Space saved as a fraction: 0.25 means 25% smaller.

    original_size == 0 -> 0.0 (niente da comprimere, niente divisione per zero).
    Negative when the output is larger than the input.
    """
    if original_size == 0:
        return 0.0
    return 1.0 - (float(compressed_size) / float(original_size))

