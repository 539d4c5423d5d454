"""Format dispatch.

A format tag picks the framing the engine wraps around the DEFLATE bitstream:

  - GZIP:    10-byte header + CRC32 + ISIZE trailer (RFC 1952)
  - DEFLATE: raw bitstream, no framing at all (RFC 1951)
  - ZLIB:    2-byte header + Adler-32 trailer (RFC 1950)

The same tag must be passed to decode: there is no auto-detection, and a
mismatched tag surfaces as a DecompressionError from the engine.
"""

from __future__ import annotations

import zlib
from collections.abc import Iterator
from contextlib import contextmanager
from enum import Enum

from bunko.core.codec_zlib import ZlibStreamDecoder, ZlibStreamEncoder
from bunko.core.levels import CompressionLevel
from bunko.errors import UsageError


class CompressionFormat(Enum):
    GZIP = "gzip"
    DEFLATE = "deflate"
    ZLIB = "zlib"


def window_bits(fmt: CompressionFormat) -> int:
    if fmt is CompressionFormat.GZIP:
        return 16 + zlib.MAX_WBITS
    if fmt is CompressionFormat.DEFLATE:
        return -zlib.MAX_WBITS
    if fmt is CompressionFormat.ZLIB:
        return zlib.MAX_WBITS
    raise TypeError(f"format must be a CompressionFormat, got {fmt!r}")


def parse_format(name: str | CompressionFormat) -> CompressionFormat:
    if isinstance(name, CompressionFormat):
        return name
    s = str(name).strip().lower()
    try:
        return CompressionFormat(s)
    except ValueError as e:
        allowed = ", ".join(f.value for f in CompressionFormat)
        raise UsageError(f"format non supportato: {name!r} (attesi: {allowed})") from e


def new_encoder(
    fmt: CompressionFormat, level: CompressionLevel, *, stage: str = "compression"
) -> ZlibStreamEncoder:
    if not isinstance(level, CompressionLevel):
        raise TypeError(f"level must be a CompressionLevel, got {level!r}")
    return ZlibStreamEncoder(window_bits(fmt), level.engine_level(), stage=stage)


def new_decoder(fmt: CompressionFormat, *, stage: str = "decompression") -> ZlibStreamDecoder:
    return ZlibStreamDecoder(window_bits(fmt), stage=stage)


@contextmanager
def open_encoder(
    fmt: CompressionFormat, level: CompressionLevel, *, stage: str = "compression"
) -> Iterator[ZlibStreamEncoder]:
    """Scoped encoder: engine state is released on every exit path."""
    enc = new_encoder(fmt, level, stage=stage)
    try:
        yield enc
    finally:
        enc.close()


@contextmanager
def open_decoder(
    fmt: CompressionFormat, *, stage: str = "decompression"
) -> Iterator[ZlibStreamDecoder]:
    dec = new_decoder(fmt, stage=stage)
    try:
        yield dec
    finally:
        dec.close()
