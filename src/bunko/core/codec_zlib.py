from __future__ import annotations

import zlib

from bunko.core.codec_base import StreamCodec
from bunko.errors import CompressionError, DecompressionError, UsageError


def _require_bytes(chunk: object) -> bytes | bytearray | memoryview:
    if not isinstance(chunk, (bytes, bytearray, memoryview)):
        raise TypeError(f"chunk must be bytes-like, got {type(chunk).__name__}")
    return chunk


class ZlibStreamEncoder(StreamCodec):
    """zlib/DEFLATE push encoder (stdlib engine, framing selected by wbits).

    ``stage`` only affects error messages ("compression", "stream compression").
    """

    def __init__(self, wbits: int, level: int, *, stage: str = "compression"):
        self.stage = stage
        self._parts: list[bytes] = []
        self._obj = zlib.compressobj(level, zlib.DEFLATED, wbits)
        self._finished = False

    def write(self, chunk: bytes) -> None:
        data = _require_bytes(chunk)
        if self._finished:
            raise UsageError(f"{self.stage}: write() dopo finish()")
        try:
            out = self._obj.compress(data)
        except zlib.error as e:
            raise CompressionError(f"{self.stage.capitalize()} error: {e}") from e
        if out:
            self._parts.append(out)

    def finish(self) -> bytes:
        if self._finished:
            raise UsageError(f"{self.stage}: finish() chiamato due volte")
        self._finished = True
        try:
            self._parts.append(self._obj.flush(zlib.Z_FINISH))
        except zlib.error as e:
            raise CompressionError(f"Failed to finish {self.stage}: {e}") from e
        finally:
            self._obj = None
        out = b"".join(self._parts)
        self._parts = []
        return out

    def close(self) -> None:
        self._finished = True
        self._obj = None
        self._parts = []


class ZlibStreamDecoder(StreamCodec):
    """zlib/DEFLATE push decoder.

    Strict: the input must hold exactly one complete stream. Missing end of
    stream (truncation) and bytes after it (trailing garbage) are both errors.
    """

    def __init__(self, wbits: int, *, stage: str = "decompression"):
        self.stage = stage
        self._parts: list[bytes] = []
        self._obj = zlib.decompressobj(wbits)
        self._finished = False

    def _check_trailing(self) -> None:
        extra = self._obj.unused_data
        if extra:
            raise DecompressionError(
                f"{self.stage.capitalize()} error: {len(extra)} byte(s) after end of stream"
            )

    def write(self, chunk: bytes) -> None:
        data = _require_bytes(chunk)
        if self._finished:
            raise UsageError(f"{self.stage}: write() dopo finish()")
        if not data:
            return
        if self._obj.eof:
            raise DecompressionError(
                f"{self.stage.capitalize()} error: {len(data)} byte(s) after end of stream"
            )
        try:
            out = self._obj.decompress(data)
        except zlib.error as e:
            raise DecompressionError(f"{self.stage.capitalize()} error: {e}") from e
        if out:
            self._parts.append(out)
        self._check_trailing()

    def finish(self) -> bytes:
        if self._finished:
            raise UsageError(f"{self.stage}: finish() chiamato due volte")
        self._finished = True
        try:
            try:
                tail = self._obj.flush()
            except zlib.error as e:
                raise DecompressionError(f"Failed to finish {self.stage}: {e}") from e
            if tail:
                self._parts.append(tail)
            if not self._obj.eof:
                raise DecompressionError(
                    f"Failed to finish {self.stage}: truncated or incomplete stream"
                )
            self._check_trailing()
        finally:
            self._obj = None
        out = b"".join(self._parts)
        self._parts = []
        return out

    def close(self) -> None:
        self._finished = True
        self._obj = None
        self._parts = []
