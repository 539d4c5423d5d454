"""Verification helpers.

A compressed file is "valid" when it decodes completely with the given format:
framing, checksum (gzip/zlib) and end-of-stream are all checked by the decoder.
"""

from __future__ import annotations

import hashlib
from dataclasses import dataclass
from pathlib import Path

from bunko.api import decompress_stream
from bunko.core.chunking import CHUNK_SIZE_DEFAULT, iter_file_chunks
from bunko.core.formats import CompressionFormat


@dataclass(frozen=True)
class VerifyReport:
    compressed_size: int
    decompressed_size: int
    sha256: str


def verify_compressed_file(
    path: Path, fmt: CompressionFormat, *, chunk_size: int = CHUNK_SIZE_DEFAULT
) -> VerifyReport:
    """Decode ``path`` fully; raises DecompressionError on any defect."""
    compressed_size = path.stat().st_size
    raw = decompress_stream(iter_file_chunks(path, chunk_size), fmt)
    return VerifyReport(
        compressed_size=compressed_size,
        decompressed_size=len(raw),
        sha256=hashlib.sha256(raw).hexdigest(),
    )
