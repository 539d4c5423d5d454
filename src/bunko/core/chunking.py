from __future__ import annotations

from collections.abc import Iterator
from pathlib import Path

CHUNK_SIZE_DEFAULT = 256 * 1024


def iter_chunks(data: bytes | bytearray | memoryview, size: int) -> Iterator[memoryview]:
    """
    Re-chunk a buffer into pieces of at most ``size`` bytes (zero-copy).

    size <= 0 (o >= len(data)) -> un solo chunk con tutto il buffer.
    Buffer vuoto -> nessun chunk.
    """
    if not isinstance(data, (bytes, bytearray, memoryview)):
        raise TypeError("data must be bytes-like")
    mv = memoryview(data).cast("B")
    n = len(mv)
    if n == 0:
        return
    step = n if size <= 0 else int(size)
    for off in range(0, n, step):
        yield mv[off : off + step]


def iter_file_chunks(path: Path, size: int = CHUNK_SIZE_DEFAULT) -> Iterator[bytes]:
    step = CHUNK_SIZE_DEFAULT if size <= 0 else int(size)
    with path.open("rb") as f:
        while True:
            b = f.read(step)
            if not b:
                break
            yield b
