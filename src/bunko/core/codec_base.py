from __future__ import annotations

from abc import ABC, abstractmethod


class StreamCodec(ABC):
    """
    Push-style codec: write() N times, finish() exactly once.

    Instances are single-use and owned by one call. Output is accumulated in
    memory and handed back by finish().
    """

    @abstractmethod
    def write(self, chunk: bytes) -> None:
        raise NotImplementedError

    @abstractmethod
    def finish(self) -> bytes:
        """Flush engine buffers, append trailers, return the whole output."""
        raise NotImplementedError

    @abstractmethod
    def close(self) -> None:
        """Release engine state. Safe to call more than once."""
        raise NotImplementedError
