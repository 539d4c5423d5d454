from __future__ import annotations

import zlib
from enum import Enum

from bunko.errors import UsageError


class CompressionLevel(Enum):
    """Coarse quality selector. Exact numbers belong to the engine."""

    FASTEST = "fastest"
    DEFAULT = "default"
    BEST = "best"

    def engine_level(self) -> int:
        """Map to the zlib preset (fast / default / best)."""
        if self is CompressionLevel.FASTEST:
            return zlib.Z_BEST_SPEED
        if self is CompressionLevel.DEFAULT:
            return zlib.Z_DEFAULT_COMPRESSION
        if self is CompressionLevel.BEST:
            return zlib.Z_BEST_COMPRESSION
        raise AssertionError("unreachable")


def parse_level(name: str | CompressionLevel) -> CompressionLevel:
    if isinstance(name, CompressionLevel):
        return name
    s = str(name).strip().lower()
    try:
        return CompressionLevel(s)
    except ValueError as e:
        allowed = ", ".join(lv.value for lv in CompressionLevel)
        raise UsageError(f"level non supportato: {name!r} (attesi: {allowed})") from e
