from __future__ import annotations

import json
from dataclasses import dataclass
from typing import Any, Protocol


class Serializer(Protocol):
    """Anything that turns a value into canonical bytes and back."""

    def serialize(self, value: Any) -> bytes: ...

    def deserialize(self, data: bytes) -> Any: ...


@dataclass(frozen=True)
class JsonSerializer:
    """
    Canonical JSON: sorted keys, compact separators, UTF-8, no NaN/Infinity.

    Nota: tuple -> list al ritorno (limite di JSON, non del codec).
    """

    id: str = "json"

    def serialize(self, value: Any) -> bytes:
        s = json.dumps(
            value,
            sort_keys=True,
            separators=(",", ":"),
            ensure_ascii=False,
            allow_nan=False,
        )
        return s.encode("utf-8")

    def deserialize(self, data: bytes) -> Any:
        return json.loads(bytes(data).decode("utf-8"))


JSON = JsonSerializer()
