"""Typed errors for bunko.

Single source of truth for error kinds and exit codes lives here.

Policy:
- Errors are small and boring: one class per failure kind, message = engine context.
- The library raises them, it never logs or retries.
- The CLI maps errors to stable exit codes (see EXIT_* constants).
- docs/exit_codes.md is generated from this module (scripts/gen_exit_codes_md.py).
"""

from __future__ import annotations

from dataclasses import dataclass

# -------------------------
# Exit codes (single source)
# -------------------------

EXIT_OK = 0
EXIT_USAGE = 2
EXIT_GENERIC = 10
EXIT_COMPRESSION = 20
EXIT_DECOMPRESSION = 21
EXIT_UTF8 = 22
EXIT_SERIALIZATION = 23
EXIT_DESERIALIZATION = 24


@dataclass(frozen=True, slots=True)
class ExitCodeInfo:
    code: int
    name: str
    description: str


EXIT_CODES: tuple[ExitCodeInfo, ...] = (
    ExitCodeInfo(EXIT_OK, "OK", "Success"),
    ExitCodeInfo(EXIT_USAGE, "USAGE", "Usage/config error (invalid args, invalid codec spec, etc.)"),
    ExitCodeInfo(EXIT_GENERIC, "GENERIC", "Generic failure (I/O error, unexpected error, etc.)"),
    ExitCodeInfo(EXIT_COMPRESSION, "COMPRESSION", "The engine failed while compressing"),
    ExitCodeInfo(
        EXIT_DECOMPRESSION,
        "DECOMPRESSION",
        "Malformed, truncated or format-mismatched compressed input",
    ),
    ExitCodeInfo(EXIT_UTF8, "UTF8", "Decompressed bytes are not valid UTF-8"),
    ExitCodeInfo(EXIT_SERIALIZATION, "SERIALIZATION", "Value could not be serialized"),
    ExitCodeInfo(
        EXIT_DESERIALIZATION, "DESERIALIZATION", "Decompressed bytes could not be deserialized"
    ),
)

_EXIT_CODE_BY_CODE: dict[int, ExitCodeInfo] = {e.code: e for e in EXIT_CODES}


def exit_code_info(code: int) -> ExitCodeInfo | None:
    return _EXIT_CODE_BY_CODE.get(int(code))


def render_exit_codes_markdown() -> str:
    """Render docs/exit_codes.md content."""
    lines: list[str] = []
    lines.append("# Exit codes\n")
    lines.append("> GENERATED FILE - do not edit manually.\n")
    lines.append("> Source of truth: `src/bunko/errors.py` (EXIT_CODES).\n")
    lines.append("> Regenerate: `python scripts/gen_exit_codes_md.py`.\n\n")
    lines.append("These are the CLI exit codes you can rely on.\n\n")
    lines.append("| Code | Name | Meaning |\n")
    lines.append("|---:|---|---|\n")
    for e in sorted(EXIT_CODES, key=lambda x: x.code):
        lines.append(f"| {e.code} | `{e.name}` | {e.description} |\n")
    lines.append("\n## Notes\n")
    lines.append("- Every library error extends `BunkoError` and carries an `exit_code`.\n")
    lines.append("- `--debug` re-raises errors to show full stack traces.\n")
    return "".join(lines)


# ---------------
# Typed exceptions
# ---------------


class BunkoError(Exception):
    """Base error for bunko."""

    exit_code: int = EXIT_GENERIC

    @property
    def kind(self) -> str:
        """Machine-readable kind name, e.g. ``"DecompressionError"``."""
        return type(self).__name__


class UsageError(BunkoError):
    exit_code = EXIT_USAGE


class CompressionError(BunkoError):
    exit_code = EXIT_COMPRESSION


class DecompressionError(BunkoError):
    exit_code = EXIT_DECOMPRESSION


class Utf8Error(BunkoError):
    exit_code = EXIT_UTF8


class SerializationError(BunkoError):
    exit_code = EXIT_SERIALIZATION


class DeserializationError(BunkoError):
    exit_code = EXIT_DESERIALIZATION
