"""bunko CLI.

This is the stable CLI entrypoint (console-script: ``bunko``).

UX policy:
  - format/level are semantic names (gzip|deflate|zlib, fastest|default|best).
  - ``--spec`` (codec spec v1) wins over --format/--level/--buffer-size.
  - results go to stdout, errors and --stats to stderr.
"""

from __future__ import annotations

import argparse
import sys
from pathlib import Path

from bunko.codec_spec import CodecSpecError, CodecSpecV1, load_codec_spec
from bunko.core.formats import CompressionFormat, parse_format
from bunko.core.levels import CompressionLevel, parse_level
from bunko.errors import EXIT_GENERIC, EXIT_USAGE, BunkoError


def _add_common_args(p: argparse.ArgumentParser) -> None:
    p.add_argument("--debug", action="store_true", help="Show stack traces on errors")


def _add_codec_args(p: argparse.ArgumentParser, *, with_level: bool) -> None:
    p.add_argument(
        "--format",
        default="gzip",
        choices=[f.value for f in CompressionFormat],
        help="Container format (default: gzip). Must match between compress and decompress.",
    )
    if with_level:
        p.add_argument(
            "--level",
            default="default",
            choices=[lv.value for lv in CompressionLevel],
            help="Compression level (default: default)",
        )
        p.add_argument(
            "--buffer-size",
            type=int,
            default=0,
            help="Read/feed the input in chunks of this many bytes (0 = engine default chunking)",
        )
    p.add_argument(
        "--spec",
        default=None,
        help=(
            "Codec spec (JSON). Use '@file.json' to load from file, or pass JSON inline. "
            "When set, --format/--level/--buffer-size are ignored."
        ),
    )


def _resolve_spec(ns: argparse.Namespace) -> CodecSpecV1:
    if ns.spec is not None:
        return load_codec_spec(str(ns.spec))
    return CodecSpecV1(
        name="cli",
        format=parse_format(ns.format),
        level=parse_level(getattr(ns, "level", "default")),
        buffer_size=int(getattr(ns, "buffer_size", 0) or 0),
    )


def _cmd_compress(input_path: Path, output_path: Path, spec: CodecSpecV1, *, stats: bool) -> int:
    from bunko.api import calculate_compression_ratio, compress_stream
    from bunko.core.chunking import iter_file_chunks

    if spec.buffer_size < 0:
        raise CodecSpecError("buffer-size deve essere >= 0")

    original_size = input_path.stat().st_size
    out = compress_stream(iter_file_chunks(input_path, spec.buffer_size), spec.format, spec.level)
    output_path.write_bytes(out)

    if stats:
        ratio = calculate_compression_ratio(original_size, len(out))
        print(
            f"[bunko] {spec.format.value}/{spec.level.value}: "
            f"{original_size} -> {len(out)} bytes (ratio {ratio:.4f})",
            file=sys.stderr,
        )
    return 0


def _cmd_decompress(input_path: Path, output_path: Path, spec: CodecSpecV1) -> int:
    from bunko.api import decompress_stream
    from bunko.core.chunking import iter_file_chunks

    out = decompress_stream(iter_file_chunks(input_path), spec.format)
    output_path.write_bytes(out)
    return 0


def _cmd_verify(input_path: Path, spec: CodecSpecV1) -> int:
    from bunko.verify import verify_compressed_file

    rep = verify_compressed_file(input_path, spec.format)
    print(f"OK {rep.decompressed_size} {rep.sha256}")
    return 0


def _cmd_spec_validate(spec_arg: str) -> int:
    # load is the validation
    load_codec_spec(spec_arg)
    print("OK")
    return 0


def _cmd_ratio(original_size: int, compressed_size: int) -> int:
    from bunko.api import calculate_compression_ratio

    if original_size < 0 or compressed_size < 0:
        raise CodecSpecError("ratio: le dimensioni devono essere >= 0")
    print(f"{calculate_compression_ratio(original_size, compressed_size):.6f}")
    return 0


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(prog="bunko", description="bunko: gzip/deflate/zlib made uniform")
    sub = p.add_subparsers(dest="cmd", required=True)

    p_c = sub.add_parser("compress", help="Compress a file")
    p_c.add_argument("input", type=Path)
    p_c.add_argument("output", type=Path)
    _add_codec_args(p_c, with_level=True)
    p_c.add_argument("--stats", action="store_true", help="Print sizes and ratio to stderr")
    _add_common_args(p_c)

    p_d = sub.add_parser("decompress", help="Decompress a file")
    p_d.add_argument("input", type=Path)
    p_d.add_argument("output", type=Path)
    _add_codec_args(p_d, with_level=False)
    _add_common_args(p_d)

    p_v = sub.add_parser("verify", help="Decode a compressed file fully and report its digest")
    p_v.add_argument("input", type=Path)
    _add_codec_args(p_v, with_level=False)
    _add_common_args(p_v)

    p_sv = sub.add_parser("spec-validate", help="Validate a codec spec (v1)")
    p_sv.add_argument("spec", help="Codec spec JSON (@file.json or inline JSON)")
    _add_common_args(p_sv)

    p_r = sub.add_parser("ratio", help="Compression ratio (1 - compressed/original)")
    p_r.add_argument("original_size", type=int)
    p_r.add_argument("compressed_size", type=int)
    _add_common_args(p_r)

    return p


def main(argv: list[str] | None = None) -> int:
    argv = list(sys.argv[1:] if argv is None else argv)
    p = build_parser()
    ns = p.parse_args(argv)

    try:
        if ns.cmd == "compress":
            return _cmd_compress(ns.input, ns.output, _resolve_spec(ns), stats=bool(ns.stats))
        if ns.cmd == "decompress":
            return _cmd_decompress(ns.input, ns.output, _resolve_spec(ns))
        if ns.cmd == "verify":
            return _cmd_verify(ns.input, _resolve_spec(ns))
        if ns.cmd == "spec-validate":
            return _cmd_spec_validate(str(ns.spec))
        if ns.cmd == "ratio":
            return _cmd_ratio(ns.original_size, ns.compressed_size)
        raise AssertionError("unreachable")

    except SystemExit:
        raise
    except CodecSpecError as e:
        # Treat as usage/config error.
        if getattr(ns, "debug", False):
            raise
        print(f"[bunko] {e}", file=sys.stderr)
        return EXIT_USAGE
    except BunkoError as e:
        if getattr(ns, "debug", False):
            raise
        print(f"[bunko] {e.kind}: {e}", file=sys.stderr)
        return int(getattr(e, "exit_code", EXIT_GENERIC) or EXIT_GENERIC)
    except Exception as e:
        if getattr(ns, "debug", False):
            raise
        print(f"[bunko] error: {e}", file=sys.stderr)
        return EXIT_GENERIC


if __name__ == "__main__":
    raise SystemExit(main())
