"""Command line: load a GGUF model file and report what it holds."""

from __future__ import annotations

import argparse
import sys
import time
from os import PathLike
from pathlib import Path

from .gguf import Gguf
from .metadata import GgufParseError
from .models import UnrecognizedModelError, model_kind


def load_model_file(path: str | PathLike[str]) -> Gguf:
    """Load a GGUF model file from disk."""
    path = Path(path)
    if path.suffix == ".bin":
        print("Legacy GGML format is not supported; trying GGUF loader.")
    return Gguf.from_path(path)


def _parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="slai", description="Inspect a GGUF model file.")
    parser.add_argument("path", nargs="?", type=Path, help="Path to the GGUF model to load.")
    parser.add_argument(
        "--image", type=Path, help="Image input for models that need it (like segment-anything)."
    )
    parser.add_argument(
        "--headless", action="store_true", help="Run without a graphical interface."
    )
    parser.add_argument(
        "--inspect", action="store_true", help="Print details of the GGUF file."
    )
    return parser


def main(argv: list[str] | None = None) -> int:
    args = _parser().parse_args(argv)
    if args.path is None:
        print("No model file provided, exiting.")
        return 0

    print(f"Loading GGUF file: {args.path}")
    started = time.perf_counter()
    try:
        gguf = load_model_file(args.path)
    except (OSError, GgufParseError) as err:
        print(f"error: {err}", file=sys.stderr)
        return 1
    print(f"GGUF model loaded in {time.perf_counter() - started:.2f} seconds.")

    if args.inspect:
        gguf.print_metadata()
        gguf.print_tensors()

    try:
        kind = model_kind(gguf)
    except UnrecognizedModelError as err:
        print(f"error: {err}", file=sys.stderr)
        return 1
    print(f"Model architecture: {kind.display_name()}")
    return 0


if __name__ == "__main__":
    sys.exit(main())