#!/usr/bin/env python3
"""
Render a score file to a WAV file next to it.

Usage:
    notesynth <score.txt> [--config <json>] [--qc] [-v]

Exit code 0 on success, 1 on any failure.
"""
import sys
import logging
import argparse
from pathlib import Path
from typing import List, Optional

from notesynth.core.errors import InvalidArguments, InvalidFileExtension, SynthError
from notesynth.core.params import get_param
from notesynth.params.resolve import load_config, resolve_config
from notesynth.qc.qc import analyze_wav
from notesynth.score.parser import load_score
from notesynth.synth.render_core import render_to_file

logger = logging.getLogger("notesynth")


class _ArgumentParser(argparse.ArgumentParser):
    def error(self, message):
        raise InvalidArguments(f"{message}\n{self.format_usage().strip()}")


def output_path_for(input_path: str, source_extension: str, output_extension: str) -> Path:
    """score.txt -> score.wav. Raises InvalidFileExtension for any other extension."""
    if not input_path.endswith(source_extension) or len(input_path) == len(source_extension):
        raise InvalidFileExtension(
            f"Input file must have extension {source_extension}: {input_path}"
        )
    return Path(input_path[: -len(source_extension)] + output_extension)


def build_parser() -> argparse.ArgumentParser:
    parser = _ArgumentParser(
        prog="notesynth",
        description="Render a note score to a mono 16-bit WAV file",
    )
    parser.add_argument("input", help="Score file (tempo, total beats, then one note per line)")
    parser.add_argument("--config", type=str, help="JSON file with config overrides")
    parser.add_argument("--qc", action="store_true", help="Print a quality report of the written file")
    parser.add_argument("-v", "--verbose", action="count", default=0, help="-v for info, -vv for debug logging")
    return parser


def _configure_logging(verbosity: int) -> None:
    level = logging.WARNING
    if verbosity == 1:
        level = logging.INFO
    elif verbosity >= 2:
        level = logging.DEBUG
    logging.basicConfig(level=level, format="%(levelname)s %(name)s: %(message)s")


def run(argv: Optional[List[str]] = None) -> int:
    """Parse args and render. Raises SynthError on failure."""
    args = build_parser().parse_args(argv)
    _configure_logging(args.verbose)

    config = load_config(args.config) if args.config else resolve_config()
    output_path = output_path_for(
        args.input,
        get_param(config, "source_extension"),
        get_param(config, "output_extension"),
    )

    score = load_score(args.input)
    info = render_to_file(score, output_path, config)
    print(f"Generated {info['notes']} notes, wrote {info['bytes']} bytes to {info['wav_path']}")

    if args.qc:
        report = analyze_wav(output_path)
        print(f"QC Status: {report['status']}")
        print(f"Peak: {report['peak']:.4f} ({report['peak_dbfs']:.2f} dBFS), RMS: {report['rms']:.4f}")
        print(f"Fingerprint SHA256: {report['sha256'][:16]}...")
        for w in report["warnings"]:
            print(f"  - {w}")
    return 0


def main(argv: Optional[List[str]] = None) -> int:
    try:
        return run(argv)
    except SynthError as e:
        logger.debug("Render failed", exc_info=True)
        print(f"Error: {type(e).__name__}: {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
