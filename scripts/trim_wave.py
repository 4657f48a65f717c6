"""Trim the silence around an exhalation recording from the command line."""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from pydantic import ValidationError

from wingtrim.audio.envelope import read_amplitude_file
from wingtrim.config import TrimSettings, load_settings
from wingtrim.errors import TrimmingError
from wingtrim.services.trimmer import STATUS_FAILED, WaveTrimmer, find_envelope_points

_OVERRIDES = ("chunk_size", "smooth_threshold", "end_percent", "allowed_silence", "padding_chunks")


def _build_settings(args: argparse.Namespace) -> TrimSettings:
    base = load_settings(args.settings)
    overrides = {name: getattr(args, name) for name in _OVERRIDES if getattr(args, name) is not None}
    if not overrides:
        return base
    return TrimSettings(**{**base.model_dump(), **overrides})


def _print_envelope_points(path: Path, settings: TrimSettings) -> int:
    try:
        envelope = read_amplitude_file(path)
        start, peak_index, end = find_envelope_points(envelope, settings)
    except TrimmingError as exc:
        logging.error("%s", exc)
        return STATUS_FAILED
    print(f"start={start.index} peak={peak_index} end={end.index}")
    return 0


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Trim silence around a Wing sensor recording.")
    parser.add_argument("input", type=Path, help="Recording (.wav) or, with --amplitudes, an envelope text file.")
    parser.add_argument(
        "--output",
        type=Path,
        default=None,
        help="Output base path; the file is written as <stem>-trimmed.wav (default: next to the input).",
    )
    parser.add_argument(
        "--amplitudes",
        action="store_true",
        help="Treat INPUT as one amplitude per line and print the envelope trim points.",
    )
    parser.add_argument("--settings", type=Path, default=None, help="JSON file with trimming settings.")
    parser.add_argument("--chunk-size", dest="chunk_size", type=int, default=None)
    parser.add_argument("--threshold", dest="smooth_threshold", type=int, default=None)
    parser.add_argument("--percent", dest="end_percent", type=float, default=None)
    parser.add_argument("--allowed-silence", dest="allowed_silence", type=int, default=None)
    parser.add_argument("--padding-chunks", dest="padding_chunks", type=int, default=None)
    parser.add_argument("-v", "--verbose", action="store_true", help="Log header and trim-point details.")
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(levelname)s %(name)s: %(message)s",
    )
    try:
        settings = _build_settings(args)
    except ValidationError as exc:
        logging.error("Invalid trimming settings: %s", exc)
        return STATUS_FAILED
    except TrimmingError as exc:
        logging.error("%s", exc)
        return STATUS_FAILED
    if args.amplitudes:
        return _print_envelope_points(args.input, settings)

    result = WaveTrimmer(settings).run(args.input, args.output or args.input)
    if result.ok:
        print(result.output_path)
    return result.status


if __name__ == "__main__":
    sys.exit(main())
