"""Command-line entry point for snvgm."""

from __future__ import annotations

import argparse
import logging
from pathlib import Path
from typing import Optional, Sequence

from snvgm import __version__
from snvgm.audio import RenderSettings, VGMSynthesizer
from snvgm.errors import SNVGMError
from snvgm.storage import load_vgm, output_path_for, save_samples

logger = logging.getLogger(__name__)


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="snvgm",
        description="Render the SN76489 part of a VGM/VGZ log to a WAV file.",
    )
    parser.add_argument("input", help="Input VGM or VGZ file")
    parser.add_argument(
        "-o", "--output",
        default=None,
        metavar="PATH",
        help="Output file (default: input name with .wav or .bin extension)",
    )
    parser.add_argument(
        "-f", "--format",
        choices=["wav", "raw"],
        default="wav",
        help="wav (default) or raw 16-bit little-endian PCM",
    )
    parser.add_argument(
        "--info",
        action="store_true",
        help="Print header metadata and exit without rendering",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Log every register write")
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return parser


def _print_info(path: Path, header_info: dict) -> None:
    print(f"{path.name}:")
    for key, value in header_info.items():
        print(f"  {key:<17} {value}")


def run(argv: Optional[Sequence[str]] = None) -> int:
    """Convert one VGM file, returning the process exit status."""

    args = _build_parser().parse_args(argv)

    # Configure logging
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="[%(levelname)s] %(name)s: %(message)s",
    )

    input_path = Path(args.input)
    settings = RenderSettings(output_format=args.format)

    try:
        vgm = load_vgm(input_path)
        if args.info:
            _print_info(input_path, vgm.header.to_dict())
            return 0

        samples = VGMSynthesizer(settings).render(vgm)
        output = Path(args.output) if args.output else output_path_for(input_path, settings.output_format)
        save_samples(samples, output, settings.output_format, settings.sample_rate)
    except SNVGMError as exc:
        logger.error(f"{input_path}: {exc}")
        return exc.exit_code

    return 0


def main() -> None:
    raise SystemExit(run())


if __name__ == "__main__":  # pragma: no cover
    main()
