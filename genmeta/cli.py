"""CLI entrypoint for reference metadata generation."""

from __future__ import annotations

import argparse
import sys
from pathlib import Path

from .config import ConfigError, load_config
from .generator import generate_metadata, output_exclusion, write_manifest
from .logging import LoggingSink, configure_logging, get_logger


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="generate-metadata",
        description="Generate a metadata manifest from annotated reference templates.",
    )
    parser.add_argument(
        "--dir",
        dest="reference_dir",
        default=None,
        help="Path to the directory holding the reference templates.",
    )
    parser.add_argument(
        "--outfile",
        default=None,
        help="Name of the output file, '-' for stdout (default).",
    )
    parser.add_argument(
        "--exit-on-error",
        "--exitOnError",
        dest="exit_on_error",
        action=argparse.BooleanOptionalAction,
        default=None,
        help=(
            "Fail the run on walk errors and conflicting component declarations "
            "(overrides exit_on_error in .genmeta.yml)."
        ),
    )
    parser.add_argument(
        "--exclude",
        action="append",
        default=[],
        metavar="PATTERN",
        help="Glob pattern of reference paths to skip (repeatable).",
    )
    parser.add_argument(
        "--config",
        default=".",
        help="Path to a .genmeta.yml file or the directory containing it.",
    )
    parser.add_argument(
        "--log-file",
        type=Path,
        default=None,
        help="Also write log records to this file.",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        default=False,
        help="Increase log verbosity for troubleshooting.",
    )
    return parser


def main(argv: list[str] | None = None) -> None:
    """CLI entrypoint for generate-metadata."""
    parser = _build_parser()
    args = parser.parse_args(argv)

    try:
        config = load_config(Path(args.config))
    except ConfigError as exc:
        parser.exit(1, f"{exc}\n")

    reference_dir = args.reference_dir or config.reference_dir
    if reference_dir is None:
        parser.exit(1, "a reference directory is required (--dir or reference_dir in .genmeta.yml)\n")

    configure_logging(
        verbose=bool(args.verbose),
        log_file=args.log_file,
        reference=Path(reference_dir).name,
    )
    logger = get_logger("cli")
    logger.debug("Configuration root %s", config.root)
    output = args.outfile or config.output or "-"
    exit_on_error = args.exit_on_error if args.exit_on_error is not None else config.exit_on_error

    exclude_paths = list(config.exclude_paths) + list(args.exclude)
    own_output = output_exclusion(reference_dir, output)
    if own_output:
        logger.debug("Excluding output file %s from discovery", own_output)
        exclude_paths.append(own_output)

    result = generate_metadata(
        reference_dir,
        exit_on_error=exit_on_error,
        sink=LoggingSink(logger),
        exclude_paths=exclude_paths,
    )
    if result.fatal is not None:
        parser.exit(1, "generate-metadata failed. Run with --verbose for more details.\n")

    try:
        target = write_manifest(result, output)
    except OSError as exc:
        parser.exit(1, f"failed to write output file: {exc}\n")
    if target is not None:
        logger.info("Metadata written to %s", target)


if __name__ == "__main__":
    main(sys.argv[1:])
