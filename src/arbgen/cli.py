"""Command-line entry point: arbgen (also python -m arbgen).

Exit codes:
    0 - module generated
    1 - generation failed (diagnostic printed to stderr)
    2 - invalid command line (reported by argparse)

Python 3.13+.
"""

from __future__ import annotations

import argparse
import logging
import sys

from arbgen.bundles import LocalFileSystem
from arbgen.config import load_config
from arbgen.diagnostics import ArbGenError, DiagnosticFormatter, OutputFormat
from arbgen.generator import LocalizationsGenerator

__all__ = ["main"]

logger = logging.getLogger(__name__)


def _parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    """Parse command-line arguments."""
    parser = argparse.ArgumentParser(
        prog="arbgen",
        description="Generate a typed Python localizations module from ARB files.",
    )
    parser.add_argument(
        "--project-dir",
        default=".",
        help="Directory holding l10n.yaml or pyproject.toml (default: current directory)",
    )
    parser.add_argument(
        "--config",
        metavar="FILE",
        help="Read settings from FILE (YAML or TOML) instead of l10n.yaml / pyproject.toml",
    )
    parser.add_argument(
        "--untranslated-messages-file",
        metavar="FILE",
        help="Write a JSON report of untranslated messages to FILE",
    )
    parser.add_argument(
        "--diagnostic-format",
        choices=[f.value for f in OutputFormat],
        default=OutputFormat.RUST.value,
        help="How errors are printed (default: rust)",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Log per-file progress")
    return parser.parse_args(argv)


def main(argv: list[str] | None = None) -> int:
    """Run the generator; return the process exit code."""
    args = _parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(levelname)s %(name)s: %(message)s",
    )

    fs = LocalFileSystem(args.project_dir)
    try:
        config = load_config(".", fs, config_file=args.config)
        generator = LocalizationsGenerator(config, fs)
        result = generator.run(untranslated_messages_file=args.untranslated_messages_file)
    except ArbGenError as e:
        if e.diagnostic is not None:
            formatter = DiagnosticFormatter(output_format=OutputFormat(args.diagnostic_format))
            print(formatter.format(e.diagnostic), file=sys.stderr)
        else:
            print(f"error: {e}", file=sys.stderr)
        return 1

    logger.info(
        "Generated %d messages for %d locales: %s",
        result.message_count,
        len(result.locales),
        ", ".join(result.locales),
    )
    return 0


if __name__ == "__main__":
    sys.exit(main())
