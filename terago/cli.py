"""Command line entry point: build radar pages from a directory of YAML files."""

from __future__ import annotations

import argparse
import logging
from collections.abc import Sequence
from pathlib import Path

from terago.generate import DEFAULT_TEMPLATE, generate_radar
from terago.meta import VERSION
from terago.reading import read_meta, read_technologies_files

logger = logging.getLogger("terago")


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="terago", description="Generate technology radar HTML pages."
    )
    parser.add_argument("-input", "--input", default="", help="Directory path containing YAML files")
    parser.add_argument("-output", "--output", default="output", help="Directory path for HTML output")
    parser.add_argument(
        "-template",
        "--template",
        default="",
        help="path to template file (if empty, uses default template)",
    )
    parser.add_argument(
        "-export-template",
        "--export-template",
        dest="export_template",
        default="",
        help="Export the built-in template to file (for customization)",
    )
    parser.add_argument("-meta", "--meta", default="meta.yaml", help="path to meta file")
    parser.add_argument("-version", "--version", action="store_true", help="print version")
    parser.add_argument(
        "-force",
        "--force",
        action="store_true",
        help="force regeneration of all HTML files (ignore existing files)",
    )
    parser.add_argument(
        "-verbose",
        "--verbose",
        action="store_true",
        help="enable verbose logging (show file processing details)",
    )
    parser.add_argument(
        "-include-links",
        "--include-links",
        dest="include_links",
        action="store_true",
        help="include links in radar entries (based on quadrant and technology name)",
    )
    parser.add_argument(
        "-add-changes",
        "--add-changes",
        dest="add_changes",
        action="store_true",
        help="add table with description of changed or new technologies",
    )
    return parser


def main(argv: Sequence[str] | None = None) -> int:
    """Run the command; return the process exit status."""
    args = _build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.INFO, format="%(asctime)s %(message)s", datefmt="%Y/%m/%d %H:%M:%S"
    )

    if args.export_template:
        try:
            Path(args.export_template).write_text(DEFAULT_TEMPLATE, encoding="utf-8")
        except OSError as err:
            logger.error("Failed to export template: %s", err)
            return 1
        logger.info("Template exported to %s", args.export_template)
        return 0

    if args.version:
        print(VERSION)
        return 0

    if args.verbose:
        logger.info(
            "Start, input=%s, output=%s, template=%s, meta=%s",
            args.input,
            args.output,
            args.template,
            args.meta,
        )
        logger.info("Reading meta file: %s", args.meta)
    meta = read_meta(args.meta)

    if not args.input:
        logger.error("Error: Directory path is required (--input)")
        return 1

    try:
        files = read_technologies_files(args.input, meta)
    except (OSError, ValueError) as err:
        logger.error("Failed to read input directory: %s", err)
        return 1

    try:
        generate_radar(
            args.output,
            args.template,
            files,
            meta,
            args.force,
            args.verbose,
            args.include_links,
            args.add_changes,
        )
    except (OSError, ValueError) as err:
        logger.error("Failed to generate radar: %s", err)
        return 1

    if args.verbose:
        logger.info("Done.")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())