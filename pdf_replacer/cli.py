#!/usr/bin/env python3
"""Command line tool: replace simple strings in PDF documents."""

import argparse
import json
import logging
import sys

import pikepdf

from .api import PDFTextReplacer
from .config import DEFAULT_VERBOSE
from .exceptions import ReplacerError
from .logging_utils import configure_logging

logger = logging.getLogger("pdf_replacer.cli")

RULES_HELP = """JSON array file path, read from stdin until EOF if not present:
[
    {"key": "[PLACEHOLDER]", "value": "A Value"},
    {"key": "anything", "value": "Other value"}
]"""


def build_parser():
    parser = argparse.ArgumentParser(
        prog="pdf-replace",
        description="Replace simple strings in PDF documents.",
        formatter_class=argparse.RawTextHelpFormatter,
    )
    parser.add_argument("--json", "-j", help=RULES_HELP)
    parser.add_argument("--input", "-i", required=True, help="PDF source path")
    parser.add_argument("--output", "-o", help="PDF output file path, written to stdout if not present")
    parser.add_argument("--verbose", "-v", type=int, choices=[0, 1, 2, 3], default=DEFAULT_VERBOSE,
                        help="Verbosity level (0=errors only, 1=standard, 2=detailed, 3=debug)")

    inspect = parser.add_mutually_exclusive_group()
    inspect.add_argument("--list-text", action="store_true",
                         help="Print the decoded text runs of every page as JSON instead of replacing")
    inspect.add_argument("--fonts", action="store_true",
                         help="Print the font report of every page as JSON instead of replacing")
    return parser


def _print_json(data):
    sys.stdout.write(json.dumps(data, ensure_ascii=False, indent=2))
    sys.stdout.write("\n")


def run(args):
    replacer = PDFTextReplacer()

    if args.list_text:
        _print_json(replacer.parse_page_text(args.input))
        return 0
    if args.fonts:
        _print_json(replacer.analyze_fonts(args.input))
        return 0

    rules = replacer.load_rules(args.json if args.json else sys.stdin)
    changed = replacer.replace_text(args.input, args.output, rules)
    logger.info("Done: %d pages rewritten, output written to %s", changed, args.output or "stdout")
    return 0


def main(argv=None):
    args = build_parser().parse_args(argv)
    configure_logging(args.verbose)

    # pikepdf raises ValueError for unusable save targets such as the input file itself
    try:
        return run(args)
    except (ReplacerError, pikepdf.PdfError, OSError, ValueError) as e:
        logger.error("%s", e)
        return 1


if __name__ == "__main__":
    sys.exit(main())
