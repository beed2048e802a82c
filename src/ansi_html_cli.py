#!/usr/bin/env python3
"""
ANSI to HTML command line - Convert, strip or detect ANSI codes in files or stdin,
or serve the conversion endpoints over HTTP
"""

import argparse
import logging
import sys
from typing import List, Optional

from ansi_detect import has_ansi_codes
from ansi_html_server import run_server
from ansi_to_html import AnsiToHtml, strip_ansi_codes
from converter_config import load_config

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    """Command line options"""
    parser = argparse.ArgumentParser(description="Convert ANSI terminal output to safe, styled HTML")
    parser.add_argument("files", nargs="*", help="Input files (default: stdin)")
    parser.add_argument("--config", type=str, default=None, help="Path to a JSON config file")
    parser.add_argument("--newline", action="store_true", help="Render newlines as <br/>")

    mode = parser.add_mutually_exclusive_group()
    mode.add_argument("--strip", action="store_true", help="Output plain text with escape sequences removed")
    mode.add_argument("--detect", action="store_true", help="Exit 0 if input contains ANSI codes, 1 otherwise")
    mode.add_argument("--serve", action="store_true", help="Run the HTTP conversion server")

    parser.add_argument("--host", type=str, default=None, help="Server host (with --serve)")
    parser.add_argument("--port", type=int, default=None, help="Server port (auto-allocated if not specified)")
    parser.add_argument("--log-level", choices=["DEBUG", "INFO", "WARNING", "ERROR"], default="WARNING", help="Log level")
    return parser


def _read_input(files: List[str]) -> str:
    if not files:
        return sys.stdin.read()

    parts = []
    for path in files:
        with open(path, "r", encoding="utf-8", errors="replace") as f:
            parts.append(f.read())
    return "".join(parts)


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point"""
    args = build_parser().parse_args(argv)

    logging.basicConfig(
        level=getattr(logging, args.log_level),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    config = load_config(args.config)
    if args.newline:
        config.newline = True
    if args.host:
        config.host = args.host
    if args.port is not None:
        config.port = args.port

    if args.serve:
        try:
            run_server(config)
        except KeyboardInterrupt:
            logger.info("Server interrupted by user")
        return 0

    try:
        text = _read_input(args.files)
    except OSError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 2

    if args.detect:
        return 0 if has_ansi_codes(text) else 1

    if args.strip:
        sys.stdout.write(strip_ansi_codes(text))
    else:
        sys.stdout.write(AnsiToHtml(config).convert(text))
    return 0


if __name__ == "__main__":
    sys.exit(main())
