#!/usr/bin/env python3
"""Export an editor HTML file from disk to DOCX, PDF, Markdown or HTML.

Usage:
  python scripts/export_file.py <input.html> [--format docx|pdf|md|html] [--title TITLE] [--output-dir DIR]

Behavior:
  - Title defaults to the input file stem.
  - Format defaults to settings.default_export_format (DEFAULT_EXPORT_FORMAT).
  - Writes <output-dir>/<sanitized title>.<ext> and prints word/character stats.
"""
from __future__ import annotations
import argparse
import sys
from pathlib import Path

from station_export.config import settings
from station_export.services.exporter import SUPPORTED_FORMATS, export_bytes
from station_export.services.exporters import ExportError
from station_export.utils.logging import logger
from station_export.utils.text_stats import document_stats


def parse_args(argv=None):
    parser = argparse.ArgumentParser(description="Export editor HTML to a document file")
    parser.add_argument("input", type=Path, help="Path to an HTML file produced by the editor")
    parser.add_argument("--format", dest="fmt", choices=SUPPORTED_FORMATS, default=settings.default_export_format)
    parser.add_argument("--title", default=None, help="Document title (default: input file stem)")
    parser.add_argument("--output-dir", type=Path, default=Path("."), help="Directory for the exported file")
    return parser.parse_args(argv)


def main(argv=None) -> int:
    args = parse_args(argv)
    if not args.input.is_file():
        print(f"Input file not found: {args.input}", file=sys.stderr)
        return 1

    html = args.input.read_text(encoding="utf-8")
    title = args.title if args.title is not None else args.input.stem

    try:
        content, filename, _ = export_bytes(title, html, fmt=args.fmt)
    except ExportError as e:
        logger.error("Export failed", extra={"export_format": args.fmt, "error": str(e)})
        print(f"Export failed: {e}", file=sys.stderr)
        return 2

    args.output_dir.mkdir(parents=True, exist_ok=True)
    out_path = args.output_dir / filename
    out_path.write_bytes(content)

    stats = document_stats(html)
    print(f"Wrote {out_path} ({len(content):,} bytes)")
    print(f"Words: {stats.word_count:,}  Characters: {stats.character_count:,}  Reading time: {stats.reading_time_minutes} min")
    return 0


if __name__ == "__main__":
    sys.exit(main())
