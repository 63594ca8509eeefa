"""
claims-timeline command line interface.

Usage:
    claims-timeline generate data.json -o timeline.html
    claims-timeline validate data.json --verbose
    claims-timeline scan ./claims
    claims-timeline folder ./claims -d ./timelines
    claims-timeline init-config claims-timeline.config.json
"""
from __future__ import annotations

import argparse
import logging
import sys
import time
from collections import Counter
from pathlib import Path

from claims_timeline import __version__
from claims_timeline.cli.validators import build_render_options, validate_json_file, validate_output_path
from claims_timeline.shared.artifacts import DEFAULT_OUTPUT_NAME
from claims_timeline.shared.config import DEFAULT_CONFIG, apply_cli_overrides, load_config, write_sample_config
from claims_timeline.shared.errors import ClaimsTimelineError
from claims_timeline.shared.models import FolderProcessingOptions, NormalizationConfig, Theme
from claims_timeline.shared.schema_validator import supported_date_formats
from claims_timeline.shared.storage import write_text
from claims_timeline.worker.folder_processor import FolderProcessor
from claims_timeline.worker.pipeline import normalize_file
from claims_timeline.worker.steps.export_render import (
    DEFAULT_TITLE,
    format_claim_kind,
    format_date,
    format_duration,
    format_file_size,
    render_html,
)

logger = logging.getLogger("claims_timeline")

DEFAULT_CONFIG_NAME = "claims-timeline.config.json"


def _build_config(args: argparse.Namespace) -> NormalizationConfig:
    config = load_config(args.config) if getattr(args, "config", None) else DEFAULT_CONFIG
    return apply_cli_overrides(config, date_format=getattr(args, "format", None))


def _render_values(args: argparse.Namespace) -> dict:
    return {
        "theme": args.theme,
        "title": args.title,
        "width": args.width,
        "height": args.height,
        "interactive": args.interactive,
    }


def _kinds_text(kinds) -> str:
    return ", ".join(format_claim_kind(k) for k in kinds)


# ── Commands ─────────────────────────────────────────────────────────────


def cmd_generate(args: argparse.Namespace) -> int:
    started = time.monotonic()
    validate_json_file(args.input)
    validate_output_path(args.output)
    config = _build_config(args)

    doc = normalize_file(args.input, config)
    values = _render_values(args)
    values["title"] = values["title"] or f"{DEFAULT_TITLE} - {Path(args.input).name}"
    html_text = render_html(doc, build_render_options(**values))
    out_path = write_text(args.output, html_text)

    elapsed_ms = (time.monotonic() - started) * 1000
    print("Timeline generated successfully!")
    print()
    print("Generation Summary:")
    print(f"   Input:     {args.input}")
    print(f"   Output:    {out_path}")
    print(f"   Claims:    {doc.summary.total_items}")
    print(f"   Types:     {_kinds_text(doc.summary.kinds)}")
    print(f"   Size:      {format_file_size(out_path.stat().st_size)}")
    print(f"   Duration:  {format_duration(elapsed_ms)}")
    if doc.warnings:
        print(f"   Skipped:   {len(doc.warnings)} (see warnings above)")
    print()
    print(f"To view: open {out_path.resolve()}")
    return 0


def cmd_validate(args: argparse.Namespace) -> int:
    validate_json_file(args.input)
    config = _build_config(args)
    doc = normalize_file(args.input, config)

    print("JSON file is valid!")
    print()
    print("Validation Results:")
    print(f"   File:       {args.input}")
    print(f"   Claims:     {doc.summary.total_items}")
    print(f"   Types:      {_kinds_text(doc.summary.kinds)}")
    print(f"   Date Range: {format_date(doc.span.start)} to {format_date(doc.span.end)}")

    if args.verbose:
        print()
        print("Detailed Analysis:")
        counts = Counter(item.kind for item in doc.items)
        for kind in doc.summary.kinds:
            print(f"   {kind.value}: {counts[kind]} claims")
        sample = doc.items[0]
        print()
        print("Sample Claim:")
        print(f"   ID:          {sample.id}")
        print(f"   Type:        {sample.kind.value}")
        print(f"   Display:     {sample.label}")
        print(f"   Start Date:  {format_date(sample.interval.start)}")
        print(f"   End Date:    {format_date(sample.interval.end)}")
        if doc.warnings:
            print()
            print("Skipped Records:")
            for w in doc.warnings:
                print(f"   [{w.code}] {w.message}")
    return 0


def cmd_scan(args: argparse.Namespace) -> int:
    processor = FolderProcessor(_build_config(args))
    files = processor.scan_folder(args.folder, recursive=args.recursive)
    valid = [f for f in files if f.is_valid_claims]

    print(f"Found {len(files)} JSON files ({len(valid)} valid claims files) in {args.folder}")
    for f in files:
        if f.is_valid_claims:
            detail = f"{f.claims_count} claims, {_kinds_text(f.claim_kinds or [])}"
            status = "valid"
        else:
            detail = f.error or "not a claims file"
            status = "invalid"
        print(f"   {f.name:<40} {format_file_size(f.size):>10}  {status:<8} {detail}")
    return 0


def cmd_folder(args: argparse.Namespace) -> int:
    started = time.monotonic()
    processor = FolderProcessor(_build_config(args))
    options = FolderProcessingOptions(
        recursive=args.recursive,
        output_dir=args.output_dir,
        render=build_render_options(**_render_values(args)),
    )
    result = processor.process_folder(args.folder, options)
    elapsed_ms = (time.monotonic() - started) * 1000

    print("Folder Processing Summary:")
    print(f"   Files scanned:   {result.files_scanned}")
    print(f"   Succeeded:       {result.files_succeeded}")
    print(f"   Failed:          {result.files_failed}")
    print(f"   Total claims:    {result.summary.total_items}")
    print(f"   Types:           {_kinds_text(result.summary.kinds)}")
    if result.summary.span is not None:
        span = result.summary.span
        print(f"   Date Range:      {format_date(span.start)} to {format_date(span.end)}")
    print(f"   Duration:        {format_duration(elapsed_ms)}")

    if result.output_files:
        print()
        print("Generated Files:")
        for out in result.output_files:
            print(f"   {out}")
    if result.errors:
        print()
        print("Errors:")
        for err in result.errors:
            print(f"   {err.file}: {err.error}")
    return 0


def cmd_init_config(args: argparse.Namespace) -> int:
    path = write_sample_config(args.path)
    print(f"Sample configuration written to {path}")
    return 0


def cmd_info(args: argparse.Namespace) -> int:
    print("Medical Claims Timeline CLI")
    print()
    print("Supported Data Formats:")
    print("   rxTba      - Prescription claims to be adjudicated")
    print("   rxHistory  - Historical prescription claims")
    print("   medHistory - Medical service claims (one timeline item per service line)")
    print()
    print("Supported Date Formats:")
    for fmt in supported_date_formats():
        print(f"   {fmt}")
    print()
    print("Examples:")
    print("   claims-timeline generate data.json -o my-timeline.html")
    print("   claims-timeline validate data.json --verbose")
    print("   claims-timeline folder ./claims -d ./timelines")
    return 0


# ── Argument parsing ─────────────────────────────────────────────────────


def _add_render_args(p: argparse.ArgumentParser) -> None:
    p.add_argument("--theme", choices=[t.value for t in Theme], default=Theme.AUTO.value, help="Color theme")
    p.add_argument("--title", default=None, help="Timeline title")
    p.add_argument("--no-interactive", dest="interactive", action="store_false", help="Disable interactive features")
    p.add_argument("--width", type=int, default=1200, help="Timeline width in pixels (400-5000)")
    p.add_argument("--height", type=int, default=600, help="Timeline height in pixels (300-3000)")


def _add_config_args(p: argparse.ArgumentParser) -> None:
    p.add_argument("-c", "--config", default=None, help="Configuration file path")
    p.add_argument("--format", default=None, help="Preferred date format, e.g. YYYY-MM-DD or MM/DD/YYYY")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="claims-timeline",
        description="Generate interactive timeline visualizations from medical claims JSON data",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument("--log-level", default="WARNING", help="Logging level (DEBUG, INFO, WARNING, ERROR)")
    sub = parser.add_subparsers(dest="command")

    p = sub.add_parser("generate", aliases=["gen"], help="Generate timeline visualization from a JSON file")
    p.add_argument("input", help="Input JSON file path")
    p.add_argument("-o", "--output", default=DEFAULT_OUTPUT_NAME, help="Output HTML file path")
    _add_config_args(p)
    _add_render_args(p)
    p.set_defaults(func=cmd_generate)

    p = sub.add_parser("validate", aliases=["val"], help="Validate JSON file structure")
    p.add_argument("input", help="Input JSON file path")
    p.add_argument("-v", "--verbose", action="store_true", help="Verbose output")
    _add_config_args(p)
    p.set_defaults(func=cmd_validate)

    p = sub.add_parser("scan", help="List JSON files in a folder and classify them")
    p.add_argument("folder", help="Folder to scan")
    p.add_argument("--no-recursive", dest="recursive", action="store_false", help="Do not descend into subfolders")
    _add_config_args(p)
    p.set_defaults(func=cmd_scan)

    p = sub.add_parser("folder", help="Generate one timeline per claims file in a folder")
    p.add_argument("folder", help="Folder containing claims JSON files")
    p.add_argument("-d", "--output-dir", default=None, help="Output directory (defaults to the input folder)")
    p.add_argument("--no-recursive", dest="recursive", action="store_false", help="Do not descend into subfolders")
    _add_config_args(p)
    _add_render_args(p)
    p.set_defaults(func=cmd_folder)

    p = sub.add_parser("init-config", help="Write a sample configuration file")
    p.add_argument("path", nargs="?", default=DEFAULT_CONFIG_NAME, help="Where to write the config")
    p.set_defaults(func=cmd_init_config)

    p = sub.add_parser("info", help="Show supported formats and examples")
    p.set_defaults(func=cmd_info)

    return parser


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=getattr(logging, str(args.log_level).upper(), logging.WARNING),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )

    if not getattr(args, "func", None):
        parser.print_help()
        return 1

    try:
        return args.func(args)
    except ClaimsTimelineError as exc:
        logger.debug("Command failed", exc_info=True)
        print(f"Error: {exc}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
