#!/usr/bin/env python3
"""
Rust source outline generator.

Lists top-level declarations (functions, structs, enums, statics and other
public items) of a crate or Cargo workspace with their line ranges.

Usage:
    python run_outline.py > outline.md
    python run_outline.py --root /path/to/workspace --output outline.md
    python run_outline.py --root . --format json --workers 4
    python run_outline.py --file src/lib.rs --pattern '^fn ' --limit 50
"""

import argparse
import dataclasses
import json
import logging
import os
import sys
from typing import List, Optional

from dotenv import load_dotenv

from core.outline_config import (
    OutlineConfig,
    OutlineConfigError,
    load_outline_config,
    resolve_strict_config_validation,
)
from core.structured_logging import configure_structured_logging, set_run_id

logger = logging.getLogger(__name__)


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    """Parse command-line arguments.

    Returns:
        Parsed argument namespace.
    """
    parser = argparse.ArgumentParser(
        description="Rust Code Structure Outline Generator",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=(
            "Examples:\n"
            "  python run_outline.py > outline.md\n"
            "  python run_outline.py --root ../my-workspace --format json\n"
            "  python run_outline.py --file src/big_module.rs --offset 100\n"
        ),
    )

    parser.add_argument(
        "--root",
        default=".",
        help="Crate or workspace root containing Cargo.toml / src. Default: ."
    )
    parser.add_argument(
        "--config",
        default=None,
        help="Path to an outline YAML config. Default: $OUTLINE_CONFIG or outline.yml"
    )
    parser.add_argument(
        "--strict-config",
        action="store_true",
        default=None,
        help="Fail on config problems instead of falling back to defaults."
    )
    parser.add_argument(
        "--format",
        choices=("markdown", "json"),
        default="markdown",
        help="Output format. Default: markdown"
    )
    parser.add_argument(
        "--output",
        default=None,
        help="Write the outline to this file instead of stdout."
    )
    parser.add_argument(
        "--workers",
        type=int,
        default=None,
        help="Number of files scanned in parallel. Default: from config (1)."
    )
    parser.add_argument(
        "--file",
        default=None,
        help="Show one file: full content if small, else its outline."
    )
    parser.add_argument(
        "--pattern",
        default=None,
        help="With --file: regex filter applied to entry summaries."
    )
    parser.add_argument(
        "--offset",
        type=int,
        default=0,
        help="With --file: number of entries to skip."
    )
    parser.add_argument(
        "--limit",
        type=int,
        default=None,
        help="With --file: entries per page. Default: from config (unlimited)."
    )
    parser.add_argument(
        "--verbose",
        action="store_true",
        default=False,
        help="Enable debug logging."
    )

    return parser.parse_args(argv)


def _write_output(text: str, output_file: Optional[str]) -> None:
    if output_file is None:
        sys.stdout.write(text)
        return
    os.makedirs(os.path.dirname(os.path.abspath(output_file)), exist_ok=True)
    with open(output_file, "w", encoding="utf-8") as f:
        f.write(text)
    logger.info("Wrote outline to %s", output_file)


def run_project(args: argparse.Namespace, config: OutlineConfig) -> str:
    """Outline every source file under ``args.root`` and render it."""
    from outline.extractor import outline_project
    from outline.render import outlines_to_dicts, render_workspace_outline

    discovery, outlines, stats = outline_project(args.root, config)
    logger.info("Final stats: %s", stats)

    if args.format == "json":
        payload = {
            "root": discovery.root,
            "is_workspace": discovery.is_workspace,
            "files": outlines_to_dicts(outlines, discovery.root),
            "stats": stats.to_dict(),
        }
        return json.dumps(payload, indent=2, ensure_ascii=False) + "\n"
    return render_workspace_outline(outlines, discovery.is_workspace, discovery.root)


def run_single_file(args: argparse.Namespace, config: OutlineConfig) -> str:
    """Render one file as full content or as a paginated outline."""
    from outline.extractor import extract_file
    from outline.render import get_file_content_or_outline

    limit = args.limit if args.limit is not None else config.results_per_page

    if args.format == "json":
        entries = extract_file(args.file)
        payload = {
            "path": args.file,
            "entries": [entry.to_dict() for entry in entries],
        }
        return json.dumps(payload, indent=2, ensure_ascii=False) + "\n"

    content = get_file_content_or_outline(
        args.file,
        auto_outline_size=config.auto_outline_size,
        pattern=args.pattern,
        offset=args.offset,
        limit=limit,
    )
    return content.text


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point for the outline generator."""
    load_dotenv()
    args = parse_args(argv)

    configure_structured_logging(logging.DEBUG if args.verbose else logging.INFO)
    run_id = set_run_id()
    logger.debug("Starting outline run %s", run_id)

    strict = (
        args.strict_config
        if args.strict_config is not None
        else resolve_strict_config_validation()
    )

    try:
        config = load_outline_config(args.config, strict=strict)
        if args.workers is not None:
            if args.workers < 1:
                raise ValueError(f"--workers must be >= 1, got {args.workers}")
            config = dataclasses.replace(config, workers=args.workers)

        if args.file:
            text = run_single_file(args, config)
        else:
            text = run_project(args, config)
        _write_output(text, args.output)

    except FileNotFoundError as e:
        logger.error(f"File error: {e}")
        return 1
    except OutlineConfigError as e:
        logger.error(f"Config error: {e}")
        return 1
    except ValueError as e:
        logger.error(f"Invalid argument: {e}")
        return 1

    return 0


if __name__ == "__main__":
    sys.exit(main())
