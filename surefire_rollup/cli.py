"""Command‑line interface for the surefire rollup.

The CLI exposes two subcommands:

  - ``scan``: list the report files that a collection would parse.
  - ``collect``: parse the reports, fold nested classes into their parent
    class, and publish per-file test measures as JSON (and optionally to an
    HTTP endpoint).
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Dict, List

from .collector import MALFORMED_POLICIES, collect
from .config import load_config
from .errors import MalformedReportError
from .resolve import DirectoryResolver
from .scanner import find_reports
from .sinks import HttpMetricSink, InMemoryMetricSink, TeeMetricSink


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="surefire report rollup", allow_abbrev=False
    )
    parser.add_argument("--config", default=None, help="Path to rollup config (YAML/JSON)")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    sub = parser.add_subparsers(dest="command", required=True)

    scan = sub.add_parser("scan", help="List candidate report files")
    scan.add_argument("--reports-dir", default=None, help="Directory holding TEST-*.xml files")

    col = sub.add_parser("collect", help="Aggregate reports and publish measures")
    col.add_argument("--reports-dir", default=None, help="Directory holding TEST-*.xml files")
    col.add_argument(
        "--test-dir",
        dest="test_dirs",
        action="append",
        default=[],
        help="Directory searched for test sources (repeatable)",
    )
    col.add_argument("--suffix", default=None, help="Source file suffix (e.g. .pas)")
    col.add_argument("--separator", default=None, help="Nested class separator")
    col.add_argument(
        "--on-malformed",
        choices=list(MALFORMED_POLICIES),
        default=None,
        help="Abort the run or skip files that fail to parse",
    )
    col.add_argument("--workers", type=int, default=None, help="Parallel parser threads")
    col.add_argument("--out", default=None, help="Write measures JSON here instead of stdout")
    col.add_argument("--post-url", default=None, help="POST measures to this URL")
    col.add_argument("--dry-run", action="store_true", help="Print the HTTP payload only")
    return parser


def _override(config: Dict, key: str, value) -> None:
    if value is not None and value != []:
        config[key] = value


def run_collect(args: argparse.Namespace, config: Dict) -> int:
    _override(config, "reports_dir", args.reports_dir)
    _override(config, "test_dirs", args.test_dirs)
    _override(config, "source_suffix", args.suffix)
    _override(config, "nesting_separator", args.separator)
    _override(config, "on_malformed", args.on_malformed)
    _override(config, "workers", args.workers)
    sink_cfg = dict(config.get("sink") or {})
    if args.post_url:
        sink_cfg["url"] = args.post_url
    if args.dry_run:
        sink_cfg["dry_run"] = True

    memory = InMemoryMetricSink()
    http = None
    if sink_cfg.get("url") or sink_cfg.get("dry_run"):
        http = HttpMetricSink(
            sink_cfg.get("url"),
            timeout=sink_cfg.get("timeout", 5),
            dry_run=bool(sink_cfg.get("dry_run")),
        )
    sink = TeeMetricSink(memory, http) if http is not None else memory

    try:
        result = collect(
            config["reports_dir"],
            DirectoryResolver(config["test_dirs"]),
            sink,
            suffix=config["source_suffix"],
            separator=config["nesting_separator"],
            on_malformed=config["on_malformed"],
            workers=int(config["workers"]),
        )
    except MalformedReportError as exc:
        print(f"[surefire-rollup] Error: {exc}", file=sys.stderr)
        return 1

    document = {
        "measures": memory.as_dict(),
        "warnings": result.warnings,
        "failed_reports": result.failed_reports,
    }
    text = json.dumps(document, indent=2)
    if args.out:
        Path(args.out).write_text(text + "\n", encoding="utf-8")
    else:
        print(text)
    if http is not None and not http.flush():
        return 1
    return 0


def run_scan(args: argparse.Namespace, config: Dict) -> int:
    _override(config, "reports_dir", args.reports_dir)
    for path in find_reports(config["reports_dir"]):
        print(path)
    return 0


def main(argv: List[str] | None = None) -> None:
    """Entry point for the CLI."""
    argv = argv if argv is not None else sys.argv[1:]
    args = _build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="[surefire-rollup] %(levelname)s %(name)s: %(message)s",
    )
    config = load_config(args.config)
    if args.command == "scan":
        code = run_scan(args, config)
    else:
        code = run_collect(args, config)
    if code:
        sys.exit(code)
