"""Run a full collection over a reports directory.

The pipeline is: find report files, parse each into a private index, absorb
the per-file indexes into the run's index in file order, fold nested classes
and publish the measures.
"""
from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterable, List, Sequence, Tuple

from .collaborators import MetricSink, ResourceResolver
from .errors import MalformedReportError
from .index import TestIndex
from .ingest.junit import parse_report
from .publisher import DEFAULT_SUFFIX, publish
from .sanitize import DEFAULT_SEPARATOR, sanitize
from .scanner import find_reports

logger = logging.getLogger(__name__)

ABORT = "abort"
SKIP = "skip"
MALFORMED_POLICIES = (ABORT, SKIP)


@dataclass
class CollectionResult:
    index: TestIndex
    reports: List[Path] = field(default_factory=list)
    published: List[str] = field(default_factory=list)
    warnings: List[str] = field(default_factory=list)
    failed_reports: List[str] = field(default_factory=list)


def _check_policy(on_malformed: str) -> None:
    if on_malformed not in MALFORMED_POLICIES:
        raise ValueError(
            f"on_malformed must be one of {', '.join(MALFORMED_POLICIES)}, got {on_malformed!r}"
        )


def _parse_one(path: Path) -> Tuple[TestIndex | None, MalformedReportError | None]:
    try:
        return parse_report(path), None
    except MalformedReportError as exc:
        return None, exc


def build_index(
    reports: Sequence[str | Path],
    *,
    on_malformed: str = ABORT,
    workers: int = 1,
) -> Tuple[TestIndex, List[str]]:
    """Parse *reports* into one index.

    Returns the index and the reports skipped as malformed.  With the
    ``abort`` policy the first malformed report, in the given order, is
    raised instead.
    """
    _check_policy(on_malformed)
    paths = [Path(r) for r in reports]
    index = TestIndex()
    failed: List[str] = []

    if workers > 1 and len(paths) > 1:
        with ThreadPoolExecutor(max_workers=workers) as executor:
            outcomes: Iterable = list(executor.map(_parse_one, paths))
    else:
        outcomes = (_parse_one(p) for p in paths)

    for path, (parsed, error) in zip(paths, outcomes):
        if error is not None:
            if on_malformed == ABORT:
                raise error
            logger.warning("Skipping malformed report %s: %s", path, error.reason)
            failed.append(str(path))
            continue
        logger.debug("Parsed %s (%d classes)", path, len(parsed))
        index.absorb(parsed)
    return index, failed


def collect(
    reports_dir: str | Path | None,
    resolver: ResourceResolver,
    sink: MetricSink,
    *,
    suffix: str = DEFAULT_SUFFIX,
    separator: str = DEFAULT_SEPARATOR,
    on_malformed: str = ABORT,
    workers: int = 1,
) -> CollectionResult:
    """Collect, sanitize and publish the reports found in *reports_dir*."""
    _check_policy(on_malformed)
    reports = find_reports(reports_dir)
    result = CollectionResult(index=TestIndex(), reports=reports)
    if not reports:
        return result
    logger.info("Found %d report files in %s", len(reports), reports_dir)

    index, failed = build_index(reports, on_malformed=on_malformed, workers=workers)
    sanitize(index, separator)
    summary = publish(index, resolver, sink, suffix)

    result.index = index
    result.failed_reports = failed
    result.published = summary.published
    result.warnings = [f"Skipped malformed report: {p}" for p in failed] + summary.warnings
    return result
