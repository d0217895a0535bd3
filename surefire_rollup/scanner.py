"""Locate Surefire report files in a reports directory."""
from __future__ import annotations

import logging
from pathlib import Path
from typing import List

logger = logging.getLogger(__name__)

SUITE_PREFIX = "TEST-"
AGGREGATE_PREFIX = "TESTS-"


def _xml_files_starting_with(directory: Path, prefix: str) -> List[Path]:
    return sorted(
        p
        for p in directory.iterdir()
        if p.is_file() and p.name.startswith(prefix) and p.name.endswith(".xml")
    )


def find_reports(directory: str | Path | None) -> List[Path]:
    """Return the report files to parse from *directory*.

    Per-suite ``TEST-*.xml`` files are preferred.  When there are none the
    aggregated ``TESTS-*.xml`` files are used instead.  A missing directory
    yields an empty list.
    """
    if directory is None:
        return []
    path = Path(directory)
    if not path.is_dir():
        logger.warning("Reports path not found: %s", path.absolute())
        return []
    reports = _xml_files_starting_with(path, SUITE_PREFIX)
    if not reports:
        # maybe there is only a test suite result file
        reports = _xml_files_starting_with(path, AGGREGATE_PREFIX)
    return reports
