"""In-memory index of class reports keyed by class identity.

The index is created empty at the start of a report run, filled by one or
more parse passes, rewritten in place by the sanitizer and discarded after
publishing.  It is not thread-safe; concurrent parsers fill private indexes
that are absorbed by a single owner (see :mod:`surefire_rollup.collector`).
"""
from __future__ import annotations

from typing import Dict, Iterator, Optional, Set, Tuple

from .models import ClassReport, OutcomeDelta, TestCaseResult


class TestIndex:
    """Mapping from class identity to its accumulated :class:`ClassReport`."""

    __test__ = False

    def __init__(self) -> None:
        self._reports: Dict[str, ClassReport] = {}

    def _index(self, identity: str) -> ClassReport:
        report = self._reports.get(identity)
        if report is None:
            report = ClassReport()
            self._reports[identity] = report
        return report

    def record(self, identity: str, delta: OutcomeDelta) -> ClassReport:
        """Add *delta* to the report for *identity*, creating it if needed."""
        report = self._index(identity)
        report.add(delta)
        return report

    def add_result(self, result: TestCaseResult) -> ClassReport:
        return self.record(result.classname, result.to_delta())

    def class_identities(self) -> Set[str]:
        return set(self._reports)

    def report_for(self, identity: str) -> Optional[ClassReport]:
        return self._reports.get(identity)

    def merge(self, source: str, destination: str) -> Optional[ClassReport]:
        """Move everything recorded for *source* into *destination*.

        Missing *source* is a no-op and returns ``None``.  A missing
        *destination* is created from the source values.  Merging an identity
        into itself changes nothing.
        """
        if source == destination:
            return self._reports.get(source)
        moved = self._reports.pop(source, None)
        if moved is None:
            return None
        target = self._index(destination)
        target.add(moved)
        return target

    def absorb(self, other: "TestIndex") -> None:
        """Add every report of *other* into this index."""
        for identity, report in other.items():
            self.record(identity, report.as_delta())

    def items(self) -> Iterator[Tuple[str, ClassReport]]:
        return iter(list(self._reports.items()))

    def __contains__(self, identity: object) -> bool:
        return identity in self._reports

    def __len__(self) -> int:
        return len(self._reports)

    def __repr__(self) -> str:
        return f"TestIndex({self._reports!r})"
