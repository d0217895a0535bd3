"""Streaming JUnit XML ingestor.

Reads Surefire/JUnit XML reports (single ``testsuite`` files as well as
aggregated ``testsuites`` files) with :func:`xml.etree.ElementTree.iterparse`
and yields one :class:`TestCaseResult` per ``testcase`` element.  Processed
elements are cleared as soon as their event is produced, so arbitrarily large
reports never need to fit in memory.
"""
from __future__ import annotations

import xml.etree.ElementTree as ET
from decimal import Decimal, InvalidOperation
from pathlib import Path
from typing import IO, Iterator, List, Optional, Union

from ..errors import MalformedReportError
from ..index import TestIndex
from ..models import TestCaseResult, TestStatus

Source = Union[str, Path, IO[bytes]]

ROOT_TAGS = {"testsuite", "testsuites"}
# upper bound on a single test duration (about 31 years)
MAX_SECONDS = Decimal(10**9)
STATUS_TAGS = {
    "skipped": TestStatus.SKIPPED,
    "error": TestStatus.ERROR,
    "failure": TestStatus.FAILURE,
}


def _local(tag: str) -> str:
    return tag.rsplit("}", 1)[-1]


def _source_name(source: Source) -> Optional[str]:
    if isinstance(source, (str, Path)):
        return str(source)
    return getattr(source, "name", None)


def _classname(elem: ET.Element, suite_name: str, where: Optional[str]) -> str:
    name = (elem.get("classname") or "").strip()
    # parameterised runners decorate the class: pkg.Foo(param)
    if name.endswith(")") and "(" in name:
        name = name[: name.index("(")].strip()
    if not name:
        name = suite_name.strip()
    if not name:
        raise MalformedReportError(
            where, f"testcase {elem.get('name', '')!r} has no classname"
        )
    return name


def _duration_ms(raw: Optional[str], where: Optional[str]) -> int:
    """Convert a ``time`` attribute in seconds to whole milliseconds."""
    if raw is None or not raw.strip():
        return 0
    text = raw.strip().replace(",", "")
    try:
        seconds = Decimal(text)
    except InvalidOperation:
        raise MalformedReportError(where, f"invalid time value {raw!r}") from None
    if seconds.is_nan():
        return 0
    if seconds.is_infinite() or seconds < 0 or seconds > MAX_SECONDS:
        raise MalformedReportError(where, f"invalid time value {raw!r}")
    return int(seconds * 1000)


def _outcome(elem: ET.Element) -> tuple[TestStatus, Optional[str]]:
    for child in elem:
        status = STATUS_TAGS.get(_local(child.tag))
        if status is None:
            continue
        message = child.get("message", "")
        text = (child.text or "").strip()
        if text and status is not TestStatus.SKIPPED:
            message = f"{message}\n\n{text}" if message else text
        return status, message.strip() or None
    return TestStatus.PASSED, None


def _to_result(
    elem: ET.Element, suite_name: str, where: Optional[str]
) -> TestCaseResult:
    classname = _classname(elem, suite_name, where)
    status, message = _outcome(elem)
    duration = _duration_ms(elem.get("time"), where)
    return TestCaseResult(
        classname=classname,
        name=elem.get("name", ""),
        status=status,
        duration_ms=0 if status is TestStatus.SKIPPED else duration,
        message=message,
    )


def _events(stream: IO[bytes], where: Optional[str]) -> Iterator[TestCaseResult]:
    suites: List[str] = []
    # open elements, root first
    open_elems: List[ET.Element] = []
    for event, elem in ET.iterparse(stream, events=("start", "end")):
        tag = _local(elem.tag)
        if event == "start":
            if not open_elems:
                if tag not in ROOT_TAGS:
                    raise MalformedReportError(
                        where, f"unexpected root element <{tag}>"
                    )
            open_elems.append(elem)
            if tag == "testsuite":
                suites.append(elem.get("name", ""))
            continue
        open_elems.pop()
        if tag == "testcase":
            yield _to_result(elem, suites[-1] if suites else "", where)
        elif tag == "testsuite" and suites:
            suites.pop()
        else:
            continue
        # only open elements stay attached to the tree
        elem.clear()
        if open_elems:
            open_elems[-1].remove(elem)


def iter_test_cases(source: Source) -> Iterator[TestCaseResult]:
    """Lazily yield the test cases of one report.

    *source* is a path or a binary file object.  The sequence is finite and
    can only be consumed once.  :class:`MalformedReportError` is raised while
    iterating when the document is not well-formed, has an unexpected root
    element, or a test case lacks a class name or has an invalid time.
    """
    where = _source_name(source)
    try:
        if isinstance(source, (str, Path)):
            with open(source, "rb") as fh:
                yield from _events(fh, where)
        else:
            yield from _events(source, where)
    except ET.ParseError as exc:
        raise MalformedReportError(where, str(exc)) from exc
    except OSError as exc:
        raise MalformedReportError(where, f"cannot read report ({exc})") from exc


def parse_report(source: Source) -> TestIndex:
    """Parse one report completely into a fresh :class:`TestIndex`."""
    index = TestIndex()
    for result in iter_test_cases(source):
        index.add_result(result)
    return index
