"""Error kinds raised by the rollup engine."""
from __future__ import annotations

from pathlib import Path


class RollupError(Exception):
    """Base class for rollup failures."""


class MalformedReportError(RollupError):
    """A report file is not well-formed XML or does not follow the JUnit shape."""

    def __init__(self, path: str | Path | None, reason: str) -> None:
        self.path = None if path is None else str(path)
        self.reason = reason
        where = self.path or "<stream>"
        super().__init__(f"Fail to parse the Surefire report {where}: {reason}")


class ResourceNotFoundError(RollupError):
    """A class identity could not be mapped to a source file."""

    def __init__(self, identity: str, filename: str) -> None:
        self.identity = identity
        self.filename = filename
        super().__init__(f"Unit test file not found: {filename}")
