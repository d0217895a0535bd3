"""Resolve class identities to test source files on disk."""
from __future__ import annotations

from pathlib import Path
from typing import Iterable, List, Optional

from .collaborators import Artifact
from .errors import ResourceNotFoundError


class DirectoryResolver:
    """Finds ``<identity><suffix>`` inside the configured test directories."""

    def __init__(self, test_dirs: Iterable[str | Path]):
        self.test_dirs: List[Path] = [Path(d) for d in test_dirs]

    def find_file(self, filename: str) -> Optional[tuple[Path, Path]]:
        """Return ``(test_dir, file)`` for the first match of *filename*."""
        for base in self.test_dirs:
            if not base.is_dir():
                continue
            direct = base / filename
            if direct.is_file():
                return base, direct
        for base in self.test_dirs:
            if not base.is_dir():
                continue
            for candidate in sorted(base.rglob(filename)):
                if candidate.is_file():
                    return base, candidate
        return None

    def resolve(self, identity: str, suffix: str) -> Artifact:
        filename = identity + suffix
        found = self.find_file(filename)
        if found is None:
            raise ResourceNotFoundError(identity, filename)
        base, path = found
        return Artifact(key=path.relative_to(base).as_posix(), path=path)
