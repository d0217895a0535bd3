"""Interfaces to the host analysis platform.

The rollup engine only needs two services from its host: mapping a class
identity to a source artifact and recording a numeric measure against that
artifact.  Both are expressed as protocols so the engine carries no
dependency on a particular platform.
"""
from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Protocol


@dataclass(frozen=True)
class Artifact:
    """Handle for the source file measures are attributed to."""

    key: str
    path: Optional[Path] = None
    placeholder: bool = False


def placeholder_artifact(identity: str) -> Artifact:
    """Return the stand-in artifact used when *identity* cannot be resolved."""
    return Artifact(key=identity, placeholder=True)


class ResourceResolver(Protocol):
    """Maps class identities to source artifacts."""

    def resolve(self, identity: str, suffix: str) -> Artifact:
        """Return the artifact for *identity*.

        Raises :class:`~surefire_rollup.errors.ResourceNotFoundError` when no
        source file exists for it.
        """
        ...


class MetricSink(Protocol):
    """Receives published measures."""

    def save_measure(self, artifact: Artifact, metric: str, value: float) -> None: ...
