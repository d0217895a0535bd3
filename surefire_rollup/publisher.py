"""Publish class report measures to a metric sink."""
from __future__ import annotations

import logging
import math
from dataclasses import dataclass, field
from typing import List

from .collaborators import Artifact, MetricSink, ResourceResolver, placeholder_artifact
from .errors import ResourceNotFoundError
from .index import TestIndex
from .metrics import compute_measures, is_publishable
from .models import ClassReport

logger = logging.getLogger(__name__)

DEFAULT_SUFFIX = ".pas"


@dataclass
class PublishSummary:
    published: List[str] = field(default_factory=list)
    skipped_empty: List[str] = field(default_factory=list)
    warnings: List[str] = field(default_factory=list)


def _artifact_for(
    identity: str, resolver: ResourceResolver, suffix: str, summary: PublishSummary
) -> Artifact:
    try:
        return resolver.resolve(identity, suffix)
    except ResourceNotFoundError as exc:
        logger.warning("%s", exc)
        summary.warnings.append(str(exc))
        return placeholder_artifact(identity)


def save_measure(sink: MetricSink, artifact: Artifact, metric: str, value: float) -> bool:
    """Forward one measure unless it is NaN."""
    if math.isnan(value):
        return False
    sink.save_measure(artifact, metric, value)
    return True


def publish_report(report: ClassReport, artifact: Artifact, sink: MetricSink) -> None:
    for metric, value in compute_measures(report).items():
        save_measure(sink, artifact, metric, value)


def publish(
    index: TestIndex,
    resolver: ResourceResolver,
    sink: MetricSink,
    suffix: str = DEFAULT_SUFFIX,
) -> PublishSummary:
    """Publish every report of *index* that recorded at least one test."""
    summary = PublishSummary()
    for identity, report in sorted(index.items()):
        if not is_publishable(report):
            summary.skipped_empty.append(identity)
            continue
        artifact = _artifact_for(identity, resolver, suffix, summary)
        publish_report(report, artifact, sink)
        summary.published.append(identity)
    logger.info("Published test measures for %d classes", len(summary.published))
    return summary
