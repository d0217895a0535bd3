"""Metric sink implementations."""
from __future__ import annotations

import json
import os
import sys
import time
from typing import Dict, List, Optional

import requests

from .collaborators import Artifact, MetricSink


class InMemoryMetricSink:
    """Keeps published measures in a dictionary keyed by artifact key."""

    name = "memory"

    def __init__(self) -> None:
        self.measures: Dict[str, Dict[str, float]] = {}
        self.artifacts: Dict[str, Artifact] = {}

    def save_measure(self, artifact: Artifact, metric: str, value: float) -> None:
        self.artifacts[artifact.key] = artifact
        self.measures.setdefault(artifact.key, {})[metric] = value

    def as_dict(self) -> Dict[str, Dict[str, float]]:
        return {key: dict(values) for key, values in sorted(self.measures.items())}


class TeeMetricSink:
    """Forward every measure to several sinks, in order."""

    name = "tee"

    def __init__(self, *sinks: MetricSink) -> None:
        self.sinks: List[MetricSink] = list(sinks)

    def save_measure(self, artifact: Artifact, metric: str, value: float) -> None:
        for sink in self.sinks:
            sink.save_measure(artifact, metric, value)


class HttpMetricSink:
    """Buffer measures and POST them as a single JSON document.

    Nothing is sent until :meth:`flush` is called.  Dry-run mode (or
    ``SUREFIRE_ROLLUP_DRY_RUN=true``) prints the payload instead of posting it.
    """

    name = "http"

    def __init__(
        self,
        url: Optional[str],
        timeout: float = 5,
        dry_run: bool = False,
        session: Optional[requests.Session] = None,
    ) -> None:
        self.url = url
        self.timeout = timeout
        env_dry = os.getenv("SUREFIRE_ROLLUP_DRY_RUN", "false").lower() in {"true", "1"}
        self.dry_run = dry_run or env_dry
        self._post = session.post if session is not None else requests.post
        self._pending: List[Dict] = []
        self._last_payload: Optional[dict] = None

    def save_measure(self, artifact: Artifact, metric: str, value: float) -> None:
        self._pending.append(
            {
                "component": artifact.key,
                "placeholder": artifact.placeholder,
                "metric": metric,
                "value": value,
            }
        )

    def flush(self) -> bool:
        """Send the buffered measures; return True on success."""
        if not self.url and not self.dry_run:
            print("HttpMetricSink: no url configured, measures not sent.", file=sys.stderr)
            return False
        payload = {"measures": list(self._pending)}
        self._last_payload = payload
        if self.dry_run:
            print(f"DRYRUN {self.name}: {json.dumps(payload)}")
            self._pending.clear()
            return True

        last_error: Optional[str] = None
        for attempt in range(2):
            try:
                resp = self._post(self.url, json=payload, timeout=self.timeout)
                resp.raise_for_status()
                self._pending.clear()
                return True
            except requests.RequestException as e:
                last_error = f"{e.__class__.__name__}: {e}"
            if attempt == 0:
                time.sleep(1)
        print(f"HttpMetricSink: {last_error}", file=sys.stderr)
        return False
