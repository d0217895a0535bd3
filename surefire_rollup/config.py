"""Configuration loading for the surefire rollup.

This module reads the rollup's YAML or JSON configuration from the `.surefire`
directory.  If the file or YAML library is missing, it falls back to sensible
defaults.  Most settings can be overridden via the CLI.
"""
from __future__ import annotations

import copy
import json
from pathlib import Path
from typing import Dict

DEFAULT_CONFIG_PATH = ".surefire/rollup.yml"

DEFAULTS: Dict = {
    "reports_dir": "target/surefire-reports",
    "test_dirs": ["test"],
    "source_suffix": ".pas",
    "nesting_separator": "$",
    "on_malformed": "abort",
    "workers": 1,
    "sink": {"url": None, "timeout": 5, "dry_run": False},
}


def _merged(data: Dict | None) -> Dict:
    merged = copy.deepcopy(DEFAULTS)
    merged.update(data or {})
    return merged


def load_config(path: str | None = None) -> Dict:
    """Load configuration from the given path or from `.surefire/rollup.yml`.

    Configuration files may be in YAML or JSON format. YAML support
    prefers ruamel.yaml (falls back to PyYAML if available); otherwise the
    loader will attempt to parse JSON.
    When no config file exists, a default configuration is returned.
    """
    cfg_path = Path(path or DEFAULT_CONFIG_PATH)
    if not cfg_path.exists():
        return _merged(None)
    text = cfg_path.read_text(encoding="utf-8")
    if cfg_path.suffix.lower() == ".json":
        return _merged(json.loads(text))
    # ruamel.yaml first, then PyYAML, then JSON
    try:
        from ruamel.yaml import YAML  # type: ignore

        y = YAML(typ="safe")
        return _merged(y.load(text))
    except Exception:
        try:
            import yaml  # type: ignore

            return _merged(yaml.safe_load(text))
        except Exception:
            try:
                return _merged(json.loads(text))
            except Exception:
                return _merged(None)
