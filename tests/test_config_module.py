import json
import sys
import types
from pathlib import Path

from surefire_rollup import config


def test_load_config_returns_defaults_when_missing(tmp_path):
    result = config.load_config(str(tmp_path / "rollup.yml"))

    assert result["reports_dir"] == "target/surefire-reports"
    assert result["source_suffix"] == ".pas"
    assert result["on_malformed"] == "abort"
    assert result["sink"]["url"] is None


def test_load_config_reads_default_location():
    cfg = config.DEFAULT_CONFIG_PATH
    Path(cfg).parent.mkdir(parents=True)
    Path(cfg).write_text("source_suffix: .py\nworkers: 4\n", encoding="utf-8")

    result = config.load_config()

    assert result["source_suffix"] == ".py"
    assert result["workers"] == 4
    assert result["nesting_separator"] == "$"


def test_load_config_merges_json_overrides(tmp_path):
    overrides = {"on_malformed": "skip", "sink": {"url": "https://m.example"}}
    cfg = tmp_path / "rollup.json"
    cfg.write_text(json.dumps(overrides), encoding="utf-8")

    result = config.load_config(str(cfg))

    assert result["on_malformed"] == "skip"
    assert result["sink"] == {"url": "https://m.example"}
    assert result["test_dirs"] == ["test"]  # default preserved


def test_defaults_are_not_shared_between_calls(tmp_path):
    first = config.load_config(str(tmp_path / "none.yml"))
    first["test_dirs"].append("mutated")

    assert config.load_config(str(tmp_path / "none.yml"))["test_dirs"] == ["test"]


def test_load_config_falls_back_to_pyyaml(tmp_path, monkeypatch):
    cfg = tmp_path / "rollup.yml"
    cfg.write_text("workers: 2\n", encoding="utf-8")

    # Simulate ruamel.yaml import present but failing at load()
    fake_ruamel = types.ModuleType("ruamel")
    fake_ruamel_yaml = types.ModuleType("ruamel.yaml")

    class ExplodingYAML:
        def __init__(self, *_, **__):
            pass

        def load(self, _):
            raise RuntimeError("boom")

    fake_ruamel_yaml.YAML = ExplodingYAML
    fake_ruamel.yaml = fake_ruamel_yaml

    fake_yaml = types.ModuleType("yaml")
    fake_yaml.safe_load = lambda text: {"workers": 2, "source_suffix": ".dpr"}

    monkeypatch.setitem(sys.modules, "ruamel", fake_ruamel)
    monkeypatch.setitem(sys.modules, "ruamel.yaml", fake_ruamel_yaml)
    monkeypatch.setitem(sys.modules, "yaml", fake_yaml)

    result = config.load_config(str(cfg))

    assert result["workers"] == 2
    assert result["source_suffix"] == ".dpr"
    assert result["on_malformed"] == "abort"
