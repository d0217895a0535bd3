from pathlib import Path

import pytest


@pytest.fixture(autouse=True)
def isolated_cwd(tmp_path_factory, monkeypatch):
    """Run every test from a fresh working directory."""
    tmp_path = tmp_path_factory.mktemp("cwd")
    monkeypatch.chdir(tmp_path)
    monkeypatch.delenv("SUREFIRE_ROLLUP_DRY_RUN", raising=False)
    yield tmp_path


@pytest.fixture
def write_report(tmp_path):
    """Return a helper writing an XML report below ``tmp_path/reports``."""
    reports = tmp_path / "reports"
    reports.mkdir(exist_ok=True)

    def _write(name: str, text: str) -> Path:
        path = reports / name
        path.write_text(text, encoding="utf-8")
        return path

    return _write
