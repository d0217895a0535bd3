import pytest

from surefire_rollup.errors import ResourceNotFoundError
from surefire_rollup.resolve import DirectoryResolver


def test_resolves_file_directly_in_test_dir(tmp_path):
    tests_dir = tmp_path / "test"
    tests_dir.mkdir()
    (tests_dir / "TestUnit.pas").write_text("unit TestUnit;", encoding="utf-8")

    artifact = DirectoryResolver([tests_dir]).resolve("TestUnit", ".pas")

    assert artifact.key == "TestUnit.pas"
    assert artifact.path == tests_dir / "TestUnit.pas"
    assert artifact.placeholder is False


def test_resolves_nested_file_and_prefers_earlier_dirs(tmp_path):
    first = tmp_path / "first"
    second = tmp_path / "second"
    (first / "sub" / "deep").mkdir(parents=True)
    second.mkdir()
    (first / "sub" / "deep" / "TestUnit.pas").write_text("", encoding="utf-8")
    (second / "TestUnit.pas").write_text("", encoding="utf-8")

    direct = DirectoryResolver([first, second]).resolve("TestUnit", ".pas")
    assert direct.path == second / "TestUnit.pas"

    only_first = DirectoryResolver([first, tmp_path / "missing"]).resolve("TestUnit", ".pas")
    assert only_first.key == "sub/deep/TestUnit.pas"


def test_unresolved_identity_raises(tmp_path):
    with pytest.raises(ResourceNotFoundError) as excinfo:
        DirectoryResolver([tmp_path]).resolve("Nope", ".pas")

    assert excinfo.value.identity == "Nope"
    assert str(excinfo.value) == "Unit test file not found: Nope.pas"
