"""CLI tests."""

from pathlib import Path

from typer.testing import CliRunner

from mdserve.cli import app


runner = CliRunner()


def test_resolve(docs_root: Path):
    result = runner.invoke(app, ["resolve", "/space-in-name/test", "--root", str(docs_root)])

    assert result.exit_code == 0
    assert str(docs_root / "space in name" / "test.md") in result.output


def test_resolve_with_options(docs_root: Path):
    result = runner.invoke(app, ["resolve", "/new", "--root", str(docs_root), "--ext", "markdown"])

    assert result.exit_code == 0
    assert "new.markdown" in result.output


def test_resolve_not_found(docs_root: Path):
    result = runner.invoke(app, ["resolve", "/foo-bar", "--root", str(docs_root)])

    assert result.exit_code == 1
    assert "No document found" in result.output


def test_show(docs_root: Path):
    result = runner.invoke(app, ["show", "/test", "--root", str(docs_root), "--html"])

    assert result.exit_code == 0
    assert "Hello World" in result.output
    assert "<li>Moe</li>" in result.output


def test_doctor(docs_root: Path, monkeypatch):
    monkeypatch.setenv("MDSERVE_ROOT_DIRECTORY", str(docs_root))

    result = runner.invoke(app, ["doctor"])

    assert result.exit_code == 0
    assert "All checks passed" in result.output


def test_doctor_missing_root(tmp_path: Path, monkeypatch):
    monkeypatch.setenv("MDSERVE_ROOT_DIRECTORY", str(tmp_path / "missing"))

    result = runner.invoke(app, ["doctor"])

    assert result.exit_code == 1
