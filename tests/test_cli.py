"""CLI behaviour tests."""

from __future__ import annotations

import zipfile
from pathlib import Path

import pytest

from docbundle import cli
from docbundle.cli import _build_parser
from tests._fixtures.llm import RecordingLLMRunner, files_response
from tests._fixtures.pipeline import make_pipeline


def test_cli_accepts_verbose_before_command() -> None:
    parser = _build_parser()
    args = parser.parse_args(["--verbose", "sources", "https://a.example"])
    assert args.verbose is True
    assert args.command == "sources"


def test_cli_accepts_verbose_after_command() -> None:
    parser = _build_parser()
    args = parser.parse_args(["generate", "Foo", "--code", "main.py", "--verbose"])
    assert args.verbose is True
    assert args.command == "generate"


def test_cli_generate_defaults() -> None:
    args = _build_parser().parse_args(["generate", "Foo", "--code", "main.py"])
    assert args.project_name == "Foo"
    assert args.no_sidebar is False
    assert args.full is False
    assert args.audience == "developer"
    assert args.tone == "professional"
    assert args.color == "#D4AF37"


def test_cli_rejects_unknown_audience() -> None:
    with pytest.raises(SystemExit):
        _build_parser().parse_args(["generate", "Foo", "--code", "x", "--audience", "robots"])


def test_generate_writes_archive(monkeypatch, tmp_path: Path, urlopen_stub, capsys) -> None:
    code = tmp_path / "main.py"
    code.write_text("def foo():\n    return 1\n", encoding="utf-8")
    runner = RecordingLLMRunner(files_response({"README.md": "# Foo"}))
    monkeypatch.setattr(
        cli.DocumentationPipeline,
        "from_config_path",
        classmethod(lambda cls, path: make_pipeline(runner)),
    )
    target = tmp_path / "out.zip"

    cli.main(["generate", "Foo", "--code", str(code), "--color", "#112233", "--output", str(target)])

    with zipfile.ZipFile(target) as archive:
        assert "README.md" in archive.namelist()
        assert "#112233" in archive.read("themes/docs.css").decode("utf-8")
    out = capsys.readouterr().out
    assert "Documentation bundle written to" in out
    assert "Files: README.md" in out


def test_generate_reports_invalid_input(tmp_path: Path) -> None:
    code = tmp_path / "main.py"
    code.write_text("x = 1\n", encoding="utf-8")

    with pytest.raises(SystemExit) as excinfo:
        cli.main(["generate", "Foo", "--code", str(code), "--color", "blue"])

    assert excinfo.value.code == 2


def test_sources_command_prints_results(urlopen_stub, tmp_path: Path, capsys) -> None:
    urlopen_stub.add("https://a.example/doc", "hello")

    cli.main(["sources", "https://a.example/doc,https://b.example/x", "--config", str(tmp_path)])

    out = capsys.readouterr().out
    assert "OK     https://a.example/doc -> https://a.example/doc (5 chars)" in out
    assert "FAILED https://b.example/x: HTTP 404 Not Found" in out


def test_cli_accepts_log_file_before_command(tmp_path: Path) -> None:
    args = _build_parser().parse_args(["--log-file", str(tmp_path / "run.log"), "sources", "x"])
    assert args.log_file == str(tmp_path / "run.log")
