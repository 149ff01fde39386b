"""CLI parser and command tests."""

from __future__ import annotations

import json
from pathlib import Path

import pytest

from gitgrade import cli
from gitgrade.cli import _build_parser, main


def test_cli_accepts_verbose_before_command() -> None:
    args = _build_parser().parse_args(["--verbose", "analyze"])
    assert args.verbose is True
    assert args.command == "analyze"
    assert args.target == "."


def test_cli_accepts_verbose_after_command() -> None:
    args = _build_parser().parse_args(["analyze", "repo", "-v"])
    assert args.verbose is True
    assert args.target == "repo"


def test_cli_analyze_flags() -> None:
    args = _build_parser().parse_args(
        ["analyze", "https://example.com/a.git", "--no-history", "--roadmap", "-o", "out.json", "--compact"]
    )
    assert args.no_history is True
    assert args.roadmap is True
    assert args.output == "out.json"
    assert args.compact is True
    assert args.verbose is False


def test_cli_serve_flags() -> None:
    args = _build_parser().parse_args(["serve", "--host", "127.0.0.1", "--port", "9001"])
    assert args.command == "serve"
    assert args.host == "127.0.0.1"
    assert args.port == 9001


def test_cli_requires_command() -> None:
    with pytest.raises(SystemExit):
        _build_parser().parse_args([])


def test_analyze_prints_json_report(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    (tmp_path / "app.py").write_text('password = "abc123"\n', encoding="utf-8")

    main(["analyze", str(tmp_path), "--no-history"])

    report = json.loads(capsys.readouterr().out)
    assert report["security"][0]["issue"] == "Password in Code Detected"
    assert report["quality_score"]["breakdown"]["security"]["score"] == 95
    assert "git_history" not in report
    assert "ai_roadmap" not in report
    assert report["resume_bullets"].startswith("• Developed production-grade software")


def test_analyze_writes_output_file(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    repo = tmp_path / "repo"
    repo.mkdir()
    (repo / "main.js").write_text("// hi\n", encoding="utf-8")
    output = tmp_path / "report.json"

    main(["analyze", str(repo), "--no-history", "--compact", "--output", str(output)])

    assert f"Report written to {output}" in capsys.readouterr().out
    text = output.read_text(encoding="utf-8")
    assert text.count("\n") == 1
    assert json.loads(text)["complexity"]["total_files"] == 1


def test_analyze_missing_path_exits(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    with pytest.raises(SystemExit) as excinfo:
        main(["analyze", str(tmp_path / "missing")])
    assert excinfo.value.code == 1
    assert "missing" in capsys.readouterr().err


def test_invalid_config_exits(tmp_path: Path) -> None:
    config = tmp_path / "bad.yml"
    config.write_text("- not\n- a mapping\n", encoding="utf-8")

    with pytest.raises(SystemExit) as excinfo:
        main(["analyze", str(tmp_path), "--config", str(config)])
    assert excinfo.value.code == 1


def test_analyze_remote_target_uses_clone(monkeypatch: pytest.MonkeyPatch, capsys) -> None:
    calls: list[tuple[str, bool, object]] = []

    class _StubReport:
        def to_dict(self) -> dict[str, object]:
            return {"quality_score": {"overall_score": 88}}

    class _StubOrchestrator:
        def __init__(self, config) -> None:
            self.config = config

        def analyze_remote(
            self, url: str, *, with_roadmap: bool = False, include_history=None
        ) -> _StubReport:
            calls.append((url, with_roadmap, include_history))
            return _StubReport()

    monkeypatch.setattr(cli, "Orchestrator", _StubOrchestrator)

    main(["analyze", "https://example.com/team/app.git", "--roadmap"])
    assert json.loads(capsys.readouterr().out) == {"quality_score": {"overall_score": 88}}
    main(["analyze", "https://example.com/team/app.git", "--no-history", "--compact"])

    assert calls == [
        ("https://example.com/team/app.git", True, None),
        ("https://example.com/team/app.git", False, False),
    ]
    assert json.loads(capsys.readouterr().out) == {"quality_score": {"overall_score": 88}}


def test_analyze_remote_failure_reports_error(monkeypatch: pytest.MonkeyPatch, capsys) -> None:
    class _FailingOrchestrator:
        def __init__(self, config) -> None:
            pass

        def analyze_remote(self, url: str, *, with_roadmap: bool = False, include_history=None):
            raise RuntimeError("Failed to clone repository: boom")

    monkeypatch.setattr(cli, "Orchestrator", _FailingOrchestrator)

    with pytest.raises(SystemExit) as excinfo:
        main(["analyze", "git@example.com:team/app.git"])
    assert excinfo.value.code == 1
    assert "gitgrade analyze failed: Failed to clone repository: boom" in capsys.readouterr().err


def test_analyze_log_file_receives_progress(sample_repo, tmp_path: Path, capsys) -> None:
    log_file = tmp_path / "logs" / "gitgrade.log"

    main(["analyze", str(sample_repo.path()), "--no-history", "--log-file", str(log_file)])

    assert json.loads(capsys.readouterr().out)["quality_score"]["overall_score"] == 95
    text = log_file.read_text(encoding="utf-8")
    assert "INFO gitgrade.orchestrator: Calculating quality score..." in text
