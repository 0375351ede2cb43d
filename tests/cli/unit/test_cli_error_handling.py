"""CLI error-handling tests."""

from __future__ import annotations

from pathlib import Path

from simple_openapi_builder.cli import main


def test_missing_required_option_returns_clean_click_error(capsys) -> None:
    exit_code = main(["build", "--output", "/tmp/openapi.json"])
    captured = capsys.readouterr()

    assert exit_code == 2
    assert "Missing option" in captured.err
    assert "--config" in captured.err
    assert "Traceback" not in captured.err


def test_unknown_option_returns_clean_click_error(capsys) -> None:
    exit_code = main(["build", "--bogus"])
    captured = capsys.readouterr()

    assert exit_code == 2
    assert "No such option: --bogus" in captured.err
    assert "Traceback" not in captured.err


def test_invalid_format_choice_returns_clean_click_error(capsys, tmp_path: Path) -> None:
    exit_code = main(["build", "--config", str(tmp_path / "r.yaml"), "--format", "xml"])
    captured = capsys.readouterr()

    assert exit_code == 2
    assert "--format" in captured.err


def test_missing_registration_file_returns_error(capsys, tmp_path: Path) -> None:
    exit_code = main(["build", "--config", str(tmp_path / "missing.yaml")])
    captured = capsys.readouterr()

    assert exit_code == 1
    assert "Registration file not found" in captured.err
    assert "Traceback" not in captured.err
