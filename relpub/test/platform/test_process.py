"""Tests for relpub.platform.process module."""

from __future__ import annotations

import sys
from pathlib import Path

import pytest

from relpub.core.result import Err, Ok
from relpub.platform.process import ProcessError, run_live, which


class TestProcessError:
    def test_str_short_command(self) -> None:
        error = ProcessError(command=("s3cmd", "put"), returncode=1)
        assert str(error) == "s3cmd put failed (exit 1)"

    def test_str_long_command_truncated(self) -> None:
        error = ProcessError(
            command=("s3cmd", "put", "--progress", "pkg/foo.deb", "s3://b/foo.deb"),
            returncode=64,
        )
        assert str(error) == "s3cmd put --progress ... failed (exit 64)"

    def test_frozen(self) -> None:
        error = ProcessError(("cmd",), 1)
        with pytest.raises(AttributeError):
            error.returncode = 2  # type: ignore[misc]


class TestRunLive:
    def test_success(self, tmp_path: Path) -> None:
        result = run_live([sys.executable, "-c", "pass"], cwd=tmp_path, timeout=30.0)

        assert isinstance(result, Ok)
        assert result.value is None

    def test_output_is_not_captured(
        self, tmp_path: Path, capfd: pytest.CaptureFixture[str]
    ) -> None:
        result = run_live([sys.executable, "-c", "print('progress 50%')"], cwd=tmp_path)

        assert isinstance(result, Ok)
        assert "progress 50%" in capfd.readouterr().out

    def test_failure_reports_exit_code(self, tmp_path: Path) -> None:
        result = run_live([sys.executable, "-c", "import sys; sys.exit(3)"], cwd=tmp_path)

        assert isinstance(result, Err)
        assert result.error.returncode == 3
        assert result.error.command[0] == sys.executable

    def test_uses_cwd(self, tmp_path: Path) -> None:
        (tmp_path / "marker").write_text("", encoding="utf-8")
        script = "import os, sys; sys.exit(0 if os.path.exists('marker') else 1)"

        result = run_live([sys.executable, "-c", script], cwd=tmp_path)

        assert isinstance(result, Ok)

    def test_timeout(self, tmp_path: Path) -> None:
        result = run_live(
            [sys.executable, "-c", "import time; time.sleep(10)"],
            cwd=tmp_path,
            timeout=0.2,
        )

        assert isinstance(result, Err)
        assert result.error.returncode == -1
        assert "timed out" in result.error.stderr.lower()

    def test_command_not_found(self, tmp_path: Path) -> None:
        result = run_live(["nonexistent_command_12345"], cwd=tmp_path)

        assert isinstance(result, Err)
        assert result.error.returncode == -1
        assert result.error.stderr


def test_which_finds_interpreter() -> None:
    assert which(sys.executable) is not None
    assert which("nonexistent_command_12345") is None
