"""Tests for the top-level CLI in basekit.__main__."""

from __future__ import annotations

import logging
import pathlib
import sys

import pytest

import basekit.__main__ as cli
import basekit.examples


@pytest.fixture(autouse=True)
def _restore_basekit_logger():
    logger = logging.getLogger("basekit")
    handlers, level = list(logger.handlers), logger.level
    yield
    logger.handlers[:] = handlers
    logger.setLevel(level)


class TestParsePairs:
    def test_scalars(self) -> None:
        assert cli._parse_pairs(["x=10", "y=2.5", "name=bob", "on=true"]) == {
            "x": 10,
            "y": 2.5,
            "name": "bob",
            "on": True,
        }

    def test_missing_equals(self) -> None:
        with pytest.raises(ValueError, match="Expected key=value"):
            cli._parse_pairs(["x"])


class TestResolveClass:
    def test_module_and_class(self) -> None:
        assert cli._resolve_class("basekit.examples:Circle") is basekit.examples.Circle

    def test_section(self) -> None:
        assert cli._resolve_class("point") is basekit.examples.Point

    def test_not_a_base_subclass(self) -> None:
        with pytest.raises(KeyError, match="not a basekit.base.Base subclass"):
            cli._resolve_class("logging")

    def test_missing_attribute(self) -> None:
        with pytest.raises(KeyError, match="Cannot load"):
            cli._resolve_class("basekit.examples:Nope")


class TestCmdNew:
    def test_builds_from_module_target(
        self, tmp_path: pathlib.Path, capsys: pytest.CaptureFixture[str]
    ) -> None:
        rc = cli._cmd_new(
            ["basekit.examples:Point", "x=10", "y=20", "--path", str(tmp_path)]
        )
        assert rc == 0
        assert capsys.readouterr().out.strip() == "Point(x=10, y=20)"

    def test_section_merges_config(
        self,
        tmp_path: pathlib.Path,
        local_config,
        capsys: pytest.CaptureFixture[str],
    ) -> None:
        local_config("[circle]\nx = 1\ny = 2\nradius = 5\n")
        rc = cli._cmd_new(["circle", "y=7", "--path", str(tmp_path)])
        assert rc == 0
        assert capsys.readouterr().out.strip() == "Circle(x=1, y=7, radius=5)"

    def test_missing_value_reports_error(
        self, tmp_path: pathlib.Path, capsys: pytest.CaptureFixture[str]
    ) -> None:
        rc = cli._cmd_new(["basekit.examples:Point", "x=10", "--path", str(tmp_path)])
        assert rc == 1
        captured = capsys.readouterr()
        assert captured.err.strip() == "[basekit-examples-point] No value specified for y"
        assert captured.out == ""

    def test_unknown_section(
        self, tmp_path: pathlib.Path, capsys: pytest.CaptureFixture[str]
    ) -> None:
        rc = cli._cmd_new(["nowhere", "--path", str(tmp_path)])
        assert rc == 1
        assert "Unknown config section: nowhere" in capsys.readouterr().err


    def test_unknown_level_reports_error(
        self,
        tmp_path: pathlib.Path,
        local_config,
        capsys: pytest.CaptureFixture[str],
    ) -> None:
        local_config("[logging]\nlevel = 'loud'\n")
        rc = cli._cmd_new(["basekit.examples:Point", "x=1", "y=2", "--path", str(tmp_path)])
        assert rc == 1
        assert "Unknown log level: loud" in capsys.readouterr().err


class TestMain:
    def test_no_args_prints_usage(
        self, monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
    ) -> None:
        monkeypatch.setattr(sys, "argv", ["basekit"])
        with pytest.raises(SystemExit) as exc_info:
            cli.main()
        assert exc_info.value.code == 1
        assert "basekit new" in capsys.readouterr().out

    def test_dispatches_config(
        self, monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
    ) -> None:
        monkeypatch.setattr(sys, "argv", ["basekit", "config", "list"])
        with pytest.raises(SystemExit) as exc_info:
            cli.main()
        assert exc_info.value.code == 0
        assert "[point]" in capsys.readouterr().out
