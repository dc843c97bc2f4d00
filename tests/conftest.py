"""Shared test fixtures for basekit tests."""

from __future__ import annotations

import pathlib

import pytest

import basekit.config


@pytest.fixture(autouse=True)
def global_config(tmp_path: pathlib.Path, monkeypatch: pytest.MonkeyPatch) -> pathlib.Path:
    """Point the global config file into the test's tmp dir."""
    path = tmp_path / "global_config" / "config.toml"
    monkeypatch.setattr(basekit.config, "_global_path", lambda: path)
    return path


@pytest.fixture
def local_config(tmp_path: pathlib.Path):
    """Factory for writing a project-local .basekit/config.toml."""

    def _create(content: str) -> pathlib.Path:
        path = tmp_path / ".basekit" / "config.toml"
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content)
        return path

    return _create
