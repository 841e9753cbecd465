"""Shared fixtures for CLI tests."""

from pathlib import Path

import pytest
from typer.testing import CliRunner

import belajar_orm.cli as cli


@pytest.fixture
def cli_runner() -> CliRunner:
    """Return a Typer CliRunner for testing commands."""
    return CliRunner()


@pytest.fixture
def mock_config_path(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Set cli.CONFIG_PATH to a temp directory and return it."""
    monkeypatch.setattr(cli, "CONFIG_PATH", tmp_path)
    return tmp_path


@pytest.fixture
def reset_config_path(monkeypatch: pytest.MonkeyPatch) -> None:
    """Reset cli.CONFIG_PATH to None before test."""
    monkeypatch.setattr(cli, "CONFIG_PATH", None)
