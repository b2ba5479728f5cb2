"""Run the repository architecture boundary checks as a test."""

from __future__ import annotations

import runpy
from pathlib import Path

import pytest

SCRIPT = Path(__file__).resolve().parents[2] / "scripts" / "check_architecture.py"


def test_architecture_boundaries_hold(capsys: pytest.CaptureFixture[str]) -> None:
    """Keep plugins and core models free of application and CLI imports."""
    runpy.run_path(str(SCRIPT))["main"]()
    assert "Architecture checks passed." in capsys.readouterr().out
