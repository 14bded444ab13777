"""Shared pytest fixtures for the control-layer suite."""

from __future__ import annotations

from pathlib import Path

import pytest

# ---------------------------------------------------------------------------
# Path fixtures
# ---------------------------------------------------------------------------


@pytest.fixture()
def world_dir(tmp_path: Path) -> Path:
    """An existing, unlocked world directory."""
    world = tmp_path / "saves" / "Berlin"
    (world / "region").mkdir(parents=True)
    return world
