"""Tests for generation target resolution.

Covers: default saves directory per platform, unique world naming,
existing-world selection, world creation inside a chosen folder or the
saves directory, and every error outcome.
"""

from __future__ import annotations

import os
import subprocess
import sys
from pathlib import Path
from unittest.mock import patch

import pytest

from worldgen_control.models.target import TargetOutcome
from worldgen_control.targets import resolver
from worldgen_control.targets.resolver import (
    create_new_world,
    default_saves_dir,
    is_world_in_use,
    resolve_existing_world,
    unique_world_name,
)


# Holds an exclusive lock on argv[1] until stdin closes.
_HOLD_LOCK = """
import fcntl, sys
with open(sys.argv[1], "r+b") as handle:
    fcntl.lockf(handle.fileno(), fcntl.LOCK_EX)
    print("locked", flush=True)
    sys.stdin.read()
"""


class TestDefaultSavesDir:
    """default_saves_dir follows the launcher's per-platform layout."""

    def test_windows(self) -> None:
        result = default_saves_dir("Windows", {"APPDATA": "C:/Users/me/AppData/Roaming"})
        assert result == Path("C:/Users/me/AppData/Roaming") / ".minecraft" / "saves"

    def test_windows_without_appdata(self) -> None:
        assert default_saves_dir("Windows", {}) is None

    def test_macos(self) -> None:
        result = default_saves_dir("Darwin", {}, Path("/Users/me"))
        assert result == Path("/Users/me/Library/Application Support/minecraft/saves")

    def test_linux(self) -> None:
        assert default_saves_dir("Linux", {}, Path("/home/me")) == Path("/home/me/.minecraft/saves")

    def test_unknown_platform(self) -> None:
        assert default_saves_dir("Plan9", {}, Path("/")) is None


class TestUniqueWorldName:
    """unique_world_name picks the first free numbered name."""

    def test_empty_parent(self, tmp_path: Path) -> None:
        assert unique_world_name(tmp_path) == "WorldGen World 1"

    def test_skips_existing(self, tmp_path: Path) -> None:
        (tmp_path / "WorldGen World 1").mkdir()
        (tmp_path / "WorldGen World 2").mkdir()
        assert unique_world_name(tmp_path) == "WorldGen World 3"


class TestResolveExistingWorld:
    """resolve_existing_world maps a picked path to an outcome."""

    def test_nothing_chosen(self) -> None:
        assert resolve_existing_world(None).outcome is TargetOutcome.NO_TARGET_SELECTED
        assert resolve_existing_world("").outcome is TargetOutcome.NO_TARGET_SELECTED

    def test_existing_world(self, world_dir: Path) -> None:
        target = resolve_existing_world(world_dir)
        assert target.outcome is TargetOutcome.SELECTED
        assert target.path == str(world_dir)
        assert target.display_name == "Berlin"

    def test_not_a_directory(self, tmp_path: Path) -> None:
        file_path = tmp_path / "level.dat"
        file_path.write_bytes(b"")
        assert resolve_existing_world(file_path).outcome is TargetOutcome.INVALID_TARGET

    def test_missing_path(self, tmp_path: Path) -> None:
        assert resolve_existing_world(tmp_path / "gone").outcome is TargetOutcome.INVALID_TARGET

    def test_folder_gets_new_world(self, tmp_path: Path) -> None:
        target = resolve_existing_world(tmp_path)
        assert target.is_usable
        created = Path(target.path)
        assert created.parent == tmp_path
        assert created.name == "WorldGen World 1"
        assert (created / "region").is_dir()

    def test_world_in_use(self, world_dir: Path) -> None:
        with patch.object(resolver, "is_world_in_use", return_value=True):
            target = resolve_existing_world(world_dir)
        assert target.outcome is TargetOutcome.TARGET_IN_USE
        assert not target.is_usable


class TestIsWorldInUse:
    """is_world_in_use probes session.lock."""

    def test_no_lock_file(self, world_dir: Path) -> None:
        assert is_world_in_use(world_dir) is False

    def test_unlocked_lock_file(self, world_dir: Path) -> None:
        (world_dir / "session.lock").write_bytes(b"\xe2\x98\x83")
        assert is_world_in_use(world_dir) is False

    @pytest.mark.skipif(os.name == "nt", reason="POSIX record locks")
    def test_lock_held_by_running_game(self, world_dir: Path) -> None:
        lock_path = world_dir / "session.lock"
        lock_path.write_bytes(b"\xe2\x98\x83")
        # The game holds an exclusive lock for as long as the world is open.
        holder = subprocess.Popen(
            [sys.executable, "-c", _HOLD_LOCK, str(lock_path)],
            stdin=subprocess.PIPE,
            stdout=subprocess.PIPE,
            text=True,
        )
        try:
            assert holder.stdout is not None
            assert holder.stdout.readline().strip() == "locked"

            assert is_world_in_use(world_dir) is True
            target = resolve_existing_world(world_dir)
            assert target.outcome is TargetOutcome.TARGET_IN_USE
        finally:
            holder.communicate(timeout=10)

        assert is_world_in_use(world_dir) is False


class TestCreateNewWorld:
    """create_new_world creates a world in the saves directory."""

    def test_creates_world(self, tmp_path: Path) -> None:
        target = create_new_world(tmp_path)
        assert target.outcome is TargetOutcome.SELECTED
        assert (Path(target.path) / "region").is_dir()

    def test_second_world_gets_next_name(self, tmp_path: Path) -> None:
        first = create_new_world(tmp_path)
        second = create_new_world(tmp_path)
        assert Path(first.path).name == "WorldGen World 1"
        assert Path(second.path).name == "WorldGen World 2"

    def test_missing_saves_dir(self, tmp_path: Path) -> None:
        target = create_new_world(tmp_path / "no-minecraft")
        assert target.outcome is TargetOutcome.TARGET_ROOT_NOT_FOUND
        assert target.display_name == "Minecraft directory not found."

    def test_default_saves_dir_used(self, tmp_path: Path) -> None:
        with patch.object(resolver, "default_saves_dir", return_value=tmp_path):
            target = create_new_world()
        assert Path(target.path).parent == tmp_path

    def test_unknown_platform_not_found(self) -> None:
        with patch.object(resolver, "default_saves_dir", return_value=None):
            assert create_new_world().outcome is TargetOutcome.TARGET_ROOT_NOT_FOUND

    def test_mkdir_failure_is_invalid_target(self, tmp_path: Path) -> None:
        with patch.object(Path, "mkdir", side_effect=PermissionError("read-only")):
            target = create_new_world(tmp_path)
        assert target.outcome is TargetOutcome.INVALID_TARGET
