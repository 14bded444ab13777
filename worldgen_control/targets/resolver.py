"""Resolve the output world for a generation job.

A target is a Minecraft world directory.  Resolution never raises; every
outcome, including failures, is a ``TargetSelection``:

- choosing an existing world checks for a ``region`` folder and for a
  running game holding ``session.lock``;
- choosing a folder that is not a world creates a new, uniquely named
  world skeleton inside it;
- creating a new world does the same inside the platform's default
  ``saves`` directory.

Only the directory skeleton is created here; the executor writes the
level data when it generates the world.
"""

from __future__ import annotations

import logging
import os
import platform
from pathlib import Path
from typing import TYPE_CHECKING

from worldgen_control.models.target import TargetOutcome, TargetSelection

if TYPE_CHECKING:
    from collections.abc import Mapping

logger = logging.getLogger("worldgen_control.targets.resolver")

WORLD_NAME_TEMPLATE = "WorldGen World {n}"
REGION_DIR = "region"
SESSION_LOCK = "session.lock"


def default_saves_dir(
    system: str | None = None,
    env: Mapping[str, str] | None = None,
    home: Path | None = None,
) -> Path | None:
    """Return the platform's default Minecraft ``saves`` directory.

    Args:
        system: ``platform.system()`` value; detected when omitted.
        env: Environment mapping; ``os.environ`` when omitted.
        home: Home directory; ``Path.home()`` when omitted.

    Returns:
        The expected path (it may not exist), or ``None`` on unknown
        platforms or when ``APPDATA`` is unset on Windows.
    """
    system = system or platform.system()
    env = os.environ if env is None else env

    if system == "Windows":
        appdata = env.get("APPDATA")
        return Path(appdata) / ".minecraft" / "saves" if appdata else None

    home = Path.home() if home is None else home
    if system == "Darwin":
        return home / "Library" / "Application Support" / "minecraft" / "saves"
    if system == "Linux":
        return home / ".minecraft" / "saves"
    return None


def unique_world_name(parent: Path) -> str:
    """First ``WorldGen World {n}`` (n >= 1) not present in *parent*."""
    n = 1
    while (parent / WORLD_NAME_TEMPLATE.format(n=n)).exists():
        n += 1
    return WORLD_NAME_TEMPLATE.format(n=n)


def is_world_in_use(world: Path) -> bool:
    """``True`` if a running game holds the world's ``session.lock``."""
    lock_path = world / SESSION_LOCK
    if not lock_path.is_file():
        return False

    if os.name == "nt":
        # Windows refuses to open a file another process holds locked.
        try:
            with lock_path.open("r+b"):
                return False
        except PermissionError:
            return True

    import fcntl

    try:
        handle = lock_path.open("rb")
    except OSError as exc:
        logger.debug("Cannot open %s to probe lock: %s", lock_path, exc)
        return False

    with handle:
        try:
            fcntl.lockf(handle.fileno(), fcntl.LOCK_SH | fcntl.LOCK_NB)
        except OSError:
            return True
        fcntl.lockf(handle.fileno(), fcntl.LOCK_UN)
        return False


def resolve_existing_world(path: str | Path | None) -> TargetSelection:
    """Resolve a directory chosen in the world picker.

    Returns:
        ``NO_TARGET_SELECTED`` when nothing was chosen,
        ``INVALID_TARGET`` when the path is not a directory,
        ``TARGET_IN_USE`` when the world is locked by a running game,
        otherwise ``SELECTED`` for the world, or for a new world created
        inside a chosen directory that is not itself a world.
    """
    if path is None or str(path) == "":
        return TargetSelection.failed(TargetOutcome.NO_TARGET_SELECTED)

    world = Path(path)
    if not world.is_dir():
        logger.warning("Target rejected | not a directory | path=%s", world)
        return TargetSelection.failed(TargetOutcome.INVALID_TARGET)

    if (world / REGION_DIR).is_dir():
        if is_world_in_use(world):
            logger.warning("Target rejected | world in use | path=%s", world)
            return TargetSelection.failed(TargetOutcome.TARGET_IN_USE)
        logger.info("Target selected | path=%s", world)
        return TargetSelection.selected(str(world))

    return _create_world_in(world)


def create_new_world(saves_dir: Path | None = None) -> TargetSelection:
    """Create a new world in *saves_dir* (default: the platform's).

    Returns:
        ``SELECTED`` for the new world, ``TARGET_ROOT_NOT_FOUND`` when the
        saves directory does not exist.
    """
    saves_dir = saves_dir if saves_dir is not None else default_saves_dir()
    if saves_dir is None or not saves_dir.is_dir():
        logger.warning("Saves directory not found | path=%s", saves_dir)
        return TargetSelection.failed(TargetOutcome.TARGET_ROOT_NOT_FOUND)
    return _create_world_in(saves_dir)


def _create_world_in(parent: Path) -> TargetSelection:
    world = parent / unique_world_name(parent)
    try:
        (world / REGION_DIR).mkdir(parents=True)
    except OSError as exc:
        logger.error("Cannot create world directory | path=%s | %s", world, exc)
        return TargetSelection.failed(TargetOutcome.INVALID_TARGET)

    logger.info("New world created | path=%s", world)
    return TargetSelection.selected(str(world))
