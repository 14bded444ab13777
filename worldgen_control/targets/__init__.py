"""Generation target (world directory) resolution."""

from worldgen_control.targets.resolver import (
    create_new_world,
    default_saves_dir,
    is_world_in_use,
    resolve_existing_world,
    unique_world_name,
)

__all__ = [
    "create_new_world",
    "default_saves_dir",
    "is_world_in_use",
    "resolve_existing_world",
    "unique_world_name",
]
