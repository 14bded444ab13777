"""In-process event plumbing between the picker, validator and lifecycle."""

from worldgen_control.events.channel import Channel

__all__ = ["Channel"]
