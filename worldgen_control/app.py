"""Application wiring for one control-layer session.

This module is purely the wiring layer between a front end (desktop
window or command line) and the control-layer components.  A front end
creates one ``ControlApp``, forwards its input events to it, and
implements ``StatusView`` for the output.
"""

from __future__ import annotations

import asyncio
import logging
from typing import TYPE_CHECKING

from worldgen_control.core.config import ControlConfig
from worldgen_control.events.channel import Channel
from worldgen_control.executors.factory import get_executor
from worldgen_control.generation.lifecycle import GenerationLifecycle
from worldgen_control.models.status import StatusColor, StatusMessage
from worldgen_control.selection.state import SelectionState
from worldgen_control.selection.validator import BBoxValidator
from worldgen_control.targets.resolver import create_new_world, resolve_existing_world

if TYPE_CHECKING:
    from collections.abc import Callable
    from pathlib import Path

    from worldgen_control.executors.base import JobExecutor
    from worldgen_control.generation.parameters import FormValues
    from worldgen_control.models.job import GenerationJob
    from worldgen_control.models.payloads import BBoxMessage
    from worldgen_control.models.progress import TerminalSignal
    from worldgen_control.models.target import TargetSelection
    from worldgen_control.selection.classifier import Classification
    from worldgen_control.view import StatusView

logger = logging.getLogger("worldgen_control.app")


class ControlApp:
    """One session: selection, coordinate channel, lifecycle, executor.

    Args:
        view: Status surface implemented by the front end.
        form_reader: Returns the generation form's current values.
        config: Configuration; defaults to ``ControlConfig()``.
        executor: Executor instance; built from ``config.executor`` when omitted.
    """

    def __init__(
        self,
        view: StatusView,
        form_reader: Callable[[], FormValues],
        *,
        config: ControlConfig | None = None,
        executor: JobExecutor | None = None,
    ) -> None:
        self.config = config or ControlConfig()
        self.view = view
        self.selection = SelectionState()
        self.bbox_channel: Channel[BBoxMessage] = Channel("bbox")
        self.validator = BBoxValidator(
            self.selection,
            view,
            channel=self.bbox_channel,
            config=self.config,
        )
        self.executor = executor or get_executor(self.config.executor, self.config)
        self.lifecycle = GenerationLifecycle(
            self.selection,
            self.executor,
            view,
            form_reader,
            config=self.config,
        )
        self._listener: asyncio.Task[None] | None = None

    # ------------------------------------------------------------------
    # Session
    # ------------------------------------------------------------------

    def start(self) -> None:
        """Start listening to the executor's progress stream."""
        if self._listener is not None and not self._listener.done():
            return
        self._listener = asyncio.create_task(
            self.lifecycle.consume(self.executor.progress_events()),
            name="progress-listener",
        )
        logger.info("Session started | executor=%s", self.executor.name)

    async def aclose(self) -> None:
        """Stop the progress listener and close the executor."""
        listener = self._listener
        if listener is not None and not listener.done():
            listener.cancel()
            try:
                await listener
            except asyncio.CancelledError:
                logger.debug("Progress listener stopped")
        await self.executor.aclose()

    # ------------------------------------------------------------------
    # Front-end events
    # ------------------------------------------------------------------

    def on_bbox_text(self, text: str) -> Classification | None:
        """The coordinate text box changed."""
        return self.validator.handle_text_input(text)

    def on_bbox_picked(self, bbox_text: str) -> None:
        """The map picker reported ``"lng1 lat1 lng2 lat2"``."""
        self.bbox_channel.publish({"bboxText": bbox_text})

    def select_target(self, path: str | Path | None) -> TargetSelection:
        """The world picker returned *path* (``None`` when dismissed)."""
        return self._apply_target(resolve_existing_world(path))

    def create_new_target(self, saves_dir: Path | None = None) -> TargetSelection:
        """The user asked for a freshly generated world."""
        return self._apply_target(create_new_world(saves_dir))

    async def start_generation(self) -> GenerationJob | None:
        """The generate button was pressed."""
        return await self.lifecycle.trigger()

    async def wait_until_idle(self) -> TerminalSignal | None:
        return await self.lifecycle.wait_until_idle()

    def _apply_target(self, target: TargetSelection) -> TargetSelection:
        self.selection.set_target(target)
        color = StatusColor.WARNING if target.is_usable else StatusColor.ERROR
        self.view.show_target(StatusMessage(target.display_name, color))
        return target
