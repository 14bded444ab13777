"""Single-flight generation lifecycle.

Gates one generation job at a time, checks that a location and a target
are selected, collects the form parameters, dispatches the job, and then
follows the executor's progress stream until a terminal message
re-enables triggering.

States::

    IDLE ──trigger──▶ DISPATCHING ──ack──▶ RUNNING ──Done!/Error!──▶ IDLE
                          │
                          └──submit failed──▶ IDLE

The latch (``enabled``) is read and cleared in the same synchronous step,
before the first ``await``, so exactly one trigger wins the
``IDLE → DISPATCHING`` transition even if triggers arrive back to back
on the event loop.  No job can be cancelled; a terminal progress message
or a dispatch failure are the only ways back to ``IDLE``.

Failures are logged and shown on the matching status line; afterwards
the lifecycle is triggerable again.
"""

from __future__ import annotations

import asyncio
import enum
import logging
from typing import TYPE_CHECKING

from worldgen_control.core.constants import (
    DEFAULT_WORLD_SCALE,
    MSG_SELECT_LOCATION_FIRST,
    MSG_SELECT_TARGET_FIRST,
)
from worldgen_control.core.exceptions import PreconditionError
from worldgen_control.executors.base import DispatchError
from worldgen_control.generation.parameters import read_job_parameters
from worldgen_control.models.job import GenerationJob
from worldgen_control.models.progress import TerminalSignal
from worldgen_control.models.status import StatusColor, StatusMessage

if TYPE_CHECKING:
    from collections.abc import AsyncIterable, Callable

    from worldgen_control.core.config import ControlConfig
    from worldgen_control.executors.base import JobExecutor
    from worldgen_control.generation.parameters import FormValues
    from worldgen_control.models.bbox import BoundingBox
    from worldgen_control.models.progress import ProgressEvent
    from worldgen_control.selection.state import SelectionState
    from worldgen_control.view import StatusView

logger = logging.getLogger("worldgen_control.generation.lifecycle")


# ---------------------------------------------------------------------------
# Exceptions
# ---------------------------------------------------------------------------


class NoSelectionError(PreconditionError):
    """Generation triggered without a selected bounding box."""

    default_stage = "generation"
    default_code = "NO_SELECTION"


class NoTargetError(PreconditionError):
    """Generation triggered without a usable target world."""

    default_stage = "generation"
    default_code = "NO_TARGET"


# ---------------------------------------------------------------------------
# State machine
# ---------------------------------------------------------------------------


class LifecycleState(enum.Enum):
    """Where the lifecycle is in the single-job cycle.

    Values:
        IDLE:        Ready to accept a trigger.
        DISPATCHING: A trigger was accepted; submission in progress.
        RUNNING:     The executor accepted the job; awaiting a terminal message.
    """

    IDLE = "idle"
    DISPATCHING = "dispatching"
    RUNNING = "running"


class GenerationLifecycle:
    """Owns the generation latch for one application session.

    Args:
        selection: Session selection state (read-only here).
        executor: Backend adapter that receives jobs.
        view: Status surface.
        form_reader: Returns the current form values; called once per trigger.
        config: Optional configuration supplying the default scale.
    """

    def __init__(
        self,
        selection: SelectionState,
        executor: JobExecutor,
        view: StatusView,
        form_reader: Callable[[], FormValues],
        *,
        config: ControlConfig | None = None,
    ) -> None:
        self._selection = selection
        self._executor = executor
        self._view = view
        self._form_reader = form_reader
        self._default_scale = config.default_world_scale if config else DEFAULT_WORLD_SCALE

        self._enabled = True
        self._state = LifecycleState.IDLE
        self._last_signal: TerminalSignal | None = None
        self._idle = asyncio.Event()
        self._idle.set()

    @property
    def enabled(self) -> bool:
        """The latch: ``True`` when a trigger would be accepted."""
        return self._enabled

    @property
    def state(self) -> LifecycleState:
        return self._state

    @property
    def last_signal(self) -> TerminalSignal | None:
        """Terminal signal of the most recent job, if one arrived."""
        return self._last_signal

    # ------------------------------------------------------------------
    # Trigger
    # ------------------------------------------------------------------

    async def trigger(self) -> GenerationJob | None:
        """Start generation for the current selection.

        Returns:
            The dispatched job, or ``None`` if nothing was dispatched
            (latch closed, precondition failed, or dispatch failed).
        """
        if not self._enabled:
            logger.debug("Trigger ignored | state=%s", self._state.value)
            return None

        try:
            bbox, target = self._check_preconditions()
        except NoSelectionError as exc:
            logger.warning("Trigger refused | code=%s", exc.code)
            self._view.show_bbox_info(StatusMessage(exc.message, StatusColor.ERROR))
            return None
        except NoTargetError as exc:
            logger.warning("Trigger refused | code=%s", exc.code)
            self._view.show_target(StatusMessage(exc.message, StatusColor.ERROR))
            return None

        params = read_job_parameters(self._form_reader(), default_scale=self._default_scale)
        job = GenerationJob(
            bbox=bbox,
            target=target,
            scale_factor=params.scale_factor,
            ground_level=params.ground_level,
            winter_mode=params.winter_mode,
            floodfill_timeout_s=params.floodfill_timeout_s,
        )

        self._enabled = False
        self._state = LifecycleState.DISPATCHING
        self._last_signal = None
        self._idle.clear()

        try:
            await self._executor.submit(job)
        except DispatchError as exc:
            logger.error(
                "Dispatch failed | executor=%s | code=%s | %s",
                exc.executor,
                exc.code,
                exc.message,
            )
            self._reopen()
            self._view.show_progress(
                None,
                StatusMessage(f"Failed to start generation: {exc.message}", StatusColor.ERROR),
            )
            return None
        except Exception as exc:
            logger.exception("Dispatch crashed | executor=%s", self._executor.name)
            self._reopen()
            self._view.show_progress(
                None,
                StatusMessage(f"Failed to start generation: {exc}", StatusColor.ERROR),
            )
            return None

        # A terminal message may already have arrived while submitting.
        if self._state is LifecycleState.DISPATCHING:
            self._state = LifecycleState.RUNNING

        logger.info(
            "Generation started | executor=%s | bbox=%s | world=%s | scale=%s | "
            "ground_level=%d | winter=%s | floodfill_timeout=%ds",
            self._executor.name,
            job.bbox.to_text(),
            job.target,
            job.scale_factor,
            job.ground_level,
            job.winter_mode,
            job.floodfill_timeout_s,
        )
        return job

    def _check_preconditions(self) -> tuple[BoundingBox, str]:
        """Return the selected box and target path.

        Raises:
            NoSelectionError: If no non-sentinel box is selected.
            NoTargetError: If the target is missing or an error outcome.
        """
        bbox = self._selection.bbox
        if bbox is None or bbox.is_sentinel:
            raise NoSelectionError(MSG_SELECT_LOCATION_FIRST)

        target = self._selection.target
        if target is None or not target.is_usable:
            raise NoTargetError(MSG_SELECT_TARGET_FIRST)

        return bbox, target.path

    # ------------------------------------------------------------------
    # Progress
    # ------------------------------------------------------------------

    def on_progress(self, event: ProgressEvent) -> None:
        """Apply one progress event to the view and the latch."""
        status: StatusMessage | None = None

        if event.message:
            signal = event.terminal_signal
            if signal is TerminalSignal.REMOTE_ERROR:
                color = StatusColor.ERROR
            elif signal is TerminalSignal.REMOTE_SUCCESS:
                color = StatusColor.SUCCESS
            else:
                color = StatusColor.NEUTRAL
            status = StatusMessage(event.message, color)

            if signal is not None:
                self._last_signal = signal
                self._reopen()
                logger.info("Generation finished | signal=%s | %s", signal.value, event.message)

        if event.percent is not None or status is not None:
            self._view.show_progress(event.percent, status)

    async def consume(self, events: AsyncIterable[ProgressEvent]) -> None:
        """Apply *events* in arrival order until the stream ends.

        A broken or ended stream while a job is in flight re-enables
        triggering, since no terminal message can arrive any more.
        """
        try:
            async for event in events:
                self.on_progress(event)
        except DispatchError as exc:
            logger.error("Progress stream failed | executor=%s | %s", exc.executor, exc.message)
            self._abandon(f"Lost connection to the generation backend: {exc.message}")
            return
        except Exception as exc:
            logger.exception("Progress stream crashed | executor=%s", self._executor.name)
            self._abandon(f"Lost connection to the generation backend: {exc}")
            return

        if not self._enabled:
            logger.warning("Progress stream ended while a job was in flight")
            self._abandon("Lost connection to the generation backend.")

    async def wait_until_idle(self) -> TerminalSignal | None:
        """Wait until triggering is possible again; return the last signal."""
        await self._idle.wait()
        return self._last_signal

    def _abandon(self, text: str) -> None:
        if self._enabled:
            return
        self._reopen()
        self._view.show_progress(None, StatusMessage(text, StatusColor.ERROR))

    def _reopen(self) -> None:
        self._enabled = True
        self._state = LifecycleState.IDLE
        self._idle.set()
