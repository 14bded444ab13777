"""In-process adapter running generation as an asyncio task.

The backend is an injected coroutine ``runner(job, emit)``.  The runner
reports progress by calling ``emit(percent, message)``; ``percent=None``
keeps the displayed value.  Exceptions escaping the runner are reported
through the progress stream as an ``Error!`` message, the same way an
external backend reports failure.  A runner that returns without a
final message is reported as complete.

Without a runner, ``simulate_generation`` walks through the backend's
stages and reports success, which is useful for dry runs.
"""

from __future__ import annotations

import asyncio
import logging
from typing import TYPE_CHECKING

from worldgen_control.core.constants import ERROR_MARKER, SUCCESS_MARKER
from worldgen_control.executors.base import DispatchError, JobExecutor
from worldgen_control.models.progress import ProgressEvent

if TYPE_CHECKING:
    from collections.abc import AsyncIterator, Awaitable, Callable

    from worldgen_control.core.config import ControlConfig
    from worldgen_control.models.job import GenerationJob

    Emit = Callable[[float | None, str], None]
    Runner = Callable[[GenerationJob, Emit], Awaitable[None]]

logger = logging.getLogger("worldgen_control.executors.inprocess")

COMPLETED_MESSAGE = f"{SUCCESS_MARKER} World generation completed."

# (percent, message) checkpoints reported by the simulated backend
SIMULATED_STAGES: tuple[tuple[float, str], ...] = (
    (5.0, "Fetching data..."),
    (15.0, "Parsing data..."),
    (25.0, "Processing data..."),
    (70.0, "Generating ground..."),
    (90.0, "Saving world..."),
)


async def simulate_generation(job: GenerationJob, emit: Emit) -> None:
    """Report the backend's stages without generating anything."""
    for percent, message in SIMULATED_STAGES:
        emit(percent, message)
        await asyncio.sleep(0)
    emit(100.0, COMPLETED_MESSAGE)
    logger.info("Simulated generation finished | world=%s", job.target)


class InProcessExecutor(JobExecutor):
    """Runs one job at a time inside the current event loop.

    Args:
        config: Accepted for factory compatibility; unused.
        runner: Coroutine performing the generation.
    """

    def __init__(
        self,
        config: ControlConfig | None = None,
        *,
        runner: Runner | None = None,
    ) -> None:
        super().__init__("inprocess")
        self._runner = runner or simulate_generation
        self._events: asyncio.Queue[ProgressEvent] = asyncio.Queue()
        self._task: asyncio.Task[None] | None = None
        self._finished = False

    @property
    def busy(self) -> bool:
        return self._task is not None and not self._task.done()

    async def submit(self, job: GenerationJob) -> None:
        if self.busy:
            msg = "A generation job is already running"
            raise DispatchError(self.name, msg)
        self._finished = False
        self._task = asyncio.create_task(self._run(job), name=f"generation:{job.target}")
        logger.info("Job submitted | executor=%s | bbox=%s", self.name, job.bbox.to_text())

    async def progress_events(self) -> AsyncIterator[ProgressEvent]:
        while True:
            yield await self._events.get()

    async def aclose(self) -> None:
        task = self._task
        if task is not None and not task.done():
            task.cancel()
            try:
                await task
            except asyncio.CancelledError:
                logger.info("Generation task cancelled on close")

    def _emit(self, percent: float | None, message: str) -> None:
        event = ProgressEvent(percent=percent, message=message)
        if event.terminal_signal is not None:
            self._finished = True
        self._events.put_nowait(event)

    async def _run(self, job: GenerationJob) -> None:
        try:
            await self._runner(job, self._emit)
        except asyncio.CancelledError:
            raise
        except Exception as exc:
            # Runner failures travel the same route as a remote backend's.
            logger.exception("Generation runner failed | world=%s", job.target)
            self._emit(None, f"{ERROR_MARKER} {exc}")
            return

        if not self._finished:
            logger.warning("Runner returned without a final message | world=%s", job.target)
            self._emit(100.0, COMPLETED_MESSAGE)
