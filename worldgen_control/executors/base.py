"""JobExecutor abstract base class.

Defines the contract that every generation backend adapter must
implement.  The generation lifecycle interacts exclusively with this
interface — it never knows (or cares) which concrete backend is behind
it.

Lifecycle:
    1. ``submit(job)``        — hand a job to the backend; returns once the
       backend has *accepted* it (not when it has finished).
    2. ``progress_events()``  — async stream of ``ProgressEvent`` updates;
       completion and failure arrive here as ``Done!`` / ``Error!``
       messages.
    3. ``aclose()``           — release connections and background tasks.
"""

from __future__ import annotations

import abc
from typing import TYPE_CHECKING

from worldgen_control.core.exceptions import TransientError

if TYPE_CHECKING:
    from collections.abc import AsyncIterator

    from worldgen_control.models.job import GenerationJob
    from worldgen_control.models.progress import ProgressEvent


class JobExecutor(abc.ABC):
    """Abstract base class for generation backend adapters.

    Example usage::

        executor = get_executor("http", config)
        await executor.submit(job)
        async for event in executor.progress_events():
            ...
    """

    def __init__(self, name: str) -> None:
        self._name = name

    @property
    def name(self) -> str:
        """Return the adapter name used in logs and errors."""
        return self._name

    @abc.abstractmethod
    async def submit(self, job: GenerationJob) -> None:
        """Submit *job* to the backend.

        Raises:
            DispatchError: If the backend could not be reached or
                refused the job.
        """

    @abc.abstractmethod
    def progress_events(self) -> AsyncIterator[ProgressEvent]:
        """Return the backend's progress stream.

        The stream is unbounded; it ends only when the backend closes it.

        Raises:
            DispatchError: If the stream cannot be opened or breaks.
        """

    async def aclose(self) -> None:
        """Release resources held by the adapter."""


# ---------------------------------------------------------------------------
# Executor exceptions
# ---------------------------------------------------------------------------


class DispatchError(TransientError):
    """The executor could not accept a job or deliver its progress.

    Attributes:
        executor: Name of the executor that raised the error.
        message: Human-readable error description.
    """

    default_stage = "dispatch"
    default_code = "DISPATCH_FAILED"

    def __init__(
        self,
        executor: str,
        message: str,
        *,
        retryable: bool = True,
    ) -> None:
        self.executor = executor
        super().__init__(
            message,
            retryable=retryable,
            code=self.default_code,
            stage=self.default_stage,
        )

    def __str__(self) -> str:
        return f"[{self.executor}] {self.message}"
