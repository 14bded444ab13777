"""Test doubles shared across the unit suite."""

from __future__ import annotations

from worldgen_control.executors.base import JobExecutor
from worldgen_control.models.progress import ProgressEvent
from worldgen_control.models.status import StatusMessage


class RecordingView:
    """``StatusView`` that records every call in order."""

    def __init__(self) -> None:
        self.bbox_info: list[StatusMessage] = []
        self.targets: list[StatusMessage] = []
        self.progress: list[tuple[float | None, StatusMessage | None]] = []

    def show_bbox_info(self, status: StatusMessage) -> None:
        self.bbox_info.append(status)

    def show_target(self, status: StatusMessage) -> None:
        self.targets.append(status)

    def show_progress(self, percent: float | None, status: StatusMessage | None) -> None:
        self.progress.append((percent, status))

    @property
    def last_bbox_info(self) -> StatusMessage | None:
        return self.bbox_info[-1] if self.bbox_info else None

    @property
    def last_target(self) -> StatusMessage | None:
        return self.targets[-1] if self.targets else None

    @property
    def last_progress(self) -> tuple[float | None, StatusMessage | None] | None:
        return self.progress[-1] if self.progress else None


class FakeExecutor(JobExecutor):
    """Executor that records submitted jobs and replays queued events."""

    def __init__(self, *, fail_with: Exception | None = None) -> None:
        super().__init__("fake")
        self.submitted: list = []
        self.fail_with = fail_with
        self.events: list[ProgressEvent] = []
        self.closed = False

    async def submit(self, job) -> None:  # type: ignore[no-untyped-def]
        if self.fail_with is not None:
            raise self.fail_with
        self.submitted.append(job)

    async def progress_events(self):  # type: ignore[no-untyped-def]
        for event in self.events:
            yield event

    async def aclose(self) -> None:
        self.closed = True

