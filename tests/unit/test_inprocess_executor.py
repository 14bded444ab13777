"""Tests for the in-process executor adapter."""

from __future__ import annotations

import asyncio

import pytest

from tests.helpers import RecordingView
from worldgen_control.executors.base import DispatchError
from worldgen_control.executors.inprocess import (
    COMPLETED_MESSAGE,
    SIMULATED_STAGES,
    InProcessExecutor,
    simulate_generation,
)
from worldgen_control.generation.lifecycle import GenerationLifecycle
from worldgen_control.generation.parameters import FormValues
from worldgen_control.models.bbox import BoundingBox
from worldgen_control.models.job import GenerationJob
from worldgen_control.models.progress import ProgressEvent, TerminalSignal
from worldgen_control.models.target import TargetSelection
from worldgen_control.selection.state import SelectionState


def _job() -> GenerationJob:
    return GenerationJob(
        bbox=BoundingBox(13.38, 52.51, 13.39, 52.52),
        target="/saves/Berlin",
        scale_factor=1.0,
        ground_level=20,
    )


async def _until_terminal(executor: InProcessExecutor) -> list[ProgressEvent]:
    events: list[ProgressEvent] = []
    async for event in executor.progress_events():
        events.append(event)
        if event.terminal_signal is not None:
            break
    return events


class TestSimulatedGeneration:
    """The default runner walks the stages and reports success."""

    @pytest.mark.asyncio()
    async def test_stages_then_done(self) -> None:
        executor = InProcessExecutor()
        await executor.submit(_job())

        events = await asyncio.wait_for(_until_terminal(executor), timeout=5)
        await executor.aclose()

        assert [(e.percent, e.message) for e in events[:-1]] == list(SIMULATED_STAGES)
        assert events[-1].percent == 100.0
        assert events[-1].terminal_signal is TerminalSignal.REMOTE_SUCCESS

    @pytest.mark.asyncio()
    async def test_simulate_generation_emits_in_order(self) -> None:
        emitted: list[tuple[float | None, str]] = []

        await simulate_generation(_job(), lambda p, m: emitted.append((p, m)))

        percents = [p for p, _m in emitted]
        assert percents == sorted(percents)
        assert emitted[-1][1].startswith("Done!")


class TestCustomRunner:
    """Injected runners report through the same stream."""

    @pytest.mark.asyncio()
    async def test_runner_receives_job(self) -> None:
        received: list[GenerationJob] = []

        async def runner(job, emit) -> None:  # type: ignore[no-untyped-def]
            received.append(job)
            emit(None, "Done! ok")

        executor = InProcessExecutor(runner=runner)
        job = _job()
        await executor.submit(job)
        events = await asyncio.wait_for(_until_terminal(executor), timeout=5)
        await executor.aclose()

        assert received == [job]
        assert events == [ProgressEvent(None, "Done! ok")]

    @pytest.mark.asyncio()
    async def test_runner_exception_becomes_error_message(self) -> None:
        async def runner(job, emit) -> None:  # type: ignore[no-untyped-def]
            emit(5.0, "Fetching data...")
            raise RuntimeError("Overpass API unreachable")

        executor = InProcessExecutor(runner=runner)
        await executor.submit(_job())
        events = await asyncio.wait_for(_until_terminal(executor), timeout=5)
        await executor.aclose()

        assert events[-1].message == "Error! Overpass API unreachable"
        assert events[-1].terminal_signal is TerminalSignal.REMOTE_ERROR

    @pytest.mark.asyncio()
    async def test_runner_without_final_message_completes(self) -> None:
        async def runner(job, emit) -> None:  # type: ignore[no-untyped-def]
            emit(50.0, "Working...")

        executor = InProcessExecutor(runner=runner)
        await executor.submit(_job())
        events = await asyncio.wait_for(_until_terminal(executor), timeout=5)
        await executor.aclose()

        assert events == [
            ProgressEvent(50.0, "Working..."),
            ProgressEvent(100.0, COMPLETED_MESSAGE),
        ]
        assert events[-1].terminal_signal is TerminalSignal.REMOTE_SUCCESS
        assert not executor.busy

    @pytest.mark.asyncio()
    async def test_runner_without_final_message_reopens_lifecycle(self) -> None:
        async def runner(job, emit) -> None:  # type: ignore[no-untyped-def]
            emit(50.0, "Working...")

        executor = InProcessExecutor(runner=runner)
        selection = SelectionState()
        selection.accept_bbox(_job().bbox)
        selection.set_target(TargetSelection.selected("/saves/Berlin"))
        lifecycle = GenerationLifecycle(selection, executor, RecordingView(), FormValues)
        listener = asyncio.create_task(lifecycle.consume(executor.progress_events()))
        try:
            assert await lifecycle.trigger() is not None
            signal = await asyncio.wait_for(lifecycle.wait_until_idle(), timeout=5)
        finally:
            listener.cancel()
            await executor.aclose()

        assert signal is TerminalSignal.REMOTE_SUCCESS
        assert lifecycle.enabled

    @pytest.mark.asyncio()
    async def test_busy_executor_rejects_second_job(self) -> None:
        release = asyncio.Event()

        async def runner(job, emit) -> None:  # type: ignore[no-untyped-def]
            await release.wait()
            emit(100.0, "Done!")

        executor = InProcessExecutor(runner=runner)
        await executor.submit(_job())
        assert executor.busy

        with pytest.raises(DispatchError) as exc_info:
            await executor.submit(_job())
        assert "already running" in exc_info.value.message

        release.set()
        await asyncio.wait_for(_until_terminal(executor), timeout=5)
        await executor.aclose()

    @pytest.mark.asyncio()
    async def test_aclose_cancels_running_job(self) -> None:
        started = asyncio.Event()

        async def runner(job, emit) -> None:  # type: ignore[no-untyped-def]
            started.set()
            await asyncio.sleep(60)

        executor = InProcessExecutor(runner=runner)
        await executor.submit(_job())
        await started.wait()

        await executor.aclose()

        assert not executor.busy
