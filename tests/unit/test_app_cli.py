"""End-to-end tests for ControlApp wiring and the command line.

These use the in-process executor, so a whole job runs inside the test's
event loop.
"""

from __future__ import annotations

import asyncio
import os
import unittest
from pathlib import Path
from unittest.mock import patch

import pytest

from tests.helpers import RecordingView
from worldgen_control.app import ControlApp
from worldgen_control.cli import build_parser, main
from worldgen_control.core.config import ControlConfig
from worldgen_control.core.constants import MSG_SELECT_TARGET_FIRST
from worldgen_control.executors.inprocess import InProcessExecutor
from worldgen_control.generation.parameters import FormValues
from worldgen_control.models.progress import TerminalSignal
from worldgen_control.models.status import StatusColor, StatusMessage
from worldgen_control.models.target import TargetOutcome
from worldgen_control.view import LoggingStatusView

INPROCESS = ControlConfig(executor="inprocess")
SMALL_TEXT = "52.51,13.38,52.52,13.39"


class TestControlApp:
    """ControlApp connects selection, lifecycle and executor."""

    @pytest.mark.asyncio()
    async def test_full_job(self, tmp_path: Path) -> None:
        view = RecordingView()
        app = ControlApp(view, FormValues, config=INPROCESS)
        app.start()
        try:
            app.on_bbox_text(SMALL_TEXT)
            app.select_target(tmp_path)
            job = await app.start_generation()
            assert job is not None
            signal = await asyncio.wait_for(app.wait_until_idle(), timeout=5)
        finally:
            await app.aclose()

        assert signal is TerminalSignal.REMOTE_SUCCESS
        assert app.lifecycle.enabled
        percent, status = view.last_progress  # type: ignore[misc]
        assert percent == 100.0
        assert status is not None
        assert status.color is StatusColor.SUCCESS

    @pytest.mark.asyncio()
    async def test_picker_message_reaches_validator(self) -> None:
        view = RecordingView()
        app = ControlApp(view, FormValues, config=INPROCESS)

        app.on_bbox_picked("13.38 52.51 13.39 52.52")

        assert app.selection.has_bbox
        assert app.bbox_channel.latest == {"bboxText": "13.38 52.51 13.39 52.52"}
        await app.aclose()

    @pytest.mark.asyncio()
    async def test_target_status_colours(self, tmp_path: Path) -> None:
        view = RecordingView()
        app = ControlApp(view, FormValues, config=INPROCESS)

        target = app.select_target(tmp_path)
        assert view.last_target == StatusMessage(target.display_name, StatusColor.WARNING)

        failed = app.create_new_target(tmp_path / "missing")
        assert failed.outcome is TargetOutcome.TARGET_ROOT_NOT_FOUND
        assert view.last_target == StatusMessage(
            "Minecraft directory not found.", StatusColor.ERROR
        )
        assert not app.selection.has_target
        await app.aclose()

    @pytest.mark.asyncio()
    async def test_no_target_refused(self) -> None:
        view = RecordingView()
        executor = InProcessExecutor()
        app = ControlApp(view, FormValues, config=INPROCESS, executor=executor)
        app.on_bbox_text(SMALL_TEXT)
        app.select_target("")

        assert await app.start_generation() is None
        assert view.last_target == StatusMessage(MSG_SELECT_TARGET_FIRST, StatusColor.ERROR)
        assert not executor.busy
        await app.aclose()


class TestParser:
    """build_parser accepts the documented options."""

    def test_minimal(self) -> None:
        args = build_parser().parse_args(["--bbox", SMALL_TEXT, "--path", "/tmp/w"])
        assert args.bbox == SMALL_TEXT
        assert args.path == "/tmp/w"
        assert args.new_world is False
        assert args.scale is None

    def test_target_required(self) -> None:
        with pytest.raises(SystemExit):
            build_parser().parse_args(["--bbox", SMALL_TEXT])

    def test_path_and_new_world_exclusive(self) -> None:
        with pytest.raises(SystemExit):
            build_parser().parse_args(["--bbox", SMALL_TEXT, "--path", "x", "--new-world"])


class TestMain:
    """main returns the documented exit codes."""

    def test_success(self, tmp_path: Path) -> None:
        with patch.dict(os.environ, {}, clear=True):
            code = main(
                [
                    "--bbox",
                    SMALL_TEXT,
                    "--path",
                    str(tmp_path),
                    "--executor",
                    "inprocess",
                    "--ground-level",
                    "-100",
                    "--winter",
                ]
            )
        assert code == 0
        assert (tmp_path / "WorldGen World 1" / "region").is_dir()

    def test_invalid_bbox(self, tmp_path: Path) -> None:
        with patch.dict(os.environ, {}, clear=True):
            code = main(["--bbox", "100,20,30,40", "--path", str(tmp_path), "--executor", "inprocess"])
        assert code == 1

    def test_invalid_target(self, tmp_path: Path) -> None:
        with patch.dict(os.environ, {}, clear=True):
            code = main(
                ["--bbox", SMALL_TEXT, "--path", str(tmp_path / "gone"), "--executor", "inprocess"]
            )
        assert code == 1

    def test_unknown_executor(self, tmp_path: Path) -> None:
        with patch.dict(os.environ, {}, clear=True):
            code = main(["--bbox", SMALL_TEXT, "--path", str(tmp_path), "--executor", "nope"])
        assert code == 1

    def test_config_error(self, tmp_path: Path) -> None:
        with patch.dict(os.environ, {"WORLDGEN_REQUEST_TIMEOUT_S": "0"}, clear=True):
            code = main(["--bbox", SMALL_TEXT, "--path", str(tmp_path)])
        assert code == 2

    def test_unreachable_backend(self, tmp_path: Path) -> None:
        env = {"WORLDGEN_EXECUTOR_URL": "http://127.0.0.1:9", "WORLDGEN_REQUEST_TIMEOUT_S": "2"}
        with patch.dict(os.environ, env, clear=True):
            code = main(["--bbox", SMALL_TEXT, "--path", str(tmp_path)])
        assert code == 1


class TestLoggingStatusView(unittest.TestCase):
    """LoggingStatusView keeps the last value of each line and logs it."""

    def test_keeps_last_values(self) -> None:
        view = LoggingStatusView()
        view.show_progress(25.0, StatusMessage("Processing data..."))
        view.show_progress(None, StatusMessage("Still processing"))
        view.show_progress(40.0, None)
        assert view.percent == 40.0
        assert view.progress == StatusMessage("Still processing")

    def test_error_colour_logs_error(self) -> None:
        view = LoggingStatusView()
        with self.assertLogs("worldgen_control.view", level="ERROR") as logs:
            view.show_target(StatusMessage("Invalid Minecraft world", StatusColor.ERROR))
        assert "Invalid Minecraft world" in logs.output[0]
        assert view.target is not None
