"""Headless command line front end.

Runs one generation job the way the desktop window would: the
coordinates go through the same validator, the target through the same
resolver, and the job through the same lifecycle.  Status updates are
written to the log.

Exit codes:
    0  the backend reported success (``Done!``)
    1  input rejected, dispatch failed, or the backend reported ``Error!``
    2  invalid configuration
"""

from __future__ import annotations

import argparse
import asyncio
import dataclasses
import logging
import sys
from pathlib import Path

from worldgen_control import __version__
from worldgen_control.app import ControlApp
from worldgen_control.core.config import ConfigValidationError, ControlConfig, validate_config
from worldgen_control.executors.base import DispatchError
from worldgen_control.generation.parameters import FormValues
from worldgen_control.models.progress import TerminalSignal
from worldgen_control.view import LoggingStatusView

logger = logging.getLogger("worldgen_control.cli")

LOG_FORMAT = "%(asctime)s %(levelname)-8s %(name)s | %(message)s"


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="worldgen-control",
        description="Generate a Minecraft world for a bounding box.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  worldgen-control --bbox "48.135,11.575,48.140,11.585" --path ~/.minecraft/saves/Munich
  worldgen-control --bbox "48.135 11.575 48.140 11.585" --new-world --winter
  worldgen-control --bbox "..." --path DIR --executor inprocess   # no backend needed
        """,
    )
    parser.add_argument(
        "--bbox",
        required=True,
        help='Coordinates as "lat,lng,lat,lng" or "lat lng lat lng"',
    )
    target = parser.add_mutually_exclusive_group(required=True)
    target.add_argument("--path", help="Existing world, or a folder to create a new world in")
    target.add_argument(
        "--new-world",
        action="store_true",
        help="Create a new world in the default Minecraft saves directory",
    )
    parser.add_argument("--scale", help="World scale factor (default: configured scale)")
    parser.add_argument("--ground-level", help="Ground level (default: 20, minimum: -62)")
    parser.add_argument("--timeout", help="Flood-fill timeout in seconds (default: 20)")
    parser.add_argument("--winter", action="store_true", help="Generate in winter mode")
    parser.add_argument("--executor", help="Executor adapter (overrides WORLDGEN_EXECUTOR)")
    parser.add_argument("--executor-url", help="Backend URL (overrides WORLDGEN_EXECUTOR_URL)")
    parser.add_argument("--debug", action="store_true", help="Enable debug logging")
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return parser


def load_config(args: argparse.Namespace) -> ControlConfig:
    """Environment configuration with command line overrides applied.

    Raises:
        ConfigValidationError: If the resulting configuration is invalid.
    """
    config = ControlConfig.from_env()
    overrides: dict[str, object] = {}
    if args.executor:
        overrides["executor"] = args.executor
    if args.executor_url:
        overrides["executor_url"] = args.executor_url
    if args.debug:
        overrides["log_level"] = "DEBUG"
    if overrides:
        config = dataclasses.replace(config, **overrides)
        validate_config(config)
    return config


async def run(args: argparse.Namespace, config: ControlConfig) -> int:
    """Run one generation job; return the process exit code."""
    view = LoggingStatusView()
    form = FormValues(
        scale=args.scale,
        floodfill_timeout=args.timeout,
        ground_level=args.ground_level,
        winter_mode=args.winter,
    )
    try:
        app = ControlApp(view, lambda: form, config=config)
    except DispatchError as exc:
        logger.error("Executor unavailable | %s", exc)
        return 1

    try:
        app.on_bbox_text(args.bbox)
        if not app.selection.has_bbox:
            return 1

        target = app.create_new_target() if args.new_world else app.select_target(args.path)
        if not target.is_usable:
            return 1

        app.start()
        job = await app.start_generation()
        if job is None:
            return 1

        signal = await app.wait_until_idle()
    finally:
        await app.aclose()

    if signal is TerminalSignal.REMOTE_SUCCESS:
        logger.info("World written to %s", Path(job.target))
        return 0
    return 1


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)

    try:
        config = load_config(args)
    except (ConfigValidationError, ValueError) as exc:
        logging.basicConfig(level=logging.ERROR, format=LOG_FORMAT)
        logger.error("%s", exc)
        return 2

    logging.basicConfig(level=config.log_level, format=LOG_FORMAT)
    logging.getLogger("httpx").setLevel(logging.WARNING)

    try:
        return asyncio.run(run(args, config))
    except KeyboardInterrupt:
        logger.warning("Interrupted")
        return 130


if __name__ == "__main__":
    sys.exit(main())
