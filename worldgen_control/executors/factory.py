"""Executor factory — selects the generation backend adapter by name.

The factory maintains a registry of known adapters.  New adapters are
registered with ``register_executor``.

Usage::

    from worldgen_control.executors.factory import get_executor

    executor = get_executor("http", config)
    await executor.submit(job)

The adapter name is read from the ``WORLDGEN_EXECUTOR`` environment
variable via ``ControlConfig.executor``.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from worldgen_control.executors.base import DispatchError, JobExecutor

if TYPE_CHECKING:
    from collections.abc import Callable

    from worldgen_control.core.config import ControlConfig

logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# Executor name constants
# ---------------------------------------------------------------------------

HTTP = "http"
INPROCESS = "inprocess"

# ---------------------------------------------------------------------------
# Lazy-import adapter registry
# ---------------------------------------------------------------------------

# Each entry maps an executor name to a callable that returns the adapter
# *class*, so httpx is only imported when the HTTP adapter is selected.

_EXECUTOR_REGISTRY: dict[str, Callable[[], type[JobExecutor]]] = {}


def _register_builtin_executors() -> None:
    """Register the built-in executor adapters."""

    def _http() -> type[JobExecutor]:
        from worldgen_control.executors.http import HttpExecutor

        return HttpExecutor

    def _inprocess() -> type[JobExecutor]:
        from worldgen_control.executors.inprocess import InProcessExecutor

        return InProcessExecutor

    _EXECUTOR_REGISTRY[HTTP] = _http
    _EXECUTOR_REGISTRY[INPROCESS] = _inprocess


def _ensure_registry() -> None:
    """Initialise the adapter registry once (idempotent)."""
    if not _EXECUTOR_REGISTRY:
        _register_builtin_executors()


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------


def register_executor(
    name: str,
    loader: Callable[[], type[JobExecutor]],
) -> None:
    """Register a custom executor adapter.

    Args:
        name: Executor name (e.g. ``"grpc"``).
        loader: A zero-argument callable that returns the adapter class.

    Raises:
        ValueError: If the name is empty.
    """
    if not name:
        msg = "Executor name must be non-empty"
        raise ValueError(msg)
    _ensure_registry()
    _EXECUTOR_REGISTRY[name] = loader
    logger.debug("Registered executor adapter: %s", name)


def get_executor(
    name: str,
    config: ControlConfig | None = None,
    **options: Any,
) -> JobExecutor:
    """Create and return an executor instance.

    Args:
        name: Executor identifier (``"http"``, ``"inprocess"``, or a
            registered custom name).
        config: Configuration passed to the adapter constructor.
        **options: Adapter-specific keyword arguments (e.g. ``runner``
            for ``inprocess``, ``transport`` for ``http``).

    Raises:
        DispatchError: If the named executor is not registered.
    """
    _ensure_registry()

    loader = _EXECUTOR_REGISTRY.get(name)
    if loader is None:
        available = ", ".join(sorted(_EXECUTOR_REGISTRY))
        msg = f"Unknown executor: {name!r}. Available: {available}"
        raise DispatchError(executor=name, message=msg, retryable=False)

    adapter_cls = loader()
    logger.info("Creating executor: %s", name)
    return adapter_cls(config, **options)  # type: ignore[call-arg]


def list_executors() -> list[str]:
    """Return the names of all registered executor adapters."""
    _ensure_registry()
    return sorted(_EXECUTOR_REGISTRY)
