"""Generation backend adapters.

Implements the backend-agnostic adapter pattern (Strategy pattern):
- JobExecutor: Abstract base class defining the interface
- HttpExecutor: Backend process reached over HTTP (``httpx``)
- InProcessExecutor: Coroutine runner inside the current event loop

The active executor is selected via configuration.
"""

from worldgen_control.executors.base import DispatchError, JobExecutor
from worldgen_control.executors.factory import (
    HTTP,
    INPROCESS,
    get_executor,
    list_executors,
    register_executor,
)

__all__ = [
    "HTTP",
    "INPROCESS",
    "DispatchError",
    "JobExecutor",
    "get_executor",
    "list_executors",
    "register_executor",
]
