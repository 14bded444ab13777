"""HTTP adapter for a generation backend.

Talks to a backend process (typically on the loopback interface) with
``httpx``:

- ``POST /generation`` with the ``GenerationRequest`` JSON body submits
  a job.  Any 2xx response is an acknowledgement.
- ``GET /progress`` is a long-lived response streaming one
  ``{"progress": n, "message": s}`` JSON object per line.
"""

from __future__ import annotations

import json
import logging
from typing import TYPE_CHECKING

import httpx

from worldgen_control.core.config import ControlConfig
from worldgen_control.core.exceptions import ContractError
from worldgen_control.executors.base import DispatchError, JobExecutor
from worldgen_control.models.progress import ProgressEvent

if TYPE_CHECKING:
    from collections.abc import AsyncIterator

    from worldgen_control.models.job import GenerationJob

logger = logging.getLogger("worldgen_control.executors.http")

GENERATION_PATH = "/generation"
PROGRESS_PATH = "/progress"


class HttpExecutor(JobExecutor):
    """Generation backend reached over HTTP.

    Args:
        config: Supplies ``executor_url`` and ``request_timeout_s``.
        transport: Optional ``httpx`` transport (tests pass a
            ``httpx.MockTransport``).
    """

    def __init__(
        self,
        config: ControlConfig | None = None,
        *,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        super().__init__("http")
        config = config or ControlConfig()
        self._base_url = config.executor_url
        self._client = httpx.AsyncClient(
            base_url=config.executor_url,
            timeout=config.request_timeout_s,
            transport=transport,
        )

    async def submit(self, job: GenerationJob) -> None:
        payload = job.to_payload()
        try:
            response = await self._client.post(GENERATION_PATH, json=payload)
            response.raise_for_status()
        except httpx.HTTPStatusError as exc:
            msg = f"Backend rejected the job: HTTP {exc.response.status_code}"
            raise DispatchError(self.name, msg, retryable=False) from exc
        except httpx.HTTPError as exc:
            msg = f"Could not reach backend at {self._base_url}: {exc}"
            raise DispatchError(self.name, msg) from exc

        logger.info(
            "Job submitted | executor=%s | bbox=%s | world=%s",
            self.name,
            payload["bboxText"],
            payload["selectedWorld"],
        )

    async def progress_events(self) -> AsyncIterator[ProgressEvent]:
        try:
            async with self._client.stream("GET", PROGRESS_PATH, timeout=None) as response:
                response.raise_for_status()
                async for line in response.aiter_lines():
                    if not line.strip():
                        continue
                    event = _parse_progress_line(line)
                    if event is not None:
                        yield event
        except httpx.HTTPError as exc:
            msg = f"Progress stream from {self._base_url} failed: {exc}"
            raise DispatchError(self.name, msg) from exc

    async def aclose(self) -> None:
        await self._client.aclose()


def _parse_progress_line(line: str) -> ProgressEvent | None:
    """Decode one NDJSON progress line; malformed lines are skipped."""
    try:
        return ProgressEvent.from_payload(json.loads(line))
    except json.JSONDecodeError:
        logger.warning("Skipping non-JSON progress line | line=%r", line[:200])
    except ContractError as exc:
        logger.warning("Skipping malformed progress line | %s | line=%r", exc.message, line[:200])
    return None
